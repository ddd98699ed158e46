"""
Listing image storage and deletion
"""
import logging

from django import forms
from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Property, PropertyImage

logger = logging.getLogger(__name__)


def split_images(files):
    """Separate real image uploads from the rest; returns (valid, rejected_names)"""
    field = forms.ImageField()
    valid, rejected = [], []
    for upload in files:
        try:
            field.clean(upload)
        except ValidationError:
            logger.warning('Rejected non-image upload %r', upload.name)
            rejected.append(upload.name)
        else:
            valid.append(upload)
    return valid, rejected


def add_images(prop: Property, files):
    """Store uploaded images after the existing ones and refresh the cover"""
    files, _ = split_images(files)
    last = prop.images.order_by('-position').values_list('position', flat=True).first()
    position = -1 if last is None else last
    created = []
    for upload in files:
        position += 1
        image = PropertyImage(property=prop, position=position)
        image.image.save(upload.name, upload, save=False)
        image.storage_path = image.image.name
        image.url = image.image.url
        image.save()
        created.append(image)
    if created:
        prop.refresh_cover()
    return created


def remove_image(image: PropertyImage):
    prop = image.property
    _delete_files([image.storage_path])
    image.delete()
    prop.refresh_cover()


def reorder_images(prop: Property, image_ids):
    """Persist positions in the given order; unknown ids are ignored"""
    images = {str(image.id): image for image in prop.images.all()}
    with transaction.atomic():
        position = 0
        for image_id in image_ids:
            image = images.pop(str(image_id), None)
            if image is None:
                continue
            if image.position != position:
                image.position = position
                image.save(update_fields=['position'])
            position += 1
        # images left out of the list keep their relative order at the end
        for image in sorted(images.values(), key=lambda i: (i.position, i.created_at)):
            if image.position != position:
                image.position = position
                image.save(update_fields=['position'])
            position += 1
    prop.refresh_cover()


def delete_property(prop: Property):
    """Remove the stored image files, then the images and the property"""
    paths = list(prop.images.exclude(storage_path='').values_list('storage_path', flat=True))
    _delete_files(paths)
    with transaction.atomic():
        prop.images.all().delete()
        prop.delete()


def _delete_files(paths):
    for path in paths:
        if not path:
            continue
        storage = PropertyImage._meta.get_field('image').storage
        storage.delete(path)
        logger.debug('Deleted stored image %s', path)
