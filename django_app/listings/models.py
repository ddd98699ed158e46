"""
Listings models - Properties, their images and contact messages
"""
from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.text import slugify
import os
import uuid


class PropertyQuerySet(models.QuerySet):

    def for_company(self, company):
        return self.filter(company=company)

    def published(self):
        """Listings visible to visitors"""
        return self.filter(is_active=True, is_approved=True)


class Property(models.Model):
    """
    A property listing owned by a user and scoped to a company
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Company scope
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='properties'
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='properties'
    )

    # Basic details
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    description = models.TextField(blank=True)

    # Location
    city = models.CharField(max_length=100, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)

    # Pricing
    price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    price_sale = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    price_rent = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    # Property specifications
    bedrooms = models.IntegerField(null=True, blank=True)
    bathrooms = models.IntegerField(null=True, blank=True)
    parking_spaces = models.IntegerField(null=True, blank=True)
    area_m2 = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    TYPE_CHOICES = [
        ('apartment', 'Apartamento'),
        ('house', 'Casa'),
        ('commercial', 'Comercial'),
    ]
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='apartment')

    BUSINESS_SALE = 'sale'
    BUSINESS_RENT = 'rent'
    BUSINESS_CHOICES = [
        (BUSINESS_SALE, 'Venda'),
        (BUSINESS_RENT, 'Aluguel'),
    ]
    business = models.CharField(max_length=10, choices=BUSINESS_CHOICES, default=BUSINESS_SALE)

    cover_image_url = models.CharField(max_length=500, blank=True)

    # Publication
    is_active = models.BooleanField(default=True)
    is_approved = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyQuerySet.as_manager()

    class Meta:
        db_table = 'properties'
        ordering = ['-created_at']
        verbose_name_plural = 'properties'
        indexes = [
            models.Index(fields=['company', 'is_active', 'is_approved'], name='properties_company_8d1a2e_idx'),
            models.Index(fields=['company', 'business'], name='properties_company_4b7f0c_idx'),
            models.Index(fields=['owner'], name='properties_owner_i_2c9e51_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            base = slugify(self.title)[:200] or 'imovel'
            self.slug = f'{base}-{self.id.hex[:8]}'
        super().save(*args, **kwargs)

    @property
    def is_published(self):
        return self.is_active and self.is_approved

    def can_edit(self, auth):
        """Owners edit their own listings; admins edit any in their company"""
        if auth.user is None:
            return False
        if auth.is_super_admin:
            return True
        if auth.is_admin and auth.profile.company_id == self.company_id:
            return True
        return self.owner_id == auth.user.pk

    def refresh_cover(self):
        """Use the first image as cover"""
        first = self.images.order_by('position', 'created_at').first()
        self.cover_image_url = first.url if first else ''
        self.save(update_fields=['cover_image_url', 'updated_at'])


def property_image_path(instance, filename):
    ext = os.path.splitext(filename)[1].lstrip('.').lower() or 'jpg'
    return f'property-images/{instance.property.owner_id}/{instance.property_id}/{uuid.uuid4()}.{ext}'


class PropertyImage(models.Model):
    """
    Images associated with a property
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name='images'
    )

    image = models.ImageField(upload_to=property_image_path, blank=True)
    storage_path = models.CharField(max_length=500, blank=True)
    url = models.CharField(max_length=500, blank=True)

    # Ordering
    position = models.IntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'property_images'
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"Image {self.position} for {self.property.title}"


class Message(models.Model):
    """
    Contact message left by a visitor on a property page
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name='messages'
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_messages'
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_messages'
    )

    sender_name = models.CharField(max_length=200, blank=True)
    sender_email = models.EmailField(blank=True)
    sender_phone = models.CharField(max_length=30, blank=True)
    content = models.TextField(blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'messages'
        ordering = ['-created_at']

    def __str__(self):
        return f"Message from {self.sender_name or self.sender_email} on {self.property.title}"
