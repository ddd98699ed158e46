"""
Listings views - public pages and owner listing management
"""
import logging
import re
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError, transaction
from django.db.models import Q
from django.forms.models import model_to_dict
from django.shortcuts import render, redirect, get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_POST

from core.guards import require_auth
from .models import Property, PropertyImage, Message
from .services import add_images, delete_property, remove_image, reorder_images, split_images
from .whatsapp import build_whatsapp_url, contact_message_text

logger = logging.getLogger(__name__)

RESULTS_LIMIT = 50
HOME_LIMIT = 6
MY_LISTINGS_LIMIT = 100

# '1.234' or '1.234.567' with no decimal comma
THOUSANDS_ONLY = re.compile(r'^-?\d{1,3}(\.\d{3})+$')

SORT_ORDERS = {
    'relevance': ('-created_at',),
    'price_asc': ('price', '-created_at'),
    'price_desc': ('-price', '-created_at'),
    'area_desc': ('-area_m2', '-created_at'),
}


def _decimal(value, max_digits=14, decimal_places=2):
    """
    Parse '1234.5', '1.234,50' or 'R$ 1.234' (= 1234) into a Decimal.

    Returns None for blanks, non-numbers, NaN/Infinity and values too
    large for a DecimalField(max_digits, decimal_places).
    """
    value = (value or '').replace('R$', '').replace(' ', '').strip()
    if not value:
        return None
    if ',' in value or THOUSANDS_ONLY.match(value):
        value = value.replace('.', '').replace(',', '.')
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    if abs(number) >= Decimal(10) ** (max_digits - decimal_places):
        return None
    return number


def _int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _company_properties(request):
    return Property.objects.for_company(request.company)


def _editable_property(request, property_id):
    prop = get_object_or_404(_company_properties(request), id=property_id)
    if not prop.can_edit(request.auth):
        return None
    return prop


def _store_images(request, prop):
    valid, rejected = split_images(request.FILES.getlist('images'))
    for name in rejected:
        messages.error(request, f'Arquivo ignorado (não é uma imagem): {name}')
    return add_images(prop, valid)


def _apply_form(prop, data):
    """Copy the listing form fields onto a property; returns an error or None"""
    title = data.get('title', '').strip()
    if not title:
        return 'Informe o título do anúncio'

    business = data.get('business', Property.BUSINESS_SALE)
    if business not in dict(Property.BUSINESS_CHOICES):
        return 'Tipo de negócio inválido'
    prop_type = data.get('type', 'apartment')
    if prop_type not in dict(Property.TYPE_CHOICES):
        return 'Tipo de imóvel inválido'

    prop.title = title
    prop.description = data.get('description', '').strip()
    prop.city = data.get('city', '').strip()
    prop.neighborhood = data.get('neighborhood', '').strip()
    prop.address = data.get('address', '').strip()
    prop.business = business
    prop.type = prop_type
    prop.price = _decimal(data.get('price'))
    prop.price_sale = _decimal(data.get('price_sale'))
    prop.price_rent = _decimal(data.get('price_rent'))
    prop.bedrooms = _int(data.get('bedrooms'))
    prop.bathrooms = _int(data.get('bathrooms'))
    prop.parking_spaces = _int(data.get('parking_spaces'))
    prop.area_m2 = _decimal(data.get('area_m2'), max_digits=10)
    return None


def home(request):
    """Landing page with the latest listings"""
    latest = _company_properties(request).published()[:HOME_LIMIT]
    return render(request, 'listings/home.html', {'properties': latest})


def results(request):
    """Search results with filters"""
    filters = {
        'q': request.GET.get('q', '').strip(),
        'city': request.GET.get('city', '').strip(),
        'business': request.GET.get('business', ''),
        'minPrice': request.GET.get('minPrice', ''),
        'maxPrice': request.GET.get('maxPrice', ''),
        'bedrooms': request.GET.get('bedrooms', ''),
        'sort': request.GET.get('sort', 'relevance'),
    }

    properties = _company_properties(request).published()

    if filters['city']:
        properties = properties.filter(city__icontains=filters['city'])
    if filters['business'] in dict(Property.BUSINESS_CHOICES):
        properties = properties.filter(business=filters['business'])
    bedrooms = _int(filters['bedrooms'])
    if bedrooms is not None:
        properties = properties.filter(bedrooms__gte=bedrooms)
    min_price = _decimal(filters['minPrice'])
    if min_price is not None:
        properties = properties.filter(price__gte=min_price)
    max_price = _decimal(filters['maxPrice'])
    if max_price is not None:
        properties = properties.filter(price__lte=max_price)
    if filters['q']:
        properties = properties.filter(
            Q(title__icontains=filters['q']) |
            Q(description__icontains=filters['q'])
        )

    properties = properties.order_by(*SORT_ORDERS.get(filters['sort'], SORT_ORDERS['relevance']))

    return render(request, 'listings/results.html', {
        'properties': properties[:RESULTS_LIMIT],
        'filters': filters,
        'business_choices': Property.BUSINESS_CHOICES,
    })


def _render_detail(request, prop):
    if not prop.is_published and not prop.can_edit(request.auth):
        return render(request, 'listings/not_found.html', status=404)

    images = []
    if prop.cover_image_url:
        images.append(prop.cover_image_url)
    for url in prop.images.values_list('url', flat=True):
        if url and url not in images:
            images.append(url)

    return render(request, 'listings/detail.html', {
        'property': prop,
        'images': images,
        'default_message': (
            f'Olá, gostaria de ter mais informações sobre: {prop.title}, '
            f'{prop.address} - {prop.neighborhood}, {prop.city}.'
        ),
    })


def property_detail(request, slug):
    prop = get_object_or_404(_company_properties(request).select_related('owner'), slug=slug)
    return _render_detail(request, prop)


def property_detail_by_id(request, property_id):
    prop = get_object_or_404(_company_properties(request).select_related('owner'), id=property_id)
    return _render_detail(request, prop)


@require_POST
def property_contact(request, property_id):
    """Record the contact message and hand the visitor over to WhatsApp"""
    prop = get_object_or_404(
        _company_properties(request).published().select_related('owner__profile'),
        id=property_id
    )

    name = request.POST.get('name', '').strip()
    email = request.POST.get('email', '').strip()
    phone = request.POST.get('phone', '').strip()
    content = request.POST.get('message', '').strip()

    try:
        with transaction.atomic():
            Message.objects.create(
                property=prop,
                owner=prop.owner,
                sender=request.auth.user,
                sender_name=name,
                sender_email=email,
                sender_phone=phone,
                content=content,
            )
    except DatabaseError as e:
        # never blocks the WhatsApp hand-off
        logger.warning('Could not save contact message for %s: %s', prop.id, e)

    owner_profile = getattr(prop.owner, 'profile', None)
    target = (
        getattr(owner_profile, 'phone', '')
        or request.company.whatsapp
        or settings.DEFAULT_WHATSAPP_PHONE
    )
    link = request.build_absolute_uri(reverse('listings:detail', args=[prop.slug]))
    text = contact_message_text(name, email, phone, prop.title, link, content)
    return redirect(build_whatsapp_url(target, text))


@require_auth
def property_create(request):
    """Create a new listing"""
    company = request.company
    is_staff = request.auth.is_admin or request.auth.is_super_admin

    if not company.allow_user_listings and not is_staff:
        messages.error(request, 'Esta imobiliária não aceita anúncios de usuários.')
        return redirect('listings:home')

    if request.method == 'POST':
        prop = Property(company=company, owner=request.user, is_active=True)
        error = _apply_form(prop, request.POST)
        if error:
            messages.error(request, error)
        else:
            prop.is_approved = is_staff or not company.require_admin_approval
            prop.save()
            _store_images(request, prop)

            if prop.is_approved:
                messages.success(request, 'Anúncio publicado!')
            else:
                messages.info(request, 'Anúncio enviado para aprovação.')
            return redirect('listings:detail', slug=prop.slug)

    return render(request, 'listings/form.html', {
        'values': request.POST.dict(),
        'type_choices': Property.TYPE_CHOICES,
        'business_choices': Property.BUSINESS_CHOICES,
        'is_create': True,
    })


@require_auth
def property_edit(request, property_id):
    """Edit a listing and manage its images"""
    prop = _editable_property(request, property_id)
    if prop is None:
        messages.error(request, 'Você não tem permissão para editar este imóvel.')
        return redirect('listings:my_listings')

    if request.method == 'POST':
        error = _apply_form(prop, request.POST)
        if error:
            messages.error(request, error)
        else:
            prop.save()
            messages.success(request, 'Alterações salvas')
            if request.auth.is_admin or request.auth.is_super_admin:
                return redirect('admin_panel:listings')
            return redirect('listings:my_listings')

    return render(request, 'listings/form.html', {
        'property': prop,
        'values': model_to_dict(prop),
        'images': prop.images.all(),
        'type_choices': Property.TYPE_CHOICES,
        'business_choices': Property.BUSINESS_CHOICES,
        'is_create': False,
    })


@require_auth
def my_listings(request):
    properties = _company_properties(request).filter(owner=request.user)[:MY_LISTINGS_LIMIT]
    return render(request, 'listings/my_listings.html', {'properties': properties})


@require_auth
@require_POST
def property_delete(request, property_id):
    prop = _editable_property(request, property_id)
    if prop is None:
        messages.error(request, 'Você não tem permissão para excluir este imóvel.')
        return redirect('listings:my_listings')

    title = prop.title
    try:
        delete_property(prop)
    except (DatabaseError, OSError):
        logger.exception('Error deleting property %s', property_id)
        messages.error(request, 'Erro ao excluir imóvel')
    else:
        messages.success(request, f'Imóvel "{title}" excluído')
    return redirect('listings:my_listings')


@require_auth
@require_POST
def image_upload(request, property_id):
    prop = _editable_property(request, property_id)
    if prop is None:
        messages.error(request, 'Você não tem permissão para editar este imóvel.')
        return redirect('listings:my_listings')

    created = _store_images(request, prop)
    messages.success(request, f'{len(created)} imagens enviadas')
    return redirect('listings:edit', property_id=prop.id)


@require_auth
@require_POST
def image_remove(request, property_id, image_id):
    prop = _editable_property(request, property_id)
    if prop is None:
        messages.error(request, 'Você não tem permissão para editar este imóvel.')
        return redirect('listings:my_listings')

    image = get_object_or_404(PropertyImage, id=image_id, property=prop)
    remove_image(image)
    messages.success(request, 'Imagem removida')
    return redirect('listings:edit', property_id=prop.id)


@require_auth
@require_POST
def image_reorder(request, property_id):
    """Save the image order; accepts the full id list or a single move"""
    prop = _editable_property(request, property_id)
    if prop is None:
        messages.error(request, 'Você não tem permissão para editar este imóvel.')
        return redirect('listings:my_listings')

    order = request.POST.getlist('image_ids')
    move_id = request.POST.get('move')
    if move_id:
        order = [str(pk) for pk in prop.images.values_list('id', flat=True)]
        if move_id in order:
            i = order.index(move_id)
            j = i + (-1 if request.POST.get('direction') == 'up' else 1)
            if 0 <= j < len(order):
                order[i], order[j] = order[j], order[i]

    reorder_images(prop, order)
    messages.success(request, 'Ordem salva!')
    return redirect('listings:edit', property_id=prop.id)
