"""
Company back-office views - listings moderation and user management

Every page is scoped to the company resolved for the request hostname.
"""
import logging

from django.contrib import messages
from django.db.models import Q
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from listings.models import Property
from .guards import require_admin, require_auth
from .models import Profile
from .services import (
    COMPANY_ROLES, GRANTABLE_ROLES, STATUSES, ServiceError, create_company_user,
)

logger = logging.getLogger(__name__)


@require_auth
@require_admin
def dashboard(request):
    """Back-office dashboard with company counts"""
    company = request.company
    properties = Property.objects.for_company(company)
    members = Profile.objects.filter(company=company)

    stats = {
        'total_listings': properties.count(),
        'active_listings': properties.filter(is_active=True).count(),
        'pending_listings': properties.filter(is_approved=False).count(),
        'total_users': members.count(),
        'blocked_users': members.filter(status=Profile.STATUS_BLOCKED).count(),
    }

    return render(request, 'admin_panel/dashboard.html', {'stats': stats})


@require_auth
@require_admin
def listing_list(request):
    """All company listings, with approval and activation toggles"""
    query = request.GET.get('q', '').strip()
    status = request.GET.get('status', '')

    properties = Property.objects.for_company(request.company).select_related('owner')
    if query:
        properties = properties.filter(
            Q(title__icontains=query) | Q(city__icontains=query) | Q(owner__email__icontains=query)
        )
    if status == 'pending':
        properties = properties.filter(is_approved=False)
    elif status == 'inactive':
        properties = properties.filter(is_active=False)

    return render(request, 'admin_panel/listings.html', {
        'properties': properties,
        'query': query,
        'status': status,
        'updated': request.GET.get('updated') == '1',
    })


@require_auth
@require_admin
@require_POST
def listing_toggle(request, property_id, field):
    """Flip is_approved or is_active on a company listing"""
    if field not in ('is_approved', 'is_active'):
        messages.error(request, 'Campo inválido')
        return redirect('admin_panel:listings')

    prop = get_object_or_404(Property.objects.for_company(request.company), id=property_id)
    setattr(prop, field, not getattr(prop, field))
    prop.save(update_fields=[field, 'updated_at'])

    logger.info('%s set %s=%s on property %s', request.user.email, field, getattr(prop, field), prop.id)
    messages.success(request, f'"{prop.title}" atualizado')
    return redirect('admin_panel:listings')


@require_auth
@require_admin
def user_list(request):
    """Users of the company"""
    query = request.GET.get('q', '').strip()

    profiles = Profile.objects.filter(company=request.company).select_related('user')
    if query:
        profiles = profiles.filter(
            Q(full_name__icontains=query) | Q(user__email__icontains=query) | Q(phone__icontains=query)
        )

    return render(request, 'admin_panel/users.html', {
        'members': profiles,
        'query': query,
    })


@require_auth
@require_admin
@require_POST
def user_update(request, user_id):
    """Change a member's role or status"""
    member = get_object_or_404(Profile, user_id=user_id, company=request.company)

    if member.user_id == request.user.pk:
        messages.error(request, 'Você não pode alterar sua própria conta.')
        return redirect('admin_panel:users')
    if member.is_super_admin and not request.auth.is_super_admin:
        messages.error(request, 'Você não tem permissão para alterar este usuário.')
        return redirect('admin_panel:users')

    role = request.POST.get('role')
    status = request.POST.get('status')
    changed = []
    if role:
        if role not in GRANTABLE_ROLES:
            messages.error(request, 'Role inválida')
            return redirect('admin_panel:users')
        member.role = role
        changed.append('role')
    if status:
        if status not in STATUSES:
            messages.error(request, 'Status inválido')
            return redirect('admin_panel:users')
        member.status = status
        changed.append('status')

    if changed:
        member.save(update_fields=changed + ['updated_at'])
        logger.info('%s updated %s on user %s', request.user.email, ', '.join(changed), member.user.email)
        messages.success(request, f'{member} atualizado')
    return redirect('admin_panel:users')


@require_auth
@require_admin
def user_create(request):
    """Create an account in the company"""
    form = {}
    if request.method == 'POST':
        form = request.POST
        try:
            user = create_company_user(
                request.auth.profile,
                email=form.get('email'),
                password=form.get('password'),
                full_name=form.get('full_name', '').strip(),
                phone=form.get('phone'),
                role=form.get('role') or Profile.ROLE_USER,
                status=form.get('status') or Profile.STATUS_ACTIVE,
                company=request.company,
                company_role=form.get('company_role') or 'user',
            )
        except ServiceError as e:
            messages.error(request, str(e))
        else:
            messages.success(request, f'Usuário {user.email} criado')
            return redirect('admin_panel:users')

    return render(request, 'admin_panel/user_form.html', {
        'form_data': form,
        'roles': GRANTABLE_ROLES,
        'statuses': STATUSES,
        'company_roles': COMPANY_ROLES,
    })
