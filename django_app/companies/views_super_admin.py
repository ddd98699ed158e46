"""
Platform back-office views - companies, their domains and their users
"""
import logging
import re

from django import forms
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db.models import Count
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from core.guards import require_auth, require_super_admin
from core.models import Profile
from core.services import COMPANY_ROLES, GRANTABLE_ROLES, ServiceError, create_company_user
from .detection import (
    add_company_domain, create_company, get_all_companies, get_company_domains,
    remove_company_domain, set_primary_domain, update_company, verify_domain,
)
from .models import Company

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')
TEXT_FIELDS = (
    'phone', 'whatsapp', 'email', 'address',
    'youtube_url', 'facebook_url', 'instagram_url',
)


def _company_fields(data, files, defaults=True):
    """Read the company form; returns (fields, error)"""
    name = data.get('name', '').strip()
    if not name:
        return None, 'Informe o nome da empresa'

    fields = {'name': name}
    slug = data.get('slug', '').strip().lower()
    if slug:
        fields['slug'] = slug
    for field in TEXT_FIELDS:
        fields[field] = data.get(field, '').strip()

    for field, fallback in (('primary_color', '#D4AF37'), ('secondary_color', '#000000')):
        color = data.get(field, '').strip() or fallback
        if not HEX_COLOR.match(color):
            return None, f'Cor inválida: {color}'
        fields[field] = color

    plan = data.get('subscription_plan') or 'basic'
    if plan not in dict(Company.PLAN_CHOICES):
        return None, 'Plano inválido'
    fields['subscription_plan'] = plan

    fields['allow_user_listings'] = data.get('allow_user_listings') == 'on'
    fields['require_admin_approval'] = data.get('require_admin_approval') == 'on'
    if not defaults:
        fields['is_active'] = data.get('is_active') == 'on'

    for field in ('logo', 'favicon'):
        upload = files.get(field)
        if not upload:
            continue
        try:
            forms.ImageField().clean(upload)
        except ValidationError:
            logger.warning('Rejected %s upload %r', field, upload.name)
            return None, f'Arquivo inválido para {field}: {upload.name}'
        fields[field] = upload

    return fields, None


@require_auth
@require_super_admin
def company_list(request):
    """All companies with active toggle"""
    companies = get_all_companies()
    counts = dict(
        Company.objects.annotate(n=Count('members')).values_list('id', 'n')
    )
    for company in companies:
        company.member_count = counts.get(company.id, 0)

    return render(request, 'super_admin/companies.html', {
        'companies': companies,
        'active_count': sum(1 for c in companies if c.is_active),
        'inactive_count': sum(1 for c in companies if not c.is_active),
    })


@require_auth
@require_super_admin
@require_POST
def company_toggle_active(request, company_id):
    company = get_object_or_404(Company, id=company_id)
    if update_company(company, is_active=not company.is_active) is None:
        messages.error(request, 'Erro ao atualizar empresa')
    else:
        state = 'ativada' if company.is_active else 'desativada'
        messages.success(request, f'Empresa "{company.name}" {state}')
    return redirect('super_admin:companies')


@require_auth
@require_super_admin
def company_create(request):
    """Create a new company"""
    if request.method == 'POST':
        fields, error = _company_fields(request.POST, request.FILES)
        if error:
            messages.error(request, error)
        else:
            company = create_company(**fields)
            if company is None:
                messages.error(request, 'Erro ao criar empresa')
            else:
                messages.success(request, f'Empresa "{company.name}" criada')
                return redirect('super_admin:companies')

    return render(request, 'super_admin/company_form.html', {
        'form_data': request.POST,
        'plan_choices': Company.PLAN_CHOICES,
        'is_create': True,
    })


@require_auth
@require_super_admin
def company_edit(request, company_id):
    """Edit company details and branding"""
    company = get_object_or_404(Company, id=company_id)

    if request.method == 'POST':
        fields, error = _company_fields(request.POST, request.FILES, defaults=False)
        if error:
            messages.error(request, error)
        elif update_company(company, **fields) is None:
            messages.error(request, 'Erro ao atualizar empresa')
        else:
            messages.success(request, 'Empresa atualizada')
            return redirect('super_admin:companies')

    return render(request, 'super_admin/company_form.html', {
        'managed_company': company,
        'plan_choices': Company.PLAN_CHOICES,
        'is_create': False,
    })


@require_auth
@require_super_admin
def company_domains(request, company_id):
    """List and add domains of a company"""
    company = get_object_or_404(Company, id=company_id)

    if request.method == 'POST':
        domain = request.POST.get('domain', '').strip()
        if not domain:
            messages.error(request, 'Informe o domínio')
        elif add_company_domain(company, domain, request.POST.get('is_primary') == 'on') is None:
            messages.error(request, 'Erro ao adicionar domínio')
        else:
            messages.success(request, f'Domínio "{domain}" adicionado')
            return redirect('super_admin:domains', company_id=company.id)

    return render(request, 'super_admin/domains.html', {
        'managed_company': company,
        'domains': get_company_domains(company),
    })


@require_auth
@require_super_admin
@require_POST
def domain_action(request, company_id, domain_id, action):
    """Remove, verify or set a domain as primary"""
    company = get_object_or_404(Company, id=company_id)
    get_object_or_404(company.domains, id=domain_id)

    if action == 'remove':
        ok = remove_company_domain(domain_id)
        done, failed = 'Domínio removido', 'Erro ao remover domínio'
    elif action == 'verify':
        ok = verify_domain(domain_id)
        done, failed = 'Domínio marcado como verificado!', 'Erro ao verificar domínio'
    elif action == 'primary':
        ok = set_primary_domain(company, domain_id)
        done, failed = 'Domínio principal atualizado!', 'Erro ao definir domínio principal'
    else:
        ok, failed = False, 'Ação inválida'

    if ok:
        messages.success(request, done)
    else:
        messages.error(request, failed)
    return redirect('super_admin:domains', company_id=company.id)


@require_auth
@require_super_admin
def company_users(request, company_id):
    """Users of a company, with account creation"""
    company = get_object_or_404(Company, id=company_id)

    if request.method == 'POST':
        try:
            user = create_company_user(
                request.auth.profile,
                email=request.POST.get('email'),
                password=request.POST.get('password'),
                full_name=request.POST.get('full_name', '').strip(),
                phone=request.POST.get('phone'),
                role=request.POST.get('role') or Profile.ROLE_USER,
                company=company,
                company_role=request.POST.get('company_role') or 'user',
            )
        except ServiceError as e:
            messages.error(request, str(e))
        else:
            messages.success(request, 'Usuário criado com sucesso!')
            logger.info('Super admin %s created %s in %s', request.user.email, user.email, company.slug)
            return redirect('super_admin:users', company_id=company.id)

    members = Profile.objects.filter(company=company).select_related('user')
    return render(request, 'super_admin/users.html', {
        'managed_company': company,
        'members': members,
        'admin_count': sum(1 for m in members if m.company_role == 'company_admin'),
        'roles': GRANTABLE_ROLES,
        'company_roles': COMPANY_ROLES,
    })


@require_auth
@require_super_admin
@require_POST
def company_user_toggle(request, company_id, user_id, field):
    """Flip role (user/admin), company role or status of a member"""
    member = get_object_or_404(Profile, user_id=user_id, company_id=company_id)

    if field == 'role' and not member.is_super_admin:
        member.role = Profile.ROLE_USER if member.is_admin else Profile.ROLE_ADMIN
    elif field == 'company_role':
        member.company_role = 'user' if member.company_role == 'company_admin' else 'company_admin'
    elif field == 'status':
        member.status = Profile.STATUS_ACTIVE if member.is_blocked else Profile.STATUS_BLOCKED
    else:
        messages.error(request, 'Ação inválida')
        return redirect('super_admin:users', company_id=company_id)

    member.save(update_fields=[field, 'updated_at'])
    messages.success(request, f'{member} atualizado')
    return redirect('super_admin:users', company_id=company_id)
