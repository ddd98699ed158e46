"""
Core app views - Authentication and the user profile
"""
import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from .auth import signups_allowed
from .guards import require_auth
from .middleware import DOMAIN_MISMATCH
from .models import is_valid_br_phone, normalize_phone

logger = logging.getLogger(__name__)

PHONE_INVALID = 'Informe um telefone válido com DDD (ex.: 11912345678)'


def _safe_next(request, default='listings:home'):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return default


def login_view(request):
    """User login"""
    if request.GET.get('error') == DOMAIN_MISMATCH:
        messages.error(request, 'Sua conta não pertence a este site. Faça login no domínio da sua empresa.')

    if request.method == 'POST':
        email = request.POST.get('email', '').strip().lower()
        password = request.POST.get('password', '')

        if not email or not password:
            messages.error(request, 'Informe seu e-mail e sua senha')
        else:
            result = request.auth.sign_in_with_password(email, password)
            if result.ok:
                return redirect(_safe_next(request))
            messages.error(request, result.error)

    return render(request, 'core/login.html', {
        'next': request.GET.get('next', ''),
        'allow_signups': signups_allowed(),
    })


@require_POST
def logout_view(request):
    """User logout"""
    request.auth.sign_out()
    messages.success(request, 'Você saiu da sua conta')
    return redirect('core:login')


def signup_view(request):
    """User registration"""
    form = {}
    if request.method == 'POST':
        form = {
            'full_name': request.POST.get('full_name', '').strip(),
            'email': request.POST.get('email', '').strip().lower(),
            'phone': normalize_phone(request.POST.get('phone', '')),
        }
        password = request.POST.get('password', '')

        if not form['full_name']:
            messages.error(request, 'Informe seu nome completo')
        elif not form['email']:
            messages.error(request, 'Informe seu e-mail')
        elif len(password) < 8:
            messages.error(request, 'A senha deve ter no mínimo 8 caracteres')
        elif not is_valid_br_phone(form['phone']):
            messages.error(request, 'Telefone inválido. Use DDD: 11912345678')
        else:
            result = request.auth.sign_up(
                form['email'], password, full_name=form['full_name'], phone=form['phone']
            )
            if result.ok:
                messages.success(request, 'Conta criada! Faça login para continuar.')
                return redirect('core:login')
            messages.error(request, result.error)

    return render(request, 'core/signup.html', {'form': form})


@require_auth
def profile_view(request):
    """View and edit the signed-in user's profile"""
    profile = request.auth.profile

    if request.method == 'POST' and profile is not None:
        full_name = request.POST.get('full_name', '').strip()
        phone = normalize_phone(request.POST.get('phone', ''))

        if phone and not is_valid_br_phone(phone):
            messages.error(request, PHONE_INVALID)
        else:
            profile.full_name = full_name
            profile.phone = phone
            try:
                profile.save(update_fields=['full_name', 'phone', 'updated_at'])
            except DatabaseError:
                logger.exception('Error saving profile for %s', request.user.email)
                messages.error(request, 'Erro ao salvar perfil')
            else:
                messages.success(request, 'Perfil atualizado')
                return redirect('core:profile')

    return render(request, 'core/profile.html', {'profile': profile})


def session_view(request):
    """Current session as JSON, with the bearer token for function calls"""
    session = request.auth.session
    if session is None:
        return JsonResponse({'session': None})
    return JsonResponse({
        'session': {
            'access_token': session.access_token,
            'token_type': 'bearer',
            'expires_at': session.expires_at.isoformat(),
            'user': {'id': str(session.user.pk), 'email': session.user.email},
        }
    })
