"""
Core middleware - auth context and domain membership validation
"""
import logging

from django.shortcuts import redirect
from django.urls import reverse

from .auth import AuthContext

logger = logging.getLogger(__name__)

DOMAIN_MISMATCH = 'domain_mismatch'


class AuthContextMiddleware:
    """
    Attach an AuthContext to the request as request.auth
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth = AuthContext(request)
        return self.get_response(request)


class DomainValidationMiddleware:
    """
    Sign out users whose profile belongs to a different company than the
    one resolved for the request hostname.

    Super admins may use any domain.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        auth = getattr(request, 'auth', None)
        company = getattr(request, 'company', None)

        if auth is not None and auth.user is not None and auth.profile is not None and company is not None:
            profile = auth.profile
            if not profile.is_super_admin and profile.company_id != company.id:
                logger.warning(
                    'Domain mismatch: user %s (company %s) on %s (company %s), signing out',
                    auth.user.email, profile.company_id, request.get_host(), company.id,
                )
                auth.sign_out()
                return redirect(f"{reverse('core:login')}?error={DOMAIN_MISMATCH}")

        return self.get_response(request)
