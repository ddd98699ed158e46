"""
Company middleware for multi-tenant support
"""
import logging

from django.conf import settings
from django.shortcuts import render

from .context import CompanyContext

logger = logging.getLogger(__name__)

LAST_HOSTNAME_SESSION_KEY = 'last_hostname'


class CompanyMiddleware:
    """
    Resolve the company that owns the request hostname.

    Sets request.company_context and request.company. When the company
    cannot be resolved the blocking error page is returned and the view
    never runs; there is no default company.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.exempt_paths = tuple(getattr(settings, 'COMPANY_EXEMPT_PATHS', []))

    def __call__(self, request):
        request.company = None
        request.company_context = None

        if self.exempt_paths and request.path.startswith(self.exempt_paths):
            return self.get_response(request)

        hostname = request.get_host().split(':')[0].lower()
        context = CompanyContext(hostname)

        last_hostname = request.session.get(LAST_HOSTNAME_SESSION_KEY)
        if last_hostname and last_hostname != hostname:
            logger.info('[CompanyContext] Hostname changed from %s to %s', last_hostname, hostname)
            context.refetch()
        else:
            context.load()
        if last_hostname != hostname:
            request.session[LAST_HOSTNAME_SESSION_KEY] = hostname

        request.company_context = context
        request.company = context.company

        if not context.is_ready:
            return render(request, 'companies/unavailable.html', {
                'company_context': context,
                'error': context.error,
            }, status=503)

        return self.get_response(request)
