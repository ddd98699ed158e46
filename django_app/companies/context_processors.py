"""
Company context processors
Adds the resolved company and its branded document head to all templates
"""
from django.conf import settings

from .branding import DocumentHead


def company_context(request):
    """
    Add company context to all templates.

    Provides:
    - company: Company resolved for the request hostname (or None)
    - head: DocumentHead carrying the company's branding
    - whatsapp_phone: number used by the floating WhatsApp button
    """
    context = getattr(request, 'company_context', None)
    company = getattr(request, 'company', None)

    return {
        'company': company,
        'head': context.head if context is not None else DocumentHead(),
        'whatsapp_phone': (company.whatsapp if company else '') or settings.DEFAULT_WHATSAPP_PHONE,
    }
