"""
Template helpers for listing pages
"""
from decimal import Decimal, InvalidOperation

from django import template

from ..whatsapp import build_whatsapp_url

register = template.Library()


@register.filter
def brl(value):
    """Format a number as Brazilian reais: 1234.5 -> R$ 1.234,50"""
    if value in (None, ''):
        return 'Sob consulta'
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return value
    formatted = f'{amount:,.2f}'.replace(',', '_').replace('.', ',').replace('_', '.')
    return f'R$ {formatted}'


@register.filter
def whatsapp_url(phone):
    return build_whatsapp_url(phone)
