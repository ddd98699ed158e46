"""
WhatsApp deep-link helpers
"""
from urllib.parse import quote

from core.models import normalize_phone

WHATSAPP_BASE_URL = 'https://wa.me/'
BRAZIL_COUNTRY_CODE = '55'


def whatsapp_target(phone):
    """
    Digits to dial on WhatsApp.

    Numbers already carrying the country code are kept; 11-digit
    national mobile numbers get the Brazilian prefix.
    """
    digits = normalize_phone(phone)
    if digits.startswith(BRAZIL_COUNTRY_CODE):
        return digits
    if len(digits) == 11:
        return f'{BRAZIL_COUNTRY_CODE}{digits}'
    return digits


def build_whatsapp_url(phone, text=''):
    url = f'{WHATSAPP_BASE_URL}{quote(whatsapp_target(phone), safe="")}'
    if text:
        url += f'?text={quote(text, safe="")}'
    return url


def contact_message_text(name, email, phone, title, link, content):
    return (
        f'Olá! Meu nome é {name}.\n'
        f'E-mail: {email}\n'
        f'Telefone: {phone}\n\n'
        f'Tenho interesse no anúncio: {title}\n'
        f'Link: {link}\n\n'
        f'Mensagem: {content}'
    )
