"""
Company branding - colors, title, SEO tags and favicon for every page

A DocumentHead is the server-side stand-in for the browser document: the
base template renders its root style, title, meta tags and links.
"""
import logging
from typing import Dict, Optional, Tuple

from django.utils.html import format_html, format_html_join

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Imóveis'


class DocumentHead:
    """Mutable document metadata rendered into <html> and <head>"""

    def __init__(self, title: str = DEFAULT_TITLE):
        self.title = title
        self.style: Dict[str, str] = {}
        self.meta: Dict[Tuple[str, str], str] = {
            ('name', 'description'): '',
        }
        self.links: Dict[str, str] = {}

    def set_property(self, name: str, value: str) -> None:
        self.style[name] = value

    def get_property_value(self, name: str) -> str:
        return self.style.get(name, '')

    def upsert_meta(self, attr: str, key: str, content: str) -> None:
        self.meta[(attr, key)] = content

    def get_meta(self, attr: str, key: str) -> Optional[str]:
        return self.meta.get((attr, key))

    def upsert_link(self, rel: str, href: str) -> None:
        self.links[rel] = href

    @property
    def root_style(self) -> str:
        return '; '.join(f'{name}: {value}' for name, value in self.style.items())

    def render_meta(self):
        return format_html_join(
            '\n',
            '<meta {}="{}" content="{}">',
            ((attr, key, content) for (attr, key), content in self.meta.items()),
        )

    def render_links(self):
        return format_html_join(
            '\n',
            '<link rel="{}" href="{}">',
            self.links.items(),
        )

    def render_root_attrs(self):
        if not self.style:
            return ''
        return format_html('style="{}"', self.root_style)

    def snapshot(self):
        """Comparable copy of the current state"""
        return (self.title, dict(self.style), dict(self.meta), dict(self.links))


def apply_branding(head: DocumentHead, company) -> None:
    """
    Apply a company's branding to the document head.

    Idempotent: applying the same company twice leaves the head unchanged.
    Errors are logged, never raised.
    """
    try:
        head.set_property('--primary-color', company.primary_color)
        head.set_property('--secondary-color', company.secondary_color)

        head.title = company.name

        head.upsert_meta('name', 'description', f'Imóveis de {company.name} - Encontre seu imóvel ideal')
        head.upsert_meta('property', 'og:title', company.name)
        head.upsert_meta('property', 'og:description', f'Imóveis de {company.name}')

        if company.favicon_url:
            head.upsert_link('icon', company.favicon_url)
    except Exception:
        logger.exception('[Company Detection] Error applying branding')
