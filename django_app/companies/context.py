"""
Company context - the resolved tenant for the current request

States: loading -> ready (company set, branding applied) | error.
"""
import logging

from .branding import DocumentHead, apply_branding
from .detection import clear_company_cache, detect_company_by_domain

logger = logging.getLogger(__name__)

LOADING = 'loading'
READY = 'ready'
ERROR = 'error'

NOT_FOUND_MESSAGE = 'Empresa não encontrada para este domínio'
LOAD_FAILED_MESSAGE = 'Erro ao carregar informações da empresa'


class CompanyContext:
    """Holds the company resolved for a hostname plus loading/error state"""

    def __init__(self, hostname):
        self.hostname = hostname
        self.company = None
        self.error = None
        self.status = LOADING
        self.head = DocumentHead()

    def __repr__(self):
        return f'<CompanyContext {self.hostname} {self.status}>'

    @property
    def loading(self):
        return self.status == LOADING

    @property
    def is_ready(self):
        return self.status == READY

    def load(self):
        self.status = LOADING
        self.error = None
        try:
            detected = detect_company_by_domain(self.hostname)
        except Exception:
            logger.exception('[CompanyContext] Error loading company')
            self._fail(LOAD_FAILED_MESSAGE)
            return self

        if detected is None:
            self._fail(NOT_FOUND_MESSAGE)
        else:
            self.company = detected
            self.head = DocumentHead()
            apply_branding(self.head, detected)
            self.status = READY
        return self

    def refetch(self):
        clear_company_cache(self.hostname)
        return self.load()

    def _fail(self, message):
        self.company = None
        self.error = message
        self.status = ERROR
