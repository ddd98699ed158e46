"""
Company detection - resolve the tenant that owns a hostname

Lookups are cached per hostname for COMPANY_CACHE_DURATION seconds.
The remaining helpers are the data-access calls used by the super admin
back-office; they log and return None/False on failure instead of raising.
Cache entries are dropped by the receivers in companies.signals whenever a
company or one of its domains is saved or deleted.
"""
import logging
import time
import uuid
from typing import List, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, transaction

from .models import Company, CompanyDomain

logger = logging.getLogger(__name__)

COMPANY_CACHE_KEY = 'current_company'


def _now() -> float:
    return time.time()


def _cache_key(hostname: str) -> str:
    return f'{COMPANY_CACHE_KEY}:{hostname.lower()}'


def _cache_duration() -> int:
    return getattr(settings, 'COMPANY_CACHE_DURATION', 60 * 60)


def detect_company_by_domain(hostname: str) -> Optional[Company]:
    """
    Detect the company that owns ``hostname``.

    Returns the cached company when the entry is younger than the cache
    duration, otherwise looks up a verified CompanyDomain with an exact
    hostname match. Returns None when nothing matches or the lookup fails.
    """
    cached = get_cached_company(hostname)
    if cached is not None:
        return cached

    try:
        mapping = CompanyDomain.objects.select_related('company').get(
            domain=hostname.lower(),
            is_verified=True,
        )
    except CompanyDomain.DoesNotExist:
        logger.warning('[Company Detection] No company found for domain: %s', hostname)
        return None
    except CompanyDomain.MultipleObjectsReturned:
        logger.warning('[Company Detection] Ambiguous mapping for domain: %s', hostname)
        return None
    except DatabaseError as e:
        logger.warning('[Company Detection] Error looking up company: %s', e)
        return None

    company = mapping.company
    cache_company(hostname, company)
    return company


def get_cached_company(hostname: str) -> Optional[Company]:
    """Return the cached company for hostname if still fresh"""
    key = _cache_key(hostname)
    try:
        cached = cache.get(key)
    except Exception as e:
        logger.warning('[Company Detection] Cache read failed: %s', e)
        return None

    if not cached:
        return None

    if _now() - cached['timestamp'] < _cache_duration():
        return cached['company']

    # Expired
    cache.delete(key)
    return None


def cache_company(hostname: str, company: Company) -> None:
    """Store the company for hostname with a fresh timestamp"""
    try:
        cache.set(
            _cache_key(hostname),
            {'company': company, 'timestamp': _now()},
            timeout=_cache_duration(),
        )
    except Exception as e:
        logger.warning('[Company Detection] Error caching company: %s', e)


def clear_company_cache(hostname: str) -> None:
    """Drop the cached company for hostname (used when the hostname changes)"""
    cache.delete(_cache_key(hostname))


def clear_domains_cache(company: Company) -> None:
    """Drop the cached entries of every hostname the company owns"""
    for domain in company.domains.values_list('domain', flat=True):
        clear_company_cache(domain)


def get_all_companies() -> List[Company]:
    """All companies ordered by name (super admin only)"""
    try:
        return list(Company.objects.order_by('name'))
    except DatabaseError as e:
        logger.error('[Company] Error fetching companies: %s', e)
        return []


def get_company_domains(company: Company) -> List[CompanyDomain]:
    """Domains of a company, primary first"""
    try:
        return list(company.domains.order_by('-is_primary', 'domain'))
    except DatabaseError as e:
        logger.error('[Company] Error fetching domains: %s', e)
        return []


def create_company(**fields) -> Optional[Company]:
    """Create a new company (super admin only)"""
    try:
        with transaction.atomic():
            return Company.objects.create(**fields)
    except DatabaseError as e:
        logger.error('[Company] Error creating company: %s', e)
        return None


def update_company(company: Company, **updates) -> Optional[Company]:
    """Update company fields (super admin only)"""
    for field, value in updates.items():
        setattr(company, field, value)
    try:
        with transaction.atomic():
            company.save()
    except DatabaseError as e:
        logger.error('[Company] Error updating company: %s', e)
        return None
    return company


def add_company_domain(company: Company, domain: str, is_primary: bool = False) -> Optional[CompanyDomain]:
    """Add an unverified domain to a company; a new primary demotes the others"""
    try:
        with transaction.atomic():
            if is_primary:
                company.domains.update(is_primary=False)
            return CompanyDomain.objects.create(
                company=company,
                domain=domain.strip().lower(),
                is_primary=is_primary,
                is_verified=False,
                verification_token=uuid.uuid4().hex,
            )
    except DatabaseError as e:
        logger.error('[Company] Error adding domain: %s', e)
        return None


def remove_company_domain(domain_id) -> bool:
    """Remove a domain from its company"""
    try:
        CompanyDomain.objects.get(id=domain_id).delete()
    except (CompanyDomain.DoesNotExist, DatabaseError) as e:
        logger.error('[Company] Error removing domain: %s', e)
        return False
    return True


def verify_domain(domain_id) -> bool:
    """Mark a domain as verified"""
    try:
        updated = CompanyDomain.objects.filter(id=domain_id).update(is_verified=True)
    except DatabaseError as e:
        logger.error('[Company] Error verifying domain: %s', e)
        return False
    return updated == 1


def set_primary_domain(company: Company, domain_id) -> bool:
    """Make one domain the company's primary domain"""
    try:
        with transaction.atomic():
            company.domains.update(is_primary=False)
            updated = company.domains.filter(id=domain_id).update(is_primary=True)
            if updated != 1:
                raise CompanyDomain.DoesNotExist(f'Domain {domain_id} not in {company.slug}')
    except (CompanyDomain.DoesNotExist, DatabaseError) as e:
        logger.error('[Company] Error setting primary domain: %s', e)
        return False
    return True
