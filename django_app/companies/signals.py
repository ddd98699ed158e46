"""
Company signals - keep the per-hostname company cache in step with the database
"""
import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .detection import clear_company_cache, clear_domains_cache
from .models import Company, CompanyDomain

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=CompanyDomain)
def clear_renamed_domain(sender, instance, raw=False, **kwargs):
    """A renamed domain must stop resolving under its old hostname"""
    if raw or instance._state.adding:
        return
    old = sender.objects.filter(pk=instance.pk).values_list('domain', flat=True).first()
    if old and old != instance.domain:
        clear_company_cache(old)


@receiver(post_save, sender=CompanyDomain)
@receiver(post_delete, sender=CompanyDomain)
def clear_domain_cache(sender, instance, **kwargs):
    clear_company_cache(instance.domain)
    logger.debug('[Company] Cache cleared for %s', instance.domain)


@receiver(post_save, sender=Company)
def clear_company_domains_cache(sender, instance, created, raw=False, **kwargs):
    if created or raw:
        return
    clear_domains_cache(instance)
