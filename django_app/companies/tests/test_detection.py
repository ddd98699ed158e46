"""
Tests for company detection and its per-hostname cache.
"""
from unittest import mock

import pytest
from django.db import DatabaseError

from companies import detection
from companies.detection import (
    add_company_domain, cache_company, clear_company_cache, detect_company_by_domain,
    get_cached_company, remove_company_domain, set_primary_domain, update_company, verify_domain,
)
from companies.models import CompanyDomain


@pytest.mark.django_db
class TestDetectCompanyByDomain:
    """Hostname resolution."""

    def test_verified_domain_resolves(self, company):
        assert detect_company_by_domain('testserver') == company

    def test_hostname_is_matched_case_insensitively(self, company):
        assert detect_company_by_domain('TestServer') == company

    def test_unknown_domain_returns_none(self, company):
        assert detect_company_by_domain('nowhere.test') is None

    def test_unverified_domain_does_not_resolve(self, company, domain_factory):
        domain_factory(company=company, domain='pending.test', is_verified=False)
        assert detect_company_by_domain('pending.test') is None

    def test_inactive_company_still_resolves(self, company):
        company.is_active = False
        company.save()
        assert detect_company_by_domain('testserver') == company

    def test_second_lookup_is_served_from_cache(self, company, django_assert_num_queries):
        with django_assert_num_queries(1):
            detect_company_by_domain('testserver')
        with django_assert_num_queries(0):
            assert detect_company_by_domain('testserver') == company

    def test_expired_entry_is_refetched(self, company, django_assert_num_queries):
        now = detection._now()
        with mock.patch('companies.detection._now', return_value=now):
            detect_company_by_domain('testserver')

        with mock.patch('companies.detection._now', return_value=now + 60 * 60 + 1):
            with django_assert_num_queries(1):
                assert detect_company_by_domain('testserver') == company

    def test_entry_younger_than_an_hour_is_fresh(self, company):
        now = detection._now()
        with mock.patch('companies.detection._now', return_value=now):
            cache_company('testserver', company)
        with mock.patch('companies.detection._now', return_value=now + 60 * 59):
            assert get_cached_company('testserver') == company

    def test_cache_is_keyed_by_hostname(self, company, other_company):
        assert detect_company_by_domain('testserver') == company
        assert detect_company_by_domain('other.test') == other_company

    def test_clear_company_cache_forces_lookup(self, company, django_assert_num_queries):
        detect_company_by_domain('testserver')
        clear_company_cache('testserver')
        assert get_cached_company('testserver') is None
        with django_assert_num_queries(1):
            detect_company_by_domain('testserver')

    def test_database_error_returns_none(self, company):
        with mock.patch.object(CompanyDomain.objects, 'select_related', side_effect=DatabaseError('down')):
            assert detect_company_by_domain('testserver') is None


@pytest.mark.django_db
class TestDomainManagement:
    """Back-office data helpers."""

    def test_add_domain_is_unverified_and_lowercased(self, company):
        domain = add_company_domain(company, '  WWW.Central.com.br ')
        assert domain.domain == 'www.central.com.br'
        assert domain.is_verified is False
        assert domain.verification_token

    def test_add_duplicate_domain_returns_none(self, company):
        assert add_company_domain(company, 'testserver') is None

    def test_verify_domain(self, company):
        domain = add_company_domain(company, 'novo.test')
        assert verify_domain(domain.id) is True
        domain.refresh_from_db()
        assert domain.is_verified is True
        assert detect_company_by_domain('novo.test') == company

    def test_set_primary_domain_is_exclusive(self, company):
        extra = add_company_domain(company, 'novo.test')
        assert set_primary_domain(company, extra.id) is True
        primaries = list(company.domains.filter(is_primary=True).values_list('domain', flat=True))
        assert primaries == ['novo.test']

    def test_set_primary_domain_of_other_company_fails(self, company, other_company):
        foreign = other_company.domains.get()
        assert set_primary_domain(company, foreign.id) is False
        assert company.domains.filter(is_primary=True).count() == 1

    def test_remove_domain_drops_cached_entry(self, company):
        extra = add_company_domain(company, 'novo.test')
        verify_domain(extra.id)
        detect_company_by_domain('novo.test')

        assert remove_company_domain(extra.id) is True
        assert get_cached_company('novo.test') is None
        assert detect_company_by_domain('novo.test') is None

    def test_update_company_clears_cache_for_its_domains(self, company):
        detect_company_by_domain('testserver')
        update_company(company, name='Nova Central')
        assert get_cached_company('testserver') is None
        assert detect_company_by_domain('testserver').name == 'Nova Central'

    def test_add_primary_domain_demotes_existing_primary(self, company):
        added = add_company_domain(company, 'novo.test', is_primary=True)
        primaries = list(company.domains.filter(is_primary=True).values_list('id', flat=True))
        assert primaries == [added.id]


@pytest.mark.django_db
class TestCacheFollowsModelChanges:
    """Saving or deleting rows outside the helpers (django-admin, shell) drops stale entries."""

    def test_unverifying_a_domain_stops_resolution(self, company):
        detect_company_by_domain('testserver')
        mapping = company.domains.get(domain='testserver')
        mapping.is_verified = False
        mapping.save()

        assert get_cached_company('testserver') is None
        assert detect_company_by_domain('testserver') is None

    def test_renamed_domain_drops_old_hostname(self, company):
        detect_company_by_domain('testserver')
        mapping = company.domains.get(domain='testserver')
        mapping.domain = 'renamed.test'
        mapping.save()

        assert get_cached_company('testserver') is None
        assert detect_company_by_domain('renamed.test') == company

    def test_deleted_domain_stops_resolution(self, company):
        detect_company_by_domain('testserver')
        company.domains.get(domain='testserver').delete()

        assert detect_company_by_domain('testserver') is None

    def test_company_save_drops_its_entries(self, company):
        detect_company_by_domain('testserver')
        company.primary_color = '#112233'
        company.save()

        assert get_cached_company('testserver') is None
        assert detect_company_by_domain('testserver').primary_color == '#112233'

    def test_deleted_company_stops_resolving(self, company):
        detect_company_by_domain('testserver')
        company.delete()

        assert detect_company_by_domain('testserver') is None
