"""
Test configuration - pytest fixtures and factory_boy factories

The Django test client talks to the host 'testserver'; the ``company``
fixture maps that hostname to a verified company so requests resolve a
tenant. Use ``other_company`` (host 'other.test') for isolation tests.
"""
from decimal import Decimal

import factory
import pytest
from django.core.cache import cache
from factory.django import DjangoModelFactory


TEST_HOST = 'testserver'
OTHER_HOST = 'other.test'
TEST_PASSWORD = 'testpass123'


# ============================================================================
# COMPANY FACTORIES
# ============================================================================

class CompanyFactory(DjangoModelFactory):
    """Factory for tenant companies."""

    class Meta:
        model = 'companies.Company'
        django_get_or_create = ('slug',)

    name = factory.Sequence(lambda n: f"Imobiliária {n}")
    slug = factory.Sequence(lambda n: f"imobiliaria-{n}")
    primary_color = '#D4AF37'
    secondary_color = '#000000'
    whatsapp = '11988887777'
    is_active = True


class CompanyDomainFactory(DjangoModelFactory):
    """Factory for hostnames mapped to a company."""

    class Meta:
        model = 'companies.CompanyDomain'
        django_get_or_create = ('domain',)

    company = factory.SubFactory(CompanyFactory)
    domain = factory.LazyAttribute(lambda o: f"{o.company.slug}.test")
    is_primary = True
    is_verified = True


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """
    Factory for accounts.

    The profile row comes from the post_save signal; set its fields with
    ``profile__<field>``, e.g. ``UserFactory(profile__role='admin')``.
    """

    class Meta:
        model = 'core.User'
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        password = kwargs.pop('password', TEST_PASSWORD)
        manager = cls._get_manager(model_class)
        return manager.create_user(*args, password=password, **kwargs)

    @factory.post_generation
    def profile(obj, create, extracted, **kwargs):
        if not create or not kwargs:
            return
        profile = obj.profile
        for field, value in kwargs.items():
            setattr(profile, field, value)
        profile.save()


# ============================================================================
# LISTING FACTORIES
# ============================================================================

class PropertyFactory(DjangoModelFactory):
    """Factory for published listings."""

    class Meta:
        model = 'listings.Property'

    company = factory.SubFactory(CompanyFactory)
    owner = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Apartamento {n}")
    description = 'Apartamento amplo e bem localizado'
    city = 'São Paulo'
    neighborhood = 'Pinheiros'
    address = 'Rua dos Pinheiros, 100'
    price = Decimal('500000.00')
    bedrooms = 2
    bathrooms = 1
    area_m2 = Decimal('70.00')
    type = 'apartment'
    business = 'sale'
    is_active = True
    is_approved = True


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache():
    """Resolved companies are cached per hostname; start every test cold."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def company(db):
    company = CompanyFactory(name='Imobiliária Central', slug='central')
    CompanyDomainFactory(company=company, domain=TEST_HOST)
    return company


@pytest.fixture
def other_company(db):
    company = CompanyFactory(name='Outra Imobiliária', slug='outra')
    CompanyDomainFactory(company=company, domain=OTHER_HOST)
    return company


@pytest.fixture
def app_settings(db):
    from core.models import AppSettings
    return AppSettings.objects.create(allow_signups=True)


@pytest.fixture
def member(company):
    return UserFactory(
        email='member@example.com',
        profile__company=company,
        profile__full_name='Maria Souza',
        profile__phone='11912345678',
    )


@pytest.fixture
def admin_user(company):
    return UserFactory(
        email='admin@example.com',
        profile__company=company,
        profile__role='admin',
    )


@pytest.fixture
def super_admin(db):
    return UserFactory(
        email='root@example.com',
        profile__role='super_admin',
    )


@pytest.fixture
def member_client(client, member):
    client.force_login(member)
    return client


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.fixture
def super_admin_client(client, super_admin):
    client.force_login(super_admin)
    return client


@pytest.fixture
def listing(company, member):
    return PropertyFactory(company=company, owner=member)


@pytest.fixture
def user_factory(db):
    return UserFactory


@pytest.fixture
def property_factory(db):
    return PropertyFactory


@pytest.fixture
def company_factory(db):
    return CompanyFactory


@pytest.fixture
def domain_factory(db):
    return CompanyDomainFactory
