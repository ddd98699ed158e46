"""
Tests for the sign-up and profile pages, the company back-office and
the init_system command.
"""
from io import BytesIO

import pytest
from PIL import Image
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.test import override_settings
from django.urls import reverse

from companies.models import Company
from core.models import AppSettings, Profile, format_br_phone, is_valid_br_phone, normalize_phone
from core.views import PHONE_INVALID

User = get_user_model()


class TestPhoneHelpers:

    def test_normalize_keeps_digits(self):
        assert normalize_phone('(11) 91234-5678') == '11912345678'
        assert normalize_phone(None) == ''

    def test_valid_lengths(self):
        assert is_valid_br_phone('1133334444')
        assert is_valid_br_phone('11912345678')
        assert not is_valid_br_phone('912345678')

    def test_format(self):
        assert format_br_phone('11912345678') == '(11) 91234-5678'
        assert format_br_phone('1133334444') == '(11) 3333-4444'
        assert format_br_phone('123') == '123'


@pytest.mark.django_db
class TestSignUpPage:

    def signup(self, client, **overrides):
        data = {
            'full_name': 'João Lima',
            'email': 'joao@example.com',
            'password': 'S3nha-forte!',
            'phone': '(11) 91234-5678',
        }
        data.update(overrides)
        return client.post(reverse('core:signup'), data)

    def test_signup_creates_account_and_returns_to_login(self, client, company, app_settings):
        response = self.signup(client)

        assert response.status_code == 302
        assert response.url == reverse('core:login')
        user = User.objects.get(email='joao@example.com')
        assert user.profile.company == company
        assert '_auth_user_id' not in client.session

    def test_signup_disabled(self, client, company, app_settings):
        app_settings.allow_signups = False
        app_settings.save()

        response = self.signup(client)

        assert response.status_code == 200
        assert 'Cadastros desativados' in response.content.decode()
        assert not User.objects.filter(email='joao@example.com').exists()

    def test_short_password(self, client, company, app_settings):
        response = self.signup(client, password='curta')
        assert 'mínimo 8 caracteres' in response.content.decode()
        assert not User.objects.exists()

    def test_invalid_phone(self, client, company, app_settings):
        response = self.signup(client, phone='1234')
        assert 'Telefone inválido' in response.content.decode()
        assert not User.objects.exists()


@pytest.mark.django_db
class TestProfilePage:

    def test_update_profile(self, member_client, member):
        response = member_client.post(reverse('core:profile'), {
            'full_name': 'Maria S. Souza',
            'phone': '(21) 3333-4444',
        })

        assert response.status_code == 302
        member.profile.refresh_from_db()
        assert member.profile.full_name == 'Maria S. Souza'
        assert member.profile.phone == '2133334444'

    def test_invalid_phone_is_rejected(self, member_client, member):
        response = member_client.post(reverse('core:profile'), {
            'full_name': 'Maria',
            'phone': '999',
        })

        assert response.status_code == 200
        assert PHONE_INVALID in response.content.decode()
        member.profile.refresh_from_db()
        assert member.profile.phone == '11912345678'

    def test_phone_may_be_cleared(self, member_client, member):
        member_client.post(reverse('core:profile'), {'full_name': 'Maria', 'phone': ''})
        member.profile.refresh_from_db()
        assert member.profile.phone == ''


@pytest.mark.django_db
class TestCompanyBackOffice:

    def test_dashboard_counts_company_data(self, admin_client, listing, property_factory, other_company):
        property_factory(company=listing.company, owner=listing.owner, is_approved=False)
        property_factory(company=other_company)

        response = admin_client.get(reverse('admin_panel:dashboard'))

        stats = response.context['stats']
        assert stats['total_listings'] == 2
        assert stats['pending_listings'] == 1
        assert stats['total_users'] == 2

    def test_listings_are_scoped_to_company(self, admin_client, listing, property_factory, other_company):
        foreign = property_factory(company=other_company)
        response = admin_client.get(reverse('admin_panel:listings'))
        ids = {p.id for p in response.context['properties']}
        assert listing.id in ids
        assert foreign.id not in ids

    def test_toggle_approval(self, admin_client, listing):
        response = admin_client.post(reverse('admin_panel:listing_toggle', args=[listing.id, 'is_approved']))

        assert response.status_code == 302
        listing.refresh_from_db()
        assert listing.is_approved is False

    def test_toggle_unknown_field(self, admin_client, listing):
        admin_client.post(reverse('admin_panel:listing_toggle', args=[listing.id, 'title']))
        listing.refresh_from_db()
        assert listing.title.startswith('Apartamento')

    def test_block_member(self, admin_client, member):
        admin_client.post(reverse('admin_panel:user_update', args=[member.pk]), {'status': 'blocked'})
        member.profile.refresh_from_db()
        assert member.profile.is_blocked

    def test_admin_cannot_change_self(self, admin_client, admin_user):
        admin_client.post(reverse('admin_panel:user_update', args=[admin_user.pk]), {'role': 'user'})
        admin_user.profile.refresh_from_db()
        assert admin_user.profile.is_admin

    def test_super_admin_role_is_not_grantable(self, admin_client, member):
        admin_client.post(reverse('admin_panel:user_update', args=[member.pk]), {'role': 'super_admin'})
        member.profile.refresh_from_db()
        assert member.profile.role == Profile.ROLE_USER

    def test_member_of_other_company_is_not_found(self, admin_client, other_company, user_factory):
        outsider = user_factory(email='outsider@example.com', profile__company=other_company)
        response = admin_client.post(reverse('admin_panel:user_update', args=[outsider.pk]), {'status': 'blocked'})
        assert response.status_code == 404

    def test_create_user_in_company(self, admin_client, company):
        response = admin_client.post(reverse('admin_panel:user_create'), {
            'email': 'novo@example.com',
            'password': 'S3nha-forte!',
            'full_name': 'Novo Corretor',
        })

        assert response.status_code == 302
        assert User.objects.get(email='novo@example.com').profile.company == company


@pytest.mark.django_db
class TestPlatformBackOffice:

    def test_create_company(self, super_admin_client, company):
        response = super_admin_client.post(reverse('super_admin:company_create'), {
            'name': 'Nova Imobiliária',
            'primary_color': '#112233',
            'secondary_color': '#FFFFFF',
            'subscription_plan': 'premium',
            'allow_user_listings': 'on',
        })

        assert response.status_code == 302
        created = Company.objects.get(name='Nova Imobiliária')
        assert created.slug == 'nova-imobiliaria'
        assert created.primary_color == '#112233'
        assert created.require_admin_approval is False

    def test_invalid_color_is_rejected(self, super_admin_client, company):
        super_admin_client.post(reverse('super_admin:company_create'), {
            'name': 'Nova Imobiliária',
            'primary_color': 'red',
        })
        assert not Company.objects.filter(name='Nova Imobiliária').exists()

    def test_non_image_logo_is_rejected(self, super_admin_client, company):
        response = super_admin_client.post(reverse('super_admin:company_create'), {
            'name': 'Nova Imobiliária',
            'logo': SimpleUploadedFile('logo.png', b'<svg onload=alert(1)>', content_type='image/png'),
        })

        assert response.status_code == 200
        assert not Company.objects.filter(name='Nova Imobiliária').exists()

    def test_png_logo_is_stored(self, super_admin_client, company):
        buffer = BytesIO()
        Image.new('RGB', (8, 8), 'gold').save(buffer, format='PNG')
        super_admin_client.post(reverse('super_admin:company_create'), {
            'name': 'Nova Imobiliária',
            'logo': SimpleUploadedFile('logo.png', buffer.getvalue(), content_type='image/png'),
        })

        assert Company.objects.get(name='Nova Imobiliária').logo

    def test_toggle_active(self, super_admin_client, company, other_company):
        super_admin_client.post(reverse('super_admin:company_toggle_active', args=[other_company.id]))
        other_company.refresh_from_db()
        assert other_company.is_active is False

    def test_add_and_verify_domain(self, super_admin_client, company, other_company):
        super_admin_client.post(reverse('super_admin:domains', args=[other_company.id]), {'domain': 'Novo.Test'})
        domain = other_company.domains.get(domain='novo.test')
        assert domain.is_verified is False

        super_admin_client.post(reverse('super_admin:domain_action', args=[other_company.id, domain.id, 'verify']))
        domain.refresh_from_db()
        assert domain.is_verified is True

    def test_create_user_for_company(self, super_admin_client, company, other_company):
        super_admin_client.post(reverse('super_admin:users', args=[other_company.id]), {
            'email': 'gerente@example.com',
            'password': 'S3nha-forte!',
            'company_role': 'company_admin',
        })
        profile = User.objects.get(email='gerente@example.com').profile
        assert profile.company == other_company
        assert profile.company_role == 'company_admin'

    def test_toggle_member_role(self, super_admin_client, member, company):
        super_admin_client.post(reverse('super_admin:user_toggle', args=[company.id, member.pk, 'role']))
        member.profile.refresh_from_db()
        assert member.profile.is_admin


@pytest.mark.django_db
class TestInitSystemCommand:

    @override_settings(SUPER_ADMIN_EMAIL='Root@Example.com', SUPER_ADMIN_PASSWORD='S3nha-forte!')
    def test_bootstrap(self):
        call_command('init_system', '--allow-signups', '--company', 'Central', '--domain', 'Central.Test')

        assert AppSettings.load().allow_signups is True
        root = User.objects.get(email='root@example.com')
        assert root.check_password('S3nha-forte!')
        assert root.profile.is_super_admin
        company = Company.objects.get(name='Central')
        assert company.domains.get().domain == 'central.test'

    @override_settings(SUPER_ADMIN_EMAIL='root@example.com', SUPER_ADMIN_PASSWORD='')
    def test_is_idempotent_and_skips_without_password(self):
        call_command('init_system')
        call_command('init_system')

        assert AppSettings.objects.count() == 1
        assert AppSettings.load().allow_signups is False
        assert not User.objects.exists()
