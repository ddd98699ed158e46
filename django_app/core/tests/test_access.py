"""
Tests for domain membership validation and the route guards.
"""
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.urls import reverse

from core.guards import require_admin, require_auth, require_super_admin


@pytest.mark.django_db
class TestDomainValidation:

    def test_member_of_company_passes(self, member_client):
        response = member_client.get(reverse('core:profile'))
        assert response.status_code == 200

    def test_member_of_other_company_is_signed_out(self, client, company, other_company, user_factory):
        outsider = user_factory(email='outsider@example.com', profile__company=other_company)
        client.force_login(outsider)

        response = client.get(reverse('listings:home'))

        assert response.status_code == 302
        assert response.url == reverse('core:login') + '?error=domain_mismatch'
        assert '_auth_user_id' not in client.session

    def test_mismatch_message_is_shown(self, client, company, other_company, user_factory):
        outsider = user_factory(email='outsider@example.com', profile__company=other_company)
        client.force_login(outsider)

        response = client.get(reverse('listings:home'), follow=True)

        assert response.status_code == 200
        assert 'Sua conta não pertence a este site' in response.content.decode()

    def test_user_without_company_is_signed_out(self, client, company, user_factory):
        stray = user_factory(email='stray@example.com')
        client.force_login(stray)

        response = client.get(reverse('listings:home'))

        assert response.url == reverse('core:login') + '?error=domain_mismatch'

    def test_super_admin_may_use_any_domain(self, super_admin_client, company, other_company):
        assert super_admin_client.get(reverse('listings:home')).status_code == 200
        assert super_admin_client.get(reverse('listings:home'), HTTP_HOST='other.test').status_code == 200

    def test_same_user_on_own_domain_after_switch(self, member_client, other_company):
        response = member_client.get(reverse('listings:home'), HTTP_HOST='other.test')
        assert response.status_code == 302
        assert '_auth_user_id' not in member_client.session

    def test_anonymous_is_untouched(self, client, company):
        assert client.get(reverse('listings:home')).status_code == 200


@pytest.mark.django_db
class TestGuards:

    def test_anonymous_is_sent_to_login_with_next(self, client, company):
        response = client.get('/perfil/?aba=dados')

        assert response.status_code == 302
        assert response.url == '/login/?next=%2Fperfil%2F%3Faba%3Ddados'

    def test_signed_in_user_passes_require_auth(self, member_client):
        assert member_client.get(reverse('core:profile')).status_code == 200

    def test_plain_user_cannot_open_admin(self, member_client):
        response = member_client.get(reverse('admin_panel:dashboard'))
        assert response.status_code == 302
        assert response.url == '/login/?next=%2Fadmin%2F'

    def test_admin_opens_admin(self, admin_client):
        assert admin_client.get(reverse('admin_panel:dashboard')).status_code == 200

    def test_super_admin_opens_admin(self, super_admin_client, company):
        assert super_admin_client.get(reverse('admin_panel:dashboard')).status_code == 200

    def test_admin_cannot_open_super_admin(self, admin_client):
        response = admin_client.get(reverse('super_admin:companies'))
        assert response.status_code == 302
        assert response.url.startswith('/login/?next=')

    def test_super_admin_opens_super_admin(self, super_admin_client, company):
        assert super_admin_client.get(reverse('super_admin:companies')).status_code == 200

    def test_loading_renders_placeholder(self, rf, company):
        request = rf.get('/perfil/')
        request.user = AnonymousUser()
        request.auth = SimpleNamespace(loading=True, user=None)

        response = require_auth(lambda r: HttpResponse('ok'))(request)

        assert response.status_code == 200
        assert 'Carregando' in response.content.decode()

    @pytest.mark.parametrize('guard, flags, allowed', [
        (require_admin, {'is_admin': True, 'is_super_admin': False}, True),
        (require_admin, {'is_admin': False, 'is_super_admin': True}, True),
        (require_admin, {'is_admin': False, 'is_super_admin': False}, False),
        (require_super_admin, {'is_admin': True, 'is_super_admin': False}, False),
        (require_super_admin, {'is_admin': False, 'is_super_admin': True}, True),
    ])
    def test_role_guards(self, rf, company, guard, flags, allowed):
        request = rf.get('/area/')
        request.auth = SimpleNamespace(loading=False, user=object(), **flags)

        response = guard(lambda r: HttpResponse('ok'))(request)

        if allowed:
            assert response.content == b'ok'
        else:
            assert response.status_code == 302
            assert response.url == '/login/?next=%2Farea%2F'
