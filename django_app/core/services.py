"""
User administration services shared by the back-office pages and the
privileged function endpoints
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .models import Profile, normalize_phone

logger = logging.getLogger(__name__)

GRANTABLE_ROLES = (Profile.ROLE_USER, Profile.ROLE_ADMIN)
STATUSES = (Profile.STATUS_ACTIVE, Profile.STATUS_BLOCKED)
COMPANY_ROLES = [choice for choice, _ in Profile.COMPANY_ROLE_CHOICES]


class ServiceError(Exception):
    """Raised with a client-facing message when a request is invalid"""


def can_manage_users(profile):
    return profile is not None and not profile.is_blocked and (profile.is_admin or profile.is_super_admin)


def create_company_user(actor, email, password, full_name=None, phone=None,
                        role=Profile.ROLE_USER, status=Profile.STATUS_ACTIVE,
                        company=None, company_role='user'):
    """
    Create an account on behalf of an admin.

    Admins always create into their own company; super admins may pick
    any company (or none).

    Raises:
        ServiceError: on missing or invalid input, or a taken email
    """
    email = (email or '').strip().lower()
    if not email or not password:
        raise ServiceError('email/password required')
    if role not in GRANTABLE_ROLES:
        raise ServiceError('invalid role')
    if status not in STATUSES:
        raise ServiceError('invalid status')
    if company_role not in COMPANY_ROLES:
        raise ServiceError('invalid company role')

    if not actor.is_super_admin:
        company = actor.company

    User = get_user_model()
    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password)
            Profile.objects.update_or_create(
                user=user,
                defaults={
                    'full_name': full_name or '',
                    'phone': normalize_phone(phone),
                    'role': role,
                    'status': status,
                    'company': company,
                    'company_role': company_role,
                },
            )
    except IntegrityError:
        raise ServiceError('User already registered')

    logger.info('User %s created by %s (company %s)', email, actor.user_id, getattr(company, 'pk', None))
    return user


def get_user_email(actor, user_id):
    """Email of a user, or 'N/A' when it is unknown or out of reach"""
    if not user_id:
        raise ServiceError('userId required')

    User = get_user_model()
    users = User.objects.all()
    if not actor.is_super_admin:
        users = users.filter(profile__company=actor.company_id) if actor.company_id else users.none()
    try:
        return users.values_list('email', flat=True).get(pk=user_id) or 'N/A'
    except (User.DoesNotExist, ValueError, TypeError):
        return 'N/A'
