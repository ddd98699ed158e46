"""
Auth context - session user, profile and sign-in/sign-up/sign-out

An AuthContext is attached to every request as request.auth. Its
operations return an AuthResult instead of raising.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from .models import AppSettings, Profile, normalize_phone
from .security import create_access_token

logger = logging.getLogger(__name__)

SIGNUPS_UNAVAILABLE = 'Cadastros temporariamente desativados.'
SIGNUPS_DISABLED = 'Cadastros desativados. Solicite acesso ao administrador.'
INVALID_CREDENTIALS = 'Invalid login credentials'
USER_BLOCKED = 'Usuário bloqueado. Entre em contato com o administrador.'
USER_EXISTS = 'User already registered'


@dataclass
class AuthResult:
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass
class Session:
    user: object
    access_token: str
    expires_at: datetime


def signups_allowed() -> bool:
    """Read the allow_signups flag; unreadable means disabled"""
    try:
        return bool(AppSettings.load().allow_signups)
    except (AppSettings.DoesNotExist, DatabaseError):
        return False


def fetch_profile(user) -> Optional[Profile]:
    if user is None:
        return None
    return Profile.objects.select_related('company').filter(user=user).first()


class AuthContext:
    """
    Wraps the authenticated session of a request and its profile.

    Profile-derived flags fall back to the least privileged reading
    (role 'user', status 'active') when no profile exists.
    """

    def __init__(self, request):
        self.request = request
        self.loading = True
        self.user = None
        self.profile = None
        self.refresh_profile()

    def __repr__(self):
        return f'<AuthContext user={self.user} role={self.role}>'

    def refresh_profile(self):
        """Re-read the session user and profile (session-change hook)"""
        user = getattr(self.request, 'user', None)
        self.user = user if user is not None and user.is_authenticated else None
        self.profile = fetch_profile(self.user)
        self.loading = False

    def clear(self):
        self.user = None
        self.profile = None
        self.loading = False

    @property
    def role(self):
        return getattr(self.profile, 'role', None) or Profile.ROLE_USER

    @property
    def status(self):
        return getattr(self.profile, 'status', None) or Profile.STATUS_ACTIVE

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def is_admin(self):
        return self.role == Profile.ROLE_ADMIN

    @property
    def is_super_admin(self):
        return self.role == Profile.ROLE_SUPER_ADMIN

    @property
    def is_blocked(self):
        return self.status == Profile.STATUS_BLOCKED

    @property
    def session(self) -> Optional[Session]:
        if self.user is None:
            return None
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        token = create_access_token(
            {'sub': str(self.user.pk), 'email': self.user.email, 'role': self.role},
            expires_delta=expires_delta,
        )
        return Session(
            user=self.user,
            access_token=token,
            expires_at=datetime.now(timezone.utc) + expires_delta,
        )

    def sign_in_with_password(self, email, password) -> AuthResult:
        email = (email or '').strip().lower()
        user = authenticate(self.request, username=email, password=password)
        if user is None:
            return AuthResult(error=INVALID_CREDENTIALS)

        profile = fetch_profile(user)
        if profile is not None and profile.is_blocked:
            logger.info('Blocked user %s refused at sign-in', email)
            return AuthResult(error=USER_BLOCKED)

        login(self.request, user)
        return AuthResult()

    def sign_up(self, email, password, full_name=None, phone=None) -> AuthResult:
        try:
            allowed = AppSettings.load().allow_signups
        except (AppSettings.DoesNotExist, DatabaseError) as e:
            logger.warning('Could not read allow_signups: %s', e)
            return AuthResult(error=SIGNUPS_UNAVAILABLE)
        if not allowed:
            return AuthResult(error=SIGNUPS_DISABLED)

        email = (email or '').strip().lower()
        if not email:
            return AuthResult(error='Email is required')

        User = get_user_model()
        if User.objects.filter(email=email).exists():
            return AuthResult(error=USER_EXISTS)

        try:
            validate_password(password, User(email=email))
        except ValidationError as e:
            return AuthResult(error=' '.join(e.messages))

        try:
            with transaction.atomic():
                user = User.objects.create_user(email=email, password=password)
        except IntegrityError:
            return AuthResult(error=USER_EXISTS)

        # The post_save signal already created the row; this fills it in
        try:
            with transaction.atomic():
                Profile.objects.update_or_create(
                    user=user,
                    defaults={
                        'full_name': full_name or '',
                        'phone': normalize_phone(phone),
                        'company': getattr(self.request, 'company', None),
                    },
                )
        except DatabaseError as e:
            logger.warning('Profile upsert after sign-up failed for %s: %s', email, e)

        return AuthResult()

    def sign_out(self):
        logout(self.request)
        self.clear()
