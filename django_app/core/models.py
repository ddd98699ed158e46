"""
Core models - Custom User model, profiles and platform settings
"""
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings
from django.db import models
from django.utils import timezone
import re


def normalize_phone(value):
    """Keep digits only"""
    return re.sub(r'\D+', '', value or '')


def is_valid_br_phone(digits):
    """Brazilian numbers with area code have 10 or 11 digits"""
    return len(digits) in (10, 11)


def format_br_phone(digits):
    if len(digits) == 11:
        return f'({digits[:2]}) {digits[2:7]}-{digits[7:]}'
    if len(digits) == 10:
        return f'({digits[:2]}) {digits[2:6]}-{digits[6:]}'
    return digits


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication"""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom user model with email as the primary identifier.
    Application data (role, status, company) lives on Profile.
    """
    username = None  # Remove username field
    email = models.EmailField('email address', unique=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        verbose_name = 'user'
        verbose_name_plural = 'users'

    def __str__(self):
        return self.email


class Profile(models.Model):
    """
    Application-level user record layered on top of the auth account
    """
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_SUPER_ADMIN = 'super_admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Admin'),
        (ROLE_SUPER_ADMIN, 'Super Admin'),
    ]

    COMPANY_ROLE_CHOICES = [
        ('user', 'User'),
        ('company_admin', 'Company Admin'),
    ]

    STATUS_ACTIVE = 'active'
    STATUS_BLOCKED = 'blocked'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_BLOCKED, 'Blocked'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile'
    )

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    company_role = models.CharField(max_length=20, choices=COMPANY_ROLE_CHOICES, default='user')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    # Tenant membership
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members'
    )

    full_name = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=20, blank=True)  # digits only

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        ordering = ['full_name']

    def __str__(self):
        return self.full_name or self.user.email

    def save(self, *args, **kwargs):
        self.phone = normalize_phone(self.phone)
        super().save(*args, **kwargs)

    @property
    def phone_display(self):
        return format_br_phone(self.phone)

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def is_super_admin(self):
        return self.role == self.ROLE_SUPER_ADMIN

    @property
    def is_blocked(self):
        return self.status == self.STATUS_BLOCKED


class AppSettings(models.Model):
    """
    Platform-wide feature flags (single row, id=1)
    """
    id = models.PositiveSmallIntegerField(primary_key=True, default=1, editable=False)
    allow_signups = models.BooleanField(default=False)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'app_settings'
        verbose_name = 'app settings'
        verbose_name_plural = 'app settings'

    def __str__(self):
        return 'App settings'

    @classmethod
    def load(cls):
        """The settings row; raises DoesNotExist when it was never created"""
        return cls.objects.get(pk=1)
