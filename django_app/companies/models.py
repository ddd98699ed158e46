"""
Company models - Multi-tenant company and hostname management
"""
from django.db import models
from django.utils import timezone
from django.utils.text import slugify
import os
import uuid


def company_asset_path(folder, filename):
    """Storage path under company-assets/companies/<folder>/"""
    ext = os.path.splitext(filename)[1].lstrip('.').lower() or 'png'
    return f'company-assets/companies/{folder}/{uuid.uuid4()}.{ext}'


def company_logo_path(instance, filename):
    return company_asset_path('logos', filename)


def company_favicon_path(instance, filename):
    return company_asset_path('favicons', filename)


class Company(models.Model):
    """
    A company is a tenant in the multi-tenant system.
    Each company owns its domains, users and listings, and brands the site.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic info
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True)

    # Branding
    logo = models.ImageField(upload_to=company_logo_path, null=True, blank=True)
    favicon = models.ImageField(upload_to=company_favicon_path, null=True, blank=True)
    primary_color = models.CharField(max_length=20, default='#D4AF37')
    secondary_color = models.CharField(max_length=20, default='#000000')

    # Contact
    phone = models.CharField(max_length=30, blank=True)
    whatsapp = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    address = models.CharField(max_length=300, blank=True)

    # Social media
    youtube_url = models.URLField(blank=True)
    facebook_url = models.URLField(blank=True)
    instagram_url = models.URLField(blank=True)

    # Settings
    allow_user_listings = models.BooleanField(default=True)
    require_admin_approval = models.BooleanField(default=False)

    # Status
    is_active = models.BooleanField(default=True)

    PLAN_CHOICES = [
        ('basic', 'Basic'),
        ('premium', 'Premium'),
        ('enterprise', 'Enterprise'),
    ]
    subscription_plan = models.CharField(max_length=20, choices=PLAN_CHOICES, default='basic')
    subscription_expires_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        ordering = ['name']
        verbose_name_plural = 'companies'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def logo_url(self):
        return self.logo.url if self.logo else None

    @property
    def favicon_url(self):
        return self.favicon.url if self.favicon else None

    @property
    def primary_domain(self):
        return self.domains.filter(is_primary=True).first()


class CompanyDomain(models.Model):
    """
    Hostname mapped to a company. Only verified domains resolve.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='domains'
    )
    domain = models.CharField(max_length=253, unique=True)

    is_primary = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)
    verification_token = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'company_domains'
        ordering = ['-is_primary', 'domain']
        indexes = [
            models.Index(fields=['domain', 'is_verified'], name='company_dom_domain_1f0c3b_idx'),
        ]

    def __str__(self):
        return f"{self.domain} -> {self.company.name}"

    def save(self, *args, **kwargs):
        self.domain = self.domain.strip().lower()
        super().save(*args, **kwargs)
