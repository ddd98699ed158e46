"""
Companies app admin configuration
"""
from django.contrib import admin
from .models import Company, CompanyDomain


class CompanyDomainInline(admin.TabularInline):
    model = CompanyDomain
    extra = 0
    readonly_fields = ('verification_token', 'created_at')


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'subscription_plan', 'is_active', 'created_at')
    list_filter = ('is_active', 'subscription_plan', 'allow_user_listings', 'require_admin_approval')
    search_fields = ('name', 'slug', 'email')
    prepopulated_fields = {'slug': ('name',)}
    inlines = [CompanyDomainInline]


@admin.register(CompanyDomain)
class CompanyDomainAdmin(admin.ModelAdmin):
    list_display = ('domain', 'company', 'is_primary', 'is_verified', 'created_at')
    list_filter = ('is_primary', 'is_verified')
    search_fields = ('domain', 'company__name')
