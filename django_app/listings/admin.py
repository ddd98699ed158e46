"""
Listings app admin configuration
"""
from django.contrib import admin
from .models import Property, PropertyImage, Message


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0
    fields = ('image', 'url', 'position')


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ('title', 'company', 'owner', 'business', 'type', 'price', 'is_active', 'is_approved')
    list_filter = ('is_active', 'is_approved', 'business', 'type', 'company')
    search_fields = ('title', 'slug', 'city', 'neighborhood', 'owner__email')
    readonly_fields = ('slug', 'created_at', 'updated_at')
    inlines = [PropertyImageInline]
    date_hierarchy = 'created_at'


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('property', 'sender_name', 'sender_email', 'sender_phone', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('property__title', 'sender_name', 'sender_email')
    date_hierarchy = 'created_at'
