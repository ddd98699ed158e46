"""
URL configuration for the tenant marketplace
"""
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin as django_admin

urlpatterns = [
    # Django Admin (platform staff only)
    path('django-admin/', django_admin.site.urls),

    # Authentication, profile and privileged functions
    path('', include('core.urls')),

    # Company back-office (admin role)
    path('admin/', include('core.urls_admin')),

    # Platform back-office (super_admin role)
    path('super-admin/', include('companies.urls_super_admin')),

    # Public search and listing management
    path('', include('listings.urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
