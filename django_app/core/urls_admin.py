"""
Company back-office URLs
"""
from django.urls import path
from . import views_admin

app_name = 'admin_panel'

urlpatterns = [
    path('', views_admin.dashboard, name='dashboard'),

    # Listings moderation
    path('listings/', views_admin.listing_list, name='listings'),
    path('listings/<uuid:property_id>/toggle/<str:field>/', views_admin.listing_toggle, name='listing_toggle'),

    # User Management
    path('users/', views_admin.user_list, name='users'),
    path('users/create/', views_admin.user_create, name='user_create'),
    path('users/<int:user_id>/', views_admin.user_update, name='user_update'),
]
