"""
Platform back-office URLs
"""
from django.urls import path
from . import views_super_admin as views

app_name = 'super_admin'

urlpatterns = [
    path('', views.company_list, name='companies'),
    path('companies/create/', views.company_create, name='company_create'),
    path('companies/<uuid:company_id>/edit/', views.company_edit, name='company_edit'),
    path('companies/<uuid:company_id>/toggle-active/', views.company_toggle_active, name='company_toggle_active'),

    # Domains
    path('companies/<uuid:company_id>/domains/', views.company_domains, name='domains'),
    path('companies/<uuid:company_id>/domains/<uuid:domain_id>/<str:action>/', views.domain_action, name='domain_action'),

    # Users
    path('companies/<uuid:company_id>/users/', views.company_users, name='users'),
    path('companies/<uuid:company_id>/users/<int:user_id>/<str:field>/', views.company_user_toggle, name='user_toggle'),
]
