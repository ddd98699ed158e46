"""
Core app URLs - Authentication, profile and function endpoints
"""
from django.urls import path
from . import views, views_functions

app_name = 'core'

urlpatterns = [
    # Authentication
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('cadastro/', views.signup_view, name='signup'),
    path('auth/session/', views.session_view, name='session'),

    # Profile
    path('perfil/', views.profile_view, name='profile'),

    # Privileged functions
    path('functions/v1/admin-create-user', views_functions.admin_create_user, name='admin_create_user'),
    path('functions/v1/get-user-email', views_functions.user_email, name='get_user_email'),
]
