"""
Core signals - profile creation and session-change notifications
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=get_user_model())
def create_profile(sender, instance, created, **kwargs):
    """Every new account gets a profile row"""
    if created:
        Profile.objects.get_or_create(user=instance)


@receiver(user_logged_in)
def refresh_auth_on_login(sender, request, user, **kwargs):
    auth = getattr(request, 'auth', None)
    if auth is not None:
        auth.refresh_profile()


@receiver(user_logged_out)
def clear_auth_on_logout(sender, request, user, **kwargs):
    # request.user is still set while this signal fires
    auth = getattr(request, 'auth', None)
    if auth is not None:
        auth.clear()
