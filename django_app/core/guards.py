"""
Route guards

Each guard renders the loading placeholder while the auth context is
still resolving, redirects to the login page with a ``next`` parameter
when its condition is unmet, and otherwise calls the view unchanged.
Guards compose by stacking.
"""
from functools import wraps
from urllib.parse import quote

from django.shortcuts import redirect, render
from django.urls import reverse


def login_redirect(request):
    """Redirect to the login page, remembering the current path and query"""
    next_url = quote(request.get_full_path(), safe='')
    return redirect(f"{reverse('core:login')}?next={next_url}")


def _guard(view_func, condition):
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        auth = getattr(request, 'auth', None)
        if auth is not None and auth.loading:
            return render(request, 'core/loading.html')
        if auth is None or not condition(auth):
            return login_redirect(request)
        return view_func(request, *args, **kwargs)
    return _wrapped_view


def require_auth(view_func):
    """Decorator requiring a signed-in user"""
    return _guard(view_func, lambda auth: auth.user is not None)


def require_admin(view_func):
    """Decorator requiring an admin; super admins are admitted too"""
    return _guard(view_func, lambda auth: auth.user is not None and (auth.is_admin or auth.is_super_admin))


def require_super_admin(view_func):
    """Decorator requiring a super admin"""
    return _guard(view_func, lambda auth: auth.user is not None and auth.is_super_admin)
