"""
Context processor exposing the auth context to templates
"""


def auth_context(request):
    auth = getattr(request, 'auth', None)
    return {
        'auth': auth,
        'profile': getattr(auth, 'profile', None),
    }
