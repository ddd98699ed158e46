"""
Privileged function endpoints (bearer-token JSON API)

Errors are plain-text bodies with an HTTP status code; CORS and
preflight handling come from django-cors-headers.
"""
import json
import logging

from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from companies.models import Company

from .models import Profile
from .security import TokenError, bearer_token, verify_token
from .services import ServiceError, can_manage_users, create_company_user, get_user_email

logger = logging.getLogger(__name__)


def _caller_profile(request):
    """Return (profile, error_response) for the bearer token on the request"""
    try:
        payload = verify_token(bearer_token(request))
    except TokenError as e:
        logger.info('Function call rejected: %s', e)
        return None, HttpResponse('Unauthorized', status=401)

    profile = (
        Profile.objects.select_related('user', 'company')
        .filter(user_id=payload.get('sub'), user__is_active=True)
        .first()
    )
    if profile is None:
        return None, HttpResponse('Unauthorized', status=401)
    if not can_manage_users(profile):
        return None, HttpResponse('Forbidden', status=403)
    return profile, None


def _json_body(request):
    try:
        body = json.loads(request.body or b'{}')
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@csrf_exempt
@require_POST
def admin_create_user(request):
    caller, error = _caller_profile(request)
    if error:
        return error

    body = _json_body(request)
    company = None
    if caller.is_super_admin and body.get('companyId'):
        try:
            company = Company.objects.filter(pk=body['companyId']).first()
        except ValidationError:
            company = None
        if company is None:
            return HttpResponse('invalid company', status=400)

    try:
        user = create_company_user(
            caller,
            email=body.get('email'),
            password=body.get('password'),
            full_name=body.get('fullName'),
            phone=body.get('phone'),
            role=body.get('role') or Profile.ROLE_USER,
            status=body.get('status') or Profile.STATUS_ACTIVE,
            company=company,
            company_role=body.get('companyRole') or 'user',
        )
    except ServiceError as e:
        return HttpResponse(str(e), status=400)

    return JsonResponse({'userId': str(user.pk), 'email': user.email})


@csrf_exempt
@require_POST
def user_email(request):
    caller, error = _caller_profile(request)
    if error:
        return error

    try:
        email = get_user_email(caller, _json_body(request).get('userId'))
    except ServiceError as e:
        return HttpResponse(str(e), status=400)

    return JsonResponse({'email': email})
