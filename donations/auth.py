import logging
from functools import wraps

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing

from .utils import error_response

logger = logging.getLogger(__name__)

TOKEN_SALT = "donations.api-token"


def issue_token(user) -> str:
    """Signed, timestamped bearer token for the admin panel."""
    return signing.dumps({"id": user.pk, "email": user.email}, salt=TOKEN_SALT)


def user_from_token(token: str):
    """
    Return the active user a token was issued for, or None if that user is gone.
    Raises signing.BadSignature (or SignatureExpired) for tampered/old tokens.
    """
    data = signing.loads(token, salt=TOKEN_SALT, max_age=settings.API_TOKEN_MAX_AGE)
    User = get_user_model()
    return User.objects.filter(pk=data.get("id"), is_active=True).first()


def admin_required(view_func):
    """
    Guard a view behind ``Authorization: Bearer <token>`` for staff users.
    Missing token or unknown user -> 401, bad token or non-staff user -> 403.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return error_response("Access token required", 401)

        try:
            user = user_from_token(token)
        except signing.BadSignature as e:
            logger.warning("Rejected API token: %s", e)
            return error_response("Invalid or expired token", 403)

        if user is None:
            return error_response("Invalid token - user not found", 401)
        if not user.is_staff:
            return error_response("Admin access required", 403)

        request.user = user
        return view_func(request, *args, **kwargs)

    return _wrapped
