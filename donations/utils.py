import json
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import JsonResponse

# Keys a payment method's details blob must carry, by method type
REQUIRED_DETAILS: Dict[str, Tuple[str, ...]] = {
    "bank": ("account_name", "account_number", "bank_name"),
    "digital": ("email",),
    "crypto": ("wallet_address",),
    "mobile": ("phone",),
}


def validate_payment_details(method_type: str, details) -> None:
    """
    Reject a details blob that doesn't match its payment method type,
    e.g. a "bank" method without an account number.
    Unknown types are left to the model's choices validation.
    """
    if not isinstance(details, dict):
        raise ValidationError({"details": "Details must be a JSON object."})

    required = REQUIRED_DETAILS.get(method_type)
    if required is None:
        return

    missing = [k for k in required if not str(details.get(k) or "").strip()]
    if missing:
        raise ValidationError(
            {"details": f"{method_type} payment methods need: {', '.join(missing)}."}
        )


def json_response(data=None, status: int = 200, message: Optional[str] = None) -> JsonResponse:
    payload = {"success": True, "data": data}
    if message:
        payload["message"] = message
    return JsonResponse(payload, status=status)


def error_response(error: str, status: int) -> JsonResponse:
    return JsonResponse({"success": False, "error": error}, status=status)


def read_json_body(request) -> dict:
    """Parse a JSON object body, raising ValueError for anything else."""
    try:
        payload = json.loads(request.body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, ValueError):
        raise ValueError("Invalid JSON body")
    if not isinstance(payload, dict):
        raise ValueError("Invalid JSON body")
    return payload


def error_message(exc: ValidationError) -> str:
    """Flatten a ValidationError into the single error string the API returns."""
    if hasattr(exc, "error_dict"):
        return format_errors(exc.message_dict)
    return " ".join(exc.messages)


def format_errors(errors) -> str:
    parts = []
    for field, messages in errors.items():
        text = " ".join(str(m) for m in messages)
        parts.append(text if field == "__all__" else f"{field}: {text}")
    return "; ".join(parts)


def paginate(queryset, params):
    """
    Apply optional ?limit=&offset= to a queryset. Without a limit the whole
    queryset is returned, so list responses keep the same shape either way.
    """
    limit = params.get("limit")
    offset = params.get("offset")
    if limit in (None, "") and offset in (None, ""):
        return queryset

    try:
        offset = int(offset or 0)
        limit = int(limit) if limit not in (None, "") else settings.API_PAGE_SIZE_MAX
    except (TypeError, ValueError):
        raise ValidationError("limit and offset must be integers.")
    if offset < 0 or limit < 1:
        raise ValidationError("limit must be positive and offset non-negative.")

    limit = min(limit, settings.API_PAGE_SIZE_MAX)
    return queryset[offset:offset + limit]
