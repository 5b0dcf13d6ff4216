"""Translate Supabase error responses into classified ``BackendError``s.

PostgREST, GoTrue and Storage each shape their error bodies differently:

    PostgREST: {"code": "PGRST205", "message": "...", "details": ..., "hint": ...}
    GoTrue:    {"code": 400, "error_code": "invalid_credentials", "msg": "..."}
               {"error": "invalid_grant", "error_description": "..."}  (older)
    Storage:   {"statusCode": "404", "error": "Bucket not found", "message": "..."}

Machine-readable codes win; message text is only consulted when the body
carries no known code.
"""

import httpx

from blog.domain.exceptions import BackendError, BackendErrorKind as Kind

_CODE_KINDS: dict[str, Kind] = {
    # PostgREST / PostgreSQL
    "PGRST205": Kind.RELATION_NOT_FOUND,
    "42P01": Kind.RELATION_NOT_FOUND,
    "PGRST202": Kind.FUNCTION_NOT_FOUND,
    "42883": Kind.FUNCTION_NOT_FOUND,
    "42501": Kind.PERMISSION_DENIED,
    "23505": Kind.DUPLICATE,
    "PGRST116": Kind.NOT_FOUND,
    # GoTrue
    "invalid_credentials": Kind.INVALID_CREDENTIALS,
    "email_not_confirmed": Kind.EMAIL_NOT_CONFIRMED,
    "over_email_send_rate_limit": Kind.RATE_LIMITED,
    "over_request_rate_limit": Kind.RATE_LIMITED,
    "user_already_exists": Kind.ALREADY_REGISTERED,
    "email_exists": Kind.ALREADY_REGISTERED,
    "weak_password": Kind.WEAK_PASSWORD,
    "email_address_invalid": Kind.INVALID_EMAIL,
}

# Checked in order against the lower-cased message.
_MESSAGE_KINDS: tuple[tuple[tuple[str, ...], Kind], ...] = (
    (("could not find the table",), Kind.RELATION_NOT_FOUND),
    (("relation", "does not exist"), Kind.RELATION_NOT_FOUND),
    (("could not find the function",), Kind.FUNCTION_NOT_FOUND),
    (("bucket not found",), Kind.BUCKET_NOT_FOUND),
    (("row-level security",), Kind.PERMISSION_DENIED),
    (("permission denied",), Kind.PERMISSION_DENIED),
    (("invalid login credentials",), Kind.INVALID_CREDENTIALS),
    (("email not confirmed",), Kind.EMAIL_NOT_CONFIRMED),
    (("rate limit",), Kind.RATE_LIMITED),
    (("user already registered",), Kind.ALREADY_REGISTERED),
    (("password should be at least",), Kind.WEAK_PASSWORD),
    (("invalid email",), Kind.INVALID_EMAIL),
    (("unable to validate email",), Kind.INVALID_EMAIL),
    (("duplicate key value",), Kind.DUPLICATE),
    (("exceeded the maximum allowed size",), Kind.PAYLOAD_TOO_LARGE),
    (("payload too large",), Kind.PAYLOAD_TOO_LARGE),
    (("file size exceeds",), Kind.PAYLOAD_TOO_LARGE),
)

_STATUS_KINDS: dict[int, Kind] = {
    403: Kind.PERMISSION_DENIED,
    404: Kind.NOT_FOUND,
    413: Kind.PAYLOAD_TOO_LARGE,
    429: Kind.RATE_LIMITED,
    502: Kind.UNREACHABLE,
    503: Kind.UNREACHABLE,
    504: Kind.UNREACHABLE,
}


def _error_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text}
    return body if isinstance(body, dict) else {"message": str(body)}


def _error_code(body: dict) -> str | None:
    for key in ("error_code", "code"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _error_message(body: dict) -> str:
    for key in ("msg", "message", "error_description", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def classify(code: str | None, message: str, status_code: int | None = None) -> Kind:
    """Pick the error kind for a code / message / HTTP status triple."""
    if code and code in _CODE_KINDS:
        return _CODE_KINDS[code]

    lowered = message.lower()
    for needles, kind in _MESSAGE_KINDS:
        if all(needle in lowered for needle in needles):
            return kind

    if status_code is not None:
        return _STATUS_KINDS.get(status_code, Kind.UNKNOWN)
    return Kind.UNKNOWN


def error_from_response(response: httpx.Response) -> BackendError:
    """Build a classified ``BackendError`` from a 4xx/5xx response."""
    body = _error_body(response)
    message = _error_message(body) or f"HTTP {response.status_code}"
    kind = classify(_error_code(body), message, response.status_code)
    return BackendError(kind, message, status_code=response.status_code)
