"""User-facing messages for classified backend failures.

Each flow (login, registration, upload) has its own wording; kinds without
a specific message fall back to the backend's raw message.
"""

from blog.config import SETUP_INSTRUCTIONS
from blog.domain.exceptions import BackendError, BackendErrorKind

_PERMISSION_DENIED = "Permission denied: Check your database RLS policies and user permissions."
_TABLE_MISSING = (
    "Database table missing: Please ensure all required tables exist in your Supabase database."
)

_LOGIN_MESSAGES: dict[BackendErrorKind, str] = {
    BackendErrorKind.NOT_CONFIGURED: SETUP_INSTRUCTIONS,
    BackendErrorKind.INVALID_CREDENTIALS: "Invalid email or password.",
    BackendErrorKind.EMAIL_NOT_CONFIRMED: "Please check your email and confirm your account.",
    BackendErrorKind.RATE_LIMITED: "Too many attempts. Please try again later.",
    BackendErrorKind.UNREACHABLE: "Auth service unreachable. Check network or Supabase URL.",
    BackendErrorKind.PERMISSION_DENIED: _PERMISSION_DENIED,
    BackendErrorKind.RELATION_NOT_FOUND: _TABLE_MISSING,
}

_REGISTER_MESSAGES: dict[BackendErrorKind, str] = {
    BackendErrorKind.NOT_CONFIGURED: SETUP_INSTRUCTIONS,
    BackendErrorKind.ALREADY_REGISTERED: "An account with this email already exists.",
    BackendErrorKind.WEAK_PASSWORD: "Password must be at least 6 characters long.",
    BackendErrorKind.INVALID_EMAIL: "Please enter a valid email address.",
    BackendErrorKind.DUPLICATE: (
        "Username or email already exists. Please try a different username or email."
    ),
    BackendErrorKind.RATE_LIMITED: "Too many attempts. Please try again later.",
    BackendErrorKind.UNREACHABLE: "Auth service unreachable. Check network or Supabase URL.",
    BackendErrorKind.PERMISSION_DENIED: _PERMISSION_DENIED,
    BackendErrorKind.RELATION_NOT_FOUND: _TABLE_MISSING,
}


def login_error_message(error: BackendError) -> str:
    return _LOGIN_MESSAGES.get(error.kind) or error.message or "Login failed"


def register_error_message(error: BackendError) -> str:
    return (
        _REGISTER_MESSAGES.get(error.kind)
        or error.message
        or "An error occurred during registration"
    )


def upload_error_message(error: BackendError, bucket: str) -> str:
    if error.kind is BackendErrorKind.BUCKET_NOT_FOUND:
        return f'The "{bucket}" bucket does not exist. Please create it in your Supabase dashboard.'
    if error.kind is BackendErrorKind.PERMISSION_DENIED:
        return (
            "Permission denied. Please add SUPABASE_SERVICE_ROLE_KEY to your .env file "
            "for storage access."
        )
    if error.kind is BackendErrorKind.PAYLOAD_TOO_LARGE:
        return "File is too large. Please choose a smaller image."
    if error.kind is BackendErrorKind.NOT_CONFIGURED:
        return SETUP_INSTRUCTIONS
    return error.message or "An unexpected error occurred while uploading the image"
