"""Domain-specific exceptions — framework-independent."""

from enum import Enum


class BackendErrorKind(str, Enum):
    """Classified failure reasons reported by the hosted backend.

    Produced by the backend adapter layer so services and user-facing
    messages never depend on raw error strings.
    """

    NOT_CONFIGURED = "not_configured"
    UNREACHABLE = "unreachable"
    RELATION_NOT_FOUND = "relation_not_found"
    FUNCTION_NOT_FOUND = "function_not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    RATE_LIMITED = "rate_limited"
    ALREADY_REGISTERED = "already_registered"
    WEAK_PASSWORD = "weak_password"
    INVALID_EMAIL = "invalid_email"
    DUPLICATE = "duplicate"
    BUCKET_NOT_FOUND = "bucket_not_found"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNKNOWN = "unknown"


# Kinds that mean "the remote article store is not usable at all" rather than
# "this particular request was refused".
STORE_UNAVAILABLE_KINDS = frozenset({
    BackendErrorKind.NOT_CONFIGURED,
    BackendErrorKind.UNREACHABLE,
    BackendErrorKind.RELATION_NOT_FOUND,
})


class BackendError(Exception):
    """Raised by backend adapters when a remote call fails."""

    def __init__(
        self,
        kind: BackendErrorKind,
        message: str,
        status_code: int | None = None,
    ):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{kind.value}] {message}")

    @property
    def store_unavailable(self) -> bool:
        return self.kind in STORE_UNAVAILABLE_KINDS


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UnauthenticatedError(Exception):
    """Raised when an operation requires a signed-in user and there is none."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"User must be logged in to {action}")


class ImageValidationError(ValueError):
    """Raised when an upload is rejected before reaching the blob store."""


class ProfileUpdateError(Exception):
    """Raised when a profile change could not be saved."""


class ReadOnlyRepositoryError(Exception):
    """Raised when a write is attempted against the bundled fallback dataset."""
