"""Translation of backend failures into HTTP errors."""

import logging

from fastapi import HTTPException, UploadFile, status

from blog.domain.entities import ImageFile
from blog.domain.exceptions import BackendError, BackendErrorKind, ReadOnlyRepositoryError

logger = logging.getLogger(__name__)

_KIND_STATUS: dict[BackendErrorKind, int] = {
    BackendErrorKind.NOT_CONFIGURED: status.HTTP_503_SERVICE_UNAVAILABLE,
    BackendErrorKind.UNREACHABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    BackendErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    BackendErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    BackendErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
    BackendErrorKind.PAYLOAD_TOO_LARGE: status.HTTP_413_CONTENT_TOO_LARGE,
    BackendErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


def backend_http_error(exc: BackendError | ReadOnlyRepositoryError) -> HTTPException:
    if isinstance(exc, ReadOnlyRepositoryError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    code = _KIND_STATUS.get(exc.kind, status.HTTP_502_BAD_GATEWAY)
    if code >= 500:
        logger.error("Backend failure: %s", exc)
    return HTTPException(status_code=code, detail=exc.message)


async def read_image(upload: UploadFile) -> ImageFile:
    return ImageFile(
        filename=upload.filename or "upload",
        content=await upload.read(),
        content_type=upload.content_type,
    )
