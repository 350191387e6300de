"""Translate use case exceptions into HTTP errors."""

from fastapi import HTTPException, status

from app.application.errors import NotFoundError, PermissionDeniedError


def to_http_exception(exc: ValueError) -> HTTPException:
    """Return the ``HTTPException`` matching a use case error."""

    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
