"""Exceptions raised by use cases and translated to HTTP status codes by routes."""


class NotFoundError(ValueError):
    """The record does not exist or is not visible to the caller."""


class PermissionDeniedError(ValueError):
    """The caller can see the record but lacks the capability to act on it."""


__all__ = ["NotFoundError", "PermissionDeniedError"]
