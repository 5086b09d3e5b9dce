"""Custom exception classes for the Portal."""

from typing import Optional


class PortalException(Exception):
    """
    Base exception class for all portal errors.
    """
    pass


class NotFoundError(PortalException):
    """
    Raised when a movie, script or premium key does not exist.
    """
    pass


class ForbiddenError(PortalException):
    """
    Raised when the admin token is wrong or premium access is missing.

    The message is fixed so callers learn nothing beyond "forbidden".
    """

    def __init__(self):
        super().__init__("Forbidden")


class UpstreamFetchError(PortalException):
    """
    Raised when the upstream video fetch fails or returns no body.
    """

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ValueTooLargeError(PortalException):
    """
    Raised when a value exceeds the store's per-value size ceiling.
    """
    pass


class InvalidNameError(PortalException, ValueError):
    """
    Raised when a script name or slug is malformed.
    """
    pass
