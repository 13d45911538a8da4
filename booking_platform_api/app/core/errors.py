"""
Exceptions raised by the service layer.

Services signal failures with ``ValueError`` subclasses; endpoints turn
them into ``HTTPException`` via :func:`http_error`.  A plain
``ValueError`` is treated as a bad request.
"""

from fastapi import HTTPException, status


class NotFoundError(ValueError):
    """The requested record does not exist."""


class PermissionDeniedError(ValueError):
    """The caller may not act on the record (role or ownership)."""


class ConflictError(ValueError):
    """A unique business identifier or name is already taken."""


def http_error(exc: ValueError) -> HTTPException:
    """Map a service exception to the matching HTTP error."""
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, PermissionDeniedError):
        status_code = status.HTTP_403_FORBIDDEN
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=status_code, detail=str(exc))
