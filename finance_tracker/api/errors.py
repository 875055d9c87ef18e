"""
Maps ledger errors to HTTP status codes.
"""

from finance_tracker.exceptions import (
    NotFoundError,
    PartialWriteError,
    ReferentialIntegrityError,
)


def status_for(error: ValueError) -> int:
    """Return the status code for an error raised by a service."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ReferentialIntegrityError):
        return 409
    if isinstance(error, PartialWriteError):
        return 500
    return 400
