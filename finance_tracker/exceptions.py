"""
Error taxonomy for the ledger core.

Every error derives from ValueError so callers that only
care about "the request was refused" can keep catching
ValueError. The API layer maps each subclass to its own
status code.
"""


class LedgerError(ValueError):
    """Base class for every error raised by the ledger core."""


class InvalidRequestError(LedgerError):
    """Rejected before any write. Safe to retry after correction."""


class NotFoundError(LedgerError):
    """A referenced account, movement, category or plan does not exist."""


class ReferentialIntegrityError(LedgerError):
    """A delete was refused because movements still reference the record."""


class PartialWriteError(LedgerError):
    """
    A composite operation failed after some of its writes succeeded.

    Nothing is rolled back by the engine itself. On a transactional
    store the caller rolls back the session; on a non-transactional
    store the records listed in written_ids remain and the account
    balance may disagree with the movement history until it is
    reconciled (see LedgerService.recalculate_balances).
    """

    def __init__(self, operation: str, written_ids: list[str], cause: Exception):
        self.operation = operation
        self.written_ids = list(written_ids)
        self.cause = cause
        super().__init__(
            f"{operation} failed after writing {len(self.written_ids)} "
            f"record(s): {cause}"
        )
