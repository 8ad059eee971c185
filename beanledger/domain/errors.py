"""Domain errors raised by the ledger core."""


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError):
    """Raised when input violates a ledger rule before any mutation."""


class NotFoundError(LedgerError):
    """Raised when a referenced account, category or transaction is missing."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class PersistenceError(LedgerError):
    """Raised when the storage collaborator fails to commit a write."""


class PartialFailureError(PersistenceError):
    """Raised when an edit rolled back the old legs but could not reapply.

    Attributes:
        pending: Transaction whose effect still has to be applied.
    """

    def __init__(self, message: str, pending) -> None:
        super().__init__(message)
        self.pending = pending


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "PartialFailureError",
]
