"""Exception taxonomy shared by the store, the report generator and the outer layers."""


class LedgerError(Exception):
    """Base exception for ledgerline."""


class ValidationError(LedgerError, ValueError):
    """A required field is missing or invalid.

    Attributes:
        fields: Mapping of field name to a human readable problem.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = dict(fields)
        details = "; ".join(f"{name}: {problem}" for name, problem in self.fields.items())
        super().__init__(f"Invalid input ({details})")


class NotFoundError(LedgerError, LookupError):
    """No transaction exists with the requested id."""

    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class StorageError(LedgerError):
    """The underlying database failed."""


class ReportError(LedgerError):
    """A monthly report could not be generated."""
