"""Domain errors for ledger validation and persistence."""


class LedgerError(Exception):
    """Base class for ledger errors."""


class LedgerValidationError(LedgerError, ValueError):
    """Raised when a raw entry or setting fails validation.

    Attributes:
        field: Name of the offending field.
    """

    field = ""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        if field is not None:
            self.field = field


class InvalidKind(LedgerValidationError):
    field = "kind"


class InvalidDescription(LedgerValidationError):
    field = "description"


class InvalidAmount(LedgerValidationError):
    field = "amount"


class InvalidQuantity(LedgerValidationError):
    field = "quantity"


class InvalidAccount(LedgerValidationError):
    field = "account"


class InvalidDate(LedgerValidationError):
    field = "date"


class InvalidExchangeRate(LedgerValidationError):
    field = "rate"


class ImportBatchInvalid(LedgerError):
    """Raised when an import batch is rejected as a whole.

    Attributes:
        cause: First offending entry's validation error, when any.
        index: Position of the offending entry in the batch.
        entry_id: Identifier of the offending entry, when readable.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: LedgerValidationError | None = None,
        index: int | None = None,
        entry_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.index = index
        self.entry_id = entry_id


class LedgerPersistenceError(LedgerError):
    """Raised when the backing store fails to read or write."""


__all__ = [
    "ImportBatchInvalid",
    "InvalidAccount",
    "InvalidAmount",
    "InvalidDate",
    "InvalidDescription",
    "InvalidExchangeRate",
    "InvalidKind",
    "InvalidQuantity",
    "LedgerError",
    "LedgerPersistenceError",
    "LedgerValidationError",
]
