"""Application use cases package."""

from .clear_ledger import ClearLedgerUseCase
from .exchange_rate import GetExchangeRateUseCase, SetExchangeRateUseCase
from .get_ledger_view import (
    GetLedgerViewUseCase,
    LedgerView,
    LedgerViewProjector,
    LedgerViewSelection,
    build_ledger_view,
)
from .import_legacy_ledger import (
    ImportLegacyLedgerUseCase,
    LegacyImportResult,
)
from .record_entry import (
    DeleteEntryUseCase,
    RecordAdjustmentUseCase,
    RecordEntryUseCase,
)
from .transfer_ledger import (
    ExportLedgerUseCase,
    ImportLedgerResult,
    ImportLedgerUseCase,
)

__all__ = [
    "ClearLedgerUseCase",
    "DeleteEntryUseCase",
    "ExportLedgerUseCase",
    "GetExchangeRateUseCase",
    "GetLedgerViewUseCase",
    "ImportLedgerResult",
    "ImportLedgerUseCase",
    "ImportLegacyLedgerUseCase",
    "LedgerView",
    "LedgerViewProjector",
    "LedgerViewSelection",
    "LegacyImportResult",
    "RecordAdjustmentUseCase",
    "RecordEntryUseCase",
    "SetExchangeRateUseCase",
    "build_ledger_view",
]
