"""
Drink ledger: log drinks, derive pure alcohol, keep a persisted running total.
Use from project root: python -m drink_ledger.main
"""

from drink_ledger.backends import MemoryBackend, SQLiteBackend
from drink_ledger.calculations import (
    ABSORPTION_FACTOR_GRAMS,
    ABSORPTION_FACTOR_ML,
    DEFAULT_ABSORPTION_FACTOR,
    compute,
    format_amount,
    unit_for_factor,
)
from drink_ledger.errors import (
    ErrorKind,
    LedgerError,
    QuotaExceeded,
    RecordNotFound,
    StorageFailure,
    StorageUnavailable,
    ValidationError,
)
from drink_ledger.ledger import RecordLedger
from drink_ledger.records import Record
from drink_ledger.store import LoadResult, RecordStore
from drink_ledger.validation import ValidationResult, validate

__all__ = [
    "RecordLedger",
    "Record",
    "RecordStore",
    "LoadResult",
    "MemoryBackend",
    "SQLiteBackend",
    "compute",
    "format_amount",
    "unit_for_factor",
    "validate",
    "ValidationResult",
    "ErrorKind",
    "LedgerError",
    "ValidationError",
    "StorageFailure",
    "QuotaExceeded",
    "StorageUnavailable",
    "RecordNotFound",
    "ABSORPTION_FACTOR_ML",
    "ABSORPTION_FACTOR_GRAMS",
    "DEFAULT_ABSORPTION_FACTOR",
]
