"""Error kinds and exceptions surfaced by the ledger core."""

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    STRENGTH_OUT_OF_RANGE = "StrengthOutOfRange"
    VOLUME_INVALID = "VolumeInvalid"
    QUOTA_EXCEEDED = "QuotaExceeded"
    STORAGE_UNAVAILABLE = "StorageUnavailable"
    CORRUPT_DATA = "CorruptData"
    NOT_FOUND = "NotFound"


class LedgerError(Exception):
    """Base class; every subclass carries the ErrorKind it reports."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str = ""):
        self.kind = kind
        super().__init__(message or kind.value)


class ValidationError(LedgerError):
    """Raised when raw field values are rejected before any mutation."""


class StorageFailure(LedgerError):
    """Raised when the persistence backend rejects a write or removal."""


class QuotaExceeded(StorageFailure):
    def __init__(self, message: str = "storage quota exceeded"):
        super().__init__(ErrorKind.QUOTA_EXCEEDED, message)


class StorageUnavailable(StorageFailure):
    def __init__(self, message: str = "storage backend unavailable"):
        super().__init__(ErrorKind.STORAGE_UNAVAILABLE, message)


class RecordNotFound(LedgerError):
    """Raised when deleting an id the ledger does not hold."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(ErrorKind.NOT_FOUND, f"No record with id {record_id!r}")
