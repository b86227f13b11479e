"""
RecordLedger: the in-memory, oldest-first record list for one session.
Every mutation is persisted through RecordStore and rolled back if the save fails.
"""

from __future__ import annotations

import logging
import math
import time
import uuid
from typing import Any, Callable, List, Tuple

from drink_ledger import calculations
from drink_ledger.errors import ErrorKind, RecordNotFound, StorageFailure, ValidationError
from drink_ledger.records import Record
from drink_ledger.store import RecordStore
from drink_ledger.validation import validate

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return uuid.uuid4().hex


class RecordLedger:
    def __init__(
        self,
        store: RecordStore,
        absorption_factor: float = calculations.DEFAULT_ABSORPTION_FACTOR,
        clock: Callable[[], int] = _now_ms,
        id_factory: Callable[[], str] = _new_id,
    ):
        if not calculations.is_valid_factor(absorption_factor):
            raise ValueError(f"absorption_factor must be a finite number > 0, got {absorption_factor!r}")
        self.store = store
        self.absorption_factor = absorption_factor
        self._clock = clock
        self._id_factory = id_factory
        self._records: List[Record] = []

    @property
    def unit(self) -> str:
        return calculations.unit_for_factor(self.absorption_factor)

    def load_from_store(self) -> ErrorKind | None:
        """Replace in-memory records with the persisted ones; returns the load warning, if any."""
        result = self.store.load()
        self._records = list(result.records)
        logger.debug("Loaded %d record(s) from slot %r", len(self._records), self.store.storage_key)
        return result.warning

    def add(self, name: Any, strength_raw: Any, volume_raw: Any) -> Record:
        """Validate, build, append and persist a record. Raises ValidationError or StorageFailure."""
        checked = validate(name, strength_raw, volume_raw)
        if not checked.valid:
            raise ValidationError(checked.reason)

        pure_alcohol = calculations.compute(checked.volume_ml, checked.strength_percent, self.absorption_factor)
        if not math.isfinite(pure_alcohol):
            # Overflowed product; the store cannot persist it.
            raise ValidationError(ErrorKind.VOLUME_INVALID)

        record = Record(
            id=self._fresh_id(),
            name=checked.name,
            strength_percent=checked.strength_percent,
            volume_ml=checked.volume_ml,
            pure_alcohol=pure_alcohol,
            created_at=self._next_timestamp(),
        )

        self._records.append(record)
        try:
            self.store.save(self._records)
        except StorageFailure:
            self._records.pop()
            raise
        logger.info("Added record %s (%s %s)", record.id, record.pure_alcohol, self.unit)
        return record

    def delete(self, record_id: str) -> None:
        """Remove a record by id and persist. Raises RecordNotFound or StorageFailure."""
        for index, record in enumerate(self._records):
            if record.id == record_id:
                break
        else:
            raise RecordNotFound(record_id)

        del self._records[index]
        try:
            self.store.save(self._records)
        except StorageFailure:
            self._records.insert(index, record)
            raise
        logger.info("Deleted record %s", record_id)

    def get_all(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def get_total(self) -> float:
        return sum((r.pure_alcohol for r in self._records), 0.0)

    def _fresh_id(self) -> str:
        taken = {r.id for r in self._records}
        record_id = self._id_factory()
        while record_id in taken:
            record_id = self._id_factory()
        return record_id

    def _next_timestamp(self) -> int:
        now = int(self._clock())
        if self._records:
            # Wall clock may step backwards; creation order must not.
            now = max(now, max(r.created_at for r in self._records))
        return now
