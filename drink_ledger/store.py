"""RecordStore: the record collection serialized into one named backend slot."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Sequence

from drink_ledger.backends import KeyValueBackend
from drink_ledger.errors import ErrorKind, StorageFailure
from drink_ledger.records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    records: tuple[Record, ...] = field(default_factory=tuple)
    warning: ErrorKind | None = None


class RecordStore:
    def __init__(self, backend: KeyValueBackend, storage_key: str):
        if not storage_key:
            raise ValueError("storage_key must be a non-empty string")
        self.backend = backend
        self.storage_key = storage_key

    def load(self) -> LoadResult:
        """Read the slot. Never raises: problems come back as LoadResult.warning."""
        try:
            raw = self.backend.get(self.storage_key)
        except StorageFailure as exc:
            logger.warning("Could not read slot %r: %s", self.storage_key, exc)
            return LoadResult(warning=exc.kind)

        if raw is None:
            return LoadResult()

        try:
            records = _parse_collection(raw)
        except ValueError as exc:
            logger.warning("Discarding corrupt data in slot %r: %s", self.storage_key, exc)
            return LoadResult(warning=ErrorKind.CORRUPT_DATA)
        return LoadResult(records=records)

    def save(self, records: Sequence[Record]) -> None:
        """Replace the whole slot value. Raises QuotaExceeded or StorageUnavailable.

        Non-finite numbers raise ValueError before anything is written.
        """
        payload = json.dumps(
            [r.to_dict() for r in records], separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
        try:
            self.backend.set(self.storage_key, payload)
        except StorageFailure as exc:
            logger.warning("Saving %d record(s) to slot %r failed: %s", len(records), self.storage_key, exc)
            raise

    def clear(self) -> None:
        try:
            self.backend.remove(self.storage_key)
        except StorageFailure as exc:
            logger.warning("Clearing slot %r failed: %s", self.storage_key, exc)
            raise


def _parse_collection(raw: str) -> tuple[Record, ...]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ValueError(f"not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("top-level value must be a list")

    records = tuple(Record.from_dict(item) for item in data)
    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate record ids")
    return records
