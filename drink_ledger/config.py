"""Environment-driven settings and ledger wiring."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path

from drink_ledger.backends import SQLiteBackend
from drink_ledger.calculations import DEFAULT_ABSORPTION_FACTOR, is_valid_factor
from drink_ledger.ledger import RecordLedger
from drink_ledger.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = str(Path("instance") / "ledger.db")
DEFAULT_STORAGE_KEY = "pureAlcoholMeter_cards"


def db_path() -> str:
    return os.environ.get("LEDGER_DB_PATH", DEFAULT_DB_PATH)


def storage_key() -> str:
    return os.environ.get("LEDGER_STORAGE_KEY", "").strip() or DEFAULT_STORAGE_KEY


def absorption_factor() -> float:
    raw = os.environ.get("LEDGER_ABSORPTION_FACTOR")
    if raw is None or not raw.strip():
        return DEFAULT_ABSORPTION_FACTOR
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not is_valid_factor(value):
        logger.warning("Ignoring invalid LEDGER_ABSORPTION_FACTOR=%r", raw)
        return DEFAULT_ABSORPTION_FACTOR
    return value


def quota_bytes() -> int | None:
    raw = os.environ.get("LEDGER_QUOTA_BYTES", "").strip()
    if not raw:
        return None
    try:
        return max(0, int(raw))
    except ValueError:
        logger.warning("Ignoring invalid LEDGER_QUOTA_BYTES=%r", raw)
        return None


def build_ledger(
    path: str | None = None,
    key: str | None = None,
    factor: float | None = None,
) -> RecordLedger:
    """Ledger over a SQLite slot; unset arguments come from the environment."""
    path = path or db_path()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    store = RecordStore(SQLiteBackend(path, quota_bytes=quota_bytes()), key or storage_key())
    return RecordLedger(store, absorption_factor=absorption_factor() if factor is None else factor)
