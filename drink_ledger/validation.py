"""Validation of raw drink fields before a record is built."""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from drink_ledger.errors import ErrorKind

MIN_STRENGTH_PERCENT = 0.0
MAX_STRENGTH_PERCENT = 100.0
MIN_VOLUME_ML = 1.0

# Leading decimal literal; trailing text such as "%" or "ml" is ignored.
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[ErrorKind] = None
    name: str = ""
    strength_percent: float = 0.0
    volume_ml: float = 0.0


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _parse_number(value: Any) -> float:
    """Lenient number parsing that never raises; unparseable input becomes NaN."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match is None:
            return math.nan
        return float(match.group(1))
    if not isinstance(value, (int, float)):
        return math.nan
    try:
        return float(value)
    except OverflowError:
        return math.inf


def validate(name: Any, strength_raw: Any, volume_raw: Any) -> ValidationResult:
    """Check raw fields in order: missing, strength range, volume. First failure wins."""
    if not isinstance(name, str) or _is_blank(name) or _is_blank(strength_raw) or _is_blank(volume_raw):
        return ValidationResult(valid=False, reason=ErrorKind.MISSING_FIELD)

    strength = _parse_number(strength_raw)
    if not math.isfinite(strength) or strength < MIN_STRENGTH_PERCENT or strength > MAX_STRENGTH_PERCENT:
        return ValidationResult(valid=False, reason=ErrorKind.STRENGTH_OUT_OF_RANGE)

    volume = _parse_number(volume_raw)
    if not math.isfinite(volume) or volume < MIN_VOLUME_ML:
        return ValidationResult(valid=False, reason=ErrorKind.VOLUME_INVALID)

    return ValidationResult(
        valid=True,
        name=name.strip(),
        strength_percent=strength,
        volume_ml=volume,
    )
