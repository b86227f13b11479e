"""Drink record entity and its persisted (camelCase) form."""

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Record:
    """One logged drink. Built only by RecordLedger.add or loaded from the store."""

    id: str
    name: str
    strength_percent: float
    volume_ml: float
    pure_alcohol: float  # derived at creation, never recomputed
    created_at: int  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "strengthPercent": self.strength_percent,
            "volumeMl": self.volume_ml,
            "pureAlcohol": self.pure_alcohol,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Record":
        """Parse one persisted object; raises ValueError on any structural problem."""
        if not isinstance(raw, dict):
            raise ValueError("record must be an object")

        record_id = raw.get("id")
        name = raw.get("name")
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("record id must be a non-empty string")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("record name must be a non-empty string")

        strength = _number(raw, "strengthPercent")
        volume = _number(raw, "volumeMl")
        pure = _number(raw, "pureAlcohol")
        created = _number(raw, "createdAt")

        return cls(
            id=record_id,
            name=name,
            strength_percent=strength,
            volume_ml=volume,
            pure_alcohol=pure,
            created_at=int(created),
        )


def _number(raw: Dict[str, Any], field: str) -> float:
    value = raw.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{field} must be finite")
    return float(value)
