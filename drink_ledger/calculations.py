"""Pure-alcohol calculation.

Model:
- pure = volume_ml * strength_percent / 100 * absorption_factor
- factor 1.0 -> millilitres of ethanol
- factor 0.8 -> grams of ethanol (ethanol density ~0.8 g/mL)
- Result rounded to 1 decimal, half away from zero
"""

import math
from decimal import ROUND_HALF_UP, Decimal

ABSORPTION_FACTOR_ML = 1.0
ABSORPTION_FACTOR_GRAMS = 0.8

DEFAULT_ABSORPTION_FACTOR = ABSORPTION_FACTOR_ML

_ONE_DECIMAL = Decimal("0.1")


def round_one_decimal(value: float) -> float:
    """Round half away from zero on the shortest decimal repr of value."""
    if not math.isfinite(value):
        return value
    # ROUND_HALF_UP in decimal rounds away from zero for negatives too.
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute(
    volume_ml: float,
    strength_percent: float,
    absorption_factor: float = DEFAULT_ABSORPTION_FACTOR,
) -> float:
    """Pure alcohol for one drink. Inputs are assumed validated; NaN/inf propagate."""
    raw = volume_ml * strength_percent / 100.0 * absorption_factor
    return round_one_decimal(raw)


def is_valid_factor(absorption_factor: float) -> bool:
    return math.isfinite(absorption_factor) and absorption_factor > 0


def unit_for_factor(absorption_factor: float) -> str:
    """Unit label of the derived quantity: 'ml' for 1.0, 'g' for the density factor."""
    if math.isclose(absorption_factor, ABSORPTION_FACTOR_ML):
        return "ml"
    if math.isclose(absorption_factor, ABSORPTION_FACTOR_GRAMS):
        return "g"
    return "units"


def format_amount(value: float) -> str:
    return f"{round_one_decimal(value):.1f}"
