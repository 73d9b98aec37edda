"""
Core math modules для GoldPH

Целочисленные примитивы для денежной арифметики и форматирование.
"""

# Integer Safeguards
from goldph.core.math.safeguards import (
    BPS_SCALE,
    SECONDS_PER_HOUR,
    apply_bps_floor,
    clamp_non_negative,
    per_hour_rate,
    validate_int,
)

# Money formatting
from goldph.core.math.money import (
    COPPER_PER_GOLD,
    COPPER_PER_SILVER,
    format_duration,
    format_money,
    format_money_short,
)

__all__ = [
    # Integer Safeguards — Constants
    "BPS_SCALE",
    "SECONDS_PER_HOUR",
    # Integer Safeguards — Functions
    "apply_bps_floor",
    "clamp_non_negative",
    "per_hour_rate",
    "validate_int",
    # Money — Constants
    "COPPER_PER_GOLD",
    "COPPER_PER_SILVER",
    # Money — Functions
    "format_duration",
    "format_money",
    "format_money_short",
]
