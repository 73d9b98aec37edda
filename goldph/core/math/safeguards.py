"""
Integer Safeguards — безопасная целочисленная арифметика

Все денежные значения — целые числа в copper (минимальная единица валюты).
Модуль обеспечивает:
- Масштабирование в basis points с floor-округлением (без float)
- Безопасный расчёт rate per hour с защитой от деления на ноль
- Clamp и валидацию целочисленных параметров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. Денежная арифметика точная: float не участвует в вычислении стоимости
3. Округление всегда floor (консервативная оценка)
"""

import math
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Масштаб basis points: 10_000 bps = 1.0
BPS_SCALE: Final[int] = 10_000

# Секунд в часе (для per-hour метрик)
SECONDS_PER_HOUR: Final[int] = 3600


# =============================================================================
# BASIS POINTS
# =============================================================================


def apply_bps_floor(value: int, bps: int) -> int:
    """
    Масштабирование целого значения на долю в basis points с floor.

    floor(value × bps / 10_000), вычисляется целочисленно.

    Args:
        value: Значение в copper
        bps: Доля в basis points (8500 = 0.85)

    Returns:
        Масштабированное значение (floor)

    Examples:
        >>> apply_bps_floor(300, 8500)
        255
        >>> apply_bps_floor(7, 5000)
        3
    """
    return (value * bps) // BPS_SCALE


# =============================================================================
# RATES
# =============================================================================


def per_hour_rate(amount: int, duration_sec: float, fallback: int = 0) -> int:
    """
    Rate per hour: floor(amount / duration_hours).

    При duration_sec <= 0 возвращает fallback (защита от деления на ноль
    для почти мгновенных запросов).

    Args:
        amount: Накопленное значение (copper, XP, ...), может быть отрицательным
        duration_sec: Длительность в секундах
        fallback: Значение при нулевой длительности (default: 0)

    Returns:
        Целое значение в час (floor к -inf для отрицательных)

    Examples:
        >>> per_hour_rate(500, 1800)
        1000
        >>> per_hour_rate(500, 0)
        0
    """
    if not math.isfinite(duration_sec) or duration_sec <= 0:
        return fallback

    if isinstance(duration_sec, int):
        return (amount * SECONDS_PER_HOUR) // duration_sec

    return math.floor(amount * SECONDS_PER_HOUR / duration_sec)


# =============================================================================
# CLAMP
# =============================================================================


def clamp_non_negative(value: int) -> int:
    """Ограничение снизу нулём."""
    return value if value > 0 else 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_int(value: int, name: str) -> None:
    """
    Валидация, что значение — целое число (bool не допускается).

    Raises:
        TypeError: Если value не int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
