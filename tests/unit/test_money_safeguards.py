"""
Тесты для целочисленных примитивов и форматирования денег

Проверяет:
1. Масштабирование в basis points (floor)
2. Rate per hour с защитой от нулевой длительности
3. Clamp и валидацию целых
4. Форматирование copper сумм и длительностей
"""

import math

import pytest

from goldph.core.clock import ManualClock
from goldph.core.math import (
    apply_bps_floor,
    clamp_non_negative,
    format_duration,
    format_money,
    format_money_short,
    per_hour_rate,
    validate_int,
)

# =============================================================================
# BASIS POINTS
# =============================================================================


class TestApplyBpsFloor:
    """Тесты для apply_bps_floor"""

    def test_gathering_friction(self) -> None:
        """300 × 0.85 = 255"""
        assert apply_bps_floor(300, 8500) == 255

    def test_floor_rounding(self) -> None:
        """Дробная часть отбрасывается"""
        assert apply_bps_floor(7, 5000) == 3
        assert apply_bps_floor(1, 8500) == 0

    def test_full_scale_is_identity(self) -> None:
        assert apply_bps_floor(12345, 10_000) == 12345


# =============================================================================
# RATES
# =============================================================================


class TestPerHourRate:
    """Тесты для per_hour_rate"""

    def test_half_hour_doubles(self) -> None:
        assert per_hour_rate(500, 1800) == 1000

    def test_zero_duration_returns_fallback(self) -> None:
        """Деление на ноль не происходит"""
        assert per_hour_rate(500, 0) == 0
        assert per_hour_rate(500, 0.0, fallback=-1) == -1

    def test_negative_duration_returns_fallback(self) -> None:
        assert per_hour_rate(500, -10) == 0

    def test_non_finite_duration_returns_fallback(self) -> None:
        assert per_hour_rate(500, math.inf) == 0
        assert per_hour_rate(500, math.nan) == 0

    def test_float_duration_floors(self) -> None:
        """floor(100 / (7000/3600)) = floor(51.43) = 51"""
        assert per_hour_rate(100, 7000.0) == 51

    def test_negative_amount_floors_down(self) -> None:
        """Отрицательный баланс округляется к -inf"""
        assert per_hour_rate(-100, 7000) == -52


# =============================================================================
# CLAMP / ВАЛИДАЦИЯ
# =============================================================================


class TestClampAndValidation:
    def test_clamp_non_negative(self) -> None:
        assert clamp_non_negative(-5) == 0
        assert clamp_non_negative(5) == 5

    def test_validate_int_rejects_bool_and_float(self) -> None:
        with pytest.raises(TypeError):
            validate_int(True, "amount")
        with pytest.raises(TypeError):
            validate_int(1.5, "amount")


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestFormatMoney:
    """Тесты для format_money"""

    @pytest.mark.parametrize(
        "copper, expected",
        [
            (0, "0c"),
            (7, "7c"),
            (500, "5s"),
            (503, "5s 3c"),
            (10_000, "1g"),
            (1_234_567, "123g 45s"),
            (123_456_789, "12,345g 67s"),
            (-42, "-42c"),
            (-10_500, "-1g 05s"),
        ],
    )
    def test_format(self, copper: int, expected: str) -> None:
        assert format_money(copper) == expected

    def test_short_format(self) -> None:
        assert format_money_short(0) == "0g 00s"
        assert format_money_short(99) == "0g 00s"
        assert format_money_short(1_234_567) == "123g 45s"
        assert format_money_short(-20_000) == "-2g 00s"
        assert format_money_short(-50) == "0g 00s"


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0s"),
            (59.9, "59s"),
            (123, "2m 3s"),
            (3723, "1h 2m 3s"),
            (-5, "0s"),
        ],
    )
    def test_format(self, seconds: float, expected: str) -> None:
        assert format_duration(seconds) == expected


# =============================================================================
# CLOCK
# =============================================================================


class TestManualClock:
    def test_advance_and_set(self) -> None:
        clock = ManualClock(start=10.0)
        assert clock.now() == 10.0
        assert clock.advance(5) == 15.0
        clock.set(20.0)
        assert clock.now() == 20.0

    def test_cannot_move_backwards(self) -> None:
        clock = ManualClock(start=10.0)
        with pytest.raises(ValueError):
            clock.set(5.0)
        with pytest.raises(ValueError):
            clock.advance(-1)
