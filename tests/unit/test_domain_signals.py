"""
Тесты для сигналов активности и окон атрибуции

Проверяет:
1. Разбор сигнала из dict по дискриминатору kind
2. Immutability сигналов
3. Окна pickpocket/контейнера (включительно до истечения)
4. Ключ владельца
"""

import pytest
from pydantic import ValidationError

from goldph.core.clock import ManualClock
from goldph.core.domain import (
    CONTAINER_WINDOW_SEC,
    NO_ATTRIBUTION,
    PICKPOCKET_WINDOW_SEC,
    AttributionWindows,
    CoinLooted,
    CurrencySpent,
    ExpenseKind,
    ItemLooted,
    ItemRemoved,
    OwnerKey,
    parse_signal,
)


# =============================================================================
# PARSE
# =============================================================================


class TestParseSignal:
    def test_parse_by_kind(self) -> None:
        signal = parse_signal({"kind": "item_looted", "item_id": 2589, "count": 4})
        assert isinstance(signal, ItemLooted)
        assert signal.count == 4
        assert signal.context == NO_ATTRIBUTION

    def test_parse_nested_context(self) -> None:
        signal = parse_signal(
            {"kind": "coin_looted", "copper": 55, "context": {"pickpocket": True}}
        )
        assert isinstance(signal, CoinLooted)
        assert signal.context.pickpocket
        assert not signal.context.from_container

    def test_parse_expense_kind(self) -> None:
        signal = parse_signal({"kind": "currency_spent", "expense": "travel", "copper": 80})
        assert isinstance(signal, CurrencySpent)
        assert signal.expense == ExpenseKind.TRAVEL

    def test_removed_defaults_to_no_proceeds(self) -> None:
        signal = parse_signal({"kind": "item_removed", "item_id": 1, "count": 2})
        assert isinstance(signal, ItemRemoved)
        assert signal.proceeds == 0

    @pytest.mark.parametrize(
        "data",
        [
            {"kind": "teleported", "copper": 1},
            {"copper": 1},
            {"kind": "coin_looted", "copper": -5},
            {"kind": "item_looted", "item_id": 1, "count": 0},
            {"kind": "currency_spent", "expense": "bribes", "copper": 1},
        ],
    )
    def test_invalid_signals_rejected(self, data) -> None:
        with pytest.raises(ValidationError):
            parse_signal(data)

    def test_signals_are_frozen(self) -> None:
        signal = CoinLooted(copper=10)
        with pytest.raises(ValidationError):
            signal.copper = 20


# =============================================================================
# ATTRIBUTION WINDOWS
# =============================================================================


class TestAttributionWindows:
    def test_default_window_lengths(self) -> None:
        assert PICKPOCKET_WINDOW_SEC == 2.0
        assert CONTAINER_WINDOW_SEC == 3.0

    def test_no_marks_no_attribution(self) -> None:
        windows = AttributionWindows(ManualClock())
        assert windows.context() == NO_ATTRIBUTION

    def test_pickpocket_window_inclusive(self) -> None:
        clock = ManualClock(start=10.0)
        windows = AttributionWindows(clock)
        assert windows.mark_pickpocket() == 12.0

        clock.set(12.0)
        assert windows.context().pickpocket

        clock.set(12.01)
        assert not windows.context().pickpocket

    def test_container_window(self) -> None:
        clock = ManualClock()
        windows = AttributionWindows(clock)
        windows.mark_container_opened()
        clock.advance(2.5)

        context = windows.context()
        assert context.from_container
        assert not context.pickpocket

        clock.advance(1.0)
        assert not windows.context().from_container

    def test_both_windows_and_clear(self) -> None:
        clock = ManualClock()
        windows = AttributionWindows(clock, pickpocket_window_sec=5.0)
        windows.mark_pickpocket()
        windows.mark_container_opened()
        clock.advance(1.0)

        context = windows.context()
        assert context.pickpocket and context.from_container

        windows.clear()
        assert windows.context() == NO_ATTRIBUTION


# =============================================================================
# OWNER
# =============================================================================


class TestOwnerKey:
    def test_key_format(self) -> None:
        owner = OwnerKey(character="Thrall", realm="Durotar", faction="Horde")
        assert owner.key == "Thrall-Durotar-Horde"

    def test_default_faction(self) -> None:
        assert OwnerKey(character="Chromie", realm="Tanaris").key == "Chromie-Tanaris-Neutral"

    def test_empty_character_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OwnerKey(character="", realm="Tanaris")
