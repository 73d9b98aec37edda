"""
Clock — источник монотонного времени

Core никогда не читает время сам: все операции с длительностью и окнами
атрибуции получают время через Clock, переданный вызывающей стороной.
"""

import time
from typing import Protocol


class Clock(Protocol):
    """Источник текущего времени (секунды, монотонно неубывающее)."""

    def now(self) -> float: ...


class MonotonicClock:
    """Clock на основе time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    Управляемый вручную Clock.

    Используется для replay сохранённых сигналов и в тестах.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        """Установка абсолютного времени (назад не двигается)."""
        if value < self._now:
            raise ValueError(f"ManualClock cannot move backwards: {value} < {self._now}")
        self._now = float(value)

    def advance(self, seconds: float) -> float:
        """Сдвиг времени вперёд, возвращает новое значение."""
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")
        self._now += seconds
        return self._now
