"""
Progress — rollover-safe счётчики прогресса и top-N разбивки

Rollover delta для счётчиков, сбрасывающихся на milestone (уровень):
- new >= old: delta = new − old
- new <  old: delta = (old_max − old) + new
Дельта всегда >= 0. Порог обновляется при каждом наблюдении.
"""

from typing import Mapping

from pydantic import BaseModel, Field

from goldph.core.domain.session import ProgressTrack
from goldph.core.math import clamp_non_negative


# =============================================================================
# ROLLOVER
# =============================================================================


def rollover_delta(old: int, old_max: int, new: int) -> int:
    """
    Неотрицательная дельта между наблюдениями счётчика.

    Examples:
        >>> rollover_delta(100, 1000, 250)
        150
        >>> rollover_delta(900, 1000, 50)
        150
    """
    if new >= old:
        return new - old
    return clamp_non_negative((old_max - old) + new)


def observe_rollover(track: ProgressTrack, value: int, ceiling: int) -> int:
    """
    Наблюдение счётчика с milestone (опыт).

    Первое наблюдение задаёт baseline. Возвращает учтённую дельту.
    """
    if track.last_value is None:
        track.last_value = value
        track.last_ceiling = ceiling
        track.enabled = True
        return 0

    old_max = track.last_ceiling if track.last_ceiling is not None else track.last_value
    delta = rollover_delta(track.last_value, old_max, value)

    track.gained += delta
    track.enabled = True
    track.last_value = value
    track.last_ceiling = ceiling
    return delta


def observe_source(track: ProgressTrack, source: str, value: int) -> int:
    """
    Наблюдение значения по источнику (репутация фракции).

    Учитываются только положительные изменения. Baseline обновляется
    при каждом наблюдении.
    """
    baseline = track.source_baselines.get(source)
    track.source_baselines[source] = value
    track.enabled = True

    if baseline is None:
        return 0

    delta = value - baseline
    if delta <= 0:
        return 0

    track.gained += delta
    track.by_source[source] = track.by_source.get(source, 0) + delta
    return delta


def add_gain(track: ProgressTrack, amount: int, kill: bool = False) -> int:
    """Аддитивный прирост (honor)."""
    amount = clamp_non_negative(amount)
    track.gained += amount
    track.enabled = True
    if kill:
        track.kills += 1
    return amount


# =============================================================================
# TOP-N
# =============================================================================


class TopBreakdown(BaseModel):
    """
    Top-N вкладов с явным остатком.

    remainder — сколько позиций не вошло в entries ("+K more").
    """

    entries: tuple[tuple[str, int], ...] = ()
    remainder: int = Field(0, ge=0)

    model_config = {"frozen": True}

    @property
    def more_label(self) -> str | None:
        return f"+{self.remainder} more" if self.remainder > 0 else None


def top_contributors(by_source: Mapping[str, int], n: int) -> TopBreakdown:
    """
    Стабильная сортировка по убыванию значения, усечение до n.

    При равных значениях сохраняется порядок вставки.
    """
    ranked = sorted(by_source.items(), key=lambda entry: entry[1], reverse=True)
    n = max(0, n)
    return TopBreakdown(entries=tuple(ranked[:n]), remainder=max(0, len(ranked) - n))
