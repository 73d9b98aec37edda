"""
Holding — FIFO очередь лотов по одному предмету

Lot — immutable снимок оценки на момент получения. Значение лота
никогда не пересчитывается, при частичном потреблении меняется только
количество (создаётся новый экземпляр лота).

Инвариант: Holding.count == Σ lot.count
"""

from collections import deque
from typing import Deque

from pydantic import BaseModel, Field, field_serializer, model_validator

from goldph.core.domain.items import ValueBucket


# =============================================================================
# LOT
# =============================================================================


class Lot(BaseModel):
    """Immutable снимок оценки партии предметов."""

    count: int = Field(..., gt=0, description="Количество в партии")
    expected_each: int = Field(..., ge=0, description="Expected value за единицу (copper)")
    bucket: ValueBucket = Field(..., description="Bucket на момент получения")

    model_config = {"frozen": True}

    @property
    def value(self) -> int:
        """Полная стоимость партии."""
        return self.count * self.expected_each


# =============================================================================
# HOLDING
# =============================================================================


class Holding(BaseModel):
    """
    Holdings одного предмета.

    lots хранится как deque: добавление в хвост и снятие с головы за O(1).
    """

    count: int = Field(0, ge=0, description="Суммарное количество по всем лотам")
    lots: Deque[Lot] = Field(default_factory=deque)

    @model_validator(mode="after")
    def validate_count_matches_lots(self) -> "Holding":
        total = sum(lot.count for lot in self.lots)
        if total != self.count:
            raise ValueError(f"Holding count {self.count} != Σ lot counts {total}")
        return self

    @field_serializer("lots")
    def serialize_lots(self, lots: Deque[Lot]) -> list:
        return [lot.model_dump(mode="json") for lot in lots]

    @property
    def expected_value(self) -> int:
        return sum(lot.value for lot in self.lots)

    def is_empty(self) -> bool:
        return self.count == 0
