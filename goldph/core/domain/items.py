"""
Items — метаданные предметов, buckets оценки и агрегаты

Метаданные приходят от внешнего resolver в виде двух вариантов:
ResolvedItem (все поля известны) или PendingItem (ещё не загружены).
Nullable-поля, проверяемые ad hoc, не используются.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class ItemQuality(int, Enum):
    """Уровень качества предмета"""

    POOR = 0  # Gray
    COMMON = 1  # White
    UNCOMMON = 2  # Green
    RARE = 3  # Blue
    EPIC = 4  # Purple


class ValueBucket(str, Enum):
    """
    Bucket оценки предмета.

    Определяет формулу expected value и инвентарный счёт в ledger.
    """

    VENDOR_TRASH = "vendor_trash"
    RARE_MULTI = "rare_multi"
    GATHERING = "gathering"
    SEALED_CONTAINER = "sealed_container"
    OTHER = "other"


# =============================================================================
# ITEM METADATA
# =============================================================================


class ResolvedItem(BaseModel):
    """Полностью разрешённые метаданные предмета."""

    item_id: int = Field(..., ge=0, description="Идентификатор предмета")
    name: str = Field(..., min_length=1, description="Отображаемое имя")
    quality: int = Field(..., ge=0, description="Уровень качества (ItemQuality)")
    item_class: int | None = Field(None, description="Класс предмета")
    item_subclass: int | None = Field(None, description="Подкласс предмета")
    vendor_price: int = Field(
        0, ge=0, description="Цена продажи торговцу (copper), гарантированная ликвидация"
    )

    model_config = {"frozen": True}


class PendingItem(BaseModel):
    """Метаданные ещё не получены, сигнал нужно повторить позже."""

    item_id: int = Field(..., ge=0)

    model_config = {"frozen": True}


ItemInfo = Union[ResolvedItem, PendingItem]


# =============================================================================
# ITEM AGGREGATE
# =============================================================================


class ItemAggregate(BaseModel):
    """
    Накопительные итоги по предмету для отчётов.

    count уменьшается при удалении из инвентаря (не ниже 0),
    count_looted и expected_total только растут.
    """

    item_id: int = Field(..., ge=0)
    name: str = Field(..., description="Имя на момент первого получения")
    quality: int = Field(..., ge=0)
    bucket: ValueBucket
    count: int = Field(0, ge=0, description="Текущее количество (после продаж)")
    count_looted: int = Field(0, ge=0, description="Всего получено за сессию")
    expected_total: int = Field(0, ge=0, description="Σ count × expected_each при получении")
