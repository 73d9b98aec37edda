"""
ValuationEngine — консервативная оценка expected value предметов

Формулы (целочисленно, в basis points):
- sealed_container / other → 0 (стоимость неизвестна или не отслеживается)
- vendor_trash → vendor
- gathering → max(vendor, floor(market × 0.85))
- rare_multi → max(vendor, floor(min(0.50·vendor + 0.35·de + 0.15·market,
                                     1.25·max(vendor, de))))

КРИТИЧЕСКИЙ ИНВАРИАНТ: оценка любого bucket, кроме нулевых, не ниже
vendor price (гарантированная ликвидация).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from goldph.core.domain.items import PendingItem, ResolvedItem, ValueBucket
from goldph.core.errors import UnresolvedItem
from goldph.core.math import BPS_SCALE, apply_bps_floor, format_money
from goldph.valuation.classifier import classify_item
from goldph.valuation.item_info import ItemInfoResolver
from goldph.valuation.price_sources import PriceResolver

logger = logging.getLogger("goldph.valuation")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ValuationConfig:
    """
    Параметры оценки в basis points (10_000 = 1.0).

    gathering_friction_bps моделирует комиссии и риск аукциона.
    rare_cap_bps ограничивает оценку от всплесков рынка.
    """

    gathering_friction_bps: int = 8500
    rare_vendor_weight_bps: int = 5000
    rare_disenchant_weight_bps: int = 3500
    rare_market_weight_bps: int = 1500
    rare_cap_bps: int = 12500


# =============================================================================
# DISENCHANT
# =============================================================================


class DisenchantSource(Protocol):
    def get_disenchant_value(self, item_id: int) -> int:
        ...


class NullDisenchantSource:
    """Оценка распыления не моделируется: всегда 0."""

    def get_disenchant_value(self, item_id: int) -> int:
        return 0


# =============================================================================
# RESULTS
# =============================================================================


class ZeroValueReason(str, Enum):
    """Причина нулевой оценки"""

    SEALED_CONTAINER = "SEALED_CONTAINER"
    UNTRACKED_BUCKET = "UNTRACKED_BUCKET"
    NO_PRICE_SOURCE = "NO_PRICE_SOURCE"


@dataclass(frozen=True)
class Valuation:
    """Результат оценки предмета."""

    item_id: int
    bucket: ValueBucket
    expected_each: int
    zero_reason: ZeroValueReason | None = None


# =============================================================================
# ENGINE
# =============================================================================


class ValuationEngine:
    """
    Классификация и оценка предметов.

    Рыночная цена берётся из PriceResolver (отсутствие = 0),
    vendor price — из ItemInfoResolver, если не передан явно.
    """

    def __init__(
        self,
        prices: PriceResolver | None = None,
        item_info: ItemInfoResolver | None = None,
        disenchant: DisenchantSource | None = None,
        config: ValuationConfig | None = None,
    ):
        self.prices = prices or PriceResolver()
        self.item_info = item_info
        self.disenchant = disenchant or NullDisenchantSource()
        self.config = config or ValuationConfig()

        # item_id → причина последней нулевой оценки
        self._zero_reasons: dict[int, ZeroValueReason] = {}

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify_item(
        self,
        item_id: int | None,
        name: str | None,
        quality: int | None,
        item_class: int | None = None,
        item_subclass: int | None = None,
    ) -> ValueBucket:
        return classify_item(item_id, name, quality, item_class, item_subclass)

    # -------------------------------------------------------------------------
    # Expected value
    # -------------------------------------------------------------------------

    def market_price(self, item_id: int) -> int:
        """Рыночная цена, 0 если источников нет."""
        return self.prices.get_market_price(item_id) or 0

    def gathering_value(self, vendor: int, market: int) -> int:
        """max(vendor, floor(market × friction))"""
        return max(vendor, apply_bps_floor(market, self.config.gathering_friction_bps))

    def rare_multi_value(self, vendor: int, disenchant: int, market: int) -> int:
        """
        Взвешенная multi-path оценка с cap и vendor floor.

        Вычисляется в масштабе basis points, floor применяется один раз.
        """
        cfg = self.config
        weighted = (
            cfg.rare_vendor_weight_bps * vendor
            + cfg.rare_disenchant_weight_bps * disenchant
            + cfg.rare_market_weight_bps * market
        )
        cap = cfg.rare_cap_bps * max(vendor, disenchant)
        return max(vendor, min(weighted, cap) // BPS_SCALE)

    def compute_expected_value(
        self,
        item_id: int,
        bucket: ValueBucket,
        vendor_price: int | None = None,
    ) -> int:
        """
        Expected value за единицу (copper).

        Args:
            item_id: Идентификатор предмета
            bucket: Bucket из classify_item
            vendor_price: Цена торговца; если None — из ItemInfoResolver

        Raises:
            UnresolvedItem: vendor price нужен, а метаданные ещё Pending
        """
        if bucket == ValueBucket.SEALED_CONTAINER:
            return self._zero(item_id, ZeroValueReason.SEALED_CONTAINER)
        if bucket == ValueBucket.OTHER:
            return self._zero(item_id, ZeroValueReason.UNTRACKED_BUCKET)

        vendor = vendor_price if vendor_price is not None else self._vendor_price(item_id)

        if bucket == ValueBucket.VENDOR_TRASH:
            value = vendor
        elif bucket == ValueBucket.GATHERING:
            value = self.gathering_value(vendor, self.market_price(item_id))
        else:
            value = self.rare_multi_value(
                vendor,
                self.disenchant.get_disenchant_value(item_id),
                self.market_price(item_id),
            )

        if value == 0:
            return self._zero(item_id, ZeroValueReason.NO_PRICE_SOURCE)

        self._zero_reasons.pop(item_id, None)
        return value

    def value_item(self, item: ResolvedItem) -> Valuation:
        """Классификация и оценка по разрешённым метаданным."""
        bucket = self.classify_item(
            item.item_id, item.name, item.quality, item.item_class, item.item_subclass
        )
        expected_each = self.compute_expected_value(item.item_id, bucket, item.vendor_price)
        logger.debug(
            "Valued %s (%d): bucket=%s each=%s",
            item.name,
            item.item_id,
            bucket.value,
            format_money(expected_each),
        )
        return Valuation(
            item_id=item.item_id,
            bucket=bucket,
            expected_each=expected_each,
            zero_reason=self.last_zero_reason(item.item_id) if expected_each == 0 else None,
        )

    def last_zero_reason(self, item_id: int) -> ZeroValueReason | None:
        """Причина последней нулевой оценки предмета."""
        return self._zero_reasons.get(item_id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _zero(self, item_id: int, reason: ZeroValueReason) -> int:
        self._zero_reasons[item_id] = reason
        # Контейнеры и untracked оцениваются в 0 штатно
        level = logging.WARNING if reason == ZeroValueReason.NO_PRICE_SOURCE else logging.DEBUG
        logger.log(level, "Zero valuation for item %d: %s", item_id, reason.value)
        return 0

    def _vendor_price(self, item_id: int) -> int:
        if self.item_info is None:
            return 0
        info = self.item_info.get_item_info(item_id)
        if isinstance(info, PendingItem):
            raise UnresolvedItem(item_id)
        return info.vendor_price
