"""
Классификация предметов и консервативная оценка expected value.
"""

from goldph.valuation.classifier import (
    CLASS_CONSUMABLE,
    CLASS_TRADE_GOODS,
    FISH_ITEM_IDS,
    SEALED_CONTAINER_PATTERNS,
    SUBCLASS_CONSUMABLE_FISH,
    classify_item,
    is_fish,
    is_sealed_container,
)
from goldph.valuation.engine import (
    DisenchantSource,
    NullDisenchantSource,
    Valuation,
    ValuationConfig,
    ValuationEngine,
    ZeroValueReason,
)
from goldph.valuation.item_info import ItemInfoResolver, StaticItemCatalog
from goldph.valuation.price_sources import (
    MANUAL_OVERRIDES_NAME,
    PriceResolver,
    PriceSource,
    StaticPriceSource,
)

__all__ = [
    # Classifier
    "CLASS_CONSUMABLE",
    "CLASS_TRADE_GOODS",
    "SUBCLASS_CONSUMABLE_FISH",
    "FISH_ITEM_IDS",
    "SEALED_CONTAINER_PATTERNS",
    "classify_item",
    "is_fish",
    "is_sealed_container",
    # Engine
    "ValuationEngine",
    "ValuationConfig",
    "Valuation",
    "ZeroValueReason",
    "DisenchantSource",
    "NullDisenchantSource",
    # Item metadata
    "ItemInfoResolver",
    "StaticItemCatalog",
    # Prices
    "PriceSource",
    "PriceResolver",
    "StaticPriceSource",
    "MANUAL_OVERRIDES_NAME",
]
