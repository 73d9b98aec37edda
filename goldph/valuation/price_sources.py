"""
Price sources — цепочка источников рыночной цены

Приоритет: ручной override → подключённые источники в порядке
регистрации → отсутствует (None). Неположительная цена считается
отсутствующей. Ядро никогда не ждёт и не повторяет запрос.
"""

import logging
from typing import Mapping, Protocol, runtime_checkable

from goldph.core.math import format_money

logger = logging.getLogger("goldph.valuation")

MANUAL_OVERRIDES_NAME = "Manual Overrides"


@runtime_checkable
class PriceSource(Protocol):
    """Внешний источник рыночной цены."""

    name: str

    def get_price(self, item_id: int) -> int | None:
        """Цена в copper или None, если данных нет."""
        ...


class StaticPriceSource:
    """Источник с фиксированной таблицей цен (snapshot рынка)."""

    def __init__(self, name: str, prices: Mapping[int, int] | None = None):
        self.name = name
        self._prices: dict[int, int] = dict(prices or {})

    def set_price(self, item_id: int, price: int) -> None:
        self._prices[item_id] = price

    def get_price(self, item_id: int) -> int | None:
        return self._prices.get(item_id)


def _positive(price: int | None) -> int | None:
    if price is None or price <= 0:
        return None
    return price


class PriceResolver:
    """
    Цепочка разрешения рыночной цены.

    Ручные overrides имеют наивысший приоритет.
    """

    def __init__(
        self,
        sources: list[PriceSource] | None = None,
        overrides: Mapping[int, int] | None = None,
    ):
        self._sources: list[PriceSource] = list(sources or [])
        self._overrides: dict[int, int] = dict(overrides or {})

    # Overrides

    def set_override(self, item_id: int, price: int) -> None:
        self._overrides[item_id] = price

    def clear_override(self, item_id: int) -> None:
        self._overrides.pop(item_id, None)

    # Sources

    def register(self, source: PriceSource) -> None:
        """Добавить источник в конец цепочки."""
        self._sources.append(source)

    def available_sources(self) -> list[str]:
        """Активные уровни цепочки в порядке приоритета."""
        names = []
        if self._overrides:
            names.append(MANUAL_OVERRIDES_NAME)
        names.extend(source.name for source in self._sources)
        return names

    def get_market_price(self, item_id: int) -> int | None:
        """
        Рыночная цена предмета.

        Returns:
            Цена в copper (> 0) или None, если ни один уровень не дал цену
        """
        price = _positive(self._overrides.get(item_id))
        if price is not None:
            logger.debug(
                "Price %s for item %d: %s", MANUAL_OVERRIDES_NAME, item_id, format_money(price)
            )
            return price

        for source in self._sources:
            price = _positive(source.get_price(item_id))
            if price is not None:
                logger.debug("Price %s for item %d: %s", source.name, item_id, format_money(price))
                return price

        return None
