"""
Item metadata resolver — интерфейс получения метаданных предмета

Resolver возвращает ResolvedItem или PendingItem. Pending означает,
что клиент ещё не загрузил данные: обработку сигнала нужно повторить.
"""

from typing import Iterable, Protocol

from goldph.core.domain.items import ItemInfo, PendingItem, ResolvedItem


class ItemInfoResolver(Protocol):
    def get_item_info(self, item_id: int) -> ItemInfo:
        ...


class StaticItemCatalog:
    """
    Каталог метаданных в памяти.

    Неизвестный item_id возвращается как PendingItem.
    """

    def __init__(self, items: Iterable[ResolvedItem] = ()):
        self._items: dict[int, ResolvedItem] = {item.item_id: item for item in items}

    def add(self, item: ResolvedItem) -> None:
        self._items[item.item_id] = item

    def get_item_info(self, item_id: int) -> ItemInfo:
        item = self._items.get(item_id)
        if item is None:
            return PendingItem(item_id=item_id)
        return item
