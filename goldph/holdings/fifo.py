"""
Holdings (FIFO) — очередь лотов по предметам

При получении предмета добавляется лот со снимком оценки. При уходе
предмета из инвентаря лоты снимаются с головы очереди и возвращается
ровно та стоимость, что была записана при получении, по buckets.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Holding.count == Σ lot.count
2. expected_each лота никогда не пересчитывается
3. Σ(стоимость снятых лотов) == Σ возвращённых значений
4. Снятое количество не превышает запрошенное
"""

import logging

from goldph.core.domain.holding import Holding, Lot
from goldph.core.domain.items import ValueBucket
from goldph.core.domain.session import Session
from goldph.core.errors import InvalidAmount, InvalidSession
from goldph.core.math import format_money, validate_int

logger = logging.getLogger("goldph.holdings")


def _require_mutable(session: Session | None) -> Session:
    if session is None:
        raise InvalidSession("No session")
    if session.is_stopped:
        raise InvalidSession(f"Session {session.session_id} is stopped")
    return session


class Holdings:
    """Сервис FIFO holdings. Состояние хранится в session.holdings."""

    def add_lot(
        self,
        session: Session,
        item_id: int,
        count: int,
        expected_each: int,
        bucket: ValueBucket,
    ) -> Lot | None:
        """
        Добавление лота в хвост очереди предмета.

        count <= 0 — no-op (возвращает None).

        Raises:
            InvalidSession: Сессия отсутствует или остановлена
            InvalidAmount: expected_each < 0
        """
        _require_mutable(session)
        validate_int(count, "count")
        validate_int(expected_each, "expected_each")

        if count <= 0:
            return None
        if expected_each < 0:
            raise InvalidAmount(f"expected_each must be >= 0, got {expected_each}")

        lot = Lot(count=count, expected_each=expected_each, bucket=bucket)
        holding = session.holdings.setdefault(item_id, Holding())
        holding.lots.append(lot)
        holding.count += count

        logger.debug(
            "Lot added: item=%d count=%d each=%s bucket=%s",
            item_id,
            count,
            format_money(expected_each),
            bucket.value,
        )
        return lot

    def consume_fifo(self, session: Session, item_id: int, count: int) -> dict[ValueBucket, int]:
        """
        Снятие count единиц с головы очереди.

        Полные лоты, у которых count <= остатка, удаляются целиком.
        Последний лот уменьшается, если он больше остатка.

        Returns:
            bucket → снятая стоимость. Пустой dict, если holdings нет
            (предмет был до начала сессии) — реверсировать нечего.
        """
        _require_mutable(session)
        validate_int(count, "count")

        holding = session.holdings.get(item_id)
        if holding is None or count <= 0:
            return {}

        consumed: dict[ValueBucket, int] = {}
        remaining = count

        while remaining > 0 and holding.lots:
            head = holding.lots[0]
            take = min(head.count, remaining)

            if take == head.count:
                holding.lots.popleft()
            else:
                holding.lots[0] = head.model_copy(update={"count": head.count - take})

            consumed[head.bucket] = consumed.get(head.bucket, 0) + take * head.expected_each
            holding.count -= take
            remaining -= take

        if holding.is_empty():
            del session.holdings[item_id]

        if remaining > 0:
            logger.debug(
                "FIFO short: item=%d requested=%d consumed=%d", item_id, count, count - remaining
            )

        logger.debug(
            "FIFO consumed: item=%d count=%d value=%s",
            item_id,
            count - remaining,
            format_money(sum(consumed.values())),
        )
        return consumed

    def get_count(self, session: Session, item_id: int) -> int:
        holding = session.holdings.get(item_id)
        return holding.count if holding is not None else 0

    def get_expected_value(self, session: Session, item_id: int) -> int:
        """Σ count × expected_each по лотам предмета."""
        holding = session.holdings.get(item_id)
        return holding.expected_value if holding is not None else 0

    def get_total_expected_value(self, session: Session) -> int:
        """Σ стоимости оставшихся лотов по всем предметам."""
        return sum(holding.expected_value for holding in session.holdings.values())

    def expected_value_by_bucket(self, session: Session) -> dict[ValueBucket, int]:
        totals: dict[ValueBucket, int] = {}
        for holding in session.holdings.values():
            for lot in holding.lots:
                totals[lot.bucket] = totals.get(lot.bucket, 0) + lot.value
        return totals
