"""
Тесты для FIFO Holdings

Проверяет:
1. Добавление лотов и инвариант count == Σ lot.count
2. Снятие с головы очереди, частичное потребление последнего лота
3. Пустой результат для предметов без holdings
4. FIFO bound: Σ снятой стоимости == сумма по buckets
5. Неизменность стоимости лотов
"""

import pytest

from goldph.core.domain import Holding, Lot, OwnerKey, Session, ValueBucket
from goldph.core.errors import InvalidAmount, InvalidSession
from goldph.holdings import Holdings

ITEM = 2589


@pytest.fixture
def holdings() -> Holdings:
    return Holdings()


@pytest.fixture
def session() -> Session:
    return Session(
        session_id=1,
        owner=OwnerKey(character="Jaina", realm="Theramore", faction="Alliance"),
        started_at=0.0,
    )


def _lot_counts(session: Session, item_id: int) -> list[int]:
    return [lot.count for lot in session.holdings[item_id].lots]


# =============================================================================
# ADD LOT
# =============================================================================


class TestAddLot:
    def test_add_lot_appends_to_tail(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, ITEM, 5, 10, ValueBucket.GATHERING)
        holdings.add_lot(session, ITEM, 3, 20, ValueBucket.GATHERING)

        assert holdings.get_count(session, ITEM) == 8
        assert _lot_counts(session, ITEM) == [5, 3]
        assert holdings.get_expected_value(session, ITEM) == 5 * 10 + 3 * 20

    def test_non_positive_count_is_noop(self, holdings: Holdings, session: Session) -> None:
        assert holdings.add_lot(session, ITEM, 0, 10, ValueBucket.GATHERING) is None
        assert holdings.add_lot(session, ITEM, -2, 10, ValueBucket.GATHERING) is None
        assert session.holdings == {}

    def test_negative_value_rejected(self, holdings: Holdings, session: Session) -> None:
        with pytest.raises(InvalidAmount):
            holdings.add_lot(session, ITEM, 1, -5, ValueBucket.GATHERING)
        assert session.holdings == {}

    def test_stopped_session_rejected(self, holdings: Holdings, session: Session) -> None:
        session.ended_at = 10.0
        with pytest.raises(InvalidSession):
            holdings.add_lot(session, ITEM, 1, 5, ValueBucket.GATHERING)


# =============================================================================
# CONSUME FIFO
# =============================================================================


class TestConsumeFifo:
    def test_consumes_full_lots_then_partial(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, ITEM, 2, 10, ValueBucket.GATHERING)
        holdings.add_lot(session, ITEM, 5, 30, ValueBucket.GATHERING)

        consumed = holdings.consume_fifo(session, ITEM, 4)

        # 2 × 10 из первого лота + 2 × 30 из второго
        assert consumed == {ValueBucket.GATHERING: 80}
        assert _lot_counts(session, ITEM) == [3]
        assert holdings.get_count(session, ITEM) == 3

    def test_partial_lot_keeps_value(self, holdings: Holdings, session: Session) -> None:
        """Стоимость за единицу не пересчитывается"""
        original = holdings.add_lot(session, ITEM, 10, 7, ValueBucket.VENDOR_TRASH)
        holdings.consume_fifo(session, ITEM, 4)

        remaining = session.holdings[ITEM].lots[0]
        assert remaining.count == 6
        assert remaining.expected_each == 7
        assert original.count == 10  # исходный лот не изменён

    def test_bucket_tagged_results(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, ITEM, 1, 100, ValueBucket.RARE_MULTI)
        holdings.add_lot(session, ITEM, 1, 40, ValueBucket.GATHERING)

        consumed = holdings.consume_fifo(session, ITEM, 2)
        assert consumed == {ValueBucket.RARE_MULTI: 100, ValueBucket.GATHERING: 40}
        assert ITEM not in session.holdings

    def test_no_holdings_returns_empty(self, holdings: Holdings, session: Session) -> None:
        """Предмет до начала сессии: реверсировать нечего"""
        assert holdings.consume_fifo(session, ITEM, 3) == {}

    def test_over_consumption_is_bounded(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, ITEM, 2, 10, ValueBucket.GATHERING)
        consumed = holdings.consume_fifo(session, ITEM, 5)
        assert consumed == {ValueBucket.GATHERING: 20}
        assert holdings.get_count(session, ITEM) == 0

    def test_zero_count_is_noop(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, ITEM, 2, 10, ValueBucket.GATHERING)
        assert holdings.consume_fifo(session, ITEM, 0) == {}
        assert holdings.get_count(session, ITEM) == 2

    @pytest.mark.parametrize(
        "lots, requests",
        [
            ([(3, 10), (4, 25), (1, 7)], [2, 2, 2, 2]),
            ([(1, 1)], [1]),
            ([(5, 3), (5, 4)], [7, 7]),
            ([(10, 11), (2, 0), (3, 9)], [1, 10, 1, 1]),
        ],
    )
    def test_fifo_bound(self, holdings: Holdings, session: Session, lots, requests) -> None:
        """Σ снятой стоимости == уменьшение стоимости holdings, count уменьшается точно"""
        for count, each in lots:
            holdings.add_lot(session, ITEM, count, each, ValueBucket.GATHERING)

        for request in requests:
            count_before = holdings.get_count(session, ITEM)
            value_before = holdings.get_expected_value(session, ITEM)

            consumed = holdings.consume_fifo(session, ITEM, request)

            consumed_count = count_before - holdings.get_count(session, ITEM)
            assert 0 <= consumed_count <= request
            assert consumed_count == min(request, count_before)
            assert sum(consumed.values()) == value_before - holdings.get_expected_value(
                session, ITEM
            )
            if ITEM in session.holdings:
                holding = session.holdings[ITEM]
                assert holding.count == sum(lot.count for lot in holding.lots)


# =============================================================================
# TOTALS
# =============================================================================


class TestTotals:
    def test_total_and_by_bucket(self, holdings: Holdings, session: Session) -> None:
        holdings.add_lot(session, 1, 2, 10, ValueBucket.VENDOR_TRASH)
        holdings.add_lot(session, 2, 1, 500, ValueBucket.RARE_MULTI)
        holdings.add_lot(session, 3, 4, 25, ValueBucket.GATHERING)

        assert holdings.get_total_expected_value(session) == 20 + 500 + 100
        assert holdings.expected_value_by_bucket(session) == {
            ValueBucket.VENDOR_TRASH: 20,
            ValueBucket.RARE_MULTI: 500,
            ValueBucket.GATHERING: 100,
        }


class TestHoldingModel:
    def test_lot_is_immutable(self) -> None:
        lot = Lot(count=1, expected_each=5, bucket=ValueBucket.GATHERING)
        with pytest.raises(Exception):
            lot.count = 2

    def test_holding_count_must_match_lots(self) -> None:
        with pytest.raises(ValueError):
            Holding(count=3, lots=[Lot(count=1, expected_each=5, bucket=ValueBucket.GATHERING)])

    def test_lot_requires_positive_count(self) -> None:
        with pytest.raises(ValueError):
            Lot(count=0, expected_each=5, bucket=ValueBucket.GATHERING)
