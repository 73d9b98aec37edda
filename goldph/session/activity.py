"""
Activity processor — приём типизированных сигналов активности

Каждый сигнал превращается в явные проводки ledger и изменения
holdings. Многоногие операции составляются здесь:

- ItemLooted:  Dr Assets:Inventory:<Bucket> / Cr Income:ItemsLooted:<Bucket>
               + лот в holdings
- ItemRemoved: Dr Assets:Cash / Cr Income:VendorSales (выручка)
               + для каждого снятого bucket
               Dr Equity:InventoryRealization / Cr Assets:Inventory:<Bucket>

Так изменение net worth за цикл "получил → продал" равно выручке,
а не выручке плюс ранее учтённой стоимости.

Атрибуция (pickpocket, контейнеры) пополняет только отчётные счётчики.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel

from goldph.core.domain.accounts import (
    CASH,
    EQUITY_INVENTORY_REALIZATION,
    EXPENSE_REPAIRS,
    EXPENSE_TRAVEL,
    EXPENSE_VENDOR_BUYS,
    INCOME_LOOTED_COIN,
    INCOME_QUEST,
    INCOME_VENDOR_SALES,
    Account,
    inventory_account,
    looted_income_account,
)
from goldph.core.domain.items import ItemAggregate, PendingItem, ValueBucket
from goldph.core.domain.session import Session
from goldph.core.domain.signals import (
    CoinLooted,
    ContainerOpened,
    CurrencySpent,
    ExpenseKind,
    ExperienceObserved,
    GatherNodeHarvested,
    HonorGained,
    ItemLooted,
    ItemRemoved,
    QuestRewarded,
    ReputationObserved,
)
from goldph.core.errors import InvalidSession, UnresolvedItem
from goldph.core.math import format_money
from goldph.holdings.fifo import Holdings
from goldph.ledger.invariants import check_invariants
from goldph.ledger.ledger import Ledger
from goldph.metrics.progress import add_gain, observe_rollover, observe_source
from goldph.valuation.engine import ValuationEngine
from goldph.valuation.item_info import ItemInfoResolver

logger = logging.getLogger("goldph.activity")

EXPENSE_ACCOUNTS: dict[ExpenseKind, Account] = {
    ExpenseKind.REPAIRS: EXPENSE_REPAIRS,
    ExpenseKind.VENDOR_BUYS: EXPENSE_VENDOR_BUYS,
    ExpenseKind.TRAVEL: EXPENSE_TRAVEL,
}


@dataclass(frozen=True)
class ProcessorConfig:
    """
    validate_invariants: проверять инварианты после каждого сигнала,
    нарушения логируются на уровне ERROR.
    """

    validate_invariants: bool = False


class ActivityProcessor:
    """Применение сигналов активности к сессии."""

    def __init__(
        self,
        item_info: ItemInfoResolver,
        valuation: ValuationEngine | None = None,
        ledger: Ledger | None = None,
        holdings: Holdings | None = None,
        config: ProcessorConfig | None = None,
    ):
        self.item_info = item_info
        self.valuation = valuation or ValuationEngine(item_info=item_info)
        self.ledger = ledger or Ledger()
        self.holdings = holdings or Holdings()
        self.config = config or ProcessorConfig()

        self._handlers: dict[type, Callable[[Session, BaseModel], None]] = {
            CoinLooted: self._on_coin_looted,
            QuestRewarded: self._on_quest_rewarded,
            CurrencySpent: self._on_currency_spent,
            ItemLooted: self._on_item_looted,
            ItemRemoved: self._on_item_removed,
            ContainerOpened: self._on_container_opened,
            GatherNodeHarvested: self._on_gather_node,
            ExperienceObserved: self._on_experience,
            ReputationObserved: self._on_reputation,
            HonorGained: self._on_honor,
        }

    def apply(self, session: Session | None, signal: BaseModel) -> bool:
        """
        Применить сигнал к сессии.

        Returns:
            True если сигнал применён, False если проигнорирован (пауза)

        Raises:
            InvalidSession: Сессия отсутствует или остановлена
            UnresolvedItem: Метаданные предмета ещё не получены
            TypeError: Неизвестный тип сигнала
        """
        if session is None:
            raise InvalidSession("No session to apply signal to")
        if session.is_stopped:
            raise InvalidSession(f"Session {session.session_id} is stopped")

        handler = self._handlers.get(type(signal))
        if handler is None:
            raise TypeError(f"Unsupported signal type: {type(signal).__name__}")

        if session.is_paused:
            logger.warning(
                "Session %d is paused, ignoring %s", session.session_id, type(signal).__name__
            )
            return False

        handler(session, signal)

        if self.config.validate_invariants:
            report = check_invariants(session, self.ledger, self.holdings)
            for failure in report.failures:
                logger.error(
                    "Invariant %s violated after %s: %s",
                    failure.name,
                    type(signal).__name__,
                    failure.details,
                )
        return True

    # =========================================================================
    # MONEY
    # =========================================================================

    def _on_coin_looted(self, session: Session, signal: CoinLooted) -> None:
        self.ledger.post(session, CASH, INCOME_LOOTED_COIN, signal.copper)

        if signal.context.pickpocket:
            session.attribution.pickpocket_coin += signal.copper
        if signal.context.from_container:
            session.attribution.from_container_coin += signal.copper

    def _on_quest_rewarded(self, session: Session, signal: QuestRewarded) -> None:
        self.ledger.post(session, CASH, INCOME_QUEST, signal.copper)

    def _on_currency_spent(self, session: Session, signal: CurrencySpent) -> None:
        self.ledger.post(session, EXPENSE_ACCOUNTS[signal.expense], CASH, signal.copper)

    # =========================================================================
    # ITEMS
    # =========================================================================

    def _on_item_looted(self, session: Session, signal: ItemLooted) -> None:
        info = self.item_info.get_item_info(signal.item_id)
        if isinstance(info, PendingItem):
            logger.warning("Item %d metadata pending, signal deferred", signal.item_id)
            raise UnresolvedItem(signal.item_id)

        valuation = self.valuation.value_item(info)
        bucket = valuation.bucket

        if bucket == ValueBucket.OTHER:
            logger.debug("Item %s (%d) is untracked", info.name, info.item_id)
            return

        expected_total = signal.count * valuation.expected_each

        if bucket != ValueBucket.SEALED_CONTAINER:
            self.ledger.post(
                session,
                inventory_account(bucket),
                looted_income_account(bucket),
                expected_total,
                meta={"item_id": info.item_id, "count": signal.count},
            )
            self.holdings.add_lot(
                session, info.item_id, signal.count, valuation.expected_each, bucket
            )

        aggregate = session.items.get(info.item_id)
        if aggregate is None:
            aggregate = ItemAggregate(
                item_id=info.item_id, name=info.name, quality=info.quality, bucket=bucket
            )
            session.items[info.item_id] = aggregate
        aggregate.count += signal.count
        aggregate.count_looted += signal.count
        aggregate.expected_total += expected_total

        if bucket == ValueBucket.SEALED_CONTAINER:
            if signal.context.pickpocket:
                session.attribution.containers_looted += signal.count
            return

        if signal.context.pickpocket:
            session.attribution.pickpocket_value += expected_total
        if signal.context.from_container:
            session.attribution.from_container_value += expected_total

    def _on_item_removed(self, session: Session, signal: ItemRemoved) -> None:
        self.ledger.post(
            session,
            CASH,
            INCOME_VENDOR_SALES,
            signal.proceeds,
            meta={"item_id": signal.item_id, "count": signal.count},
        )

        consumed = self.holdings.consume_fifo(session, signal.item_id, signal.count)
        for bucket, value in consumed.items():
            self.ledger.post(session, EQUITY_INVENTORY_REALIZATION, inventory_account(bucket), value)

        aggregate = session.items.get(signal.item_id)
        if aggregate is not None:
            aggregate.count = max(0, aggregate.count - signal.count)

        if consumed:
            logger.debug(
                "Item %d x%d removed: proceeds %s, reversed %s",
                signal.item_id,
                signal.count,
                format_money(signal.proceeds),
                format_money(sum(consumed.values())),
            )

    def _on_container_opened(self, session: Session, signal: ContainerOpened) -> None:
        session.attribution.containers_opened += signal.count

    # =========================================================================
    # COUNTERS
    # =========================================================================

    def _on_gather_node(self, session: Session, signal: GatherNodeHarvested) -> None:
        gathering = session.gathering
        gathering.total_nodes += 1
        gathering.by_node[signal.node_name] = gathering.by_node.get(signal.node_name, 0) + 1

    def _on_experience(self, session: Session, signal: ExperienceObserved) -> None:
        observe_rollover(session.progress.xp, signal.value, signal.ceiling)

    def _on_reputation(self, session: Session, signal: ReputationObserved) -> None:
        observe_source(session.progress.rep, signal.source, signal.value)

    def _on_honor(self, session: Session, signal: HonorGained) -> None:
        add_gain(session.progress.honor, signal.amount, kill=signal.killing_blow)
