"""
MetricsSnapshot — производные метрики сессии

Снимок читает Ledger/Holdings и вспомогательные счётчики и никогда их
не изменяет. Все rate: floor(total / duration_hours), 0 при нулевой
длительности.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from goldph.core.domain.accounts import (
    CASH,
    EXPENSE_REPAIRS,
    EXPENSE_TRAVEL,
    EXPENSE_VENDOR_BUYS,
    INCOME_ITEMS_LOOTED,
    INCOME_LOOTED_COIN,
    INCOME_QUEST,
    INCOME_VENDOR_SALES,
    INVENTORY,
    AccountCategory,
    inventory_account,
)
from goldph.core.domain.items import ValueBucket
from goldph.core.domain.session import AttributionTotals, ProgressTrack, Session
from goldph.core.math import SECONDS_PER_HOUR, per_hour_rate
from goldph.ledger.invariants import equity_adjustment
from goldph.ledger.ledger import Ledger
from goldph.metrics.duration import duration_so_far
from goldph.metrics.progress import TopBreakdown, top_contributors


@dataclass(frozen=True)
class MetricsConfig:
    """
    Параметры метрик.

    short_session_threshold_sec — порог "короткой" сессии для архивации.
    """

    top_n: int = 3
    short_session_threshold_sec: float = 300.0


# =============================================================================
# MODELS
# =============================================================================


class ProgressSummary(BaseModel):
    gained: int = Field(0, ge=0)
    per_hour: int = Field(0, ge=0)
    enabled: bool = False
    kills: int = Field(0, ge=0)
    top: TopBreakdown = Field(default_factory=TopBreakdown)

    model_config = {"frozen": True}


class MetricsSnapshot(BaseModel):
    """Снимок метрик сессии на момент запроса."""

    # Время
    duration_sec: float = Field(..., ge=0)
    duration_hours: float = Field(..., ge=0)

    # Деньги
    cash: int
    cash_per_hour: int

    # Доходы
    income_looted_coin: int
    income_quest: int
    income_vendor_sales: int
    income_items_looted: int
    income_total: int

    # Расходы
    expense_repairs: int
    expense_vendor_buys: int
    expense_travel: int
    expenses: int

    # Инвентарь (expected value)
    expected_inventory: int
    expected_per_hour: int
    inventory_by_bucket: dict[ValueBucket, int]

    # Итог (изменение net worth)
    total_value: int
    total_per_hour: int
    equity_realization: int = Field(
        ..., description="Накопленная корректировка реализации инвентаря"
    )

    # Отчётные счётчики
    attribution: AttributionTotals
    gathering_nodes: int
    gathering_nodes_per_hour: int
    top_nodes: TopBreakdown

    # Прогресс
    xp: ProgressSummary
    rep: ProgressSummary
    honor: ProgressSummary

    model_config = {"frozen": True}


# =============================================================================
# COMPUTE
# =============================================================================


def _summarize(
    track: ProgressTrack, duration_sec: float, top_n: int, with_top: bool = False
) -> ProgressSummary:
    return ProgressSummary(
        gained=track.gained,
        per_hour=per_hour_rate(track.gained, duration_sec),
        enabled=track.enabled,
        kills=track.kills,
        top=top_contributors(track.by_source, top_n) if with_top else TopBreakdown(),
    )


def compute_metrics(
    session: Session,
    now: float,
    config: MetricsConfig | None = None,
    ledger: Ledger | None = None,
) -> MetricsSnapshot:
    """Метрики сессии на момент now (монотонные часы)."""
    config = config or MetricsConfig()
    ledger = ledger or Ledger()

    duration_sec = duration_so_far(session, now)

    def balance(account) -> int:
        return ledger.get_balance(session, account)

    cash = balance(CASH)

    expense_repairs = balance(EXPENSE_REPAIRS)
    expense_vendor_buys = balance(EXPENSE_VENDOR_BUYS)
    expense_travel = balance(EXPENSE_TRAVEL)

    inventory_by_bucket = {bucket: balance(inventory_account(bucket)) for bucket in ValueBucket}
    expected_inventory = ledger.sum_matching(session, INVENTORY)
    total_value = cash + expected_inventory

    return MetricsSnapshot(
        duration_sec=duration_sec,
        duration_hours=duration_sec / SECONDS_PER_HOUR,
        cash=cash,
        cash_per_hour=per_hour_rate(cash, duration_sec),
        income_looted_coin=balance(INCOME_LOOTED_COIN),
        income_quest=balance(INCOME_QUEST),
        income_vendor_sales=balance(INCOME_VENDOR_SALES),
        income_items_looted=ledger.sum_matching(session, INCOME_ITEMS_LOOTED),
        income_total=ledger.sum_matching(session, AccountCategory.INCOME.value),
        expense_repairs=expense_repairs,
        expense_vendor_buys=expense_vendor_buys,
        expense_travel=expense_travel,
        expenses=ledger.sum_matching(session, AccountCategory.EXPENSE.value),
        expected_inventory=expected_inventory,
        expected_per_hour=per_hour_rate(expected_inventory, duration_sec),
        inventory_by_bucket=inventory_by_bucket,
        total_value=total_value,
        total_per_hour=per_hour_rate(total_value, duration_sec),
        equity_realization=equity_adjustment(session, ledger),
        attribution=session.attribution.model_copy(),
        gathering_nodes=session.gathering.total_nodes,
        gathering_nodes_per_hour=per_hour_rate(session.gathering.total_nodes, duration_sec),
        top_nodes=top_contributors(session.gathering.by_node, config.top_n),
        xp=_summarize(session.progress.xp, duration_sec, config.top_n),
        rep=_summarize(session.progress.rep, duration_sec, config.top_n, with_top=True),
        honor=_summarize(session.progress.honor, duration_sec, config.top_n),
    )
