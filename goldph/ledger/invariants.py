"""
Invariant checks — проверка согласованности ledger и holdings

Проверки:
- trial_balance: Σ debit-normal − Σ credit-normal == 0
- net_worth: Cash + стоимость holdings == Income − Expense − equity adjustment
- holdings_vs_ledger: баланс Assets:Inventory:<Bucket> == стоимость лотов bucket
- holding_counts: Holding.count == Σ lot.count, лоты не пустые
"""

from dataclasses import dataclass

from goldph.core.domain.accounts import (
    CASH,
    EQUITY_INVENTORY_REALIZATION,
    INVENTORY,
    AccountCategory,
    inventory_account,
)
from goldph.core.domain.items import ValueBucket
from goldph.core.domain.session import Session
from goldph.holdings.fifo import Holdings
from goldph.ledger.ledger import Ledger


@dataclass(frozen=True)
class InvariantResult:
    """Результат одной проверки."""

    name: str
    ok: bool
    details: str = ""


@dataclass(frozen=True)
class InvariantReport:
    results: tuple[InvariantResult, ...]

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failures(self) -> tuple[InvariantResult, ...]:
        return tuple(result for result in self.results if not result.ok)

    def __getitem__(self, name: str) -> InvariantResult:
        for result in self.results:
            if result.name == name:
                return result
        raise KeyError(name)


def equity_adjustment(session: Session, ledger: Ledger | None = None) -> int:
    """
    Накопленная equity-корректировка реализации инвентаря.

    Equity — credit-normal счёт, реверс проводится по дебету, поэтому
    корректировка равна балансу с обратным знаком.
    """
    ledger = ledger or Ledger()
    return -ledger.get_balance(session, EQUITY_INVENTORY_REALIZATION)


def check_invariants(
    session: Session,
    ledger: Ledger | None = None,
    holdings: Holdings | None = None,
) -> InvariantReport:
    """Проверка всех инвариантов сессии."""
    ledger = ledger or Ledger()
    holdings = holdings or Holdings()
    results: list[InvariantResult] = []

    # 1. Trial balance
    trial = ledger.trial_balance(session)
    results.append(
        InvariantResult("trial_balance", trial == 0, f"trial balance = {trial}")
    )

    # 2. Net worth identity
    cash = ledger.get_balance(session, CASH)
    inventory_value = holdings.get_total_expected_value(session)
    income = ledger.sum_matching(session, AccountCategory.INCOME.value)
    expense = ledger.sum_matching(session, AccountCategory.EXPENSE.value)
    adjustment = equity_adjustment(session, ledger)
    left = cash + inventory_value
    right = income - expense - adjustment
    results.append(
        InvariantResult(
            "net_worth",
            left == right,
            f"cash {cash} + inventory {inventory_value} = {left}; "
            f"income {income} - expense {expense} - equity {adjustment} = {right}",
        )
    )

    # 3. Holdings vs ledger per bucket
    by_bucket = holdings.expected_value_by_bucket(session)
    mismatches = []
    for bucket in ValueBucket:
        booked = ledger.get_balance(session, inventory_account(bucket))
        held = by_bucket.get(bucket, 0)
        if booked != held:
            mismatches.append(f"{bucket.value}: ledger {booked} != holdings {held}")
    inventory_total = ledger.sum_matching(session, INVENTORY)
    if inventory_total != inventory_value:
        mismatches.append(f"total: ledger {inventory_total} != holdings {inventory_value}")
    results.append(
        InvariantResult("holdings_vs_ledger", not mismatches, "; ".join(mismatches))
    )

    # 4. Holding counts
    bad_counts = []
    for item_id, holding in session.holdings.items():
        lot_total = sum(lot.count for lot in holding.lots)
        if lot_total != holding.count or any(lot.count <= 0 for lot in holding.lots):
            bad_counts.append(f"item {item_id}: count {holding.count} != lots {lot_total}")
    results.append(
        InvariantResult("holding_counts", not bad_counts, "; ".join(bad_counts))
    )

    return InvariantReport(results=tuple(results))
