"""
Domain models and value objects.

Contains accounts, items, holdings, activity signals and the session record.
"""

from goldph.core.domain.accounts import (
    BUCKET_ACCOUNT_SEGMENTS,
    CASH,
    DEBIT_INCREASES,
    EQUITY_INVENTORY_REALIZATION,
    EXPENSE_REPAIRS,
    EXPENSE_TRAVEL,
    EXPENSE_VENDOR_BUYS,
    INCOME_ITEMS_LOOTED,
    INCOME_LOOTED_COIN,
    INCOME_QUEST,
    INCOME_VENDOR_SALES,
    INVENTORY,
    STANDARD_ACCOUNTS,
    Account,
    AccountCategory,
    inventory_account,
    looted_income_account,
    standard_balances,
)
from goldph.core.domain.holding import Holding, Lot
from goldph.core.domain.items import (
    ItemAggregate,
    ItemInfo,
    ItemQuality,
    PendingItem,
    ResolvedItem,
    ValueBucket,
)
from goldph.core.domain.session import (
    AttributionTotals,
    GatheringTotals,
    OwnerKey,
    ProgressTrack,
    ProgressTracks,
    Session,
)
from goldph.core.domain.signals import (
    CONTAINER_WINDOW_SEC,
    NO_ATTRIBUTION,
    PICKPOCKET_WINDOW_SEC,
    ActivitySignal,
    AttributionContext,
    AttributionWindows,
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
    parse_signal,
)

__all__ = [
    # Accounts
    "Account",
    "AccountCategory",
    "DEBIT_INCREASES",
    "BUCKET_ACCOUNT_SEGMENTS",
    "STANDARD_ACCOUNTS",
    "CASH",
    "INVENTORY",
    "INCOME_LOOTED_COIN",
    "INCOME_VENDOR_SALES",
    "INCOME_QUEST",
    "INCOME_ITEMS_LOOTED",
    "EXPENSE_REPAIRS",
    "EXPENSE_VENDOR_BUYS",
    "EXPENSE_TRAVEL",
    "EQUITY_INVENTORY_REALIZATION",
    "inventory_account",
    "looted_income_account",
    "standard_balances",
    # Items
    "ItemQuality",
    "ValueBucket",
    "ResolvedItem",
    "PendingItem",
    "ItemInfo",
    "ItemAggregate",
    # Holdings
    "Lot",
    "Holding",
    # Session
    "OwnerKey",
    "Session",
    "AttributionTotals",
    "GatheringTotals",
    "ProgressTrack",
    "ProgressTracks",
    # Signals
    "ActivitySignal",
    "AttributionContext",
    "AttributionWindows",
    "NO_ATTRIBUTION",
    "PICKPOCKET_WINDOW_SEC",
    "CONTAINER_WINDOW_SEC",
    "ExpenseKind",
    "CoinLooted",
    "QuestRewarded",
    "CurrencySpent",
    "ItemLooted",
    "ItemRemoved",
    "ContainerOpened",
    "GatherNodeHarvested",
    "ExperienceObserved",
    "ReputationObserved",
    "HonorGained",
    "parse_signal",
]
