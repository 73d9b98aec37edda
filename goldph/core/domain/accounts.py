"""
Accounts — иерархические счета ledger и правила полярности

Категория счёта — закрытый enum, полярность debit/credit определяется
таблицей по enum, а не сопоставлением строк.

Правила:
- Assets/Expense: debit увеличивает, credit уменьшает
- Income/Equity: debit уменьшает, credit увеличивает
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

from goldph.core.domain.items import ValueBucket
from goldph.core.errors import InvalidAccount

# Разделитель сегментов пути счёта
ACCOUNT_SEPARATOR: Final[str] = ":"


# =============================================================================
# ENUMS
# =============================================================================


class AccountCategory(str, Enum):
    """Категория счёта (корневой сегмент пути)"""

    ASSETS = "Assets"
    INCOME = "Income"
    EXPENSE = "Expense"
    EQUITY = "Equity"


# True: debit увеличивает баланс (debit-normal счёт)
DEBIT_INCREASES: Final[dict[AccountCategory, bool]] = {
    AccountCategory.ASSETS: True,
    AccountCategory.EXPENSE: True,
    AccountCategory.INCOME: False,
    AccountCategory.EQUITY: False,
}


# =============================================================================
# ACCOUNT
# =============================================================================


class Account(BaseModel):
    """
    Структурированный путь счёта, например Assets:Inventory:Gathering.

    category — корневой сегмент, segments — остальные сегменты.
    Immutable (frozen=True), hashable.
    """

    category: AccountCategory
    segments: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, path: "str | Account") -> "Account":
        """
        Разбор строкового пути счёта.

        Raises:
            InvalidAccount: Пустой путь, пустой сегмент или неизвестная категория
        """
        if isinstance(path, Account):
            return path
        if not isinstance(path, str) or not path:
            raise InvalidAccount(f"Account path must be a non-empty string, got {path!r}")

        root, *rest = path.split(ACCOUNT_SEPARATOR)
        try:
            category = AccountCategory(root)
        except ValueError:
            raise InvalidAccount(f"Unknown account category '{root}' in '{path}'") from None

        if any(not segment for segment in rest):
            raise InvalidAccount(f"Empty segment in account path '{path}'")

        return cls(category=category, segments=tuple(rest))

    @property
    def path(self) -> str:
        """Полный строковый путь (ключ баланса в ledger)."""
        return ACCOUNT_SEPARATOR.join((self.category.value, *self.segments))

    @property
    def debit_increases(self) -> bool:
        return DEBIT_INCREASES[self.category]

    def child(self, *segments: str) -> "Account":
        """Дочерний счёт."""
        return Account(category=self.category, segments=self.segments + tuple(segments))

    def is_under(self, prefix: "Account") -> bool:
        """True если счёт совпадает с prefix или вложен в него."""
        if self.category != prefix.category:
            return False
        return self.segments[: len(prefix.segments)] == prefix.segments

    def __str__(self) -> str:
        return self.path


# =============================================================================
# STANDARD CHART OF ACCOUNTS
# =============================================================================

CASH: Final[Account] = Account.parse("Assets:Cash")
INVENTORY: Final[Account] = Account.parse("Assets:Inventory")

INCOME_LOOTED_COIN: Final[Account] = Account.parse("Income:LootedCoin")
INCOME_VENDOR_SALES: Final[Account] = Account.parse("Income:VendorSales")
INCOME_QUEST: Final[Account] = Account.parse("Income:Quest")
INCOME_ITEMS_LOOTED: Final[Account] = Account.parse("Income:ItemsLooted")

EXPENSE_REPAIRS: Final[Account] = Account.parse("Expense:Repairs")
EXPENSE_VENDOR_BUYS: Final[Account] = Account.parse("Expense:VendorBuys")
EXPENSE_TRAVEL: Final[Account] = Account.parse("Expense:Travel")

EQUITY_INVENTORY_REALIZATION: Final[Account] = Account.parse("Equity:InventoryRealization")

# Сегменты счёта для каждого bucket
BUCKET_ACCOUNT_SEGMENTS: Final[dict[ValueBucket, tuple[str, ...]]] = {
    ValueBucket.VENDOR_TRASH: ("VendorTrash",),
    ValueBucket.RARE_MULTI: ("RareMulti",),
    ValueBucket.GATHERING: ("Gathering",),
    ValueBucket.SEALED_CONTAINER: ("Containers", "Sealed"),
    ValueBucket.OTHER: ("Other",),
}

# Счета, создаваемые при старте каждой сессии
STANDARD_ACCOUNTS: Final[tuple[Account, ...]] = (
    CASH,
    INCOME_LOOTED_COIN,
    INCOME_VENDOR_SALES,
    INCOME_QUEST,
    EXPENSE_REPAIRS,
    EXPENSE_VENDOR_BUYS,
    EXPENSE_TRAVEL,
    INVENTORY.child(*BUCKET_ACCOUNT_SEGMENTS[ValueBucket.SEALED_CONTAINER]),
    EQUITY_INVENTORY_REALIZATION,
)


def inventory_account(bucket: ValueBucket) -> Account:
    """Assets:Inventory:<Bucket>"""
    return INVENTORY.child(*BUCKET_ACCOUNT_SEGMENTS[bucket])


def looted_income_account(bucket: ValueBucket) -> Account:
    """Income:ItemsLooted:<Bucket>"""
    return INCOME_ITEMS_LOOTED.child(*BUCKET_ACCOUNT_SEGMENTS[bucket])


def standard_balances() -> dict[str, int]:
    """Начальная карта балансов новой сессии."""
    return {account.path: 0 for account in STANDARD_ACCOUNTS}
