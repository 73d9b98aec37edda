"""
Signals — типизированные сигналы активности

Сигналы формирует внешний слой классификации событий. Ядро получает
сигнал целиком, вместе с контекстом атрибуции, и не хранит скрытого
временного состояния.

Все сигналы immutable (frozen=True). Поле kind — дискриминатор для
разбора сигнала из dict (parse_signal).
"""

from enum import Enum
from typing import Annotated, Any, Final, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from goldph.core.clock import Clock

# Длительность окон атрибуции (секунды)
PICKPOCKET_WINDOW_SEC: Final[float] = 2.0
CONTAINER_WINDOW_SEC: Final[float] = 3.0


# =============================================================================
# ATTRIBUTION
# =============================================================================


class AttributionContext(BaseModel):
    """
    Контекст атрибуции сигнала (только для отчётов).

    Не влияет на ledger: деньги и предметы проводятся ровно один раз,
    атрибуция лишь пополняет отчётные счётчики.
    """

    pickpocket: bool = Field(False, description="Событие внутри окна pickpocket")
    from_container: bool = Field(False, description="Событие внутри окна открытия контейнера")

    model_config = {"frozen": True}


NO_ATTRIBUTION: Final[AttributionContext] = AttributionContext()


class AttributionWindows:
    """
    Окна атрибуции на стороне слоя событий.

    Хранит явные timestamps истечения окон и сравнивает их с
    переданными часами. Окно активно включительно до момента истечения.
    """

    def __init__(
        self,
        clock: Clock,
        pickpocket_window_sec: float = PICKPOCKET_WINDOW_SEC,
        container_window_sec: float = CONTAINER_WINDOW_SEC,
    ):
        self._clock = clock
        self.pickpocket_window_sec = pickpocket_window_sec
        self.container_window_sec = container_window_sec
        self.pickpocket_until: float | None = None
        self.container_until: float | None = None

    def mark_pickpocket(self) -> float:
        """Открыть окно pickpocket, вернуть момент истечения."""
        self.pickpocket_until = self._clock.now() + self.pickpocket_window_sec
        return self.pickpocket_until

    def mark_container_opened(self) -> float:
        """Открыть окно открытия контейнера, вернуть момент истечения."""
        self.container_until = self._clock.now() + self.container_window_sec
        return self.container_until

    def context(self) -> AttributionContext:
        """Контекст для сигнала, формируемого сейчас."""
        now = self._clock.now()
        return AttributionContext(
            pickpocket=self.pickpocket_until is not None and now <= self.pickpocket_until,
            from_container=self.container_until is not None and now <= self.container_until,
        )

    def clear(self) -> None:
        self.pickpocket_until = None
        self.container_until = None


# =============================================================================
# SIGNALS
# =============================================================================


class ExpenseKind(str, Enum):
    """Категория расхода"""

    REPAIRS = "repairs"
    VENDOR_BUYS = "vendor_buys"
    TRAVEL = "travel"


class CoinLooted(BaseModel):
    """Получены деньги из лута."""

    kind: Literal["coin_looted"] = "coin_looted"
    copper: int = Field(..., ge=0)
    context: AttributionContext = NO_ATTRIBUTION

    model_config = {"frozen": True}


class QuestRewarded(BaseModel):
    """Денежная награда за квест."""

    kind: Literal["quest_rewarded"] = "quest_rewarded"
    copper: int = Field(..., ge=0)

    model_config = {"frozen": True}


class CurrencySpent(BaseModel):
    """Расход денег (ремонт, покупка у торговца, перелёт)."""

    kind: Literal["currency_spent"] = "currency_spent"
    expense: ExpenseKind
    copper: int = Field(..., ge=0)

    model_config = {"frozen": True}


class ItemLooted(BaseModel):
    """Предмет получен в инвентарь."""

    kind: Literal["item_looted"] = "item_looted"
    item_id: int = Field(..., ge=0)
    count: int = Field(..., gt=0)
    context: AttributionContext = NO_ATTRIBUTION

    model_config = {"frozen": True}


class ItemRemoved(BaseModel):
    """
    Предмет покинул инвентарь.

    proceeds > 0 — продажа торговцу, 0 — уничтожение/использование.
    """

    kind: Literal["item_removed"] = "item_removed"
    item_id: int = Field(..., ge=0)
    count: int = Field(..., gt=0)
    proceeds: int = Field(0, ge=0, description="Выручка от продажи (copper)")

    model_config = {"frozen": True}


class ContainerOpened(BaseModel):
    """Открыт запертый контейнер."""

    kind: Literal["container_opened"] = "container_opened"
    count: int = Field(1, gt=0)

    model_config = {"frozen": True}


class GatherNodeHarvested(BaseModel):
    kind: Literal["gather_node_harvested"] = "gather_node_harvested"
    node_name: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class ExperienceObserved(BaseModel):
    """Наблюдение текущего значения опыта и порога уровня."""

    kind: Literal["experience_observed"] = "experience_observed"
    value: int = Field(..., ge=0)
    ceiling: int = Field(..., ge=0)

    model_config = {"frozen": True}


class ReputationObserved(BaseModel):
    """Наблюдение текущей репутации по источнику (фракции)."""

    kind: Literal["reputation_observed"] = "reputation_observed"
    source: str = Field(..., min_length=1)
    value: int

    model_config = {"frozen": True}


class HonorGained(BaseModel):
    kind: Literal["honor_gained"] = "honor_gained"
    amount: int = Field(..., ge=0)
    killing_blow: bool = False

    model_config = {"frozen": True}


ActivitySignal = Annotated[
    Union[
        CoinLooted,
        QuestRewarded,
        CurrencySpent,
        ItemLooted,
        ItemRemoved,
        ContainerOpened,
        GatherNodeHarvested,
        ExperienceObserved,
        ReputationObserved,
        HonorGained,
    ],
    Field(discriminator="kind"),
]

_SIGNAL_ADAPTER: Final[TypeAdapter] = TypeAdapter(ActivitySignal)


def parse_signal(data: dict[str, Any]) -> BaseModel:
    """
    Разбор сигнала из dict по полю kind.

    Raises:
        pydantic.ValidationError: Неизвестный kind или некорректные поля
    """
    return _SIGNAL_ADAPTER.validate_python(data)
