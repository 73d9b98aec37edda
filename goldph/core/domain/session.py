"""
Session — состояние игровой сессии

Session — изменяемая модель: во время активной жизни её меняют только
Ledger, Holdings и ActivityProcessor. После stop сессия заморожена
(ended_at установлен), дальнейшие изменения запрещены.

Сериализуется в вложенные примитивы (to_record) без поведения.
"""

from pydantic import BaseModel, Field

from goldph.core.domain.accounts import standard_balances
from goldph.core.domain.holding import Holding
from goldph.core.domain.items import ItemAggregate


# =============================================================================
# OWNER
# =============================================================================


class OwnerKey(BaseModel):
    """Идентичность владельца сессии (персонаж)."""

    character: str = Field(..., min_length=1)
    realm: str = Field(..., min_length=1)
    faction: str = Field("Neutral", min_length=1)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Строковый ключ: Character-Realm-Faction."""
        return f"{self.character}-{self.realm}-{self.faction}"


# =============================================================================
# AUXILIARY COUNTERS
# =============================================================================


class AttributionTotals(BaseModel):
    """Отчётные счётчики атрибуции (не участвуют в ledger)."""

    pickpocket_coin: int = Field(0, ge=0)
    pickpocket_value: int = Field(0, ge=0)
    containers_looted: int = Field(0, ge=0)
    containers_opened: int = Field(0, ge=0)
    from_container_coin: int = Field(0, ge=0)
    from_container_value: int = Field(0, ge=0)


class GatheringTotals(BaseModel):
    total_nodes: int = Field(0, ge=0)
    by_node: dict[str, int] = Field(default_factory=dict)


class ProgressTrack(BaseModel):
    """
    Накопитель прогресса (опыт, репутация, honor).

    Первое наблюдение задаёт baseline и включает трек. gained растёт
    только на неотрицательные дельты.
    """

    gained: int = Field(0, ge=0)
    enabled: bool = False
    last_value: int | None = None
    last_ceiling: int | None = None
    by_source: dict[str, int] = Field(default_factory=dict)
    source_baselines: dict[str, int] = Field(default_factory=dict)
    kills: int = Field(0, ge=0)


class ProgressTracks(BaseModel):
    xp: ProgressTrack = Field(default_factory=ProgressTrack)
    rep: ProgressTrack = Field(default_factory=ProgressTrack)
    honor: ProgressTrack = Field(default_factory=ProgressTrack)


# =============================================================================
# SESSION
# =============================================================================


class Session(BaseModel):
    """
    Сессия игрока.

    Длительность: accumulated_duration + открытый сегмент
    (now - current_login_at), если current_login_at задан.
    paused_at задан, пока сессия на паузе.
    """

    # Идентификация
    session_id: int = Field(..., ge=1)
    owner: OwnerKey
    zone: str = "Unknown"

    # Время
    started_at: float = Field(..., description="Момент старта (monotonic clock)")
    ended_at: float | None = None
    duration_sec: float = Field(0.0, ge=0, description="Итоговая длительность после stop")
    accumulated_duration: float = Field(0.0, ge=0)
    current_login_at: float | None = None
    paused_at: float | None = None

    # Учёт
    ledger: dict[str, int] = Field(default_factory=standard_balances)
    holdings: dict[int, Holding] = Field(default_factory=dict)
    items: dict[int, ItemAggregate] = Field(default_factory=dict)

    # Вспомогательные счётчики
    attribution: AttributionTotals = Field(default_factory=AttributionTotals)
    gathering: GatheringTotals = Field(default_factory=GatheringTotals)
    progress: ProgressTracks = Field(default_factory=ProgressTracks)

    # Архив
    archived: bool = False
    archived_at: float | None = None
    archived_reason: str | None = None

    # Merge
    merged_from: list[int] = Field(default_factory=list)
    merged_at: float | None = None

    @property
    def is_stopped(self) -> bool:
        return self.ended_at is not None

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None
