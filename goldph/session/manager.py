"""
SessionManager — жизненный цикл сессий

Состояния активной сессии:
- RUNNING: сегмент открыт (current_login_at задан)
- OFFLINE: персонаж вышел, сегмент свёрнут
- PAUSED: paused_at задан, время и сигналы заморожены
- STOPPED: ended_at задан, длительность зафиксирована

Для одного владельца активна не более одной сессии. Archive, delete и
merge работают только с остановленными сессиями и возвращают токен
отмены с ограниченным сроком действия.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel

from goldph.core.clock import Clock
from goldph.core.domain.session import OwnerKey, Session
from goldph.core.errors import (
    ActiveSessionConflict,
    InvalidSession,
    MergeOwnerMismatch,
    NoActiveSession,
    SessionAlreadyActive,
    SessionStateError,
)
from goldph.core.math import format_duration
from goldph.ledger.ledger import Ledger
from goldph.metrics.duration import (
    duration_so_far,
    finalize_duration,
    fold_open_segment,
    open_segment,
    pause_clock,
    resume_clock,
)
from goldph.metrics.snapshot import MetricsConfig, MetricsSnapshot, compute_metrics
from goldph.session.activity import ActivityProcessor
from goldph.session.merge import merge_sessions
from goldph.session.undo import UndoAction, UndoHistory, UndoPolicy, UndoToken

logger = logging.getLogger("goldph.session")

# Причины архивации
ARCHIVE_REASON_MANUAL = "manual"
ARCHIVE_REASON_SHORT = "auto-short"


@dataclass(frozen=True)
class MergeResult:
    session: Session
    token: UndoToken


class SessionManager:
    """
    Владелец всех сессий и активной сессии каждого владельца.

    Время берётся из переданных монотонных часов.
    """

    def __init__(
        self,
        clock: Clock,
        processor: ActivityProcessor | None = None,
        ledger: Ledger | None = None,
        undo_policy: UndoPolicy | None = None,
        metrics_config: MetricsConfig | None = None,
    ):
        self.clock = clock
        self.processor = processor
        self.ledger = ledger or Ledger()
        self.metrics_config = metrics_config or MetricsConfig()
        self.undo_history = UndoHistory(undo_policy)

        self._sessions: dict[int, Session] = {}
        # owner.key → session_id активной сессии
        self._active: dict[str, int] = {}
        self._last_session_id = 0

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_session(self, session_id: int) -> Session:
        """
        Raises:
            InvalidSession: Сессия не найдена
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise InvalidSession(f"Session {session_id} not found")
        return session

    def get_active_session(self, owner: OwnerKey) -> Session | None:
        session_id = self._active.get(owner.key)
        return self._sessions.get(session_id) if session_id is not None else None

    def is_active(self, session_id: int) -> bool:
        return session_id in self._active.values()

    def list_sessions(self, limit: int | None = None) -> list[Session]:
        """Сессии от новых к старым (по id)."""
        ordered = sorted(self._sessions.values(), key=lambda s: s.session_id, reverse=True)
        return ordered[:limit] if limit is not None else ordered

    def get_metrics(self, session: Session | int) -> MetricsSnapshot:
        if isinstance(session, int):
            session = self.get_session(session)
        return compute_metrics(session, self.clock.now(), self.metrics_config, self.ledger)

    def is_short_session(self, session: Session, threshold_sec: float | None = None) -> bool:
        threshold = (
            threshold_sec
            if threshold_sec is not None
            else self.metrics_config.short_session_threshold_sec
        )
        return duration_so_far(session, self.clock.now()) < threshold

    # =========================================================================
    # ACTIVE LIFECYCLE
    # =========================================================================

    def start_session(self, owner: OwnerKey, zone: str = "Unknown") -> Session:
        """
        Raises:
            SessionAlreadyActive: У владельца уже есть активная сессия
        """
        if owner.key in self._active:
            raise SessionAlreadyActive(
                f"Session {self._active[owner.key]} already active for {owner.key}"
            )

        now = self.clock.now()
        session = Session(
            session_id=self._next_id(),
            owner=owner,
            zone=zone,
            started_at=now,
            current_login_at=now,
        )
        self.ledger.initialize_ledger(session)

        self._sessions[session.session_id] = session
        self._active[owner.key] = session.session_id
        logger.info("Session %d started for %s in %s", session.session_id, owner.key, zone)
        return session

    def pause_session(self, owner: OwnerKey) -> Session:
        session = self._require_active(owner)
        if session.is_paused:
            raise SessionStateError(f"Session {session.session_id} is already paused")
        pause_clock(session, self.clock.now())
        logger.info("Session %d paused", session.session_id)
        return session

    def resume_session(self, owner: OwnerKey) -> Session:
        session = self._require_active(owner)
        if not session.is_paused:
            raise SessionStateError(f"Session {session.session_id} is not paused")
        resume_clock(session, self.clock.now())
        logger.info("Session %d resumed", session.session_id)
        return session

    def stop_session(self, owner: OwnerKey) -> Session:
        """Остановить и заморозить активную сессию."""
        session = self._require_active(owner)
        now = self.clock.now()
        finalize_duration(session, now)
        session.ended_at = now
        del self._active[owner.key]
        logger.info(
            "Session %d stopped after %s",
            session.session_id,
            format_duration(session.duration_sec),
        )
        return session

    def on_logout(self, owner: OwnerKey) -> Session:
        """Свернуть открытый сегмент при выходе из игры."""
        session = self._require_active(owner)
        fold_open_segment(session, self.clock.now())
        logger.debug("Session %d segment closed on logout", session.session_id)
        return session

    def on_login(self, owner: OwnerKey) -> Session:
        """Открыть новый сегмент при входе (на паузе сегмент не открывается)."""
        session = self._require_active(owner)
        open_segment(session, self.clock.now())
        return session

    def apply_signal(self, owner: OwnerKey, signal: BaseModel) -> bool:
        """
        Передать сигнал активной сессии владельца.

        Raises:
            NoActiveSession: Активной сессии нет
            RuntimeError: ActivityProcessor не подключён
        """
        if self.processor is None:
            raise RuntimeError("SessionManager has no ActivityProcessor")
        return self.processor.apply(self._require_active(owner), signal)

    # =========================================================================
    # HISTORY OPERATIONS (undoable)
    # =========================================================================

    def archive_session(
        self,
        session_id: int,
        archived: bool = True,
        reason: str | None = ARCHIVE_REASON_MANUAL,
    ) -> UndoToken:
        """Архивировать или разархивировать остановленную сессию."""
        session = self._require_inactive(session_id)
        now = self.clock.now()
        token = self.undo_history.record(UndoAction.ARCHIVE, {session_id: session}, now)

        session.archived = archived
        session.archived_at = now if archived else None
        session.archived_reason = (reason or ARCHIVE_REASON_MANUAL) if archived else None

        logger.info("Session %d %s", session_id, "archived" if archived else "unarchived")
        return token

    def archive_short_sessions(self, threshold_sec: float | None = None) -> UndoToken | None:
        """
        Архивировать все остановленные сессии короче порога.

        Returns:
            Токен отмены или None, если архивировать нечего
        """
        candidates = [
            session
            for session in self._sessions.values()
            if session.is_stopped
            and not session.archived
            and self.is_short_session(session, threshold_sec)
        ]
        if not candidates:
            return None

        now = self.clock.now()
        token = self.undo_history.record(
            UndoAction.ARCHIVE_SHORT, {s.session_id: s for s in candidates}, now
        )
        for session in candidates:
            session.archived = True
            session.archived_at = now
            session.archived_reason = ARCHIVE_REASON_SHORT

        logger.info("Archived %d short session(s)", len(candidates))
        return token

    def delete_session(self, session_id: int) -> UndoToken:
        session = self._require_inactive(session_id)
        token = self.undo_history.record(
            UndoAction.DELETE, {session_id: session}, self.clock.now()
        )
        del self._sessions[session_id]
        logger.info("Session %d deleted", session_id)
        return token

    def merge_sessions(self, session_ids: Iterable[int]) -> MergeResult:
        """
        Объединить остановленные сессии одного владельца в новую.

        Raises:
            SessionStateError: Меньше двух уникальных сессий или сессия в архиве
            InvalidSession: Сессия не найдена
            ActiveSessionConflict: Одна из сессий активна
            MergeOwnerMismatch: Сессии разных владельцев
        """
        unique_ids = list(dict.fromkeys(session_ids))
        if len(unique_ids) < 2:
            raise SessionStateError("Need at least two unique sessions to merge")

        sources = []
        for session_id in unique_ids:
            session = self._require_inactive(session_id)
            if session.archived:
                raise SessionStateError(f"Session {session_id} is archived; unarchive first")
            sources.append(session)

        owner_key = sources[0].owner.key
        if any(s.owner.key != owner_key for s in sources[1:]):
            raise MergeOwnerMismatch("Sessions must belong to the same character")

        now = self.clock.now()
        merged = merge_sessions(sources, self._next_id(), now)

        previous: dict[int, Session | None] = {s.session_id: s for s in sources}
        previous[merged.session_id] = None
        token = self.undo_history.record(UndoAction.MERGE, previous, now)

        for source in sources:
            del self._sessions[source.session_id]
        self._sessions[merged.session_id] = merged

        logger.info("Merged sessions %s into %d", merged.merged_from, merged.session_id)
        return MergeResult(session=merged, token=token)

    # =========================================================================
    # UNDO
    # =========================================================================

    def undo(self, token: UndoToken | int) -> list[int]:
        """
        Отменить операцию по токену. Токен должен быть последним.

        Returns:
            id восстановленных сессий

        Raises:
            UndoUnavailable: Токен неизвестен, истёк или после него были операции
        """
        entry = self.undo_history.pop(token, self.clock.now())
        return self._restore(entry.previous, entry.token.action)

    def undo_last(self) -> list[int]:
        entry = self.undo_history.pop_last(self.clock.now())
        return self._restore(entry.previous, entry.token.action)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _restore(self, previous: dict[int, Session | None], action: UndoAction) -> list[int]:
        restored = []
        for session_id, snapshot in previous.items():
            if snapshot is None:
                self._sessions.pop(session_id, None)
            else:
                self._sessions[session_id] = snapshot.model_copy(deep=True)
                restored.append(session_id)
        logger.info("Undo %s restored sessions %s", action.value, restored)
        return restored

    def _next_id(self) -> int:
        self._last_session_id += 1
        return self._last_session_id

    def _require_active(self, owner: OwnerKey) -> Session:
        session = self.get_active_session(owner)
        if session is None:
            raise NoActiveSession(f"No active session for {owner.key}")
        return session

    def _require_inactive(self, session_id: int) -> Session:
        session = self.get_session(session_id)
        if self.is_active(session_id):
            raise ActiveSessionConflict(f"Session {session_id} is active")
        return session
