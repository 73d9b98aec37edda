"""
Undo history — ограниченная по времени отмена деструктивных операций

Перед archive/delete/merge сохраняется глубокая копия затронутых сессий.
Запись живёт window_sec секунд, стек ограничен max_entries записями
(старейшие вытесняются). Отменить можно только последнюю действующую
запись.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque

from goldph.core.domain.session import Session
from goldph.core.errors import UndoUnavailable


@dataclass(frozen=True)
class UndoPolicy:
    window_sec: float = 30.0
    max_entries: int = 20


class UndoAction(str, Enum):
    """Тип отменяемой операции"""

    ARCHIVE = "archive"
    ARCHIVE_SHORT = "archive_short"
    DELETE = "delete"
    MERGE = "merge"


@dataclass(frozen=True)
class UndoToken:
    """Токен отмены, возвращается вызывающему коду."""

    token_id: int
    action: UndoAction
    expires_at: float


@dataclass(frozen=True)
class UndoEntry:
    """
    Запись отмены.

    previous: session_id → снимок до операции, None означает, что
    сессии до операции не было (её нужно удалить при отмене).
    """

    token: UndoToken
    previous: dict[int, Session | None]


def _snapshot(session: Session | None) -> Session | None:
    return session.model_copy(deep=True) if session is not None else None


class UndoHistory:
    """Стек записей отмены с окном по времени."""

    def __init__(self, policy: UndoPolicy | None = None):
        self.policy = policy or UndoPolicy()
        self._entries: Deque[UndoEntry] = deque()
        self._next_token_id = 1

    def __len__(self) -> int:
        return len(self._entries)

    def record(
        self,
        action: UndoAction,
        previous: dict[int, Session | None],
        now: float,
    ) -> UndoToken:
        """Сохранить глубокие копии previous и вернуть токен."""
        token = UndoToken(
            token_id=self._next_token_id,
            action=action,
            expires_at=now + self.policy.window_sec,
        )
        self._next_token_id += 1

        entry = UndoEntry(
            token=token,
            previous={session_id: _snapshot(s) for session_id, s in previous.items()},
        )
        self._entries.append(entry)
        while len(self._entries) > self.policy.max_entries:
            self._entries.popleft()
        return token

    def prune(self, now: float) -> int:
        """Удалить истёкшие записи. Возвращает число удалённых."""
        before = len(self._entries)
        self._entries = deque(e for e in self._entries if now <= e.token.expires_at)
        return before - len(self._entries)

    def pop(self, token: UndoToken | int, now: float) -> UndoEntry:
        """
        Извлечь запись по токену.

        Отменяется только последняя операция: снимки более старой записи
        не учитывают изменений, сделанных после неё.

        Raises:
            UndoUnavailable: Токен неизвестен, вытеснен, истёк или не последний
        """
        token_id = token.token_id if isinstance(token, UndoToken) else token
        self.prune(now)
        if not any(entry.token.token_id == token_id for entry in self._entries):
            raise UndoUnavailable(f"Undo token {token_id} is unknown or expired")
        if self._entries[-1].token.token_id != token_id:
            raise UndoUnavailable(
                f"Undo token {token_id} is superseded by a later operation"
            )
        return self._entries.pop()

    def pop_last(self, now: float) -> UndoEntry:
        """
        Извлечь последнюю действующую запись.

        Raises:
            UndoUnavailable: Нечего отменять или окно истекло
        """
        self.prune(now)
        if not self._entries:
            raise UndoUnavailable("Nothing to undo (or undo window expired)")
        return self._entries.pop()
