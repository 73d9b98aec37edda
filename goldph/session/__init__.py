"""
Жизненный цикл сессий: приём сигналов, start/pause/resume/stop,
archive/delete/merge с ограниченной по времени отменой.
"""

from goldph.session.activity import EXPENSE_ACCOUNTS, ActivityProcessor, ProcessorConfig
from goldph.session.manager import (
    ARCHIVE_REASON_MANUAL,
    ARCHIVE_REASON_SHORT,
    MergeResult,
    SessionManager,
)
from goldph.session.merge import merge_sessions
from goldph.session.undo import UndoAction, UndoEntry, UndoHistory, UndoPolicy, UndoToken

__all__ = [
    # Activity
    "ActivityProcessor",
    "ProcessorConfig",
    "EXPENSE_ACCOUNTS",
    # Manager
    "SessionManager",
    "MergeResult",
    "ARCHIVE_REASON_MANUAL",
    "ARCHIVE_REASON_SHORT",
    # Merge
    "merge_sessions",
    # Undo
    "UndoAction",
    "UndoEntry",
    "UndoHistory",
    "UndoPolicy",
    "UndoToken",
]
