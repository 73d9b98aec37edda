"""
Duration — учёт игрового времени сессии по сегментам

durationSoFar = accumulated_duration + (now − current_login_at),
если сегмент открыт, иначе accumulated_duration.

- logout / pause: открытый сегмент сворачивается в accumulated_duration
- login / resume: открывается новый сегмент
- на паузе время заморожено, даже если wall-clock идёт

Отрицательные сегменты (часы ушли назад) обнуляются.
"""

from goldph.core.domain.session import Session


def segment_length(session: Session, now: float) -> float:
    """Длина открытого сегмента, 0 если сегмент закрыт."""
    if session.current_login_at is None:
        return 0.0
    return max(0.0, now - session.current_login_at)


def duration_so_far(session: Session, now: float) -> float:
    """Текущая длительность сессии (секунды)."""
    if session.is_stopped:
        return session.duration_sec
    return session.accumulated_duration + segment_length(session, now)


def fold_open_segment(session: Session, now: float) -> float:
    """Свернуть открытый сегмент в accumulated_duration. Возвращает добавленное."""
    added = segment_length(session, now)
    session.accumulated_duration += added
    session.current_login_at = None
    return added


def open_segment(session: Session, now: float) -> bool:
    """
    Открыть новый сегмент.

    Не открывается на паузе и если сегмент уже открыт.
    """
    if session.is_paused or session.current_login_at is not None:
        return False
    session.current_login_at = now
    return True


def pause_clock(session: Session, now: float) -> None:
    fold_open_segment(session, now)
    session.paused_at = now


def resume_clock(session: Session, now: float) -> None:
    session.paused_at = None
    open_segment(session, now)


def finalize_duration(session: Session, now: float) -> float:
    """Зафиксировать итоговую длительность при stop."""
    fold_open_segment(session, now)
    session.paused_at = None
    session.duration_sec = session.accumulated_duration
    return session.duration_sec
