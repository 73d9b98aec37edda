"""
Errors — таксономия ошибок accounting core

Все ошибки валидации поднимаются на границе вызова до любой мутации:
отклонённая операция не оставляет частичного состояния.
"""


class GoldPHError(Exception):
    """Базовая ошибка GoldPH."""

    pass


class InvalidSession(GoldPHError):
    """
    Сессия отсутствует, не найдена или заморожена (остановлена).

    Остановленная сессия не принимает postings и изменения holdings.
    """

    pass


class InvalidAmount(GoldPHError, ValueError):
    """Отрицательная сумма posting или отрицательное количество."""

    pass


class InvalidAccount(GoldPHError, ValueError):
    """Пустой путь счёта или неизвестная категория в корне пути."""

    pass


class NoActiveSession(GoldPHError):
    """У владельца нет активной сессии."""

    pass


class SessionAlreadyActive(GoldPHError):
    """У владельца уже есть активная сессия (не более одной на владельца)."""

    pass


class SessionStateError(GoldPHError):
    """Операция недопустима в текущем состоянии сессии (paused, archived...)."""

    pass


class UnresolvedItem(GoldPHError):
    """
    Метаданные предмета ещё не получены (Pending).

    Не постоянная ошибка: вызывающая сторона должна повторить сигнал
    после разрешения метаданных.
    """

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item metadata pending for item_id={item_id}; retry later")


class MergeOwnerMismatch(GoldPHError):
    """Сессии для merge принадлежат разным владельцам."""

    pass


class ActiveSessionConflict(GoldPHError):
    """Archive/delete/merge нацелен на активную сессию."""

    pass


class UndoUnavailable(GoldPHError):
    """Undo невозможен: токен неизвестен, окно истекло или стек пуст."""

    pass
