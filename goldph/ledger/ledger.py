"""
Ledger — double-entry учёт балансов сессии

Каждая проводка — пара debit/credit одинаковой величины. Полярность
определяется категорией счёта (DEBIT_INCREASES):
- Assets/Expense: debit +amount, credit -amount
- Income/Equity: debit -amount, credit +amount

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. amount < 0 отклоняется, amount == 0 — успешный no-op
2. Отклонённая проводка не меняет ни одного баланса
3. Каскадных проводок нет: многоногие операции составляет вызывающий код
"""

import logging
from typing import Any, Mapping

from goldph.core.domain.accounts import Account, standard_balances
from goldph.core.domain.session import Session
from goldph.core.errors import InvalidAmount, InvalidSession
from goldph.core.math import format_money, validate_int

logger = logging.getLogger("goldph.ledger")


class Ledger:
    """
    Сервис проводок и запросов балансов.

    Состояние хранится в session.ledger (account path → copper), сам
    сервис stateless.
    """

    def initialize_ledger(self, session: Session) -> None:
        """Сброс балансов к стандартному плану счетов (все нули)."""
        session.ledger = standard_balances()

    def post(
        self,
        session: Session | None,
        debit: Account | str,
        credit: Account | str,
        amount: int,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Проводка Dr debit / Cr credit на amount copper.

        Args:
            session: Активная сессия
            debit: Счёт дебета
            credit: Счёт кредита
            amount: Сумма в copper (>= 0)
            meta: Произвольный контекст для логов

        Raises:
            InvalidSession: Сессия отсутствует или остановлена
            InvalidAmount: amount < 0
            InvalidAccount: Некорректный путь счёта
        """
        if session is None:
            raise InvalidSession("No session to post to")
        if session.is_stopped:
            raise InvalidSession(f"Session {session.session_id} is stopped")

        validate_int(amount, "amount")
        if amount < 0:
            raise InvalidAmount(f"Posting amount must be >= 0, got {amount}")

        # Счета разбираются до изменения балансов
        debit_account = Account.parse(debit)
        credit_account = Account.parse(credit)

        if amount == 0:
            return

        balances = session.ledger
        debit_sign = 1 if debit_account.debit_increases else -1
        credit_sign = -1 if credit_account.debit_increases else 1

        balances[debit_account.path] = balances.get(debit_account.path, 0) + debit_sign * amount
        balances[credit_account.path] = (
            balances.get(credit_account.path, 0) + credit_sign * amount
        )

        logger.debug(
            "Posted %s: Dr %s / Cr %s%s",
            format_money(amount),
            debit_account,
            credit_account,
            f" {dict(meta)}" if meta else "",
        )

    def get_balance(self, session: Session, account: Account | str) -> int:
        """Баланс счёта, 0 для неизвестных счетов."""
        return session.ledger.get(Account.parse(account).path, 0)

    def get_balances_matching(
        self, session: Session, prefix: Account | str
    ) -> dict[str, int]:
        """
        Балансы всех счетов, вложенных в prefix (по сегментам).

        "Income:Items" не совпадает с "Income:ItemsLooted".
        """
        prefix_account = Account.parse(prefix)
        return {
            path: balance
            for path, balance in session.ledger.items()
            if Account.parse(path).is_under(prefix_account)
        }

    def sum_matching(self, session: Session, prefix: Account | str) -> int:
        """Сумма балансов под prefix."""
        return sum(self.get_balances_matching(session, prefix).values())

    def trial_balance(self, session: Session) -> int:
        """
        Σ debit-normal балансов − Σ credit-normal балансов.

        Всегда 0 для сессии, изменённой только через post.
        """
        total = 0
        for path, balance in session.ledger.items():
            if Account.parse(path).debit_increases:
                total += balance
            else:
                total -= balance
        return total
