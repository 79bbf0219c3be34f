from .errors import BalanceOverflow, InsufficientFunds, InvalidAmount
from .journal import UndoLog

MAX_BALANCE = 2 ** 256 - 1


def check_amount(amount) -> int:
    """Validate that amount is a non-negative integer"""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmount(f"Amount must not be negative, got {amount}")
    return amount


class BalanceAccount:
    """Single pool of funds shared by the wallet owners"""

    def __init__(self, limit: int = MAX_BALANCE):
        self._limit = check_amount(limit)
        self._balance = 0
        self._journal = None

    @property
    def limit(self) -> int:
        return self._limit

    def balance(self) -> int:
        """Get current balance"""
        return self._balance

    def credit(self, amount: int) -> int:
        """Add funds, failing instead of wrapping past the limit"""
        check_amount(amount)

        if amount > self._limit - self._balance:
            raise BalanceOverflow(
                f"Credit of {amount} would exceed balance limit {self._limit}"
            )

        self._set(self._balance + amount)
        return self._balance

    def debit(self, amount: int) -> int:
        """Remove funds if available"""
        check_amount(amount)

        if amount > self._balance:
            raise InsufficientFunds(amount, self._balance)

        self._set(self._balance - amount)
        return self._balance

    def attach_journal(self, journal: UndoLog) -> None:
        self._journal = journal

    def _set(self, value: int) -> None:
        if self._journal is not None:
            previous = self._balance

            def undo():
                self._balance = previous

            self._journal.record(undo)
        self._balance = value
