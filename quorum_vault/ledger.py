import logging
from dataclasses import dataclass, asdict, replace
from typing import List, Tuple

from .balance import BalanceAccount, check_amount
from .errors import InsufficientFunds, InvalidRecipient, NotFound
from .journal import UndoLog
from .owners import OwnerRegistry, is_null_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    """A requested transfer and its approval state"""
    index: int
    recipient: str
    requester: str
    value: int
    signature_count: int = 0
    executed: bool = False

    def to_dict(self) -> dict:
        """Serialize transaction to dictionary"""
        return asdict(self)


class TransactionLedger:
    """Append-only record of transfer requests, addressed by index"""

    def __init__(self, registry: OwnerRegistry, balance: BalanceAccount):
        self.registry = registry
        self.balance = balance
        self._entries: List[Transaction] = []
        self._journal = None

    def append(self, requester: str, recipient: str, value: int) -> Transaction:
        """Record a new transfer request from an owner"""
        self.registry.require_owner(requester)
        check_amount(value)
        if not isinstance(recipient, str) or is_null_identity(recipient):
            raise InvalidRecipient(f"Invalid recipient {recipient!r}")

        # Pre-check only; funds are not reserved for the request
        available = self.balance.balance()
        if value > available:
            raise InsufficientFunds(value, available)

        tx = Transaction(
            index=len(self._entries),
            recipient=recipient,
            requester=requester,
            value=value,
        )
        self._entries.append(tx)
        if self._journal is not None:
            self._journal.record(self._entries.pop)

        logger.info("Transaction %d requested: %d to %s", tx.index, value, recipient)
        return tx

    def get(self, index: int) -> Transaction:
        """Get transaction by index"""
        if isinstance(index, bool) or not isinstance(index, int):
            raise NotFound(index)
        if not 0 <= index < len(self._entries):
            raise NotFound(index)
        return self._entries[index]

    def all(self) -> Tuple[Transaction, ...]:
        """Get every transaction in request order"""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.all())

    def record_signature(self, index: int) -> Transaction:
        current = self.get(index)
        return self._replace(replace(current, signature_count=current.signature_count + 1))

    def mark_executed(self, index: int) -> Transaction:
        return self._replace(replace(self.get(index), executed=True))

    def attach_journal(self, journal: UndoLog) -> None:
        self._journal = journal

    def _replace(self, tx: Transaction) -> Transaction:
        if self._journal is not None:
            previous = self._entries[tx.index]

            def undo():
                self._entries[tx.index] = previous

            self._journal.record(undo)
        self._entries[tx.index] = tx
        return tx
