import hashlib
import logging
from typing import List, Optional, Tuple

from .balance import BalanceAccount, check_amount
from .config import settings
from .engine import ApprovalEngine
from .events import Deposited, Event, EventLog
from .ledger import Transaction, TransactionLedger
from .owners import OwnerRegistry
from .rules import ThresholdRule
from .transfer import PayeeBook

logger = logging.getLogger(__name__)


class MultiSigWallet:
    """High-level interface for quorum wallet operations"""

    def __init__(
        self,
        owners: List[str],
        threshold: int,
        gateway=None,
        threshold_rule: Optional[ThresholdRule] = None,
        balance_limit: Optional[int] = None,
    ):
        self.registry = OwnerRegistry(owners, threshold)
        self.balance_account = BalanceAccount(
            settings.balance_limit if balance_limit is None else balance_limit
        )
        self.ledger = TransactionLedger(self.registry, self.balance_account)
        self.events = EventLog()
        self.gateway = gateway if gateway is not None else PayeeBook()
        self.engine = ApprovalEngine(
            self.registry,
            self.balance_account,
            self.ledger,
            self.events,
            self.gateway,
            threshold_rule or settings.threshold_rule,
        )
        self.wallet_id = self._generate_wallet_id()

    def _generate_wallet_id(self) -> str:
        """Generate deterministic wallet ID from owners, threshold and rule"""
        hasher = hashlib.sha256()
        hasher.update(bytes.fromhex(self.registry.registry_id))
        hasher.update(self.threshold_rule.value.encode())
        return hasher.hexdigest()

    @property
    def owners(self) -> Tuple[str, ...]:
        return self.registry.owners

    @property
    def threshold(self) -> int:
        return self.registry.threshold

    @property
    def threshold_rule(self) -> ThresholdRule:
        return self.engine.threshold_rule

    def is_owner(self, identity: str) -> bool:
        return self.registry.is_owner(identity)

    def deposit(self, caller: str, amount: int) -> int:
        """Add funds to the wallet; anyone may deposit"""
        check_amount(amount)

        with self.engine.atomic():
            new_balance = self.balance_account.credit(amount)
            self.events.emit(Deposited(caller, amount))

        logger.info("Deposit of %d from %s, balance %d", amount, str(caller)[:16], new_balance)
        return new_balance

    def request_transaction(
        self, caller: str, to: str, value: int, requester: Optional[str] = None
    ) -> Transaction:
        """Request a transfer; only owners may request"""
        self.registry.require_owner(caller)

        with self.engine.atomic():
            return self.ledger.append(caller if requester is None else requester, to, value)

    def approve_transaction(self, caller: str, index: int) -> Transaction:
        """Sign a transaction; only owners may approve"""
        return self.engine.approve(index, caller)

    def get_transactions(self) -> Tuple[Transaction, ...]:
        return self.ledger.all()

    def get_transaction(self, index: int) -> Transaction:
        return self.ledger.get(index)

    def get_balance(self) -> int:
        return self.balance_account.balance()

    def get_events(self) -> Tuple[Event, ...]:
        return self.events.all()

    def state_hash(self) -> str:
        """Commitment over owners, balance and ledger"""
        hasher = hashlib.sha256()
        hasher.update(bytes.fromhex(self.wallet_id))
        hasher.update(str(self.get_balance()).encode())
        hasher.update(b"\x00")

        for tx in self.ledger.all():
            hasher.update(tx.index.to_bytes(8, 'little'))
            hasher.update(tx.recipient.encode() + b"\x00")
            hasher.update(tx.requester.encode() + b"\x00")
            hasher.update(str(tx.value).encode())
            hasher.update(b"\x00")
            hasher.update(tx.signature_count.to_bytes(4, 'little'))
            hasher.update(b"\x01" if tx.executed else b"\x00")

        return hasher.hexdigest()

    def to_dict(self) -> dict:
        """Serialize wallet state surface to dictionary"""
        transactions = []
        for tx in self.ledger.all():
            entry = tx.to_dict()
            entry['signers'] = self.engine.signers(tx.index)
            entry['status'] = self.engine.status(tx.index).value
            transactions.append(entry)

        return {
            'wallet_id': self.wallet_id,
            'owners': list(self.owners),
            'threshold': self.threshold,
            'threshold_rule': self.threshold_rule.value,
            'required_signatures': self.engine.required_signatures,
            'balance': self.get_balance(),
            'transactions': transactions,
            'state_hash': self.state_hash(),
        }
