"""
Approval engine - signature tracking and threshold-triggered execution
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import List, Set, Tuple

from .balance import BalanceAccount
from .errors import AlreadyExecuted, AlreadySigned, InsufficientFunds, TransferFailed
from .events import EventLog, Executed, Signed
from .journal import UndoLog
from .ledger import Transaction, TransactionLedger
from .owners import OwnerRegistry
from .rules import ThresholdRule

logger = logging.getLogger(__name__)


class TransactionStatus(Enum):
    PENDING = "pending"
    EXECUTING = "executing"
    EXECUTED = "executed"


class ApprovalEngine:
    """Orchestrates owner signatures and executes transactions at quorum"""

    def __init__(
        self,
        registry: OwnerRegistry,
        balance: BalanceAccount,
        ledger: TransactionLedger,
        events: EventLog,
        gateway,
        threshold_rule: ThresholdRule = ThresholdRule.EXCEED,
    ):
        self.registry = registry
        self.balance = balance
        self.ledger = ledger
        self.events = events
        self.gateway = gateway
        self.threshold_rule = threshold_rule
        self._signatures: Set[Tuple[int, str]] = set()
        self._executing: Set[int] = set()

        self.journal = UndoLog()
        for part in (balance, ledger, events, gateway):
            attach = getattr(part, "attach_journal", None)
            if attach is not None:
                attach(self.journal)

        if not threshold_rule.is_reachable(registry.threshold, len(registry)):
            logger.warning(
                "Threshold %d under rule %s needs %d signatures but only %d owners exist; "
                "transactions can never execute",
                registry.threshold,
                threshold_rule.value,
                threshold_rule.required_signatures(registry.threshold),
                len(registry),
            )

    @property
    def required_signatures(self) -> int:
        return self.threshold_rule.required_signatures(self.registry.threshold)

    def has_signed(self, index: int, identity: str) -> bool:
        return (index, identity) in self._signatures

    def signers(self, index: int) -> List[str]:
        """Get owners who signed a transaction, in owner order"""
        self.ledger.get(index)
        return [o for o in self.registry.owners if (index, o) in self._signatures]

    def status(self, index: int) -> TransactionStatus:
        tx = self.ledger.get(index)
        if index in self._executing:
            return TransactionStatus.EXECUTING
        if tx.executed:
            return TransactionStatus.EXECUTED
        return TransactionStatus.PENDING

    @contextmanager
    def atomic(self):
        """Run a wallet call as one unit: any exception undoes all of its writes"""
        mark = self.journal.begin()
        try:
            yield
        except BaseException:
            self.journal.rollback(mark)
            raise
        else:
            self.journal.commit()

    def approve(self, index: int, signer: str) -> Transaction:
        """Sign a transaction, executing it once the threshold rule is met"""

        # Checks
        self.registry.require_owner(signer)
        tx = self.ledger.get(index)
        if tx.executed:
            raise AlreadyExecuted(index)
        if self.has_signed(index, signer):
            raise AlreadySigned(index, signer)
        available = self.balance.balance()
        if tx.value > available:
            raise InsufficientFunds(tx.value, available)

        with self.atomic():
            self._signatures.add((index, signer))
            self.journal.record(lambda: self._signatures.discard((index, signer)))
            tx = self.ledger.record_signature(index)
            self.events.emit(Signed(signer, index))
            logger.debug(
                "Transaction %d signed by %s (%d/%d)",
                index, signer[:16], tx.signature_count, self.required_signatures,
            )

            if self.threshold_rule.is_met(tx.signature_count, self.registry.threshold):
                tx = self._execute(index, signer)

        return tx

    def _execute(self, index: int, signer: str) -> Transaction:
        # Effects are committed before the recipient gets control
        tx = self.ledger.mark_executed(index)
        self.balance.debit(tx.value)
        self._executing.add(index)

        try:
            # Interaction
            self.gateway.transfer(tx.recipient, tx.value)
        except TransferFailed:
            logger.warning("Transfer for transaction %d failed, rolling back", index)
            raise
        except Exception as exc:
            logger.warning("Transfer for transaction %d failed, rolling back", index)
            raise TransferFailed(f"Transfer for transaction {index} failed: {exc}") from exc
        finally:
            self._executing.discard(index)

        self.events.emit(Executed(signer, index))
        logger.info("Transaction %d executed: %d to %s", index, tx.value, tx.recipient)
        return self.ledger.get(index)

    def pending(self) -> List[Transaction]:
        """Get transactions still waiting for signatures"""
        return [tx for tx in self.ledger.all() if not tx.executed]
