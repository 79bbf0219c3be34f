"""
Quorum Vault - multi-owner wallet with threshold-approved transfers
"""

from .owners import OwnerRegistry
from .balance import BalanceAccount
from .ledger import Transaction, TransactionLedger
from .engine import ApprovalEngine, TransactionStatus
from .rules import ThresholdRule
from .events import Deposited, Signed, Executed, EventLog
from .transfer import PayeeBook
from .keys import OwnerKey
from .wallet import MultiSigWallet

__version__ = "0.1.0"
__all__ = [
    "OwnerRegistry",
    "BalanceAccount",
    "Transaction",
    "TransactionLedger",
    "ApprovalEngine",
    "TransactionStatus",
    "ThresholdRule",
    "Deposited",
    "Signed",
    "Executed",
    "EventLog",
    "PayeeBook",
    "OwnerKey",
    "MultiSigWallet",
]
