"""
Error taxonomy for quorum wallet operations
"""


class WalletError(Exception):
    """Base class for wallet errors."""


class InvalidConfiguration(WalletError, ValueError):
    """Raised when the owner set or threshold is invalid at construction."""


class InvalidAmount(WalletError, ValueError):
    """Raised when an amount is negative or not an integer."""


class BalanceOverflow(InvalidAmount):
    """Raised when a credit would push the balance past its upper bound."""


class Unauthorized(WalletError):
    """Raised when a non-owner attempts an owner-only action."""

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"{str(identity)[:16]}... is not a wallet owner")


class InsufficientFunds(WalletError):
    """Raised when a value exceeds the available balance."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient balance: need {requested}, have {available}")


class AlreadySigned(WalletError):
    """Raised when an owner signs the same transaction twice."""

    def __init__(self, index: int, identity):
        self.index = index
        self.identity = identity
        super().__init__(f"{str(identity)[:16]}... already signed transaction {index}")


class AlreadyExecuted(WalletError):
    """Raised when approving a transaction that already executed."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Transaction {index} already executed")


class NotFound(WalletError):
    """Raised when a transaction index is out of range."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"Transaction {index} not found")


class TransferFailed(WalletError):
    """Raised when the external transfer to a recipient did not complete."""


class InvalidRecipient(WalletError, ValueError):
    """Raised when a transfer recipient is missing or the zero identity."""
