"""
Outgoing transfers to transaction recipients
"""

import logging
from typing import Callable, Dict, List, Optional

from .errors import TransferFailed
from .journal import UndoLog

logger = logging.getLogger(__name__)

ReceiveHook = Callable[[str, int], Optional[bool]]


class PayeeBook:
    """Default transfer gateway that tracks what each recipient has received.

    A recipient may register a receive hook. The hook runs before the payment
    lands; if it raises or returns False the payment is rejected and nothing
    is credited. Hooks are free to call back into the wallet.
    """

    def __init__(self):
        self._received: Dict[str, int] = {}
        self._hooks: Dict[str, ReceiveHook] = {}
        self._transfer_history: List[dict] = []
        self._journal = None

    def register_hook(self, recipient: str, hook: ReceiveHook) -> None:
        self._hooks[recipient] = hook

    def remove_hook(self, recipient: str) -> None:
        self._hooks.pop(recipient, None)

    def transfer(self, recipient: str, value: int) -> None:
        """Send value to recipient or raise TransferFailed"""
        hook = self._hooks.get(recipient)

        if hook is not None:
            try:
                accepted = hook(recipient, value)
            except Exception as exc:
                logger.warning("Recipient %s rejected %d: %s", recipient, value, exc)
                raise TransferFailed(f"Recipient {recipient} rejected transfer: {exc}") from exc

            if accepted is False:
                logger.warning("Recipient %s declined %d", recipient, value)
                raise TransferFailed(f"Recipient {recipient} declined transfer")

        previous = self.received_by(recipient)
        self._received[recipient] = previous + value
        self._transfer_history.append({'to': recipient, 'amount': value})

        if self._journal is not None:
            def undo():
                self._transfer_history.pop()
                if previous:
                    self._received[recipient] = previous
                else:
                    del self._received[recipient]

            self._journal.record(undo)

    def received_by(self, recipient: str) -> int:
        """Get total amount paid out to recipient"""
        return self._received.get(recipient, 0)

    def get_transfer_history(self) -> List[dict]:
        return self._transfer_history.copy()

    def attach_journal(self, journal: UndoLog) -> None:
        """Let a failed wallet call undo payouts made during it"""
        self._journal = journal
