"""
Undo log for atomic wallet calls
"""

from typing import Callable, List

Undo = Callable[[], None]


class UndoLog:
    """Undo actions for the writes made by in-flight wallet calls.

    Only writes of the current outermost call are kept, so rolling back costs
    as much as the call did, not as much as the wallet holds. Writes made
    outside any call are not recorded.
    """

    def __init__(self):
        self._undo: List[Undo] = []
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    def record(self, undo: Undo) -> None:
        if self._depth:
            self._undo.append(undo)

    def begin(self) -> int:
        """Open a call and return its position in the log"""
        self._depth += 1
        return len(self._undo)

    def commit(self) -> None:
        self._close()

    def rollback(self, mark: int) -> None:
        """Undo every write recorded since mark, newest first"""
        try:
            while len(self._undo) > mark:
                self._undo.pop()()
        finally:
            self._close()

    def _close(self) -> None:
        self._depth -= 1
        if not self._depth:
            # outermost call finished; nothing left that could be undone
            self._undo.clear()

    def __len__(self) -> int:
        return len(self._undo)
