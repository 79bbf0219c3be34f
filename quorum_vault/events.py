"""
Observable wallet events
"""

from dataclasses import dataclass, asdict
from typing import List, Tuple, Type, Union

from .journal import UndoLog


@dataclass(frozen=True)
class Deposited:
    account: str
    value: int

    def to_dict(self) -> dict:
        return {'event': 'Deposited', **asdict(self)}


@dataclass(frozen=True)
class Signed:
    account: str
    index: int

    def to_dict(self) -> dict:
        return {'event': 'Signed', **asdict(self)}


@dataclass(frozen=True)
class Executed:
    account: str
    index: int

    def to_dict(self) -> dict:
        return {'event': 'Executed', **asdict(self)}


Event = Union[Deposited, Signed, Executed]


class EventLog:
    """Append-only log of wallet events"""

    def __init__(self):
        self._events: List[Event] = []
        self._journal = None

    def emit(self, event: Event) -> None:
        self._events.append(event)
        if self._journal is not None:
            self._journal.record(self._events.pop)

    def all(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def of_type(self, kind: Type) -> List[Event]:
        """Get events of a single kind, in emission order"""
        return [e for e in self._events if isinstance(e, kind)]

    def __iter__(self):
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._events)

    def attach_journal(self, journal: UndoLog) -> None:
        self._journal = journal
