# pathlab/core/trace.py
#!/usr/bin/env python3
"""
Replayable log of what a search did, in the order it did it.

Events are frozen records holding positions, never live Cell references,
so a player can replay them later (or on another thread) and always see
the state as it was captured.
"""

from dataclasses import dataclass
from typing import ClassVar, Iterator, List, Optional, Sequence, Type, TypeVar, Union, overload

from pathlab.core.types import Cell, Position


@dataclass(frozen=True)
class StepEvent:
    kind: ClassVar[str] = "event"

    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(frozen=True)
class MarkStart(StepEvent):
    kind: ClassVar[str] = "start"


@dataclass(frozen=True)
class MarkEnd(StepEvent):
    kind: ClassVar[str] = "end"


@dataclass(frozen=True)
class Visit(StepEvent):
    kind: ClassVar[str] = "visit"


@dataclass(frozen=True)
class PushFrontier(StepEvent):
    kind: ClassVar[str] = "frontier"

    cost: float = 0
    heuristic: Optional[float] = None


@dataclass(frozen=True)
class JumpOver(StepEvent):
    kind: ClassVar[str] = "jump_over"


@dataclass(frozen=True)
class MarkPath(StepEvent):
    kind: ClassVar[str] = "path"


E = TypeVar("E", bound=StepEvent)


class StepTrace(Sequence[StepEvent]):
    """Append-only event sequence. Order is the order decisions were made."""

    def __init__(self, events: Optional[List[StepEvent]] = None):
        self._events: List[StepEvent] = list(events) if events else []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[StepEvent]:
        return iter(self._events)

    @overload
    def __getitem__(self, i: int) -> StepEvent: ...
    @overload
    def __getitem__(self, i: slice) -> List[StepEvent]: ...

    def __getitem__(self, i: Union[int, slice]):
        return self._events[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, StepTrace):
            return NotImplemented
        return self._events == other._events

    def __repr__(self) -> str:
        return f"StepTrace({len(self._events)} events)"

    def append(self, event: StepEvent) -> None:
        self._events.append(event)

    # -------------------- recording helpers --------------------

    def mark_start(self, cell: Cell) -> None:
        self.append(MarkStart(cell.row, cell.col))

    def mark_end(self, cell: Cell) -> None:
        self.append(MarkEnd(cell.row, cell.col))

    def visit(self, cell: Cell) -> None:
        self.append(Visit(cell.row, cell.col))

    def push_frontier(self, cell: Cell, cost: float, heuristic: Optional[float] = None) -> None:
        self.append(PushFrontier(cell.row, cell.col, cost, heuristic))

    def jump_over(self, cell: Cell) -> None:
        self.append(JumpOver(cell.row, cell.col))

    def mark_path(self, cell: Cell) -> None:
        self.append(MarkPath(cell.row, cell.col))

    # -------------------- queries --------------------

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [e for e in self._events if isinstance(e, event_type)]

    def positions(self, event_type: Type[StepEvent]) -> List[Position]:
        return [e.position for e in self.of_type(event_type)]

    def counts(self) -> dict:
        out: dict = {}
        for e in self._events:
            out[e.kind] = out.get(e.kind, 0) + 1
        return out


