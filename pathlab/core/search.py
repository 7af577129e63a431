# pathlab/core/search.py
#!/usr/bin/env python3
"""
BFS, Dijkstra, A* and Greedy best-first over a weighted 4-connected grid.

All four run the same loop and differ only in frontier order:

    BFS       FIFO insertion order
    Dijkstra  (g, seq)
    A*        (g + h, h, seq)     h = Euclidean distance to the end
    Greedy    (h, seq)

One call runs to completion and returns the path together with a StepTrace
that a player can replay afterwards. Per-run scratch (cost, predecessor,
tag) lives in a SearchState indexed by cell index, so the grid itself is
only read.

Frontier entries are immutable snapshots. A cheaper route pushes a fresh
entry; the outdated one is dropped when it is popped.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set, Tuple

from pathlab.core.heap import PriorityQueue, compare_keys
from pathlab.core.trace import StepTrace
from pathlab.core.types import (
    INFINITE_COST,
    Cell,
    Grid,
    JumpTag,
    SearchResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrontierEntry:
    cell: Cell
    cost: float
    heuristic: float
    seq: int


class SearchState:
    """Scratch storage for one search, indexed by Cell.index."""

    def __init__(self, grid: Grid):
        n = len(grid)
        self.grid = grid
        self.cost: List[float] = [INFINITE_COST] * n
        self.predecessor: List[Optional[Cell]] = [None] * n
        self.tag: List[JumpTag] = [JumpTag.NONE] * n
        self.closed: Set[int] = set()
        self.discovered: Set[int] = set()
        self.jump_points: List[Cell] = []
        self.seq = 0

    def cost_of(self, cell: Cell) -> float:
        return self.cost[cell.index]

    def predecessor_of(self, cell: Cell) -> Optional[Cell]:
        return self.predecessor[cell.index]

    def tag_of(self, cell: Cell) -> JumpTag:
        return self.tag[cell.index]

    def next_seq(self) -> int:
        self.seq += 1
        return self.seq

    def backtrack(self, start: Cell, end: Cell) -> List[Cell]:
        """Follow predecessors from end back to start, returned start-first."""
        chain: List[Cell] = []
        cur: Optional[Cell] = end
        while cur is not None:
            chain.append(cur)
            if cur is start:
                break
            cur = self.predecessor[cur.index]
        chain.reverse()
        return chain


class FifoFrontier:
    """Queue with the PriorityQueue surface, for BFS."""

    def __init__(self):
        self._items: Deque[FrontierEntry] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def push(self, entry: FrontierEntry) -> None:
        self._items.append(entry)

    def pop(self) -> FrontierEntry:
        return self._items.popleft()


def euclidean(a: Cell, b: Cell) -> float:
    return math.hypot(a.row - b.row, a.col - b.col)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


# -------------------- shared template --------------------

@dataclass
class GridSearchAlgo:
    name: str = "search"

    # Dijkstra/A* lower a queued cell's cost; BFS/Greedy keep the first route found.
    relaxes = True
    uses_heuristic = False

    def find_path(self, grid: Grid, start: Cell, end: Cell) -> Tuple[Optional[List[Cell]], StepTrace]:
        result = self.run(grid, start, end)
        return result.path, result.trace

    def run(self, grid: Grid, start: Cell, end: Cell) -> SearchResult:
        """Search from start to end. Endpoints must be distinct, walkable and in bounds."""
        trace = StepTrace()
        trace.mark_start(start)
        trace.mark_end(end)

        state = self._new_state(grid)
        frontier = self._new_frontier()
        state.cost[start.index] = 0
        state.discovered.add(start.index)
        self._push(frontier, state, start, end)

        visited = 0
        reached = False
        while len(frontier) > 0:
            entry = frontier.pop()
            current = entry.cell
            if current.index in state.closed or entry.cost > state.cost[current.index]:
                continue  # outdated snapshot

            state.closed.add(current.index)
            visited += 1
            if current is not start and current is not end:
                trace.visit(current)

            if current is end:
                reached = True
                break

            self._expand(grid, state, current, end, frontier, trace)

        return self._finish(state, start, end, reached, trace, visited, len(frontier))

    # -------------------- hooks --------------------

    def heuristic(self, cell: Cell, end: Cell) -> float:
        return 0

    def sort_key(self, entry: FrontierEntry) -> tuple:
        return (entry.cost, entry.seq)

    def _new_state(self, grid: Grid) -> SearchState:
        return SearchState(grid)

    def _new_frontier(self):
        return PriorityQueue(lambda a, b: compare_keys(self.sort_key(a), self.sort_key(b)))

    def _expand(self, grid: Grid, state: SearchState, current: Cell, end: Cell,
                frontier, trace: StepTrace) -> None:
        for nb in grid.walkable_neighbors(current):
            if nb.index in state.closed:
                continue
            alt = state.cost[current.index] + nb.weight
            if self.relaxes:
                if alt >= state.cost[nb.index]:
                    continue
            elif nb.index in state.discovered:
                continue
            self._discover(frontier, state, trace, nb, alt, current, end)

    def _build_path(self, state: SearchState, start: Cell, end: Cell) -> List[Cell]:
        return state.backtrack(start, end)

    # -------------------- helpers --------------------

    def _push(self, frontier, state: SearchState, cell: Cell, end: Cell) -> float:
        h = self.heuristic(cell, end)
        frontier.push(FrontierEntry(cell, state.cost[cell.index], h, state.next_seq()))
        return h

    def _discover(self, frontier, state: SearchState, trace: StepTrace,
                  cell: Cell, cost: float, parent: Cell, end: Cell) -> None:
        state.cost[cell.index] = cost
        state.predecessor[cell.index] = parent
        state.discovered.add(cell.index)
        h = self._push(frontier, state, cell, end)
        if cell is not end:
            trace.push_frontier(cell, cost, h if self.uses_heuristic else None)

    def _finish(self, state: SearchState, start: Cell, end: Cell, reached: bool,
                trace: StepTrace, visited: int, open_size: int) -> SearchResult:
        path: Optional[List[Cell]] = None
        if reached:
            path = self._build_path(state, start, end)
            for cell in path[1:-1]:
                trace.mark_path(cell)
        else:
            logger.debug("%s: %r unreachable from %r", self.name, end, start)

        result = SearchResult(
            algorithm=self.name,
            path=path,
            trace=trace,
            cost=state.cost[end.index] if reached else INFINITE_COST,
            visited=visited,
            pushed=state.seq,
            closed_count=len(state.closed),
            open_size=open_size,
            jump_points=list(state.jump_points),
        )
        logger.debug("%s: visited=%d pushed=%d cost=%s path_len=%d",
                     self.name, result.visited, result.pushed, result.cost,
                     len(path) if path else 0)
        return result


# -------------------- strategies --------------------

@dataclass
class BFSAlgo(GridSearchAlgo):
    """Fewest edges. Ignores weights when ordering."""
    name: str = "BFS"

    relaxes = False

    def _new_frontier(self):
        return FifoFrontier()


@dataclass
class DijkstraAlgo(GridSearchAlgo):
    name: str = "Dijkstra"


@dataclass
class AStarAlgo(GridSearchAlgo):
    """
    Euclidean heuristic. Every weight is >= 1, so it never overestimates
    and A* matches Dijkstra's cost.
    """
    name: str = "A*"

    uses_heuristic = True

    def heuristic(self, cell: Cell, end: Cell) -> float:
        return euclidean(cell, end)

    def sort_key(self, entry: FrontierEntry) -> tuple:
        return (entry.cost + entry.heuristic, entry.heuristic, entry.seq)


@dataclass
class GreedyBestFirstAlgo(GridSearchAlgo):
    """Heads straight for the end; the path can be longer than the cheapest one."""
    name: str = "Greedy Best-First"

    relaxes = False
    uses_heuristic = True

    def heuristic(self, cell: Cell, end: Cell) -> float:
        return euclidean(cell, end)

    def sort_key(self, entry: FrontierEntry) -> tuple:
        return (entry.heuristic, entry.seq)
