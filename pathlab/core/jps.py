# pathlab/core/jps.py
#!/usr/bin/env python3
"""
Jump point search, 4-directional.

Instead of expanding every neighbour, JPS keeps moving in a straight line
until something makes the line interesting:

    GOAL             the end cell
    FORCED_NEIGHBOR  the cell just left has an obstacle at its side, so the
                     side cell next to this one is only reachable by turning here
    NORMAL_JUMP      horizontal travel only: a vertical jump from this cell
                     reaches the goal or a forced neighbour
    FORCED_STOP      the next step is a wall or the grid edge

Horizontal moves come first on the paths JPS looks for, so a vertical leg
only has to turn where an obstacle stopped the turn from happening earlier.
That is why horizontal jumps look sideways at every cell and vertical
jumps do not.

A jump point is expanded in every open direction except back the way it
came; a forced stop only turns 90 degrees.

Directions are (dx, dy): dx moves along columns, dy along rows.

Jump results are memoised per search on (row, col, dx, dy). Cells skipped
over are recorded as JumpOver events, never as Visit events.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pathlab.core.search import FrontierEntry, GridSearchAlgo, SearchState, manhattan
from pathlab.core.trace import StepTrace
from pathlab.core.types import Cell, Grid, JumpTag

Direction = Tuple[int, int]  # (dx, dy)
JumpHit = Tuple[Cell, JumpTag]

EAST: Direction = (1, 0)
NORTH: Direction = (0, -1)
WEST: Direction = (-1, 0)
SOUTH: Direction = (0, 1)

DIRECTIONS: Tuple[Direction, ...] = (EAST, NORTH, WEST, SOUTH)
VERTICAL: Tuple[Direction, ...] = (NORTH, SOUTH)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def has_forced_neighbor(grid: Grid, row: int, col: int, dx: int, dy: int) -> bool:
    """True if a blocked side cell hides an open cell diagonally ahead."""
    walkable = grid.is_walkable
    if dx != 0 and dy == 0:
        if not walkable(row - 1, col) and walkable(row - 1, col + dx):
            return True
        if not walkable(row + 1, col) and walkable(row + 1, col + dx):
            return True
    elif dx == 0 and dy != 0:
        if not walkable(row, col - 1) and walkable(row + dy, col - 1):
            return True
        if not walkable(row, col + 1) and walkable(row + dy, col + 1):
            return True
    return False


def pruned_directions(grid: Grid, cell: Cell, parent: Optional[Cell], tag: JumpTag) -> List[Direction]:
    def open_towards(d: Direction) -> bool:
        return grid.is_walkable(cell.row + d[1], cell.col + d[0])

    if parent is None:
        return [d for d in DIRECTIONS if open_towards(d)]

    dx = _sign(cell.col - parent.col)
    dy = _sign(cell.row - parent.row)

    if tag is JumpTag.FORCED_STOP:
        turns = (NORTH, SOUTH) if dx != 0 else (EAST, WEST)
        return [d for d in turns if open_towards(d)]

    back = (-dx, -dy)
    return [d for d in DIRECTIONS if d != back and open_towards(d)]


def expand_jump_points(grid: Grid, points: List[Cell]) -> List[Cell]:
    """Fill in the straight runs between consecutive jump points."""
    if not points:
        return []
    path = [points[0]]
    for a, b in zip(points, points[1:]):
        dr = _sign(b.row - a.row)
        dc = _sign(b.col - a.col)
        row, col = a.row, a.col
        while (row, col) != (b.row, b.col):
            row += dr
            col += dc
            path.append(grid.cells[grid.index_of(row, col)])
    return path


class JumpState(SearchState):
    def __init__(self, grid: Grid):
        super().__init__(grid)
        self.memo: Dict[Tuple[int, int, int, int], Optional[JumpHit]] = {}


@dataclass
class JPSAlgo(GridSearchAlgo):
    """
    Ordered by g + Manhattan h. The cost of a jump is the Manhattan length
    of the segment times the landing cell's weight, which is exact on a
    uniform grid and an approximation on a weighted one.
    """
    name: str = "JPS"

    uses_heuristic = True

    def heuristic(self, cell: Cell, end: Cell) -> float:
        return manhattan(cell, end)

    def sort_key(self, entry: FrontierEntry) -> tuple:
        return (entry.cost + entry.heuristic, entry.heuristic, entry.seq)

    def _new_state(self, grid: Grid) -> SearchState:
        return JumpState(grid)

    def _expand(self, grid: Grid, state: SearchState, current: Cell, end: Cell,
                frontier, trace: StepTrace) -> None:
        directions = pruned_directions(grid, current, state.predecessor_of(current), state.tag_of(current))
        for dx, dy in directions:
            hit = self.jump(grid, state, trace, current.row, current.col, dx, dy, end)
            if hit is None:
                continue
            point, tag = hit
            if point.index in state.closed:
                continue  # memoised before it was expanded

            new_cost = state.cost[current.index] + manhattan(current, point) * point.weight
            if new_cost >= state.cost[point.index]:
                continue
            state.tag[point.index] = tag
            self._discover(frontier, state, trace, point, new_cost, current, end)

    def jump(self, grid: Grid, state: JumpState, trace: StepTrace,
             row: int, col: int, dx: int, dy: int, end: Cell) -> Optional[JumpHit]:
        """
        Walk from (row, col) in direction (dx, dy) to the next jump point.

        Returns (cell, tag), or None when the walk runs into a closed cell
        or starts somewhere unwalkable. Every key passed on the way is
        memoised with the same answer.
        """
        memo = state.memo
        chain: List[Tuple[int, int, int, int]] = []
        result: Optional[JumpHit] = None

        while True:
            key = (row, col, dx, dy)
            if key in memo:
                result = memo[key]
                break
            chain.append(key)

            nrow, ncol = row + dy, col + dx
            nxt = grid.cell_at(nrow, ncol)
            if nxt is None or not nxt.walkable:
                here = grid.cell_at(row, col)
                if here is not None and here.walkable:
                    result = (here, JumpTag.FORCED_STOP)
                break

            if nxt is end:
                result = (nxt, JumpTag.GOAL)
                break

            if has_forced_neighbor(grid, row, col, dx, dy):
                result = (nxt, JumpTag.FORCED_NEIGHBOR)
                break

            # nothing new can start beyond a closed cell in this direction
            if nxt.index in state.closed:
                break

            if dx != 0 and self._leads_somewhere_vertically(grid, state, trace, nxt, end):
                result = (nxt, JumpTag.NORMAL_JUMP)
                break

            trace.jump_over(nxt)
            row, col = nrow, ncol

        for k in chain:
            memo[k] = result
        return result

    def _leads_somewhere_vertically(self, grid: Grid, state: JumpState, trace: StepTrace,
                                    cell: Cell, end: Cell) -> bool:
        # a wall at the end of the column is not a reason to turn
        for dx, dy in VERTICAL:
            hit = self.jump(grid, state, trace, cell.row, cell.col, dx, dy, end)
            if hit is not None and hit[1] is not JumpTag.FORCED_STOP:
                return True
        return False

    def _build_path(self, state: SearchState, start: Cell, end: Cell) -> List[Cell]:
        points = state.backtrack(start, end)
        state.jump_points = points
        return expand_jump_points(state.grid, points)
