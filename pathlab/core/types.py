# pathlab/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import Iterator, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from pathlab.core.trace import StepTrace

Position = Tuple[int, int]  # (row, col)

WEIGHT_DEFAULT = 1
WEIGHT_EXPENSIVE = 50
WEIGHT_BLOCK = 2**31 - 1    # impassable

INFINITE_COST = inf


class JumpTag(Enum):
    """Why JPS stopped on a cell. Decides which directions it expands next."""
    NONE = 0
    NORMAL_JUMP = 1
    FORCED_STOP = 2
    FORCED_NEIGHBOR = 3
    GOAL = 4


@dataclass(eq=False)
class Cell:
    row: int
    col: int
    weight: int = WEIGHT_DEFAULT
    index: int = 0

    @property
    def walkable(self) -> bool:
        return self.weight != WEIGHT_BLOCK

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col}, w={self.weight})"


class Grid:
    """
    Uniform rectangular weighted grid, cells stored row-major.

    The shape is fixed at construction. Weights may be edited between
    searches (obstacle areas), never during one.
    """

    def __init__(self, width: int, height: int, weight: int = WEIGHT_DEFAULT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        _check_weight(weight)
        self.width = width
        self.height = height
        self.cells: List[Cell] = [
            Cell(row, col, weight, row * width + col)
            for row in range(height)
            for col in range(width)
        ]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    # -------------------- lookup --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index_of(self, row: int, col: int) -> int:
        return row * self.width + col

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        """Cell at (row, col), or None when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[self.index_of(row, col)]

    def is_walkable(self, row: int, col: int) -> bool:
        cell = self.cell_at(row, col)
        return cell is not None and cell.walkable

    def neighbors4(self, cell: Cell) -> Iterator[Cell]:
        """In-bounds neighbours in east, north, west, south order."""
        for dr, dc in ((0, 1), (-1, 0), (0, -1), (1, 0)):
            n = self.cell_at(cell.row + dr, cell.col + dc)
            if n is not None:
                yield n

    def walkable_neighbors(self, cell: Cell) -> Iterator[Cell]:
        return (n for n in self.neighbors4(cell) if n.walkable)

    # -------------------- editing --------------------

    def set_weight(self, row: int, col: int, weight: int) -> None:
        _check_weight(weight)
        cell = self.cell_at(row, col)
        if cell is None:
            raise ValueError(f"({row}, {col}) is outside a {self.width}x{self.height} grid")
        cell.weight = weight

    def set_area(self, row: int, col: int, width: int, height: int, weight: int) -> None:
        """Apply weight to a rectangle; the parts outside the grid are ignored."""
        _check_weight(weight)
        for r in range(row, row + height):
            for c in range(col, col + width):
                cell = self.cell_at(r, c)
                if cell is not None:
                    cell.weight = weight


def _check_weight(weight: int) -> None:
    if weight < WEIGHT_DEFAULT:
        raise ValueError(f"Cell weight must be >= {WEIGHT_DEFAULT}, got {weight}")


@dataclass
class SearchResult:
    algorithm: str
    path: Optional[List[Cell]]          # None when the end was never reached
    trace: "StepTrace"
    cost: float = INFINITE_COST
    visited: int = 0                    # cells popped and expanded
    pushed: int = 0                     # frontier pushes, duplicates included
    closed_count: int = 0
    open_size: int = 0                  # entries left in the frontier
    jump_points: List[Cell] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.path is not None

    def metrics(self) -> dict:
        return {
            "algo": self.algorithm,
            "popped": self.visited,
            "open_size": self.open_size,
            "closed_count": self.closed_count,
            "path_len": len(self.path) if self.path else 0,
            "total_cost": self.cost if self.found else None,
        }
