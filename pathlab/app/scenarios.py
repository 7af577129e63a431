# pathlab/app/scenarios.py
#!/usr/bin/env python3
"""
Built-in boards for the viewer.

A scenario is a grid size, a list of weighted rectangles and the two
endpoints. Endpoints are clamped and separated here, before any search
runs; the search code assumes they are already valid.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from pathlab.core.types import WEIGHT_BLOCK, WEIGHT_EXPENSIVE, Cell, Grid, Position


@dataclass(frozen=True)
class Area:
    row: int
    col: int
    width: int
    height: int
    weight: int


def resolve_endpoints(width: int, height: int, start: Position, end: Position) -> Tuple[Position, Position]:
    """Clamp both endpoints into the grid, then move the end off the start if they coincide."""
    def clamp(p: Position) -> Position:
        return (min(max(p[0], 0), height - 1), min(max(p[1], 0), width - 1))

    start = clamp(start)
    end = clamp(end)
    if start == end:
        row, col = end
        if col < width - 1:
            col += 1
        elif row < height - 1:
            row += 1
        elif col > 0:
            col -= 1
        elif row > 0:
            row -= 1
        end = (row, col)
    return start, end


@dataclass
class Scenario:
    name: str
    title: str
    width: int
    height: int
    start: Position
    end: Position
    areas: List[Area] = field(default_factory=list)

    def build(self) -> Tuple[Grid, Cell, Cell]:
        grid = Grid(self.width, self.height)
        for a in self.areas:
            grid.set_area(a.row, a.col, a.width, a.height, a.weight)

        start_pos, end_pos = resolve_endpoints(self.width, self.height, self.start, self.end)
        start = grid.cell_at(*start_pos)
        end = grid.cell_at(*end_pos)
        for label, cell in (("start", start), ("end", end)):
            if not cell.walkable:
                raise ValueError(f"{self.name}: {label} {cell.position} is blocked")
        return grid, start, end


SCENARIOS: Dict[str, Scenario] = {
    "default": Scenario(
        name="default",
        title="Expensive walls",
        width=15, height=15,
        start=(9, 2), end=(7, 14),
        areas=[
            Area(3, 3, 9, 1, WEIGHT_EXPENSIVE),
            Area(3, 11, 1, 9, WEIGHT_EXPENSIVE),
        ],
    ),
    "open": Scenario(
        name="open",
        title="Open 5x5",
        width=5, height=5,
        start=(0, 0), end=(4, 4),
    ),
    "gap": Scenario(
        name="gap",
        title="Wall with a gap",
        width=5, height=5,
        start=(0, 0), end=(4, 4),
        areas=[Area(0, 2, 1, 4, WEIGHT_BLOCK)],
    ),
    "rooms": Scenario(
        name="rooms",
        title="Rooms (JPS showcase)",
        width=24, height=14,
        start=(1, 1), end=(12, 22),
        areas=[
            Area(0, 7, 1, 9, WEIGHT_BLOCK),
            Area(4, 15, 1, 10, WEIGHT_BLOCK),
            Area(9, 0, 5, 1, WEIGHT_BLOCK),
            Area(6, 16, 5, 1, WEIGHT_BLOCK),
        ],
    ),
}

SCENARIO_ORDER: List[str] = list(SCENARIOS)


def get_scenario(name: str) -> Scenario:
    try:
        return SCENARIOS[name]
    except KeyError:
        raise KeyError(f"Unknown scenario {name!r}; expected one of: {', '.join(SCENARIOS)}") from None


def next_scenario(name: str) -> str:
    i = SCENARIO_ORDER.index(name) if name in SCENARIO_ORDER else -1
    return SCENARIO_ORDER[(i + 1) % len(SCENARIO_ORDER)]
