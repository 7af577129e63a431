import pytest

from pathlab.app.scenarios import get_scenario
from pathlab.core.types import WEIGHT_BLOCK, Grid


ALGO_NAMES = ["bfs", "dijkstra", "astar", "greedy", "jps"]


@pytest.fixture
def open_board():
    """5x5, uniform weight, (0,0) -> (4,4)."""
    return get_scenario("open").build()


@pytest.fixture
def gap_board():
    """5x5, column 2 blocked except row 4, (0,0) -> (4,4)."""
    return get_scenario("gap").build()


@pytest.fixture
def default_board():
    return get_scenario("default").build()


@pytest.fixture
def walled_in_board():
    """End at (2,2) cut off by blocks at (1,2) and (2,1)."""
    grid = Grid(3, 3)
    grid.set_weight(1, 2, WEIGHT_BLOCK)
    grid.set_weight(2, 1, WEIGHT_BLOCK)
    return grid, grid.cell_at(0, 0), grid.cell_at(2, 2)
