import pytest

from pathlab.core.finder import ALGORITHMS, UnknownAlgorithmError, find_path, get_algorithm, path_cost
from pathlab.core.jps import JPSAlgo
from pathlab.core.trace import StepTrace
from pathlab.core.types import Grid


def test_registry_names():
    assert list(ALGORITHMS) == ["bfs", "dijkstra", "astar", "greedy", "jps"]
    assert isinstance(get_algorithm("JPS"), JPSAlgo)


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError) as exc:
        get_algorithm("dfs")
    assert isinstance(exc.value, KeyError)
    assert "dijkstra" in str(exc.value)


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_uniform_contract(open_board, name):
    grid, start, end = open_board
    path, trace = find_path(name, grid, start, end)
    assert path[0] is start and path[-1] is end
    assert isinstance(trace, StepTrace)


def test_path_cost_skips_first_cell():
    grid = Grid(3, 1)
    grid.set_weight(0, 0, 9)
    grid.set_weight(0, 2, 4)
    assert path_cost(grid.cells) == 1 + 4
