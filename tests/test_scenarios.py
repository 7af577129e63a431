import pytest

from pathlab.app.scenarios import (
    SCENARIO_ORDER,
    SCENARIOS,
    Area,
    Scenario,
    get_scenario,
    next_scenario,
    resolve_endpoints,
)
from pathlab.core.finder import run
from pathlab.core.types import WEIGHT_BLOCK, WEIGHT_DEFAULT, WEIGHT_EXPENSIVE

from conftest import ALGO_NAMES


def test_endpoints_are_clamped():
    assert resolve_endpoints(5, 5, (-1, 20), (9, -3)) == ((0, 4), (4, 0))


@pytest.mark.parametrize("same,moved", [
    ((2, 2), (2, 3)),   # right
    ((2, 4), (3, 4)),   # down when at the right edge
    ((4, 4), (4, 3)),   # left in the bottom-right corner
])
def test_coincident_end_is_nudged(same, moved):
    assert resolve_endpoints(5, 5, same, same) == (same, moved)


def test_default_scenario_layout():
    grid, start, end = get_scenario("default").build()
    assert (grid.width, grid.height) == (15, 15)
    assert start.position == (9, 2)
    assert end.position == (7, 14)
    assert grid.cell_at(3, 3).weight == WEIGHT_EXPENSIVE
    assert grid.cell_at(3, 11).weight == WEIGHT_EXPENSIVE
    assert grid.cell_at(11, 11).weight == WEIGHT_EXPENSIVE
    assert grid.cell_at(12, 11).weight == WEIGHT_DEFAULT
    assert grid.cell_at(3, 12).weight == WEIGHT_DEFAULT


def test_gap_scenario_layout():
    grid, _, _ = get_scenario("gap").build()
    assert [r for r in range(5) if not grid.is_walkable(r, 2)] == [0, 1, 2, 3]


def test_blocked_endpoint_is_rejected():
    boxed = Scenario("boxed", "Boxed", 3, 3, (0, 0), (2, 2), [Area(0, 0, 1, 1, WEIGHT_BLOCK)])
    with pytest.raises(ValueError):
        boxed.build()


def test_builds_are_independent():
    a, _, _ = get_scenario("open").build()
    b, _, _ = get_scenario("open").build()
    a.set_weight(1, 1, WEIGHT_BLOCK)
    assert b.is_walkable(1, 1)


@pytest.mark.parametrize("algo", ALGO_NAMES)
@pytest.mark.parametrize("name", list(SCENARIOS))
def test_every_scenario_is_solvable(name, algo):
    grid, start, end = get_scenario(name).build()
    assert start is not end
    assert run(algo, grid, start, end).found


def test_unknown_scenario():
    with pytest.raises(KeyError):
        get_scenario("nowhere")


def test_next_scenario_cycles():
    seen = [SCENARIO_ORDER[0]]
    for _ in range(len(SCENARIO_ORDER)):
        seen.append(next_scenario(seen[-1]))
    assert seen[-1] == SCENARIO_ORDER[0]
    assert set(seen) == set(SCENARIO_ORDER)
    assert next_scenario("nowhere") == SCENARIO_ORDER[0]
