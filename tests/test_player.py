import pytest

from pathlab.app.player import MAX_SPEED, MIN_SPEED, TracePlayer, format_cost
from pathlab.core.finder import run
from pathlab.core.trace import MarkStart, PushFrontier, StepTrace, Visit


@pytest.fixture
def astar_result(open_board):
    grid, start, end = open_board
    return run("astar", grid, start, end)


def test_starts_paused_at_zero(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path)
    assert player.paused
    assert player.progress() == (0, len(astar_result.trace))
    assert player.status_text() == "Paused"
    assert player.board == {}


def test_step_applies_events_in_order(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path)
    assert player.step() == MarkStart(0, 0)
    assert player.tile((0, 0)).status == "start"
    assert player.step() is astar_result.trace[1]
    assert player.cursor == 2


def test_tick_respects_pause_and_interval(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path, steps_per_sec=8)
    assert player.tick(1.0) == 0
    player.toggle_pause()
    assert player.status_text() == "Running"
    assert player.tick(1.0) == 1
    assert player.tick(1.01) == 0
    assert player.tick(1.2) == 1
    assert player.cursor == 2


def test_replay_to_end(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path)
    player.run_to_end()
    assert player.finished
    assert player.status_text() == "Done"
    assert player.path_visible()
    assert player.step() is None
    player.toggle_pause()
    assert player.paused


def test_board_reflects_last_event_per_tile(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path)
    player.run_to_end()
    for cell in astar_result.path[1:-1]:
        assert player.tile(cell.position).status == "path"
    for pos in astar_result.trace.positions(Visit):
        assert player.tile(pos).status in ("visit", "path")


def test_frontier_label_survives_later_events():
    trace = StepTrace([PushFrontier(1, 1, 3, 2.0), Visit(1, 1)])
    player = TracePlayer(trace)
    player.run_to_end()
    view = player.tile((1, 1))
    assert view.status == "visit"
    assert view.label == "3"
    assert view.heuristic == 2.0


def test_reset_rewinds(astar_result):
    player = TracePlayer(astar_result.trace, astar_result.path)
    player.toggle_pause()
    player.run_to_end()
    player.reset()
    assert player.cursor == 0
    assert player.paused
    assert player.board == {}


def test_unreachable_status(walled_in_board):
    grid, start, end = walled_in_board
    result = run("bfs", grid, start, end)
    player = TracePlayer(result.trace, result.path)
    player.run_to_end()
    assert player.status_text() == "No path"
    assert not player.path_visible()


def test_speed_is_clamped():
    player = TracePlayer(StepTrace(), steps_per_sec=MAX_SPEED)
    player.bump_speed(+5)
    assert player.steps_per_sec == MAX_SPEED
    player.steps_per_sec = MIN_SPEED
    player.bump_speed(-1)
    assert player.steps_per_sec == MIN_SPEED


@pytest.mark.parametrize("cost,text", [(0, ""), (3, "3"), (4.0, "4"), (2.5, "2.5")])
def test_format_cost(cost, text):
    assert format_cost(cost) == text
