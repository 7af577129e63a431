import dataclasses

import pytest

from pathlab.core.trace import JumpOver, MarkEnd, MarkPath, MarkStart, PushFrontier, StepTrace, Visit
from pathlab.core.types import Grid


@pytest.fixture
def grid():
    return Grid(3, 3)


def test_helpers_record_positions_in_order(grid):
    trace = StepTrace()
    trace.mark_start(grid.cell_at(0, 0))
    trace.mark_end(grid.cell_at(2, 2))
    trace.push_frontier(grid.cell_at(0, 1), 1, 1.5)
    trace.visit(grid.cell_at(0, 1))
    trace.jump_over(grid.cell_at(1, 1))
    trace.mark_path(grid.cell_at(0, 1))

    assert list(trace) == [
        MarkStart(0, 0),
        MarkEnd(2, 2),
        PushFrontier(0, 1, 1, 1.5),
        Visit(0, 1),
        JumpOver(1, 1),
        MarkPath(0, 1),
    ]
    assert len(trace) == 6
    assert trace[2].position == (0, 1)


def test_events_are_frozen():
    event = Visit(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.row = 0


def test_event_kinds():
    assert [cls.kind for cls in (MarkStart, MarkEnd, Visit, PushFrontier, JumpOver, MarkPath)] == [
        "start", "end", "visit", "frontier", "jump_over", "path",
    ]


def test_push_frontier_heuristic_is_optional(grid):
    trace = StepTrace()
    trace.push_frontier(grid.cell_at(1, 0), 4)
    assert trace[0].heuristic is None
    assert trace[0].cost == 4


def test_queries(grid):
    trace = StepTrace()
    trace.visit(grid.cell_at(0, 1))
    trace.visit(grid.cell_at(0, 2))
    trace.mark_path(grid.cell_at(0, 1))
    assert trace.positions(Visit) == [(0, 1), (0, 2)]
    assert trace.of_type(MarkPath) == [MarkPath(0, 1)]
    assert trace.counts() == {"visit": 2, "path": 1}


def test_equality_is_by_events(grid):
    a, b = StepTrace(), StepTrace()
    for t in (a, b):
        t.visit(grid.cell_at(1, 1))
    assert a == b
    b.visit(grid.cell_at(2, 2))
    assert a != b


def test_events_do_not_follow_later_cell_changes(grid):
    trace = StepTrace()
    cell = grid.cell_at(1, 1)
    trace.push_frontier(cell, cell.weight)
    grid.set_weight(1, 1, 9)
    assert trace[0] == PushFrontier(1, 1, 1, None)
