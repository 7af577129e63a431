# pathlab/app/player.py
#!/usr/bin/env python3
"""
Replays a finished StepTrace one event at a time.

No pygame in here: the viewer owns the clock and the drawing, the player
owns the cursor, pause/step state and what every tile currently shows.
Events are only ever applied in trace order.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pathlab.core.trace import PushFrontier, StepEvent, StepTrace
from pathlab.core.types import Cell, Position

MIN_SPEED = 1
MAX_SPEED = 60


@dataclass
class TileView:
    status: str = "default"     # event kind that last touched the tile
    label: str = ""
    heuristic: Optional[float] = None


def format_cost(cost: float) -> str:
    if cost == 0:
        return ""
    if float(cost).is_integer():
        return str(int(cost))
    return f"{cost:.1f}"


class TracePlayer:
    def __init__(self, trace: StepTrace, path: Optional[List[Cell]] = None, steps_per_sec: int = 8):
        self.trace = trace
        self.path = path
        self.steps_per_sec = steps_per_sec
        self.cursor = 0
        self.paused = True
        self.board: Dict[Position, TileView] = {}
        self._last_step_t = 0.0

    # -------------------- state --------------------

    @property
    def total(self) -> int:
        return len(self.trace)

    @property
    def finished(self) -> bool:
        return self.cursor >= len(self.trace)

    def progress(self) -> Tuple[int, int]:
        return self.cursor, len(self.trace)

    def status_text(self) -> str:
        if self.finished:
            return "Done" if self.path is not None else "No path"
        return "Paused" if self.paused else "Running"

    def tile(self, pos: Position) -> TileView:
        return self.board.get(pos, TileView())

    def path_visible(self) -> bool:
        """The route line is drawn once the whole trace has been replayed."""
        return self.finished and self.path is not None

    # -------------------- controls --------------------

    def toggle_pause(self) -> None:
        if self.finished:
            return
        self.paused = not self.paused

    def reset(self) -> None:
        self.cursor = 0
        self.paused = True
        self.board.clear()
        self._last_step_t = 0.0

    def bump_speed(self, dv: int) -> None:
        self.steps_per_sec = int(max(MIN_SPEED, min(MAX_SPEED, self.steps_per_sec + dv)))

    def step(self) -> Optional[StepEvent]:
        """Apply the next event, if any, and return it."""
        if self.finished:
            return None
        event = self.trace[self.cursor]
        self._apply(event)
        self.cursor += 1
        return event

    def tick(self, now: float) -> int:
        """Advance by at most one event when running and the step interval has passed."""
        if self.paused or self.finished:
            return 0
        if now - self._last_step_t < 1.0 / max(MIN_SPEED, self.steps_per_sec):
            return 0
        self._last_step_t = now
        self.step()
        return 1

    def run_to_end(self) -> None:
        while not self.finished:
            self.step()

    # -------------------- board --------------------

    def _apply(self, event: StepEvent) -> None:
        view = self.board.setdefault(event.position, TileView())
        view.status = event.kind
        if isinstance(event, PushFrontier):
            view.label = format_cost(event.cost)
            view.heuristic = event.heuristic
