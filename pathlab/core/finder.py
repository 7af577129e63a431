# pathlab/core/finder.py
#!/usr/bin/env python3
"""
One entry point over all five algorithms.

    path, trace = find_path("astar", grid, start, end)

`path` is None when the end cannot be reached.
"""

from typing import Dict, List, Optional, Tuple, Type

from pathlab.core.jps import JPSAlgo
from pathlab.core.search import AStarAlgo, BFSAlgo, DijkstraAlgo, GreedyBestFirstAlgo, GridSearchAlgo
from pathlab.core.trace import StepTrace
from pathlab.core.types import Cell, Grid, SearchResult

ALGORITHMS: Dict[str, Type[GridSearchAlgo]] = {
    "bfs": BFSAlgo,
    "dijkstra": DijkstraAlgo,
    "astar": AStarAlgo,
    "greedy": GreedyBestFirstAlgo,
    "jps": JPSAlgo,
}


class UnknownAlgorithmError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown algorithm {self.name!r}; expected one of: {', '.join(ALGORITHMS)}"


def get_algorithm(name: str) -> GridSearchAlgo:
    try:
        return ALGORITHMS[name.lower()]()
    except KeyError:
        raise UnknownAlgorithmError(name) from None


def run(name: str, grid: Grid, start: Cell, end: Cell) -> SearchResult:
    return get_algorithm(name).run(grid, start, end)


def find_path(name: str, grid: Grid, start: Cell, end: Cell) -> Tuple[Optional[List[Cell]], StepTrace]:
    return get_algorithm(name).find_path(grid, start, end)


def path_cost(path: List[Cell]) -> int:
    """Weighted length of a path: the weight of every cell entered after the first."""
    return sum(cell.weight for cell in path[1:])
