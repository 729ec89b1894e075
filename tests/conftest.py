import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from tileroute.core.graph import build_graph
from tileroute.core.engine import solve
from tileroute.core.types import Grid


@pytest.fixture
def solve_rows():
    """Solve a world given as symbol rows on a freshly built graph."""
    def _solve(rows, strategy, on_path=None):
        grid = Grid.from_rows(rows)
        graph = build_graph(grid)
        return solve(graph, grid.find_start(), grid.find_end(), strategy, on_path)
    return _solve
