# tileroute/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional, Dict, Any, Iterable

Cell = Tuple[int, int]  # (col, row) == (x, y)
RGB = Tuple[int, int, int]

INFINITY = inf  # unreachable; no cost is higher than this

ROAD_COST, ROAD_DIAGONAL_COST = 10, 14
SAND_COST, SAND_DIAGONAL_COST = 14, 20
WATER_COST, WATER_DIAGONAL_COST = 20, 28
MOUNTAIN_COST, MOUNTAIN_DIAGONAL_COST = 24, 34


class TileWorldError(Exception):
    """Base class for problems with a tile world handed to the core."""


class GridFormatError(TileWorldError, ValueError):
    """The world file or rows could not be turned into a rectangular grid."""


class MissingEndpointError(TileWorldError):
    """The grid has no Start or no End cell."""


class TerrainType(Enum):
    #              symbol  rgb              cost           diagonal cost
    ROAD         = (".", (255, 255, 255), ROAD_COST,     ROAD_DIAGONAL_COST)
    SAND         = ("s", (255, 255, 0),   SAND_COST,     SAND_DIAGONAL_COST)
    WATER        = ("~", (0, 0, 255),     WATER_COST,    WATER_DIAGONAL_COST)
    MOUNTAIN     = ("^", (128, 128, 128), MOUNTAIN_COST, MOUNTAIN_DIAGONAL_COST)
    NON_WALKABLE = ("#", (0, 0, 0),       INFINITY,      INFINITY)
    START        = ("S", (255, 0, 0),     ROAD_COST,     ROAD_DIAGONAL_COST)
    END          = ("E", (0, 255, 0),     ROAD_COST,     ROAD_DIAGONAL_COST)
    PATH         = ("*", (0, 255, 255),   ROAD_COST,     ROAD_DIAGONAL_COST)
    UNKNOWN      = ("?", (255, 192, 203), INFINITY,      INFINITY)  # unrecognised input

    def __init__(self, symbol: str, rgb: RGB, cost, diagonal_cost):
        self.symbol = symbol
        self.rgb = rgb
        self.cost = cost
        self.diagonal_cost = diagonal_cost

    @property
    def walkable(self) -> bool:
        return self.cost != INFINITY

    @classmethod
    def from_rgb(cls, rgb: RGB) -> "TerrainType":
        """Colour -> terrain. UNKNOWN if no terrain uses that colour."""
        return _BY_RGB.get(tuple(rgb)[:3], cls.UNKNOWN)

    @classmethod
    def from_symbol(cls, symbol: str) -> "TerrainType":
        return _BY_SYMBOL.get(symbol, cls.UNKNOWN)


_BY_RGB: Dict[RGB, TerrainType] = {t.rgb: t for t in TerrainType}
_BY_SYMBOL: Dict[str, TerrainType] = {t.symbol: t for t in TerrainType}


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[TerrainType]]     # [row][col]
    name: str = ""

    @classmethod
    def from_rows(cls, rows: Iterable[str], name: str = "") -> "Grid":
        """Build a grid from symbol strings, one string per row."""
        rows = list(rows)
        if not rows or not rows[0]:
            raise GridFormatError("a tile world needs at least one cell")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise GridFormatError(f"row {y} has {len(row)} cells, expected {width}")
        cells = [[TerrainType.from_symbol(ch) for ch in row] for row in rows]
        return cls(width, len(rows), cells, name)

    def to_rows(self) -> List[str]:
        return ["".join(t.symbol for t in row) for row in self.cells]

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, [list(row) for row in self.cells], self.name)

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def terrain_at(self, c: Cell) -> TerrainType:
        x, y = c
        return self.cells[y][x]

    def set_terrain(self, c: Cell, terrain: TerrainType) -> None:
        x, y = c
        self.cells[y][x] = terrain

    def mark_path(self, c: Cell) -> None:
        self.set_terrain(c, TerrainType.PATH)

    # -------------------- index conversions (row-major) --------------------

    def index_of(self, c: Cell) -> int:
        x, y = c
        return y * self.width + x

    def cell_of(self, index: int) -> Cell:
        return (index % self.width, index // self.width)

    def find(self, terrain: TerrainType) -> Optional[Cell]:
        """First cell of the given terrain in a row-major scan, else None."""
        for y, row in enumerate(self.cells):
            for x, t in enumerate(row):
                if t is terrain:
                    return (x, y)
        return None

    def find_start(self) -> Optional[Cell]:
        return self.find(TerrainType.START)

    def find_end(self) -> Optional[Cell]:
        return self.find(TerrainType.END)


@dataclass
class SearchResult:
    best_path_cost: int = -1                # -1 when End is unreachable
    nodes_expanded: int = 0
    solution_path: List[Cell] = field(default_factory=list)   # End -> Start
    time_ns: int = 0                        # set by the caller around solve()

    @property
    def found(self) -> bool:
        return self.best_path_cost >= 0

    def path_start_to_end(self) -> List[Cell]:
        return list(reversed(self.solution_path))


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
