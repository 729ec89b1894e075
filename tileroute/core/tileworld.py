#!/usr/bin/env python3
"""
Reading and writing tile worlds.

A tile world is either
- a PNG image where every pixel is one cell, coloured by terrain
  (white road, yellow sand, blue water, grey mountain, black wall,
  red start, green end, cyan path), or
- a JSON map: {"rows": ["S..~", "..#E"]} using the terrain symbols.

Unrecognised colours or symbols are loaded as UNKNOWN (not walkable) and
reported with their location.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from tileroute.core.types import Grid, TerrainType, GridFormatError

logger = logging.getLogger(__name__)

WORLD_SUFFIXES = (".png", ".json")
PathLike = Union[str, Path]


def _warn_unknown(grid: Grid, raw) -> None:
    for y, row in enumerate(grid.cells):
        for x, t in enumerate(row):
            if t is TerrainType.UNKNOWN:
                logger.warning("%s: unknown tile %r at location %d (%d,%d)",
                               grid.name or "<world>", raw(x, y), grid.index_of((x, y)), x, y)


def load_png(path: PathLike) -> Grid:
    path = Path(path)
    try:
        image = pygame.image.load(str(path))
    except pygame.error as ex:
        raise GridFormatError(f"cannot decode image {path}: {ex}") from ex

    width, height = image.get_width(), image.get_height()
    if width == 0 or height == 0:
        raise GridFormatError(f"image {path} is empty")

    def rgb(x: int, y: int):
        c = image.get_at((x, y))
        return (c.r, c.g, c.b)

    cells = [[TerrainType.from_rgb(rgb(x, y)) for x in range(width)] for y in range(height)]
    grid = Grid(width, height, cells, name=path.stem)
    _warn_unknown(grid, lambda x, y: "#%02x%02x%02x" % rgb(x, y))
    return grid


def load_json(path: PathLike) -> Grid:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            raise GridFormatError(f"{path}: {ex}") from ex
    rows = data.get("rows") if isinstance(data, dict) else None
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise GridFormatError(f"{path}: expected an object with a 'rows' list of strings")
    grid = Grid.from_rows(rows, name=path.stem)
    _warn_unknown(grid, lambda x, y: rows[y][x])
    return grid


def load_world(path: PathLike) -> Grid:
    """Load a tile world from a .png or .json file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"tile world file {str(path)!r} cannot be found")
    suffix = path.suffix.lower()
    if suffix == ".png":
        return load_png(path)
    if suffix == ".json":
        return load_json(path)
    raise GridFormatError(f"unsupported tile world format: {path.name}")


def save_world(grid: Grid, path: PathLike) -> Path:
    """Write the grid as a PNG image, one pixel per cell. Appends .png if missing."""
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_name(path.name + ".png")
    path.parent.mkdir(parents=True, exist_ok=True)

    surface = pygame.Surface((grid.width, grid.height))
    for y, row in enumerate(grid.cells):
        for x, t in enumerate(row):
            surface.set_at((x, y), t.rgb)
    pygame.image.save(surface, str(path))
    logger.debug("saved %s (%dx%d)", path, grid.width, grid.height)
    return path


def resolve_world(name: str, input_dir: Optional[PathLike] = None) -> Path:
    """
    Find the file for a world name. "i1" tries i1.png then i1.json inside
    input_dir; a name with a suffix, or an existing path, is used as given.
    """
    base = Path(input_dir) if input_dir is not None else Path(".")
    candidate = Path(name)
    if candidate.suffix.lower() in WORLD_SUFFIXES:
        return candidate if candidate.is_absolute() or candidate.exists() else base / candidate
    for suffix in WORLD_SUFFIXES:
        p = base / (name + suffix)
        if p.exists():
            return p
    return base / (name + WORLD_SUFFIXES[0])
