# tileroute/app/settings.py
#!/usr/bin/env python3
"""
Paths and defaults for the command line and the viewer.

Each value can be overridden from the environment; command-line flags win over
both.
- TILEROUTE_INPUT_DIR   where tile worlds are read from     (./input)
- TILEROUTE_OUTPUT_DIR  where solved worlds are written     (./output)
- TILEROUTE_MAPS_DIR    worlds offered by the viewer        (<repo>/maps)
- TILEROUTE_LOG_LEVEL   logging level name                  (WARNING)
"""

import logging
import os
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_INPUT_DIR = Path("input")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_MAPS_DIR = REPO_ROOT / "maps"
DEFAULT_LOG_LEVEL = "WARNING"

# Output image suffix per algorithm: <world>_a.png, <world>_d.png, <world>_g.png
OUTPUT_SUFFIX = {"A*": "_a", "Dijkstra": "_d", "Greedy Search": "_g"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _path_from_env(var: str, default: Path, override: Optional[str] = None) -> Path:
    if override:
        return Path(override)
    value = os.getenv(var)
    return Path(value) if value else default


def input_dir(override: Optional[str] = None) -> Path:
    return _path_from_env("TILEROUTE_INPUT_DIR", DEFAULT_INPUT_DIR, override)


def output_dir(override: Optional[str] = None) -> Path:
    return _path_from_env("TILEROUTE_OUTPUT_DIR", DEFAULT_OUTPUT_DIR, override)


def maps_dir(override: Optional[str] = None) -> Path:
    return _path_from_env("TILEROUTE_MAPS_DIR", DEFAULT_MAPS_DIR, override)


def log_level(override: Optional[str] = None) -> int:
    name = (override or os.getenv("TILEROUTE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name}")
    return level


def configure_logging(override: Optional[str] = None) -> None:
    logging.basicConfig(level=log_level(override), format=LOG_FORMAT)
