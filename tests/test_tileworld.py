#!/usr/bin/env python3
"""Loading and saving tile worlds (PNG and JSON)."""

import json
import logging
from pathlib import Path

import pytest

from tileroute.core.tileworld import load_json, load_world, resolve_world, save_world
from tileroute.core.types import Grid, GridFormatError, TerrainType

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestJson:
    def test_load(self, tmp_path):
        grid = load_world(write_json(tmp_path / "w1.json", {"rows": ["S.~", "^#E"]}))
        assert grid.name == "w1"
        assert grid.to_rows() == ["S.~", "^#E"]
        assert grid.find_start() == (0, 0)

    def test_unknown_symbol_is_reported(self, tmp_path, caplog):
        path = write_json(tmp_path / "odd.json", {"rows": ["SxE"]})
        with caplog.at_level(logging.WARNING, logger="tileroute.core.tileworld"):
            grid = load_json(path)
        assert grid.terrain_at((1, 0)) is TerrainType.UNKNOWN
        assert "(1,0)" in caplog.text

    @pytest.mark.parametrize("content", ["{not json", json.dumps({"cells": []}), json.dumps(["S.E"])])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(GridFormatError):
            load_world(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "bytes.json"
        path.write_bytes(b'{"rows": ["S\xff.E"]}')
        with pytest.raises(GridFormatError):
            load_world(path)

    def test_bundled_maps_load(self):
        paths = sorted(MAPS_DIR.glob("*.json"))
        assert paths
        for p in paths:
            grid = load_world(p)
            assert grid.find_start() is not None
            assert grid.find_end() is not None


class TestPng:
    def test_save_then_load(self, tmp_path):
        rows = ["S.s~", "^#*?", "...E"]
        saved = save_world(Grid.from_rows(rows), tmp_path / "out" / "w1")
        assert saved == tmp_path / "out" / "w1.png"
        assert saved.exists()
        grid = load_world(saved)
        assert (grid.width, grid.height) == (4, 3)
        assert grid.to_rows() == rows
        assert grid.name == "w1"


class TestLoadWorld:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_world(tmp_path / "nope.png")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "w.txt"
        path.write_text("S.E")
        with pytest.raises(GridFormatError):
            load_world(path)


class TestResolveWorld:
    def test_prefers_png(self, tmp_path):
        (tmp_path / "i1.png").write_bytes(b"")
        (tmp_path / "i1.json").write_text("{}")
        assert resolve_world("i1", tmp_path) == tmp_path / "i1.png"

    def test_falls_back_to_json(self, tmp_path):
        (tmp_path / "i2.json").write_text("{}")
        assert resolve_world("i2", tmp_path) == tmp_path / "i2.json"

    def test_default_when_missing(self, tmp_path):
        assert resolve_world("i3", tmp_path) == tmp_path / "i3.png"

    def test_explicit_suffix(self, tmp_path):
        assert resolve_world("w.json", tmp_path) == tmp_path / "w.json"
        existing = write_json(tmp_path / "here.json", {"rows": ["SE"]})
        assert resolve_world(str(existing), "elsewhere") == existing
