#!/usr/bin/env python3
"""Heuristic and frontier ordering rules."""

import pytest

from tileroute.core.graph import GraphNode
from tileroute.core.strategies import (
    AStar, Dijkstra, Greedy, SearchStrategy, as_strategy, octile_distance, strategy_for,
)
from tileroute.core.types import TerrainType


def node(x, y, g=0, h=0):
    return GraphNode(x, y, TerrainType.ROAD, tentative_cost=g, heuristic_cost=h)


@pytest.mark.parametrize("start, goal, expected", [
    ((0, 0), (0, 0), 0),
    ((0, 0), (5, 0), 50),
    ((0, 0), (0, 3), 30),
    ((0, 0), (4, 4), 56),
    ((0, 0), (3, 1), 34),
    ((7, 2), (1, 6), 4 * 14 + 2 * 10),
])
def test_octile_distance(start, goal, expected):
    assert octile_distance(node(*start), node(*goal)) == expected


def test_octile_distance_is_symmetric():
    a, b = node(2, 9), node(6, 3)
    assert octile_distance(a, b) == octile_distance(b, a)


class TestDijkstra:
    def test_heuristic_is_zero(self):
        assert Dijkstra().heuristic(node(0, 0), node(9, 9)) == 0

    def test_orders_by_cost_only(self):
        s = Dijkstra()
        assert s.priority(node(0, 0, g=30, h=500)) == 30
        assert s.compare(node(0, 0, g=5, h=90), node(1, 0, g=7, h=0)) == -1
        assert s.compare(node(0, 0, g=7), node(1, 0, g=7)) == 0


class TestAStar:
    def test_heuristic_is_octile(self):
        assert AStar().heuristic(node(0, 0), node(3, 1)) == 34

    def test_orders_by_cost_plus_heuristic(self):
        s = AStar()
        assert s.priority(node(0, 0, g=20, h=14)) == 34
        assert s.compare(node(0, 0, g=10, h=30), node(1, 0, g=14, h=20)) == 1


class TestGreedy:
    def test_orders_by_heuristic_only(self):
        s = Greedy()
        assert s.priority(node(0, 0, g=1000, h=10)) == 10
        assert s.compare(node(0, 0, g=1000, h=10), node(1, 0, g=0, h=20)) == -1
        assert s.compare(node(0, 0, h=30), node(1, 0, h=20)) == 1

    def test_equal_heuristics_rank_first_operand_lower(self):
        s = Greedy()
        a, b = node(0, 0, h=10), node(1, 0, h=10)
        assert s.compare(a, b) == -1
        assert s.compare(b, a) == -1


class TestLookup:
    @pytest.mark.parametrize("name, cls", [
        ("A*", AStar), ("astar", AStar), ("a", AStar),
        ("Dijkstra", Dijkstra), ("d", Dijkstra),
        ("greedy", Greedy), ("Greedy Search", Greedy), ("G", Greedy),
    ])
    def test_strategy_for(self, name, cls):
        assert isinstance(strategy_for(name), cls)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            strategy_for("bfs")

    def test_enum_creates_fresh_strategies(self):
        assert isinstance(SearchStrategy.GREEDY.create(), Greedy)
        assert SearchStrategy.A_STAR.create() is not SearchStrategy.A_STAR.create()

    def test_as_strategy(self):
        s = AStar()
        assert as_strategy(s) is s
        assert isinstance(as_strategy(SearchStrategy.DIJKSTRA), Dijkstra)
        assert isinstance(as_strategy("g"), Greedy)

    def test_names(self):
        assert [m.create().name for m in SearchStrategy] == ["A*", "Dijkstra", "Greedy Search"]
