#!/usr/bin/env python3
"""
Priority-first search engine shared by Dijkstra, A* and Greedy.

One expansion per step() so the viewer can animate it; run() drives step() to
completion and is what solve() uses.

Loop (per step):
  - Pop the lowest-priority node.
  - If it is the End node, walk the predecessor chain back to Start and finish.
  - Else, for every unvisited neighbour: take it out of the frontier, relax it
    (ties overwrite the predecessor, so the last equal-cost path wins), and put
    it back keyed by its current priority.
  - Mark the popped node visited and count it as expanded.

An exhausted frontier means End is unreachable: best cost -1, empty path.

Frontier ordering is (priority, seq): equal priorities pop in insertion order.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from tileroute.core.graph import GraphNode, NodeGraph
from tileroute.core.strategies import PriorityStrategy, SearchStrategy, as_strategy
from tileroute.core.types import Cell, SearchResult, StepResult

logger = logging.getLogger(__name__)

PathSink = Callable[[GraphNode], None]

_REMOVED = object()  # placeholder for a removed frontier entry


class Frontier:
    """Min-priority queue of nodes with O(log n) push and removal by identity."""

    def __init__(self) -> None:
        self._heap: List[list] = []
        self._entries: Dict[GraphNode, list] = {}
        self._seq = 0

    def push(self, node: GraphNode, priority: float) -> None:
        if node in self._entries:
            self.remove(node)
        self._seq += 1
        entry = [priority, self._seq, node]
        self._entries[node] = entry
        heapq.heappush(self._heap, entry)

    def remove(self, node: GraphNode) -> bool:
        """Drop `node` if queued. Returns whether it was."""
        entry = self._entries.pop(node, None)
        if entry is None:
            return False
        entry[-1] = _REMOVED
        return True

    def pop(self) -> GraphNode:
        while self._heap:
            _, _, node = heapq.heappop(self._heap)
            if node is not _REMOVED:
                del self._entries[node]
                return node
        raise IndexError("pop from an empty frontier")

    def clear(self) -> None:
        self._heap.clear()
        self._entries.clear()
        self._seq = 0

    def cells(self) -> List[Cell]:
        return [n.cell for n in self._entries]

    def __contains__(self, node: GraphNode) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class SearchEngine:
    graph: NodeGraph
    start: GraphNode
    end: GraphNode
    strategy: PriorityStrategy
    on_path: Optional[PathSink] = None

    # Internal state
    frontier: Frontier = field(default_factory=Frontier)
    nodes_expanded: int = 0
    result: Optional[SearchResult] = None

    def __post_init__(self) -> None:
        self.reset()

    @property
    def name(self) -> str:
        return self.strategy.name

    # -------------------- lifecycle --------------------

    def reset(self) -> None:
        """Reset every node, compute heuristics against End, seed with Start."""
        self.frontier.clear()
        self.nodes_expanded = 0
        self.result = None

        for node in self.graph:
            node.reset()
            if node is self.start:
                node.tentative_cost = 0
            node.heuristic_cost = self.strategy.heuristic(node, self.end)

        self.frontier.push(self.start, self.strategy.priority(self.start))
        logger.debug("%s: start %s, end %s, %d nodes",
                     self.name, self.start.cell, self.end.cell, len(self.graph))

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        if self.result is not None:
            status = "done" if self.result.found else "no_path"
            return StepResult(status=status, path=self.result.path_start_to_end() or None,
                              metrics=self._metrics())

        if not self.frontier:
            self.result = SearchResult(-1, self.nodes_expanded)
            logger.debug("%s: frontier exhausted after %d expansions", self.name, self.nodes_expanded)
            return StepResult(status="no_path", metrics=self._metrics())

        current = self.frontier.pop()

        if current is self.end:
            self.result = self._finish(current)
            logger.debug("%s: reached end, cost %s, %d expansions",
                         self.name, self.result.best_path_cost, self.nodes_expanded)
            return StepResult(status="done", closed=[current.cell], current=current.cell,
                              path=self.result.path_start_to_end(), metrics=self._metrics())

        opened: List[Cell] = []
        for other in current.unvisited_neighbors():
            was_queued = self.frontier.remove(other)
            candidate = current.tentative_cost + current.cost_to(other)
            if other.tentative_cost >= candidate:
                other.tentative_cost = candidate
                other.predecessor = current
            self.frontier.push(other, self.strategy.priority(other))
            if not was_queued:
                opened.append(other.cell)

        current.visited = True
        self.nodes_expanded += 1

        return StepResult(status="running", opened=opened, closed=[current.cell],
                          current=current.cell, metrics=self._metrics())

    def run(self) -> SearchResult:
        while self.result is None:
            self.step()
        return self.result

    def _finish(self, end: GraphNode) -> SearchResult:
        path: List[Cell] = []
        node: Optional[GraphNode] = end
        while node is not None:
            if self.on_path is not None:
                self.on_path(node)
            path.append(node.cell)
            node = node.predecessor
        return SearchResult(best_path_cost=end.tentative_cost,
                            nodes_expanded=self.nodes_expanded,
                            solution_path=path)

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        found = self.result is not None and self.result.found
        return {
            "algo": self.name,
            "expanded": self.nodes_expanded,
            "open_size": len(self.frontier),
            "closed_count": self.nodes_expanded,
            "path_len": len(self.result.solution_path) if found else 0,
            "total_cost": self.result.best_path_cost if self.result is not None else None,
        }


def _as_node(graph: NodeGraph, where: Union[GraphNode, Cell]) -> GraphNode:
    return where if isinstance(where, GraphNode) else graph[where]


def solve(graph: NodeGraph,
          start: Union[GraphNode, Cell],
          end: Union[GraphNode, Cell],
          strategy: Union[PriorityStrategy, SearchStrategy, str],
          on_path: Optional[PathSink] = None) -> SearchResult:
    """
    Run one search on `graph` and return its result.

    `graph` must be freshly built for this run. `on_path` is called for every
    node on the End->Start chain once End is settled. The result's time_ns is
    left at 0; callers time the call themselves.
    """
    engine = SearchEngine(graph, _as_node(graph, start), _as_node(graph, end),
                          as_strategy(strategy), on_path)
    return engine.run()
