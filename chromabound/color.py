"""Colouring strategies that give upper bounds on the chromatic number."""

from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import count
from typing import Sequence

from chromabound.graph import Graph


class ColorStrategy(ABC):
    """Colours a graph so that no two adjacent vertices share a colour."""

    @abstractmethod
    def color(self, graph: Graph) -> int:
        """Colour ``graph`` with colours 1..k, store it on the graph and return k."""


def greedy_find_color(
    graph: Graph, vertex: int, coloring: Sequence[int], current_max_k: int = 0
) -> int:
    """Return the lowest colour not used by any coloured neighbour of ``vertex``."""
    used = {coloring[neighbour] for neighbour in graph.neighbours(vertex)}
    return next(color for color in count(1) if color not in used)


class GreedyColorStrategy(ColorStrategy):
    """Colours vertices in descending degree order, each with its lowest free colour."""

    def color(self, graph: Graph) -> int:
        coloring = [0] * (graph.highest_vertex() + 1)
        graph.sort_by_degree()
        max_k = 0
        for vertex in graph.vertices():
            assigned = greedy_find_color(graph, vertex, coloring, max_k)
            max_k = max(max_k, assigned)
            coloring[vertex] = assigned
        graph.set_full_coloring(coloring)
        return max_k


class InactiveColorStrategy(ColorStrategy):
    """Leaves the colouring untouched and reports its highest colour."""

    def color(self, graph: Graph) -> int:
        return max(graph.coloring(), default=0)


class InterleavedColorStrategy(ColorStrategy):
    """Alternates runs of calls between two strategies."""

    def __init__(
        self,
        first: ColorStrategy,
        second: ColorStrategy,
        length_first: int,
        length_second: int,
    ) -> None:
        self._first = first
        self._second = second
        self._length_first = length_first
        self._length_second = length_second
        self._is_first = True
        self._current_length = 0

    def color(self, graph: Graph) -> int:
        self._current_length += 1
        if self._is_first:
            max_k = self._first.color(graph)
            if self._current_length == self._length_first:
                self._is_first = False
                self._current_length = 0
        else:
            max_k = self._second.color(graph)
            if self._current_length == self._length_second:
                self._is_first = True
                self._current_length = 0
        return max_k