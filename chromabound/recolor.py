"""Recolouring heuristics that try to lower the highest colour of a colouring."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Iterable

from chromabound.color import ColorStrategy
from chromabound.graph import Graph

_DEFAULT_SWAP_THRESHOLD = 50


class RecolorStrategy(ABC):
    """Partially recolours a graph to reduce its highest colour."""

    @abstractmethod
    def recolor(self, graph: Graph) -> int:
        """Return 0 if recolouring failed, else how much the highest colour dropped."""


class VertexRecolorData:
    """A vertex next to a maximum-coloured vertex, able to move to another colour.

    ``coloring`` is the shared list, indexed by vertex, that every instance reads
    and writes; ``max_color`` bounds the colours it may move to (exclusive).
    """

    def __init__(
        self,
        vertex: int,
        coloring: list[int],
        max_color: int,
        neighbours: Iterable[int] = (),
        rng: random.Random | None = None,
    ) -> None:
        self.vertex = vertex
        self.max_color = max_color
        self.neighbours = list(neighbours)
        self._coloring = coloring
        self._old_color: int | None = None
        self._rng = rng if rng is not None else random.Random()

    def current_color(self) -> int:
        return self._coloring[self.vertex]

    def _remember_color(self) -> None:
        if self._old_color is None:
            self._old_color = self._coloring[self.vertex]

    def revert_color(self) -> None:
        """Restore the colour held before the first change, if any."""
        if self._old_color is not None:
            self._coloring[self.vertex] = self._old_color
            self._old_color = None

    def _available_colors(self) -> list[int]:
        forbidden = {self.current_color()}
        forbidden.update(self._coloring[neighbour] for neighbour in self.neighbours)
        return [color for color in range(1, self.max_color) if color not in forbidden]

    def is_recolorable(self) -> bool:
        """Tell whether :meth:`recolor` would succeed with the current colouring."""
        return not self.neighbours or bool(self._available_colors())

    def recolor(self) -> bool:
        """Move to a colour below ``max_color`` that no neighbour uses.

        When several colours are free one is chosen at random.
        """
        if not self.neighbours:
            return True
        available = self._available_colors()
        if not available:
            return False
        self._remember_color()
        if len(available) == 1:
            self._coloring[self.vertex] = available[0]
        else:
            self._coloring[self.vertex] = self._rng.choice(available)
        return True

    def assign_color(self, color: int) -> None:
        """Set the colour, remembering the previous one if not yet remembered."""
        self._remember_color()
        self._coloring[self.vertex] = color


class SwapRecolorStructure:
    """Tries to give every maximum-coloured vertex a lower colour by moving neighbours."""

    def __init__(
        self,
        graph: Graph,
        coloring: list[int],
        threshold: int = 10,
    ) -> None:
        self._graph = graph
        self._coloring = coloring
        self._threshold = threshold
        self._rng = random.Random()
        self._vertex_to_data: dict[int, VertexRecolorData] = {}
        self._dont_color = False
        self._filled = False

    def fill_with_data(self) -> None:
        """Sort the graph by colour and prepare the neighbours of the top-coloured vertices.

        If the number of top-coloured vertices reaches the threshold, recolouring is
        given up.
        """
        self._filled = True
        self._graph.sort_by_color()
        vertices = self._graph.vertices()
        if not vertices:
            self._dont_color = True
            return
        max_color = self._graph.color(vertices[0])
        top = [v for v in vertices if self._graph.color(v) == max_color]
        if len(top) >= self._threshold:
            self._dont_color = True
            return

        full_coloring = self._graph.full_coloring()
        for vertex in vertices:
            if full_coloring[vertex] < max_color:
                break
            for neighbour in self._graph.neighbours(vertex):
                if neighbour not in self._vertex_to_data:
                    self._vertex_to_data[neighbour] = VertexRecolorData(
                        neighbour,
                        self._coloring,
                        max_color,
                        self._graph.neighbours(neighbour),
                        self._rng,
                    )

    def recolor(self) -> bool:
        """Try to recolour every top-coloured vertex; on failure nothing is changed."""
        if not self._filled:
            self.fill_with_data()
        if self._dont_color:
            return False
        vertices = self._graph.vertices()
        max_color = self._graph.color(vertices[0])
        top: list[int] = []
        for vertex in vertices:
            if self._graph.color(vertex) != max_color:
                break
            top.append(vertex)
        return self._recolor_body(top, max_color)

    def _recolor_body(self, pending: list[int], max_color: int) -> bool:
        if not pending:
            return True
        current = pending[-1]
        rest = pending[:-1]
        neighbours = self._graph.neighbours(current)

        for color in range(1, max_color):
            self._coloring[current] = color
            recolored: list[VertexRecolorData] = []
            success = True
            for neighbour in neighbours:
                data = self._vertex_to_data[neighbour]
                if data.current_color() != color:
                    continue
                if not data.recolor():
                    for moved in recolored:
                        moved.assign_color(color)
                    success = False
                    break
                recolored.append(data)

            if not success:
                self._coloring[current] = max_color
                continue

            if self._recolor_body(rest, max_color):
                return True
            for moved in recolored:
                moved.assign_color(color)

        self._coloring[current] = max_color
        return False


class GreedySwapRecolorStrategy(RecolorStrategy):
    """Lowers the highest colour by 1 by greedily swapping colours with neighbours."""

    def __init__(
        self, threshold: int = _DEFAULT_SWAP_THRESHOLD, rng: random.Random | None = None
    ) -> None:
        self._threshold = threshold
        self._rng = rng

    def recolor(self, graph: Graph) -> int:
        coloring = graph.full_coloring()
        structure = SwapRecolorStructure(graph, coloring, self._threshold)
        if self._rng is not None:
            structure._rng = self._rng
        structure.fill_with_data()
        result = structure.recolor()
        graph.set_full_coloring(coloring)
        return int(result)


class ColorNRecolorStrategy(ColorStrategy):
    """Colours with one strategy, then tries to improve the result with a recolouring."""

    def __init__(
        self, color_strategy: ColorStrategy, recolor_strategy: RecolorStrategy
    ) -> None:
        self._color_strategy = color_strategy
        self._recolor_strategy = recolor_strategy

    def color(self, graph: Graph) -> int:
        max_k = self._color_strategy.color(graph)
        if self._recolor_strategy.recolor(graph):
            max_k = max(graph.full_coloring(), default=0)
        return max_k