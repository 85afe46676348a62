"""Heuristics that find large cliques, giving lower bounds on the chromatic number."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from chromabound.graph import Graph

_MAX_ITERATIONS = 100


class CliqueStrategy(ABC):
    """Finds a feasible clique of a graph."""

    @abstractmethod
    def find_clique(self, graph: Graph) -> int:
        """Return the size of a clique found in ``graph``."""

    @abstractmethod
    def last_clique(self) -> list[int]:
        """Return the vertices of the last clique found."""


class StubCliqueStrategy(CliqueStrategy):
    """Trivial strategy: an edge is a clique of two, a vertex a clique of one."""

    def find_clique(self, graph: Graph) -> int:
        return 2 if graph.num_edges() >= 1 else 1

    def last_clique(self) -> list[int]:
        return []


class FastCliqueStrategy(CliqueStrategy):
    """Clique strategy backed by :class:`FastWClq`."""

    def __init__(self, k: int = 5) -> None:
        self._k = k
        self._solver: FastWClq | None = None

    def find_clique(self, graph: Graph) -> int:
        self._solver = FastWClq(graph, self._k)
        return len(self._solver.find_max_weight_clique())

    def last_clique(self) -> list[int]:
        if self._solver is None:
            return []
        return self._solver.max_clique()


class FastWClq:
    """Greedy clique construction with Best-from-Multiple-Selection sampling."""

    def __init__(self, graph: Graph, k: int = 5, rng: random.Random | None = None) -> None:
        if k < 1:
            raise ValueError("sample size k must be at least 1")
        self._graph = graph
        self._k = k
        self._rng = rng if rng is not None else random.Random()
        self._max_clique: list[int] = []

    def find_max_weight_clique(self) -> list[int]:
        """Build cliques until the reduction step leaves nothing to improve."""
        best: list[int] = []
        for _ in range(_MAX_ITERATIONS + 1):
            clique = self._construct_clique()
            if len(clique) > len(best):
                best = clique
            if len(self._reduce(best)) <= 1:
                break
        self._max_clique = best
        return list(best)

    def max_clique(self) -> list[int]:
        return list(self._max_clique)

    def _reduce(self, best: list[int]) -> list[int]:
        reduced: list[int] = []
        vertices = self._graph.vertices()
        for vertex in vertices:
            if 1 + self._graph.ex_degree(vertex) > len(best):
                reduced.append(vertex)
            if len(reduced) <= 1:
                return []
        if len(reduced) == len(vertices):
            return []
        return reduced

    def _construct_clique(self) -> list[int]:
        clique: list[int] = []
        candidates = self._graph.vertices()
        while candidates:
            vertex = self._choose_vertex(candidates)
            clique.append(vertex)
            if len(candidates) == 1:
                break
            candidates = [u for u in candidates if self._graph.has_edge(vertex, u)]
        return clique

    def _benefit(self, vertex: int) -> int:
        return self._graph.degree(vertex) + self._graph.ex_degree(vertex) // 2

    def _choose_vertex(self, candidates: list[int]) -> int:
        if len(candidates) <= self._k:
            pool = candidates
        else:
            picked = sorted(self._rng.sample(range(len(candidates)), self._k))
            pool = [candidates[index] for index in picked]
        return max(pool, key=self._benefit)