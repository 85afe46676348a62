"""Undirected graphs with vertex colourings, and branch records for the solver."""

from __future__ import annotations

import copy
import json
import struct
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Sequence

Edges = list[list[bool]]

_BRANCH_HEADER = struct.Struct("<iHiQ")


def get_neighbours(edges: Sequence[Sequence[bool]], vertex_index: int) -> list[int]:
    """Return the indices adjacent to ``vertex_index`` in an adjacency matrix."""
    row = islice(edges[vertex_index], len(edges))
    return [index for index, adjacent in enumerate(row) if adjacent]


def _symmetry_error(edges: Sequence[Sequence[bool]]) -> str | None:
    size = len(edges)
    for i, row in enumerate(edges):
        if len(row) != size:
            return f"Invalid size at row {i}; expected: {size} actual: {len(row)}"
        for j, (value, other_row) in enumerate(zip(row[:i], edges[:i])):
            mirrored = other_row[i]
            if value != mirrored:
                return (
                    f"Non symmetric values edges[{i}][{j}]={int(value)} "
                    f"vs edges[{j}][{i}]={int(mirrored)}"
                )
    return None


def is_symmetric(edges: Sequence[Sequence[bool]]) -> bool:
    """Tell whether ``edges`` is a square, symmetric adjacency matrix."""
    return _symmetry_error(edges) is None


class Graph:
    """An undirected simple graph on positive integer vertices, with a colouring.

    Vertices are kept in an explicit order that the sorting methods change.
    Colour 0 means "not coloured"; real colours start at 1.
    """

    def __init__(self, num_vertices: int = 0) -> None:
        if num_vertices < 0:
            raise ValueError("number of vertices must not be negative")
        self._adjacency: dict[int, set[int]] = {
            vertex: set() for vertex in range(1, num_vertices + 1)
        }
        self._order: list[int] = list(self._adjacency)
        self._colors: list[int] = [0] * (num_vertices + 1)

    def _check(self, vertex: int) -> None:
        if vertex not in self._adjacency:
            raise KeyError(f"unknown vertex {vertex}")

    def add_vertex(self) -> int:
        """Add a new vertex after the highest one and return it."""
        vertex = self.highest_vertex() + 1
        self._adjacency[vertex] = set()
        self._order.append(vertex)
        self._colors.extend([0] * (vertex + 1 - len(self._colors)))
        return vertex

    def add_edge(self, v: int, w: int) -> None:
        """Connect ``v`` and ``w``; self-loops are ignored."""
        self._check(v)
        self._check(w)
        if v == w:
            return
        self._adjacency[v].add(w)
        self._adjacency[w].add(v)

    def remove_edge(self, v: int, w: int) -> None:
        """Disconnect ``v`` and ``w`` if they are connected."""
        self._check(v)
        self._check(w)
        self._adjacency[v].discard(w)
        self._adjacency[w].discard(v)

    def has_edge(self, v: int, w: int) -> bool:
        return w in self._adjacency.get(v, ())

    def neighbours(self, vertex: int) -> list[int]:
        """Return the neighbours of ``vertex`` in increasing order."""
        self._check(vertex)
        return sorted(self._adjacency[vertex])

    def vertices(self) -> list[int]:
        """Return the vertices in their current order."""
        return list(self._order)

    def set_vertices(self, order: Iterable[int]) -> None:
        """Reorder the vertices; ``order`` must be a permutation of them."""
        new_order = list(order)
        if len(new_order) != len(self._order) or set(new_order) != set(self._adjacency):
            raise ValueError("new order must be a permutation of the graph's vertices")
        self._order = new_order

    def num_vertices(self) -> int:
        return len(self._adjacency)

    def num_edges(self) -> int:
        return sum(len(adjacent) for adjacent in self._adjacency.values()) // 2

    def highest_vertex(self) -> int:
        """Return the largest vertex identifier, or 0 for an empty graph."""
        return max(self._adjacency, default=0)

    def degree(self, vertex: int) -> int:
        self._check(vertex)
        return len(self._adjacency[vertex])

    def ex_degree(self, vertex: int) -> int:
        """Return the sum of the degrees of the neighbours of ``vertex``."""
        self._check(vertex)
        return sum(len(self._adjacency[other]) for other in self._adjacency[vertex])

    def full_degrees(self) -> list[int]:
        """Return the degrees indexed by vertex, 0 for absent identifiers."""
        return [
            len(self._adjacency.get(vertex, ()))
            for vertex in range(self.highest_vertex() + 1)
        ]

    def sort_by_degree(self, descending: bool = True) -> None:
        """Stably sort the vertex order by degree."""
        self._order.sort(key=lambda vertex: len(self._adjacency[vertex]), reverse=descending)

    def sort_by_color(self, descending: bool = True) -> None:
        """Stably sort the vertex order by colour."""
        self._order.sort(key=lambda vertex: self._colors[vertex], reverse=descending)

    def color(self, vertex: int) -> int:
        self._check(vertex)
        return self._colors[vertex]

    def coloring(self) -> list[int]:
        """Return the colours of the vertices in their current order."""
        return [self._colors[vertex] for vertex in self._order]

    def full_coloring(self) -> list[int]:
        """Return the colours indexed by vertex identifier."""
        return list(self._colors)

    def set_full_coloring(self, coloring: Sequence[int]) -> None:
        """Set the colouring from a sequence indexed by vertex identifier."""
        size = self.highest_vertex() + 1
        if len(coloring) < size:
            raise ValueError(f"coloring needs at least {size} entries, got {len(coloring)}")
        self._colors = list(coloring[:size])

    def clone(self) -> Graph:
        return copy.deepcopy(self)

    def serialize(self) -> str:
        edges = sorted(
            (v, w) for v, adjacent in self._adjacency.items() for w in adjacent if v < w
        )
        return json.dumps(
            {"vertices": self._order, "edges": edges, "coloring": self._colors}
        )

    @classmethod
    def deserialize(cls, data: str) -> Graph:
        """Rebuild a graph from the text produced by :meth:`serialize`."""
        try:
            payload = json.loads(data)
            order = [int(vertex) for vertex in payload["vertices"]]
            edges = [(int(v), int(w)) for v, w in payload["edges"]]
            colors = [int(color) for color in payload["coloring"]]
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f"malformed graph data: {error}") from error
        graph = cls()
        graph._adjacency = {vertex: set() for vertex in order}
        graph._order = order
        if len(graph._adjacency) != len(order):
            raise ValueError("malformed graph data: repeated vertices")
        for v, w in edges:
            graph.add_edge(v, w)
        if len(colors) != graph.highest_vertex() + 1:
            raise ValueError("malformed graph data: coloring size does not match vertices")
        graph._colors = colors
        return graph

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self._order == other._order
            and self._adjacency == other._adjacency
            and self._colors == other._colors
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Graph(vertices={self.num_vertices()}, edges={self.num_edges()})"


@dataclass
class Branch:
    """A subproblem of the branch-and-bound search, ordered by depth."""

    g: Graph
    lb: int = 0
    ub: int = 0
    depth: int = 0

    def __lt__(self, other: Branch) -> bool:
        return self.depth < other.depth

    def __copy__(self) -> Branch:
        return Branch(self.g.clone(), self.lb, self.ub, self.depth)

    def serialize(self) -> bytes:
        """Pack the bounds, depth and graph into a binary record."""
        graph_data = self.g.serialize().encode("utf-8")
        try:
            header = _BRANCH_HEADER.pack(self.lb, self.ub, self.depth, len(graph_data))
        except struct.error as error:
            raise ValueError(f"branch fields out of range: {error}") from error
        return header + graph_data

    @classmethod
    def deserialize(cls, buffer: bytes) -> Branch:
        """Rebuild a branch from the bytes produced by :meth:`serialize`."""
        buffer = bytes(buffer)
        if len(buffer) < _BRANCH_HEADER.size:
            raise ValueError("buffer too short for a branch header")
        lb, ub, depth, size = _BRANCH_HEADER.unpack_from(buffer)
        graph_data = buffer[_BRANCH_HEADER.size:_BRANCH_HEADER.size + size]
        if len(graph_data) < size:
            raise ValueError("buffer too short for the branch graph")
        return cls(Graph.deserialize(graph_data.decode("utf-8")), lb, ub, depth)