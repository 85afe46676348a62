"""DSatur colouring: always colour the vertex whose neighbours use the most colours."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from chromabound.color import ColorStrategy, greedy_find_color
from chromabound.graph import Graph


@dataclass(eq=False)
class DSaturItem:
    """A node of one saturation-degree list of a :class:`DSaturList`."""

    sat_degree: int
    degree: int
    vertex: int
    next: DSaturItem | None = field(default=None, repr=False)
    prev: DSaturItem | None = field(default=None, repr=False)


class DSaturList:
    """Vertices bucketed by saturation degree, each bucket sorted by ascending degree.

    The highest vertex is the one with the largest degree among those with the
    largest saturation degree; the lowest vertex is the one with the smallest
    degree among those with the smallest saturation degree.
    """

    def __init__(self, graph: Graph) -> None:
        degrees = graph.full_degrees()
        vertices = sorted(graph.vertices(), key=lambda vertex: degrees[vertex])

        self._vertex_to_item: dict[int, DSaturItem] = {}
        self._neighbour_colors: defaultdict[int, set[int]] = defaultdict(set)
        self._heads: list[DSaturItem | None] = [None]
        self._tails: list[DSaturItem | None] = [None]
        self._last_degree = -1

        for vertex in vertices:
            item = DSaturItem(0, degrees[vertex], vertex, prev=self._tails[0])
            if self._tails[0] is None:
                self._heads[0] = item
            else:
                self._tails[0].next = item
            self._tails[0] = item
            self._vertex_to_item[vertex] = item
        if vertices:
            self._last_degree = 0

    def __len__(self) -> int:
        return len(self._vertex_to_item)

    def _item(self, vertex: int) -> DSaturItem:
        try:
            return self._vertex_to_item[vertex]
        except KeyError:
            raise KeyError(f"vertex {vertex} is not in the list") from None

    def _unlink(self, item: DSaturItem) -> None:
        sat = item.sat_degree
        if item.prev is None:
            self._heads[sat] = item.next
        else:
            item.prev.next = item.next
        if item.next is None:
            self._tails[sat] = item.prev
        else:
            item.next.prev = item.prev
        item.prev = item.next = None
        if self._heads[sat] is None and sat == self._last_degree:
            while self._last_degree >= 0 and self._heads[self._last_degree] is None:
                self._last_degree -= 1

    def _link(self, item: DSaturItem, sat: int, after_equal: bool = False) -> None:
        if sat >= len(self._heads):
            missing = sat + 1 - len(self._heads)
            self._heads.extend([None] * missing)
            self._tails.extend([None] * missing)
        prev: DSaturItem | None = None
        current = self._heads[sat]
        while current is not None and (
            current.degree < item.degree
            or (after_equal and current.degree == item.degree)
        ):
            prev, current = current, current.next
        item.prev, item.next = prev, current
        if prev is None:
            self._heads[sat] = item
        else:
            prev.next = item
        if current is None:
            self._tails[sat] = item
        else:
            current.prev = item
        item.sat_degree = sat
        self._last_degree = max(self._last_degree, sat)

    def add_neighbour_color(self, vertex: int, color: int) -> None:
        """Record that a neighbour of ``vertex`` has ``color``, raising its saturation if new."""
        item = self._item(vertex)
        colors = self._neighbour_colors[item.vertex]
        if color not in colors:
            colors.add(color)
            self.increase_sat_degree(vertex)

    def _lowest_item(self) -> DSaturItem | None:
        for head in self._heads[: self._last_degree + 1]:
            if head is not None:
                return head
        return None

    def lowest_sat_degree(self) -> int:
        """Return the saturation degree of :meth:`lowest_vertex`, or -1 if empty."""
        item = self._lowest_item()
        return -1 if item is None else item.sat_degree

    def lowest_vertex(self) -> int | None:
        """Return the lowest vertex, or None if the list is empty."""
        item = self._lowest_item()
        return None if item is None else item.vertex

    def pop_lowest_vertex(self) -> int:
        """Remove and return the lowest vertex."""
        item = self._lowest_item()
        if item is None:
            raise IndexError("pop from an empty DSaturList")
        self._unlink(item)
        del self._vertex_to_item[item.vertex]
        return item.vertex

    def highest_sat_degree(self) -> int:
        """Return the largest saturation degree present, or -1 if empty."""
        return self._last_degree

    def highest_vertex(self) -> int | None:
        """Return the highest vertex, or None if the list is empty."""
        if self._last_degree < 0:
            return None
        tail = self._tails[self._last_degree]
        return None if tail is None else tail.vertex

    def pop_highest_vertex(self) -> int:
        """Remove and return the highest vertex."""
        if self._last_degree < 0:
            raise IndexError("pop from an empty DSaturList")
        item = self._tails[self._last_degree]
        assert item is not None
        self._unlink(item)
        del self._vertex_to_item[item.vertex]
        return item.vertex

    def is_empty(self) -> bool:
        return self._last_degree < 0

    def __getitem__(self, sat_degree: int) -> list[DSaturItem]:
        """Return the items with the given saturation degree, in list order."""
        if sat_degree < 0:
            raise IndexError("saturation degree must not be negative")
        items: list[DSaturItem] = []
        current = self._heads[sat_degree] if sat_degree < len(self._heads) else None
        while current is not None:
            items.append(current)
            current = current.next
        return items

    def increase_sat_degree(self, vertex: int, increment: int = 1) -> None:
        """Move ``vertex`` to the list ``increment`` saturation degrees higher."""
        item = self._item(vertex)
        new_sat = item.sat_degree + increment
        if new_sat < 0:
            raise ValueError(f"saturation degree of {vertex} would become negative")
        if increment == 0:
            return
        self._unlink(item)
        self._link(item, new_sat)

    def decrease_sat_degree(self, vertex: int, decrement: int = 1) -> None:
        """Move ``vertex`` to the list ``decrement`` saturation degrees lower."""
        self.increase_sat_degree(vertex, -decrement)

    def increase_degree(self, vertex: int, increment: int = 1) -> None:
        """Raise the degree of ``vertex`` and keep its list sorted."""
        if increment < 0:
            raise ValueError("increment must not be negative")
        item = self._item(vertex)
        if increment == 0:
            return
        sat = item.sat_degree
        self._unlink(item)
        item.degree += increment
        self._link(item, sat)

    def decrease_degree(self, vertex: int, decrement: int = 1) -> None:
        """Lower the degree of ``vertex`` and keep its list sorted."""
        if decrement < 0:
            raise ValueError("decrement must not be negative")
        item = self._item(vertex)
        new_degree = item.degree - decrement
        if new_degree < 0:
            raise ValueError(f"degree of {vertex} would become negative")
        if decrement == 0:
            return
        sat = item.sat_degree
        self._unlink(item)
        item.degree = new_degree
        self._link(item, sat, after_equal=True)


class DSaturColorStrategy(ColorStrategy):
    """Greedy colouring that always picks the most saturated, then highest-degree, vertex."""

    def color(self, graph: Graph) -> int:
        coloring = [0] * (graph.highest_vertex() + 1)
        pending = DSaturList(graph)
        max_k = 0
        while not pending.is_empty():
            vertex = pending.pop_highest_vertex()
            selected = greedy_find_color(graph, vertex, coloring, max_k + 1)
            coloring[vertex] = selected
            max_k = max(max_k, selected)
            for neighbour in graph.neighbours(vertex):
                if coloring[neighbour] == 0:
                    pending.add_neighbour_color(neighbour, selected)
        graph.set_full_coloring(coloring)
        return max_k