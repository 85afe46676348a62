import random

import pytest

from chromabound.color import ColorStrategy, GreedyColorStrategy
from chromabound.dsatur import DSaturColorStrategy
from chromabound.graph import Graph
from chromabound.recolor import (
    ColorNRecolorStrategy,
    GreedySwapRecolorStrategy,
    SwapRecolorStructure,
    VertexRecolorData,
)


def _graph(n, edges, coloring=None):
    graph = Graph(n)
    for v, w in edges:
        graph.add_edge(v, w)
    if coloring is not None:
        graph.set_full_coloring(coloring)
    return graph


def _is_valid(graph):
    for vertex in graph.vertices():
        color = graph.color(vertex)
        if color == 0:
            return False
        if any(graph.color(n) == color for n in graph.neighbours(vertex)):
            return False
    return True


def _random_graph(n, p, seed):
    rng = random.Random(seed)
    edges = [(i, j) for i in range(1, n + 1) for j in range(i + 1, n + 1) if rng.random() < p]
    return _graph(n, edges)


def test_path_without_swaps():
    graph = _graph(3, [(1, 2), (2, 3)], [0, 1, 2, 3])
    assert GreedySwapRecolorStrategy().recolor(graph) == 1
    assert graph.full_coloring() == [0, 1, 2, 1]
    assert _is_valid(graph)


def test_recolor_with_one_swap():
    graph = _graph(3, [(1, 2), (1, 3)], [0, 3, 1, 2])
    assert GreedySwapRecolorStrategy().recolor(graph) == 1
    assert graph.full_coloring() == [0, 1, 2, 2]
    assert _is_valid(graph)


def test_recolor_failure_keeps_coloring():
    original = [0, 3, 1, 2, 2, 1]
    graph = _graph(5, [(1, 2), (1, 3), (2, 4), (3, 5)], original)
    assert GreedySwapRecolorStrategy().recolor(graph) == 0
    assert graph.full_coloring() == original


def test_failure_deeper_in_recursion_restores_everything():
    original = [0, 3, 3, 2, 1, 2, 2, 1]
    graph = _graph(7, [(2, 3), (1, 4), (1, 5), (4, 6), (5, 7)], original)
    assert GreedySwapRecolorStrategy().recolor(graph) == 0
    assert graph.full_coloring() == original
    assert _is_valid(graph)


def test_threshold_stops_recoloring():
    original = [0, 2, 2, 1]
    graph = _graph(3, [(1, 3), (2, 3)], original)
    assert GreedySwapRecolorStrategy(threshold=2).recolor(graph) == 0
    assert graph.full_coloring() == original


def test_single_color_cannot_be_reduced():
    graph = _graph(2, [], [0, 1, 1])
    assert GreedySwapRecolorStrategy().recolor(graph) == 0
    assert graph.full_coloring() == [0, 1, 1]


def test_empty_graph_is_not_recolored():
    assert GreedySwapRecolorStrategy().recolor(Graph()) == 0


def test_structure_recolor_sorts_and_works():
    graph = _graph(3, [(1, 2), (1, 3)], [0, 3, 1, 2])
    coloring = graph.full_coloring()
    structure = SwapRecolorStructure(graph, coloring, 10)
    structure.fill_with_data()
    assert graph.vertices() == [1, 3, 2]
    assert structure.recolor() is True
    assert coloring == [0, 1, 2, 2]


@pytest.mark.parametrize("seed", range(8))
def test_dsatur_then_recolor_stays_valid(seed):
    graph = _random_graph(30, 0.3, seed)
    before = DSaturColorStrategy().color(graph)
    result = GreedySwapRecolorStrategy(rng=random.Random(seed)).recolor(graph)
    after = max(graph.full_coloring())
    assert _is_valid(graph)
    assert result in (0, 1)
    assert after == (before - 1 if result else before)


@pytest.mark.parametrize("seed", range(4))
def test_greedy_after_color_sort_then_recolor(seed):
    graph = _random_graph(25, 0.4, seed)
    DSaturColorStrategy().color(graph)
    GreedySwapRecolorStrategy(rng=random.Random(seed)).recolor(graph)
    graph.sort_by_color(False)
    max_k = GreedyColorStrategy().color(graph)
    assert _is_valid(graph)
    result = GreedySwapRecolorStrategy(rng=random.Random(seed)).recolor(graph)
    assert _is_valid(graph)
    assert max(graph.full_coloring()) == max_k - result


def test_vertex_data_single_choice():
    coloring = [0, 1, 1, 2]
    data = VertexRecolorData(2, coloring, 3, [1])
    assert data.current_color() == 1
    assert data.is_recolorable() is True
    assert data.recolor() is True
    assert coloring[2] == 2
    data.revert_color()
    assert coloring[2] == 1


def test_vertex_data_not_recolorable():
    coloring = [0, 1, 2, 1]
    data = VertexRecolorData(2, coloring, 3, [1, 3])
    assert data.is_recolorable() is False
    assert data.recolor() is False
    assert coloring[2] == 2


def test_vertex_data_without_neighbours_keeps_color():
    coloring = [0, 2]
    data = VertexRecolorData(1, coloring, 3)
    assert data.recolor() is True
    assert coloring == [0, 2]


def test_vertex_data_random_choice_is_free_color():
    coloring = [0, 1, 4]
    data = VertexRecolorData(1, coloring, 5, [2], random.Random(3))
    assert data.recolor() is True
    assert coloring[1] in (2, 3)


def test_assign_color_then_revert_restores_first_color():
    coloring = [0, 1]
    data = VertexRecolorData(1, coloring, 4, [])
    data.assign_color(2)
    data.assign_color(3)
    assert coloring[1] == 3
    data.revert_color()
    assert coloring[1] == 1
    data.revert_color()
    assert coloring[1] == 1


class _FixedColoring(ColorStrategy):
    def __init__(self, coloring):
        self._coloring = coloring

    def color(self, graph):
        graph.set_full_coloring(self._coloring)
        return max(self._coloring)


def test_color_n_recolor_reports_reduced_color():
    graph = _graph(3, [(1, 2), (1, 3)])
    strategy = ColorNRecolorStrategy(_FixedColoring([0, 3, 1, 2]), GreedySwapRecolorStrategy())
    assert strategy.color(graph) == 2
    assert graph.full_coloring() == [0, 1, 2, 2]


def test_color_n_recolor_keeps_color_on_failure():
    graph = _graph(5, [(1, 2), (1, 3), (2, 4), (3, 5)])
    strategy = ColorNRecolorStrategy(
        _FixedColoring([0, 3, 1, 2, 2, 1]), GreedySwapRecolorStrategy()
    )
    assert strategy.color(graph) == 3
    assert graph.full_coloring() == [0, 3, 1, 2, 2, 1]


def test_color_n_recolor_with_dsatur_is_valid():
    graph = _random_graph(20, 0.35, 11)
    expected_upper = DSaturColorStrategy().color(graph.clone())
    strategy = ColorNRecolorStrategy(DSaturColorStrategy(), GreedySwapRecolorStrategy())
    max_k = strategy.color(graph)
    assert _is_valid(graph)
    assert max_k == max(graph.full_coloring())
    assert max_k <= expected_upper