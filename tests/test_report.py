import pytest

from chromabound.color import GreedyColorStrategy
from chromabound.graph import Graph
from chromabound.report import (
    RunOptions,
    check_coloring,
    expected_chromatic_number,
    load_expected_results,
    parse_args,
    write_report,
)


def triangle():
    graph = Graph(3)
    graph.add_edge(1, 2)
    graph.add_edge(2, 3)
    graph.add_edge(1, 3)
    return graph


def test_parse_defaults():
    assert parse_args(["anna.col"]) == RunOptions("anna.col", 60, 10, 1, 0, "output.txt", 0)


def test_parse_all_options():
    options = parse_args([
        "g.col", "--timeout=30", "--sol_gather_period=5", "--balanced=0",
        "--color_strategy=2", "--output=out.txt", "--logging=1",
    ])
    assert options == RunOptions("g.col", 30, 5, 0, 2, "out.txt", 1)


def test_parse_integer_prefix():
    assert parse_args(["g.col", "--timeout=12abc"]).timeout == 12


def test_parse_requires_file_name():
    with pytest.raises(ValueError, match="Usage"):
        parse_args([])


@pytest.mark.parametrize(
    "arg, message",
    [
        ("--timeout=0", "Timeout must be a positive integer"),
        ("--sol_gather_period=-1", "Solution gathering period"),
        ("--timeout=abc", "Invalid value for argument --timeout"),
        ("--unknown=1", "Unknown argument --unknown=1"),
        ("--timeout", "Invalid argument format --timeout"),
        ("--timeout=", "Invalid argument format"),
    ],
)
def test_parse_errors(arg, message):
    with pytest.raises(ValueError, match=message):
        parse_args(["g.col", arg])


def test_load_expected_results(tmp_path):
    path = tmp_path / "expected_chi.txt"
    path.write_text("anna.col 11\nqueen5_5.col 5\nbroken.col x\nlater.col 3\n")
    assert load_expected_results(path) == {"anna.col": 11, "queen5_5.col": 5}


def test_load_expected_results_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_expected_results(tmp_path / "absent.txt")


def test_expected_chromatic_number_uses_base_name():
    assert expected_chromatic_number({"anna.col": 11}, "graphs_instances/anna.col") == 11


def test_expected_chromatic_number_missing():
    with pytest.raises(KeyError):
        expected_chromatic_number({"anna.col": 11}, "david.col")


def test_check_coloring_valid():
    graph = triangle()
    graph.set_full_coloring([0, 1, 2, 3])
    assert check_coloring(graph) is True


def test_check_coloring_uncoloured_vertex():
    graph = triangle()
    graph.set_full_coloring([0, 1, 2, 0])
    assert check_coloring(graph) is False


def test_check_coloring_conflict():
    graph = triangle()
    graph.set_full_coloring([0, 1, 1, 2])
    assert check_coloring(graph) is False


def test_greedy_coloring_passes_check():
    graph = triangle()
    GreedyColorStrategy().color(graph)
    assert check_coloring(graph) is True


def test_write_report_in_time(tmp_path):
    graph = Graph(3)
    graph.add_edge(1, 2)
    graph.set_full_coloring([0, 1, 2, 1])
    path = tmp_path / "out.txt"
    write_report(path, graph, "tiny.col", 60, 8, 1.5)
    assert path.read_text().splitlines() == [
        "problem_instance_file_name tiny.col",
        "cmd line ",
        "solver version ",
        "number_of_vertices 3",
        "number_of_edges: 1",
        "time_limit_sec 60",
        "number_of_worker_processes 8",
        "number_of_cores_per_worker 4",
        "wall_time_sec 1.5",
        "is_within_time_limit 1",
        "number_of_colors 2",
        "1 1",
        "2 2",
        "3 1",
    ]


def test_write_report_timeout(tmp_path):
    graph = triangle()
    graph.set_full_coloring([0, 3, 1, 2])
    graph.sort_by_color()
    path = tmp_path / "out.txt"
    write_report(path, graph, "tri.col", 10, 1, -1)
    lines = path.read_text().splitlines()
    assert lines[8:11] == [
        "wall_time_sec > 10000",
        "is_within_time_limit 0",
        "number_of_colors 3",
    ]
    assert lines[11:] == ["1 3", "3 2", "2 1"]