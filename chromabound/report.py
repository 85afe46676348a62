"""Command-line options, expected results, colouring checks and result reports of a run."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from chromabound.graph import Graph

USAGE = (
    "Usage: run_instance <file_name> [--timeout=<timeout>] [--sol_gather_period=<period>] "
    "[--balanced=<0|1>] [--output=<output_file>] [--logging=<0|1>]"
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_CORES_PER_WORKER = 4


@dataclass
class RunOptions:
    """Settings of a single solver run."""

    file_name: str
    timeout: int = 60
    sol_gather_period: int = 10
    balanced: int = 1
    color_strategy: int = 0
    output: str = "output.txt"
    logging: int = 0


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(text)
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(text)
    return value


def parse_args(argv: Sequence[str]) -> RunOptions:
    """Parse ``<file_name> [--key=value ...]``; raise ValueError on a bad argument."""
    if not argv:
        raise ValueError(USAGE)
    options = RunOptions(argv[0])
    integer_keys = {
        "--timeout": "timeout",
        "--sol_gather_period": "sol_gather_period",
        "--balanced": "balanced",
        "--color_strategy": "color_strategy",
        "--logging": "logging",
    }
    for arg in argv[1:]:
        key, sep, value = arg.partition("=")
        if not sep or not value:
            raise ValueError(f"Error: Invalid argument format {arg}.")
        if key == "--output":
            options.output = value
            continue
        attribute = integer_keys.get(key)
        if attribute is None:
            raise ValueError(f"Error: Unknown argument {arg}")
        try:
            number = _leading_int(value)
        except ValueError:
            raise ValueError(f"Error: Invalid value for argument {key}.") from None
        if key == "--timeout" and number <= 0:
            raise ValueError("Error: Timeout must be a positive integer.")
        if key == "--sol_gather_period" and number <= 0:
            raise ValueError("Error: Solution gathering period must be a positive integer.")
        setattr(options, attribute, number)
    return options


def load_expected_results(path: str | Path) -> dict[str, int]:
    """Read ``name value`` pairs, stopping at the first value that is not an integer."""
    tokens = Path(path).read_text().split()
    results: dict[str, int] = {}
    for key, value in zip(tokens[::2], tokens[1::2]):
        try:
            results[key] = _leading_int(value)
        except ValueError:
            break
    return results


def expected_chromatic_number(results: Mapping[str, int], file_name: str) -> int:
    """Look up the expected chromatic number by the base name of ``file_name``."""
    key = Path(file_name).name
    try:
        return results[key]
    except KeyError:
        raise KeyError(f"No expected result found for {key}.") from None


def check_coloring(graph: Graph) -> bool:
    """Tell whether every vertex is coloured and no two neighbours share a colour."""
    for vertex in graph.vertices():
        current = graph.color(vertex)
        if current == 0:
            return False
        if any(graph.color(neighbour) == current for neighbour in graph.neighbours(vertex)):
            return False
    return True


def write_report(
    path: str | Path,
    graph: Graph,
    file_name: str,
    timeout: int,
    n_proc: int,
    optimum_time: float | None,
) -> None:
    """Write the result report; an ``optimum_time`` of -1 or None marks a timeout."""
    timed_out = optimum_time is None or optimum_time == -1
    colors = graph.full_coloring()
    lines = [
        f"problem_instance_file_name {file_name}",
        "cmd line ",
        "solver version ",
        f"number_of_vertices {graph.num_vertices()}",
        f"number_of_edges: {graph.num_edges()}",
        f"time_limit_sec {timeout}",
        f"number_of_worker_processes {n_proc}",
        f"number_of_cores_per_worker {_CORES_PER_WORKER}",
    ]
    if timed_out:
        lines += ["wall_time_sec > 10000", "is_within_time_limit 0"]
    else:
        lines += [f"wall_time_sec {optimum_time:g}", "is_within_time_limit 1"]
    lines.append(f"number_of_colors {max(colors, default=0)}")
    lines += [f"{vertex} {colors[vertex]}" for vertex in graph.vertices()]
    Path(path).write_text("\n".join(lines) + "\n")