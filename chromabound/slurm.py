"""Submit every benchmark instance of a difficulty class as a SLURM batch job."""

from __future__ import annotations

import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import Sequence

SCRIPT_NAME = "run_all_instances.slurm"


class Difficulty(Enum):
    """Benchmark classes, each with its own cluster allocation."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


_EXPECTED: dict[Difficulty, dict[str, int]] = {
    Difficulty.EASY: {
        "anna.col": 11,
        "david.col": 11,
        "fpsol2.i.1.col": 65,
        "fpsol2.i.2.col": 30,
        "fpsol2.i.3.col": 30,
        "games120.col": 9,
        "homer.col": 13,
        "huck.col": 11,
        "inithx.i.1.col": 54,
        "inithx.i.2.col": 31,
        "inithx.i.3.col": 31,
        "jean.col": 10,
        "miles250.col": 8,
        "miles500.col": 20,
        "miles750.col": 31,
        "miles1000.col": 42,
        "miles1500.col": 73,
        "myciel3.col": 4,
        "myciel4.col": 5,
        "myciel5.col": 6,
        "myciel6.col": 7,
        "myciel7.col": 8,
        "zeroin.i.1.col": 49,
        "zeroin.i.2.col": 30,
        "zeroin.i.3.col": 30,
    },
    Difficulty.MEDIUM: {
        "queen5_5.col": 5,
        "queen6_6.col": 7,
        "queen7_7.col": 7,
    },
    Difficulty.HARD: {
        "queen8_8.col": 9,
        "queen8_12.col": 12,
        "queen9_9.col": 10,
        "queen11_11.col": 11,
        "queen13_13.col": 13,
        "le450_5a.col": 5,
        "le450_5b.col": 5,
        "le450_5c.col": 5,
        "le450_5d.col": 5,
        "le450_15a.col": 15,
        "le450_15b.col": 15,
        "le450_15c.col": 15,
        "le450_15d.col": 15,
        "le450_25a.col": 25,
        "le450_25b.col": 25,
        "le450_25c.col": 25,
        "le450_25d.col": 25,
        "mulsol.i.1.col": 49,
        "mulsol.i.3.col": 31,
        "mulsol.i.4.col": 31,
        "mulsol.i.5.col": 31,
    },
}

# nodes, wall-clock limit, solver timeout in seconds
_ALLOCATION: dict[Difficulty, tuple[int, str, int]] = {
    Difficulty.EASY: (1, "00:15:00", 600),
    Difficulty.MEDIUM: (8, "04:00:00", 10000),
    Difficulty.HARD: (64, "04:00:00", 10000),
}

_FLAGS = {
    "--run_easy": Difficulty.EASY,
    "--run_medium": Difficulty.MEDIUM,
    "--run_hard": Difficulty.HARD,
}


def expected_results(difficulty: Difficulty) -> dict[str, int]:
    """Return the known chromatic numbers of the instances of ``difficulty``."""
    return dict(_EXPECTED[difficulty])


def output_name(instance: str) -> str:
    """Return the result file name: the last three characters replaced by ``_output.txt``."""
    return instance[:-3] + "_output.txt"


def job_script(difficulty: Difficulty, instance: str) -> str:
    """Return the batch script that solves ``instance`` with the allocation of ``difficulty``."""
    nodes, wall_time, timeout = _ALLOCATION[difficulty]
    lines = [
        "#!/bin/bash ",
        "#SBATCH --job-name=team2_mpi_branch_n_bound    # Job name",
        f"#SBATCH --nodes={nodes}                        # Number of nodes",
        "#SBATCH --ntasks-per-node=8              # MPI tasks per node",
        "#SBATCH --cpus-per-task=4               # Cores per MPI task (increase if CPU-BOUND)",
        f"#SBATCH --time={wall_time}                  # Time limit (HH:MM:SS)",
        "#SBATCH --partition=cpu                  # Replace with actual partition",
        "#SBATCH --output=output_mpi.txt           # Standard output file",
        "#SBATCH --error=error_mpi.txt             # Standard error file",
        "",
        f"srun run_instance {instance} --timeout={timeout} --sol_gather_period=20 "
        f"--balanced=1 --output={output_name(instance)}",
    ]
    return "\n".join(lines) + "\n"


def submit(script_path: str | Path) -> str:
    """Pass ``script_path`` to ``sbatch`` and return what it printed."""
    try:
        completed = subprocess.run(
            ["sbatch", str(script_path)], capture_output=True, text=True
        )
    except OSError as error:
        raise RuntimeError(f"could not start sbatch: {error}") from error
    return completed.stdout


def main(argv: Sequence[str] | None = None) -> int:
    """Submit one job per instance of every difficulty selected on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    selected: list[Difficulty] = []
    for arg in args:
        difficulty = _FLAGS.get(arg)
        if difficulty is None:
            print(f"Error: Invalid argument format {arg}.", file=sys.stderr)
            return 1
        if difficulty not in selected:
            selected.append(difficulty)

    script_path = Path(SCRIPT_NAME)
    for difficulty in Difficulty:
        if difficulty not in selected:
            continue
        for instance in _EXPECTED[difficulty]:
            script_path.write_text(job_script(difficulty, instance))
            print(submit(script_path))
    return 0