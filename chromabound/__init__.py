"""Graph colouring heuristics, clique lower bounds, result reporting and SLURM job submission."""

__version__ = "0.1.0"