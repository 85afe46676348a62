[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromabound"
version = "0.1.0"
description = "Graph colouring heuristics and clique bounds for chromatic-number search"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph-coloring",
    "chromatic-number",
    "dsatur",
    "clique",
    "recoloring",
    "slurm",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chromabound-submit = "chromabound.slurm:main"

[tool.hatch.build.targets.wheel]
packages = ["chromabound"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
