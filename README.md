# chromabound

Building blocks for finding the chromatic number of a graph: a small graph
type, greedy and DSatur colouring, a swap-based recolouring step that tries
to drop the highest colour, and a heuristic clique finder that gives a lower
bound. It also has helpers for checking and reporting a colouring, and a
command that submits benchmark instances to a SLURM cluster.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Graphs

`chromabound.graph.Graph(n)` is an undirected simple graph on vertices
`1..n`. Vertices can be added with `add_vertex()`, edges with `add_edge` and
`remove_edge` (self-loops are ignored). The vertex order returned by
`vertices()` can be changed with `set_vertices`, `sort_by_degree` and
`sort_by_color`. Colours are stored per vertex; `full_coloring()` and
`set_full_coloring()` use a list indexed by vertex identifier, and
`coloring()` lists the colours in the current vertex order. Colour 0 means
"not coloured".

`Graph.serialize()` / `Graph.deserialize()` turn a graph into JSON text and
back. `chromabound.graph.Branch` holds a graph with a lower bound, an upper
bound and a depth; branches compare by depth, and `Branch.serialize()` /
`Branch.deserialize()` pack them into a binary record.

For adjacency matrices, `get_neighbours(edges, vertex_index)` lists the
adjacent indices and `is_symmetric(edges)` checks the matrix is square and
symmetric.

## Colouring a graph

```python
from chromabound.graph import Graph
from chromabound.dsatur import DSaturColorStrategy
from chromabound.report import check_coloring

graph = Graph(5)
graph.add_edge(1, 2)
graph.add_edge(2, 3)
graph.add_edge(1, 3)
graph.add_edge(3, 4)

highest = DSaturColorStrategy().color(graph)
print(highest, graph.full_coloring())
assert check_coloring(graph)
```

Every colour strategy sets the colouring on the graph and returns the highest
colour it used.

- `chromabound.color.GreedyColorStrategy`: sorts the vertices by descending
  degree, then gives each the lowest colour its neighbours leave free
  (`greedy_find_color`).
- `chromabound.dsatur.DSaturColorStrategy`: always colours next the vertex
  whose neighbours already use the most distinct colours, breaking ties by
  the highest degree. It is built on `DSaturList`, which keeps the vertices
  bucketed by saturation degree and sorted by degree within each bucket.
- `chromabound.recolor.ColorNRecolorStrategy`: runs a colour strategy, then a
  `RecolorStrategy`. `GreedySwapRecolorStrategy` tries to move every vertex of
  the highest colour to a lower one by moving its neighbours to other free
  colours; if it fails nothing is changed, and it does not try at all when
  the number of top-coloured vertices reaches its threshold (50 by default).
- `chromabound.color.InterleavedColorStrategy`: runs the first strategy a
  given number of times, then the second a given number of times, and so on.
- `chromabound.color.InactiveColorStrategy`: keeps the colouring already on the
  graph and reports its highest colour.

Strategies compose:

```python
from chromabound.color import GreedyColorStrategy, InterleavedColorStrategy
from chromabound.dsatur import DSaturColorStrategy
from chromabound.recolor import ColorNRecolorStrategy, GreedySwapRecolorStrategy

heavy = ColorNRecolorStrategy(DSaturColorStrategy(), GreedySwapRecolorStrategy())
mixed = InterleavedColorStrategy(GreedyColorStrategy(), heavy, 5, 2)
```

## Clique lower bound

```python
from chromabound.clique import FastCliqueStrategy

strategy = FastCliqueStrategy(5)
size = strategy.find_clique(graph)
members = strategy.last_clique()
```

`FastCliqueStrategy` uses `FastWClq`, which builds cliques greedily, choosing
each vertex as the best of `k` randomly sampled candidates, and stops when a
reduction step leaves nothing to improve (or after a fixed number of
rounds). `FastWClq` accepts a `random.Random` for reproducible runs. The size
of any clique is a lower bound on the chromatic number.
`StubCliqueStrategy` simply answers 2 if the graph has an edge, else 1.

## Checking and reporting results

`chromabound.report` provides:

- `parse_args(argv)`: parses `<file_name> [--timeout=N]
  [--sol_gather_period=N] [--balanced=0|1] [--color_strategy=N]
  [--output=FILE] [--logging=0|1]` into a `RunOptions` (defaults: timeout 60,
  period 10, balanced 1, colour strategy 0, output `output.txt`, logging 0),
  raising `ValueError` on a bad argument.
- `load_expected_results(path)`: reads whitespace-separated `name value`
  pairs.
- `expected_chromatic_number(results, file_name)`: looks up a result by the
  file's base name, raising `KeyError` if it is missing.
- `check_coloring(graph)`: true when every vertex is coloured and no two
  neighbours share a colour.
- `write_report(path, graph, file_name, timeout, n_proc, optimum_time)`:
  writes the instance name, vertex and edge counts, time limit, worker count,
  wall time (`> 10000` when `optimum_time` is -1 or None), the number of
  colours and one `vertex colour` line per vertex.

## Submitting benchmark instances

```
chromabound-submit --run_easy
chromabound-submit --run_medium --run_hard
```

For every instance of the chosen difficulty the command writes a job script
named `run_all_instances.slurm` in the current directory and hands it to
`sbatch`, printing what `sbatch` answers. Easy instances get one node, 15
minutes and a 600-second solver timeout; medium ones 8 nodes and hard ones 64
nodes, each with four hours and a 10000-second timeout. Any other argument is
an error. `expected_results(difficulty)` lists the known chromatic numbers of
each class, and `job_script(difficulty, instance)` returns the script text.

## What this package does not do

It has no exact branch-and-bound search for the chromatic number, no reader
for DIMACS graph files and no distributed (MPI) execution. The job scripts
written by `chromabound-submit` call a `run_instance` program, which this
package does not provide; likewise `parse_args` and `write_report` are
helpers only, and there is no command here that loads a graph, solves it and
writes a report.