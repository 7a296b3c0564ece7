# dvfsqueue

Tools for studying a multi-server queue whose servers change speed level
(P-state) with the number of customers in the system. The package builds the
discrete-time Markov chain of the model, solves it for its stationary
distribution, and turns that distribution into performance and energy
figures. Closed-form birth-death models are included for comparison.

The queue model (`dvfsqueue.model.PalierModel`) has 10 servers, a buffer of
90 customers and six speed levels with service rates 1, 1.8, 2, 2.2, 2.4 and
2.6. Five thresholds on the number of customers decide which level is active.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## File formats

A model called `model` is described by plain-text files:

- `model.sz` – number of transitions, number of reachable states, number of
  state components, one per line.
- `model.cd` – one line per state: its number followed by its components.
- `model.Rii` – the transition matrix stored by rows: for each state, its
  number, its degree, then pairs of probability and destination state.
- `model.pi` – the stationary distribution, one probability per line.

## Typical workflow

Generate the chain for an arrival rate and five level thresholds. The command
refuses to run if `model.cd`, `model.Rii` or `model.sz` already exists:

```
dvfsqueue-generate -f model 30 15 30 45 60 75
```

Solve it with the dense GTH algorithm (the suffix must start with `R`); the
elapsed time is appended to `GTH.time`:

```
dvfsqueue-gth -f model Rii
```

or with the sparse GTH solver, which reads `model.Rii` and appends its time
to `SPARSE-GTH.time`:

```
dvfsqueue-sparse-gth -f model
```

To use the power method, first convert the matrix to column storage, then
solve (the suffix must start with `C`). The iteration starts from the uniform
vector and runs until the summed relative change falls below 1e-15:

```
dvfsqueue-convert model.Rii Cuu
dvfsqueue-power -f model Cuu
```

`dvfsqueue-convert` accepts any pair of formats `{R|C}{i|d|u}{i|d|u}`: row or
column storage, then the ordering of the lines and of the entries within a
line (increasing, decreasing, or unordered, which is written increasing).

Per-component marginal distributions (`model.marginale.0.pi`) and a TGF
graph of the chain (`model.tgf`):

```
dvfsqueue-marginal -f model
dvfsqueue-tgf -f model
```

Reorder the states of a two-component chain by decreasing difference between
its components, and write `model-reordre.sz`, `model-reordre.cd` and
`model-reordre.Rii`:

```
dvfsqueue-reorder model
```

## Analytical models

- `dvfsqueue-mmc LAMBDA` – M/M/c queue with 20 servers at the third speed
  level. Writes the distribution to `Dist_Stat.PI` and appends the mean
  number of customers, response time and mean power to
  `File_Infini.resultats`.
- `dvfsqueue-two-level` – infinite birth-death queue with 20 servers that
  switches from the third to the fifth level above 10 customers, swept over
  odd arrival rates up to the capacity; results go to `File_Infini.resultats`.
  `dvfsqueue.two_level` also offers `best_energy`, `best_delay` and
  `best_performance_per_watt`, which search the best threshold for every pair
  of levels.
- `dvfsqueue-finite-levels S1 S2 S3 S4 S5` – queue with 20 servers, a buffer
  of 80 and six levels separated by the five thresholds, swept over odd
  arrival rates; results go to `File_Infini.resultats`, the last distribution
  to `Dist_stat`.

## Other tools

- `dvfsqueue-heatmap` – for every pair of queue lengths on two pools of 20
  servers, finds the split of their customers that minimises power plus a
  cost of 1 per migrated customer, writes `HeatMap.data`, and checks that no
  target state itself calls for a further migration.
- `dvfsqueue-ring [FILE]` – slotted-ring simulation of 18 stations on 150
  slots over 10 001 ticks, with inter-arrival times drawn from the
  distribution in `FILE` (by default `test-ngreen-25-DAG.Conv.H.G.pi`, pairs
  of value and probability for 0 to 30). Writes `NbreMoyen.res`, `Delai.res`,
  `Remplissage.data`, `FctRepart1.data`, `FctRepart2.data` and appends to
  `MeanFilling.data`.

## Library use

```python
from dvfsqueue import rewards
from dvfsqueue.generator import generate_chain
from dvfsqueue.gth import gth_solve
from dvfsqueue.model import PalierModel

model = PalierModel(arrival_rate=30, thresholds=(15, 30, 45, 60, 75))
chain = generate_chain(model)
pi = gth_solve(dict(enumerate(chain.rows)), chain.size)

rewards.mean_customers(chain.states, pi)
rewards.response_time(30, chain.states, pi, model.buffer_size)
rewards.mean_energy(chain.states, pi, model.thresholds)
```

`generate_chain` also takes a `Scheme` to build `(I + P) / 2`, `(I + P²) / 2`
or `P²` instead of `P`, and raises `ValueError` if a row does not sum to one.
`write_chain` writes the `.cd`, `.Rii` and `.sz` files. Other solvers are
`dvfsqueue.sparse_gth.sparse_gth_solve` and `dvfsqueue.power.power_solve`.

## Limits

- The chain generator builds only the single-queue model of
  `PalierModel`, whose states have one component. `dvfsqueue-reorder` reads
  states with two components, so its input has to be produced by other means.
- Files are written as text for further processing; the package draws no
  graphs or plots itself.