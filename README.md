# fuzzyfold

Building blocks for nucleic acid secondary structures and their folding
kinetics:

- dot-bracket notation (`fuzzyfold.dotbracket`: `DotBracket`, `DotBracketVec`);
- pair tables for single strands (`fuzzyfold.pair_table.PairTable`) and for
  strand complexes (`fuzzyfold.multi_pair_table.MultiPairTable`);
- loop tables (`fuzzyfold.loop_table`: `LoopTable`, `Unpaired`, `Paired`);
- a Metropolis rate model (`fuzzyfold.rate_model.Metropolis`);
- a Gillespie simulation of base-pair addition and removal moves
  (`fuzzyfold.simulation.LoopStructureSSA`);
- macrostates (`fuzzyfold.macrostates.MacrostateRegistry`), time courses
  (`fuzzyfold.timeline.Timeline`) with JSON storage
  (`fuzzyfold.timeline_io`) and an occupancy plot
  (`fuzzyfold.plotting.plot_occupancy_over_time`);
- readers for FASTA-like sequence/structure input
  (`fuzzyfold.input_parsers`);
- a random sequence generator (`fuzzyfold.randseq`, command `ff-randseq`).

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Structures

```python
from fuzzyfold.dotbracket import DotBracketVec
from fuzzyfold.pair_table import PairTable
from fuzzyfold.multi_pair_table import MultiPairTable
from fuzzyfold.loop_table import LoopTable

pt = PairTable.from_string("((..))")
print(list(pt))                 # [5, 4, None, None, 1, 0]
print(pt.is_well_formed(1, 5))  # True

lt = LoopTable.from_pair_table(pt)
print(lt)                       # [0/1, 1/2, 2, 2, 1/2, 0/1]

dbv = DotBracketVec.from_string("(.).")
print(PairTable.from_dotbracket(dbv).to_dotbracket())   # (.).

mpt = MultiPairTable.from_string("((.+.))")
print(mpt.get_pair((0, 0)))     # (1, 2)
print(mpt.to_dotbracket())      # ((.+.))+
```

`DotBracketVec` is an immutable, hashable tuple of `DotBracket` tokens and
accepts `+` or `&` as a strand break. Malformed structures raise a subclass of
`StructureError` (itself a `ValueError`), such as `UnmatchedOpenError`,
`UnmatchedCloseError` or `InvalidTokenError`, from `fuzzyfold.errors`.

## Input files

A FASTA-like input holds an optional `>` header line, a sequence line and an
optional structure line. Only the first whitespace-separated token of the
sequence and structure lines is used.

```python
from fuzzyfold.input_parsers import read_fasta_like_string, read_eval_string, ruler

header, sequence, structure = read_fasta_like_string(">test\nACGU\n....\n")
print(ruler(10))   # 0....,....1
```

`read_fasta_like*` fills in an open chain when the structure line is missing;
`read_eval*` raises `InputError` instead. Both raise `InputError` if the
sequence is missing or the lengths differ. The `*_string`, `*_file` and
`*_input` variants read from a string, a file, or (for `*_input` given `"-"`)
standard input.

## Rates and output times

```python
from fuzzyfold.rate_model import Metropolis
from fuzzyfold.parameters import TimelineParameters

rates = Metropolis(37.0, 1e6)      # temperature in Celsius, k0 > 0
print(rates.rate(0))               # 1000000.0; downhill moves run at k0

params = TimelineParameters(t_ext=1e-5, t_end=1.0, t_lin=1, t_log=20)
params.validate()                  # ValueError if inconsistent
times = params.get_output_times()  # 0, linear points up to t_ext, log points up to t_end
```

Energy changes are given as integers in dcal/mol.

## Stochastic simulation

`LoopStructureSSA(loopstructure, ratemodel)` runs on any object that provides
the `LoopStructureLike` interface from `fuzzyfold.simulation`:
`get_add_neighbors_per_loop()`, `get_del_neighbors()`, `loop_lookup()`,
`apply_add_move(i, j)`, `apply_del_move(i, j)` and `energy()`. Moves are
`(i, j, delta_e)` triples.

`simulate(rng, t_max, callback)` takes a `random.Random` and, before every
move, calls `callback(t, tinc, flux, loopstructure)` with the current time,
the sampled waiting time and the total flux. Fluxes are kept in log space; the
helpers `log_add`, `log_sub` and `log_sum_exp` are available too.

## Macrostates and time courses

A macrostate file holds a `>name` header, the sequence, and one dot-bracket
structure per line; blank lines and `#` comments are skipped.

```python
import random
from fuzzyfold.macrostates import MacrostateRegistry
from fuzzyfold.timeline import Timeline
from fuzzyfold.timeline_io import write_file, from_file
from fuzzyfold.plotting import plot_occupancy_over_time

registry = MacrostateRegistry.from_files(["hairpin.txt"], "GGGAAACCC")
timeline = Timeline(times, registry)
timeline.assign_structure(0, structure)   # classified by exact structure match
print(timeline)                           # occupancy table per time point

write_file(timeline, "timeline.json")
restored = from_file("timeline.json", times, registry)

plot_occupancy_over_time(timeline, "occupancy.svg", 1e-5, 1.0)
```

Index 0 of a `MacrostateRegistry` is always `Unassigned`; structures found in
no macrostate are counted there, and a structure found in more than one
raises `MacrostateError`. Passing `energy_fn(sequence, pair_table)` (returning
dcal/mol) and `temperature` to `from_files` gives every macrostate its
ensemble free energy in kcal/mol. `from_file` raises a `TimelineError`
subclass if the number of time points, a time, or a macrostate name does not
match. The plot draws only macrostates that reach an occupancy of 0.1 and
saves the figure with matplotlib in the format of the file name's extension.

## Random sequences

```
ff-randseq --alphabet A,C,G,U --length 50 --num 3
```

The defaults are the alphabet `A,C,G,U`, length 50 and one sequence.

## What is not included

- There is no nearest-neighbor free energy model: no parameter files, no
  evaluation of loop or structure energies. Macrostate energies come from an
  energy function you supply.
- There is no concrete loop decomposition class; `LoopStructureSSA` needs an
  object implementing `LoopStructureLike`, which you provide.
- Consequently there are no commands for energy evaluation, single
  trajectories or time-course simulations; `ff-randseq` is the only command.