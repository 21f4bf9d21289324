"""Timelines: macrostate occupancies collected at fixed output times."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from fuzzyfold.dotbracket import DotBracketVec
from fuzzyfold.macrostates import MacrostateRegistry


class TimelineError(ValueError):
    """A timeline could not be loaded or does not fit the expected layout."""


class TimepointCountMismatchError(TimelineError):
    def __init__(self, found: int, expected: int) -> None:
        self.found = found
        self.expected = expected
        super().__init__(f"Timeline file has {found} timepoints, expected {expected}")


class TimeMismatchError(TimelineError):
    def __init__(self, file_time: float, expected_time: float) -> None:
        self.file_time = file_time
        self.expected_time = expected_time
        super().__init__(f"Time mismatch: {file_time} vs {expected_time}")


class MacrostateNotFoundError(TimelineError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Macrostate '{name}' not found in registry")


@dataclass
class Timepoint:
    """Counts of trajectories per macrostate index at one time."""

    time: float
    ensemble: dict = field(default_factory=dict)
    counter: int = 0

    def add(self, macro_idx: int) -> None:
        self.ensemble[macro_idx] = self.ensemble.get(macro_idx, 0) + 1
        self.counter += 1

    def count(self, macro_idx: int) -> int:
        return self.ensemble.get(macro_idx, 0)

    def occupancy(self, macro_idx: int) -> float:
        """Fraction of observations in the macrostate; 0.0 if nothing was recorded."""
        if self.counter == 0:
            return 0.0
        return self.count(macro_idx) / self.counter

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(self.ensemble.items())


class Timeline:
    """One :class:`Timepoint` per output time, classified against a registry."""

    def __init__(self, times: Iterable[float], registry: MacrostateRegistry) -> None:
        self.registry = registry
        self.points = [Timepoint(t) for t in times]

    def __repr__(self) -> str:
        return f"Timeline(points={len(self.points)}, registry={self.registry!r})"

    def assign_structure(self, t_idx: int, structure: DotBracketVec) -> None:
        self.points[t_idx].add(self.registry.classify(structure))

    def point(self, t_idx: int) -> Timepoint:
        return self.points[t_idx]

    def __iter__(self) -> Iterator[Timepoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def merge(self, other: Timeline) -> None:
        """Add the counts of ``other``, which must share registry and time points."""
        if other.registry is not self.registry:
            raise ValueError("Cannot merge timelines with different registries")
        if len(self.points) != len(other.points):
            raise ValueError("Cannot merge timelines with different numbers of timepoints")
        for mine, theirs in zip(self.points, other.points):
            for macro_idx, count in theirs.items():
                mine.ensemble[macro_idx] = mine.ensemble.get(macro_idx, 0) + count
            mine.counter += theirs.counter

    def __str__(self) -> str:
        lines = [f"{'time':>13} {'id':>5} {'occupancy':>12} {'energy':>10} {'macrostate':>25}"]
        for tp in self.points:
            total = max(tp.counter, 1)

            def energy_key(entry: Tuple[int, int]) -> Tuple[int, float]:
                energy = self.registry.get(entry[0]).energy
                return (1, 0.0) if energy is None else (0, energy)

            for m_idx, count in sorted(tp.items(), key=energy_key):
                macrostate = self.registry.get(m_idx)
                energy = macrostate.energy
                energy_text = "N/A" if energy is None else f"{energy:10.2f}"
                lines.append(
                    f"{tp.time:13.9f} {m_idx:5} {count / total:12.8f} "
                    f"{energy_text:>10} {macrostate.name:>25}"
                )
        return "\n".join(lines) + "\n"