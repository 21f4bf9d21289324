"""Macrostates: named sets of secondary structures used to classify trajectories."""

from __future__ import annotations

import math
import os
from typing import Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union

from fuzzyfold.dotbracket import DotBracketVec
from fuzzyfold.errors import StructureError
from fuzzyfold.pair_table import PairTable
from fuzzyfold.rate_model import K0, KB

EnergyFunction = Callable[[str, PairTable], int]
PathLike = Union[str, "os.PathLike[str]"]


class MacrostateError(ValueError):
    """A macrostate file is malformed or a structure cannot be classified."""


class StructureRegistry:
    """An explicit, named collection of structures forming one macrostate."""

    def __init__(
        self,
        name: str,
        structures: Iterable[DotBracketVec] = (),
        energy: Optional[float] = None,
    ) -> None:
        self.name = name
        self.energy = energy
        self._pool: list[DotBracketVec] = []
        self._lookup: dict[DotBracketVec, int] = {}
        for index, structure in enumerate(structures):
            self._pool.append(structure)
            self._lookup[structure] = index

    def __repr__(self) -> str:
        return (
            f"StructureRegistry(name={self.name!r}, size={len(self._pool)}, "
            f"energy={self.energy!r})"
        )

    @classmethod
    def from_list(cls, name: str, structures: Iterable[DotBracketVec]) -> StructureRegistry:
        return cls(name, structures)

    def assign_energy(self, sequence: str, energy_fn: EnergyFunction, rt: float) -> None:
        """Set the ensemble free energy ``-RT ln(sum exp(-E/RT))`` in kcal/mol.

        ``energy_fn(sequence, pair_table)`` returns a free energy in dcal/mol.
        """
        q_sum = 0.0
        for structure in self._pool:
            pt = PairTable.from_dotbracket(structure)
            en = energy_fn(sequence, pt) / 100.0
            q_sum += math.exp(-en / rt)
        self.energy = math.inf if q_sum == 0.0 else -rt * math.log(q_sum)

    def contains(self, structure: DotBracketVec) -> bool:
        return structure in self._lookup

    def __contains__(self, structure: object) -> bool:
        return structure in self._lookup

    def __len__(self) -> int:
        return len(self._pool)

    def __iter__(self) -> Iterator[DotBracketVec]:
        return iter(self._pool)


Macrostate = StructureRegistry


def _read_registry(
    path: PathLike,
    sequence: str,
    energy_fn: Optional[EnergyFunction],
    temperature: float,
) -> StructureRegistry:
    with open(path, encoding="utf-8") as fh:
        lines = (line.rstrip("\r\n") for line in fh)

        header = next(lines, None)
        if header is None:
            raise MacrostateError(f"Macrostate file {path!s} is missing a header line")
        if not header.startswith(">"):
            raise MacrostateError(f"First line must start with '>' in {path!s}")
        name = header[1:].strip()

        seq_line = next(lines, None)
        if seq_line is None:
            raise MacrostateError(f"Macrostate file {path!s} is missing a sequence line")
        if seq_line.strip() != sequence:
            raise MacrostateError(
                f"Sequence in macrostate file {path!s} does not match provided input sequence"
            )

        structures = []
        for lineno, raw in enumerate(lines, start=3):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                structures.append(DotBracketVec.from_string(line))
            except StructureError as err:
                raise MacrostateError(
                    f"Error parsing dot-bracket at line {lineno} in {path!s}: {err}"
                ) from err

    if not structures:
        raise MacrostateError(f"Macrostate file {path!s} does not contain any structures")

    registry = StructureRegistry.from_list(name, structures)
    if energy_fn is not None:
        registry.assign_energy(sequence, energy_fn, KB * (K0 + temperature))
    return registry


class MacrostateRegistry:
    """An ordered list of macrostates; index 0 is always ``Unassigned``."""

    def __init__(self) -> None:
        self._macrostates: list[Macrostate] = [StructureRegistry("Unassigned")]

    def __repr__(self) -> str:
        return f"MacrostateRegistry({self._macrostates!r})"

    @classmethod
    def from_files(
        cls,
        files: Sequence[PathLike],
        sequence: str,
        energy_fn: Optional[EnergyFunction] = None,
        temperature: float = 37.0,
    ) -> MacrostateRegistry:
        """Read one macrostate per file.

        A file holds a ``>name`` header, the sequence, and one dot-bracket
        structure per line; blank lines and ``#`` comments are skipped. With
        ``energy_fn``, each macrostate gets its ensemble free energy at
        ``temperature`` degrees Celsius.
        """
        registry = cls()
        for path in files:
            registry.insert(_read_registry(path, sequence, energy_fn, temperature))
        return registry

    def insert(self, macrostate: Macrostate) -> None:
        self._macrostates.append(macrostate)

    def classify(self, structure: DotBracketVec) -> int:
        """Index of the single macrostate holding ``structure``, or 0 if none does."""
        matches = [i for i, ms in enumerate(self._macrostates) if ms.contains(structure)]
        if not matches:
            return 0
        if len(matches) == 1:
            return matches[0]
        raise MacrostateError(f"Structure {structure} belongs to multiple macrostates")

    def get(self, idx: int) -> Macrostate:
        return self._macrostates[idx]

    def items(self) -> Iterator[Tuple[int, Macrostate]]:
        return enumerate(self._macrostates)

    def __len__(self) -> int:
        return len(self._macrostates)

    def __iter__(self) -> Iterator[Macrostate]:
        return iter(self._macrostates)