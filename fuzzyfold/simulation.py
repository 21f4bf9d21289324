"""Stochastic simulation of secondary structure folding on a loop structure."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional, Protocol, Sequence, Tuple

from fuzzyfold.rate_model import RateModel

NEG_INF = float("-inf")

Move = Tuple[int, int, int]
IndexedLoopNeighbors = Tuple[int, Sequence[Move]]


def log_add(a: float, b: float) -> float:
    """Return ``log(exp(a) + exp(b))`` without leaving log space."""
    if a == NEG_INF:
        return b
    if b == NEG_INF:
        return a
    m = max(a, b)
    return m + math.log(math.exp(a - m) + math.exp(b - m))


def log_sub(a: float, b: float) -> float:
    """Return ``log(exp(a) - exp(b))``; requires ``a >= b`` up to round-off.

    Raises ``ValueError`` if ``b`` exceeds ``a``, which means the running
    sums are inconsistent and must be recomputed.  A difference that is
    numerically zero gives ``-inf``.
    """
    if b == NEG_INF:
        return a
    if b > a + 1e-12:
        raise ValueError(f"cannot subtract log value {b} from smaller value {a}")
    remainder = 1.0 - math.exp(-(a - b))
    if remainder <= 0.0:
        return NEG_INF
    return a + math.log(remainder)


def log_sum_exp(xs: Iterable[float]) -> float:
    """Return ``log(sum(exp(x)))``; ``-inf`` for an empty input."""
    values = list(xs)
    m = max(values, default=NEG_INF)
    if m == NEG_INF:
        return NEG_INF
    return m + math.log(sum(math.exp(x - m) for x in values))


class LoopStructureLike(Protocol):
    """What the simulator needs from a loop decomposition of a structure.

    Moves are ``(i, j, delta_e)`` with ``delta_e`` in dcal/mol.
    """

    def get_add_neighbors_per_loop(self) -> Mapping[int, Sequence[Move]]:
        """Base pairs that can be added, grouped by loop index."""

    def get_del_neighbors(self) -> Sequence[Move]:
        """Base pairs that can be removed."""

    def loop_lookup(self) -> Mapping[int, int]:
        """For every sequence position, the index of the loop it points to."""

    def apply_add_move(
        self, i: int, j: int
    ) -> Tuple[IndexedLoopNeighbors, IndexedLoopNeighbors, Sequence[Move]]:
        """Form pair ``(i, j)``; return outer and inner loop moves and pair changes."""

    def apply_del_move(self, i: int, j: int) -> Tuple[IndexedLoopNeighbors, Sequence[Move]]:
        """Open pair ``(i, j)``; return the merged loop's moves and pair changes."""

    def energy(self) -> int:
        """Free energy of the current structure in dcal/mol."""


class ReactionKind(Enum):
    ADD = "add"
    DELETE = "delete"


@dataclass(frozen=True)
class Reaction:
    """A single base-pair move together with its log rate."""

    kind: ReactionKind
    i: int
    j: int
    delta_e: int
    log_rate: float

    @classmethod
    def add(cls, model: RateModel, i: int, j: int, delta_e: int) -> Reaction:
        return cls(ReactionKind.ADD, i, j, delta_e, model.log_rate(delta_e))

    @classmethod
    def delete(cls, model: RateModel, i: int, j: int, delta_e: int) -> Reaction:
        return cls(ReactionKind.DELETE, i, j, delta_e, model.log_rate(delta_e))

    @property
    def ij(self) -> Tuple[int, int]:
        return self.i, self.j


def _log_uniform(rng: random.Random) -> float:
    u = rng.random()
    return math.log(u) if u > 0.0 else NEG_INF


Callback = Callable[[float, float, float, LoopStructureLike], None]


class LoopStructureSSA:
    """Gillespie simulation over a loop structure, with fluxes kept in log space."""

    def __init__(self, loopstructure: LoopStructureLike, ratemodel: RateModel) -> None:
        self.loopstructure = loopstructure
        self.ratemodel = ratemodel
        self.per_loop_flux: dict[int, float] = {}
        self.per_loop_rxns: dict[int, list[Reaction]] = {}
        self.pair_rxns: dict[int, Reaction] = {}

        loop_logs = []
        for lli, add_neighbors in loopstructure.get_add_neighbors_per_loop().items():
            rxns = [Reaction.add(ratemodel, i, j, d) for i, j, d in add_neighbors]
            if rxns:
                lflux = log_sum_exp(r.log_rate for r in rxns)
                self.per_loop_flux[lli] = lflux
                loop_logs.append(lflux)
            self.per_loop_rxns[lli] = rxns

        for i, j, delta in loopstructure.get_del_neighbors():
            self.pair_rxns[i] = Reaction.delete(ratemodel, i, j, delta)

        self.pair_flux: Optional[float] = (
            log_sum_exp(r.log_rate for r in self.pair_rxns.values())
            if self.pair_rxns
            else None
        )
        self.loop_flux: Optional[float] = log_sum_exp(loop_logs) if loop_logs else None
        self.log_flux = self._combined_flux()

    def __repr__(self) -> str:
        return (
            f"LoopStructureSSA(ratemodel={self.ratemodel!r}, "
            f"loopstructure={str(self.loopstructure)!r}, flux={self.log_flux!r})"
        )

    def _combined_flux(self) -> float:
        pf, lf = self.pair_flux, self.loop_flux
        if pf is not None and lf is not None:
            return log_add(pf, lf)
        if pf is not None:
            return pf
        if lf is not None:
            return lf
        raise RuntimeError("no flux at all?")

    def current_structure(self) -> str:
        return str(self.loopstructure)

    def _recompute_flux(self) -> None:
        loops = list(self.per_loop_flux.values())
        pairs = [r.log_rate for r in self.pair_rxns.values()]
        self.loop_flux = log_sum_exp(loops) if loops else None
        self.pair_flux = log_sum_exp(pairs) if pairs else None
        self.log_flux = self._combined_flux()

    def remove_loop_reaction(self, i: int) -> None:
        """Drop all add reactions of the loop that position ``i`` points to."""
        lli = self.loopstructure.loop_lookup()[i]
        rxns = self.per_loop_rxns.pop(lli)
        if not rxns:
            self.per_loop_flux.pop(lli, None)
            return
        lflux = self.per_loop_flux.pop(lli)
        if self.per_loop_flux:
            self.loop_flux = log_sub(self.loop_flux, lflux)
            self.log_flux = log_sub(self.log_flux, lflux)
        else:
            # The total flux is recomputed before the next step.
            self.loop_flux = None

    def remove_pair_reaction(self, i: int) -> None:
        """Drop the delete reaction of pair ``i`` and the reactions of both its loops."""
        old = self.pair_rxns.pop(i)
        if self.pair_rxns:
            self.pair_flux = log_sub(self.pair_flux, old.log_rate)
            self.log_flux = log_sub(self.log_flux, old.log_rate)
        else:
            self.pair_flux = None
        pi, pj = old.ij
        self.remove_loop_reaction(pi)
        self.remove_loop_reaction(pj)

    def insert_loop_reactions(self, lli: int, add_neighbors: Iterable[Move]) -> None:
        rxns = [Reaction.add(self.ratemodel, i, j, d) for i, j, d in add_neighbors]
        if rxns:
            lflux = log_sum_exp(r.log_rate for r in rxns)
            self.per_loop_flux[lli] = lflux
            self.loop_flux = lflux if self.loop_flux is None else log_add(self.loop_flux, lflux)
            self.log_flux = log_add(self.log_flux, lflux)
        self.per_loop_rxns[lli] = rxns

    def update_pair_reactions(self, change: Iterable[Move]) -> None:
        """Insert or replace the delete reactions of the given pairs."""
        for i, j, delta in change:
            old = self.pair_rxns.pop(i, None)
            if old is not None:
                if self.pair_rxns:
                    self.pair_flux = log_sub(self.pair_flux, old.log_rate)
                    self.log_flux = log_sub(self.log_flux, old.log_rate)
                else:
                    self.pair_flux = None
            rxn = Reaction.delete(self.ratemodel, i, j, delta)
            if self.pair_rxns:
                self.pair_flux = log_add(self.pair_flux, rxn.log_rate)
            else:
                self.pair_flux = rxn.log_rate
            self.log_flux = log_add(self.log_flux, rxn.log_rate)
            self.pair_rxns[i] = rxn

    def _choose_reaction(self, log_thresh: float) -> Optional[Reaction]:
        acc = NEG_INF
        if self.pair_flux is not None:
            if self.pair_flux >= log_thresh:
                for rxn in self.pair_rxns.values():
                    acc = log_add(acc, rxn.log_rate)
                    if acc >= log_thresh:
                        return rxn
            else:
                acc = self.pair_flux
        for lli, lflux in self.per_loop_flux.items():
            next_acc = log_add(acc, lflux)
            if next_acc > log_thresh:
                for rxn in self.per_loop_rxns[lli]:
                    acc = log_add(acc, rxn.log_rate)
                    if acc >= log_thresh:
                        return rxn
            else:
                acc = next_acc
        return None

    def _apply(self, rxn: Reaction) -> None:
        if rxn.kind is ReactionKind.ADD:
            self.remove_loop_reaction(rxn.i)
            (lli, ami), (llj, amj), changes = self.loopstructure.apply_add_move(rxn.i, rxn.j)
            self.insert_loop_reactions(lli, ami)
            self.insert_loop_reactions(llj, amj)
            self.update_pair_reactions(changes)
        else:
            self.remove_pair_reaction(rxn.i)
            (lli, neighbors), changes = self.loopstructure.apply_del_move(rxn.i, rxn.j)
            self.insert_loop_reactions(lli, neighbors)
            self.update_pair_reactions(changes)

    def simulate(self, rng: random.Random, t_max: float, callback: Callback) -> None:
        """Run until ``t_max``.

        Before each move, ``callback(t, tinc, flux, loopstructure)`` is called
        with the current time, the sampled waiting time and the total flux.
        """
        t = 0.0
        while t < t_max:
            pf, lf = self.pair_flux, self.loop_flux
            if pf is not None and lf is not None:
                if abs(log_add(pf, lf) - self.log_flux) > 1e-8:
                    self._recompute_flux()
            else:
                self._recompute_flux()

            flux = math.exp(self.log_flux)
            tinc = -_log_uniform(rng) / flux
            callback(t, tinc, flux, self.loopstructure)
            t += tinc

            rxn = self._choose_reaction(self.log_flux + _log_uniform(rng))
            if rxn is None:
                raise RuntimeError("No reaction chosen despite positive flux")
            self._apply(rxn)