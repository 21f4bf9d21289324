"""Rate models turning free energy changes into transition rates."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

K0 = 273.15
KB = 0.001987204285  # kcal/(mol*K)


class RateModel(ABC):
    """Maps a free energy change (in dcal/mol) to a rate constant."""

    @abstractmethod
    def rate(self, delta_e: int) -> float:
        """Rate constant of a move with energy change ``delta_e``."""

    def log_rate(self, delta_e: int) -> float:
        """Natural logarithm of :meth:`rate`."""
        return math.log(self.rate(delta_e))


class Metropolis(RateModel):
    """Metropolis rates: downhill moves at ``k0``, uphill moves Boltzmann-weighted."""

    def __init__(self, celsius: float, k0: float) -> None:
        if k0 <= 0.0:
            raise ValueError("k0 must be positive!")
        self.kt = KB * (celsius + K0)
        self.k0 = k0

    def __repr__(self) -> str:
        return f"Metropolis(kt={self.kt!r}, k0={self.k0!r})"

    def rate(self, delta_e: int) -> float:
        if delta_e <= 0:
            return self.k0
        return self.k0 * math.exp((-delta_e / 100.0) / self.kt)

    def log_rate(self, delta_e: int) -> float:
        if delta_e <= 0:
            return math.log(self.k0)
        return math.log(self.k0) + (-delta_e / 100.0) / self.kt