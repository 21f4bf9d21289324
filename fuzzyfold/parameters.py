"""Rate model and output timeline parameters for simulations."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class RateModelParams:
    """Parameters of the Metropolis rate model."""

    k0: float = 1e6


@dataclass
class TimelineParameters:
    """Output time points: ``t_lin`` linear points up to ``t_ext``, then
    ``t_log`` logarithmically spaced points up to ``t_end``."""

    t_ext: float = 1e-5
    t_end: float = 1.0
    t_lin: int = 1
    t_log: int = 20

    def validate(self) -> None:
        """Raise ``ValueError`` if the parameters are inconsistent."""
        if self.t_end <= self.t_ext:
            raise ValueError(
                f"t_end ({self.t_end}) must be greater than t_ext ({self.t_ext})"
            )
        if self.t_lin == 0 and self.t_log > 1:
            raise ValueError(
                f"t_lin must be > 0 if t_log > 1 "
                f"(got t_lin={self.t_lin}, t_log={self.t_log})"
            )

    def get_output_times(self) -> list[float]:
        times = [0.0]

        if self.t_lin > 0:
            step = self.t_ext / self.t_lin
            times.extend(k * step for k in range(1, self.t_lin + 1))

        if self.t_log > 1:
            log_start = math.log(times[-1])
            log_end = math.log(self.t_end)
            times.extend(
                math.exp(log_start + (k / self.t_log) * (log_end - log_start))
                for k in range(1, self.t_log)
            )

        times.append(self.t_end)
        return times