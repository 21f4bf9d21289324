"""Occupancy plots of macrostates over time."""

from __future__ import annotations

import os
from typing import List, Tuple, Union

from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter, MaxNLocator, MultipleLocator

from fuzzyfold.timeline import Timeline

PathLike = Union[str, "os.PathLike[str]"]
Series = List[Tuple[float, float]]

_OCCUPANCY_THRESHOLD = 0.1
_GRID_COLOR = (220 / 255, 220 / 255, 220 / 255)
_SEPARATOR = dict(color="black", alpha=0.7, linewidth=1.0)


def _trajectories(timeline: Timeline) -> List[Tuple[int, Series]]:
    """Occupancy series of every macrostate that reaches the threshold once."""
    selected = []
    for idx, _ in timeline.registry.items():
        series = [(tp.time, tp.occupancy(idx)) for tp in timeline.points]
        if any(occu >= _OCCUPANCY_THRESHOLD for _, occu in series):
            selected.append((idx, series))
    selected.sort(key=lambda entry: entry[0])
    return selected


def plot_occupancy_over_time(
    timeline: Timeline,
    filename: PathLike,
    t_lin: float,
    t_log: float,
) -> List[Tuple[int, Series]]:
    """Draw occupancies on a linear panel up to ``t_lin`` and a logarithmic
    panel from ``t_lin`` to ``t_log``, and save the figure to ``filename``.

    Only macrostates whose occupancy reaches 0.1 at some time are drawn.
    Returns the drawn ``(macrostate index, [(time, occupancy), ...])`` series.
    """
    if not (t_lin > 0.0 and t_log > t_lin):
        raise ValueError("Require 0 < t_lin < t_log")
    if not timeline.points:
        raise ValueError("Cannot plot a timeline without time points")

    fig = Figure(figsize=(10.24, 4.8), dpi=100)
    fig.patch.set_facecolor("white")
    left, right = fig.subplots(
        1, 2, gridspec_kw={"width_ratios": [200, 824], "wspace": 0.0}
    )
    fig.subplots_adjust(left=0.07, right=0.96, top=0.85, bottom=0.16)
    fig.suptitle(f"ff-simulate ({timeline.points[0].counter} simulations)", fontsize=20)
    fig.text(0.5, 0.02, "time", ha="center", fontsize=13)

    left.set_xlim(0.0, t_lin)
    left.set_ylim(0.0, 1.0)
    left.set_ylabel("occupancy", fontsize=13)
    left.xaxis.set_major_locator(MaxNLocator(nbins=2))
    left.xaxis.set_major_formatter(
        FuncFormatter(lambda x, _: "" if abs(x - t_lin) < 1e-9 else f"{x:g}")
    )
    left.yaxis.set_major_locator(MultipleLocator(0.1))
    left.grid(True, color=_GRID_COLOR)
    left.tick_params(labelsize=11)
    left.plot([t_lin, t_lin], [0.0, 1.0], **_SEPARATOR)

    right.set_xscale("log")
    right.set_xlim(t_lin, t_log)
    right.set_ylim(0.0, 1.0)
    right.xaxis.set_major_formatter(
        FuncFormatter(lambda x, _: f"{x:.1e}" if x < 0.01 else f"{x:g}")
    )
    right.yaxis.set_major_locator(MultipleLocator(0.1))
    right.tick_params(axis="y", labelleft=False)
    right.tick_params(labelsize=11)
    right.grid(True, color=_GRID_COLOR)
    right.plot([t_lin, t_lin], [0.0, 1.0], **_SEPARATOR)

    trajectories = _trajectories(timeline)
    palette = [f"C{k}" for k in range(10)]
    for k, (idx, series) in enumerate(trajectories):
        color = palette[k % len(palette)]
        macrostate = timeline.registry.get(idx)
        energy = macrostate.energy if macrostate.energy is not None else 0.0
        label = f"{macrostate.name.strip():20} {energy:>6.2f}"

        lin = [(t, o) for t, o in series if t <= t_lin]
        log = [(t, o) for t, o in series if t >= t_lin]
        if lin:
            left.plot(*zip(*lin), color=color, alpha=0.9, linewidth=2)
        xs, ys = zip(*log) if log else ((), ())
        right.plot(xs, ys, color=color, alpha=0.9, linewidth=2, label=label)

    if trajectories:
        legend = right.legend(loc="upper right", fontsize=11, frameon=True)
        legend.get_frame().set_edgecolor("black")
        legend.get_frame().set_facecolor((1.0, 1.0, 1.0, 0.8))

    fig.savefig(os.fspath(filename))
    return trajectories