"""Reading and writing timelines as JSON."""

from __future__ import annotations

import json
import os
from typing import Any, Sequence, Union

from fuzzyfold.macrostates import MacrostateRegistry
from fuzzyfold.timeline import (
    MacrostateNotFoundError,
    TimeMismatchError,
    Timeline,
    TimelineError,
    TimepointCountMismatchError,
)

PathLike = Union[str, "os.PathLike[str]"]


def to_serializable(timeline: Timeline) -> dict:
    """A JSON-ready form where macrostates are referred to by name."""
    return {
        "points": [
            {
                "time": tp.time,
                "ensemble": [
                    [timeline.registry.get(idx).name, count] for idx, count in tp.items()
                ],
                "counter": tp.counter,
            }
            for tp in timeline.points
        ]
    }


def _load_points(path: PathLike) -> list:
    try:
        with open(path, encoding="utf-8") as fh:
            data: Any = json.load(fh)
    except OSError as err:
        raise TimelineError(f"I/O error: {err}") from err
    except json.JSONDecodeError as err:
        raise TimelineError(f"JSON parse error: {err}") from err

    try:
        points = data["points"]
        return [
            (
                float(point["time"]),
                [(str(name), int(count)) for name, count in point["ensemble"]],
            )
            for point in points
        ]
    except (KeyError, TypeError, ValueError) as err:
        raise TimelineError(f"JSON parse error: {err}") from err


def from_file(
    path: PathLike, times: Sequence[float], registry: MacrostateRegistry
) -> Timeline:
    """Load a timeline and check it against the expected times and registry."""
    points = _load_points(path)
    if len(points) != len(times):
        raise TimepointCountMismatchError(len(points), len(times))

    timeline = Timeline(times, registry)
    names = {}
    for idx, macrostate in registry.items():
        names.setdefault(macrostate.name, idx)

    for tp, (file_time, ensemble) in zip(timeline.points, points):
        if abs(tp.time - file_time) >= 1e-9:
            raise TimeMismatchError(file_time, tp.time)
        for name, count in ensemble:
            if name not in names:
                raise MacrostateNotFoundError(name)
            idx = names[name]
            tp.ensemble[idx] = tp.ensemble.get(idx, 0) + count
            tp.counter += count
    return timeline


def write_file(timeline: Timeline, path: PathLike) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(to_serializable(timeline), fh, indent=2)