import pytest

from fuzzyfold.dotbracket import DotBracketVec
from fuzzyfold.macrostates import MacrostateRegistry, StructureRegistry
from fuzzyfold.plotting import plot_occupancy_over_time
from fuzzyfold.timeline import Timeline

HAIRPIN = DotBracketVec.from_string("((...))")
SHIFTED = DotBracketVec.from_string(".(...).")
OPEN = DotBracketVec.from_string(".......")
TIMES = [0.0, 1e-5, 1e-3, 1.0]


def _registry():
    registry = MacrostateRegistry()
    registry.insert(StructureRegistry.from_list("hairpin", [HAIRPIN]))
    registry.insert(StructureRegistry.from_list("shifted", [SHIFTED]))
    return registry


def _timeline():
    timeline = Timeline(TIMES, _registry())
    for t_idx in range(len(TIMES)):
        for _ in range(18):
            timeline.assign_structure(t_idx, HAIRPIN)
        timeline.assign_structure(t_idx, OPEN)
        timeline.assign_structure(t_idx, SHIFTED)
    return timeline


def test_writes_svg_file(tmp_path):
    target = tmp_path / "occupancy.svg"
    plot_occupancy_over_time(_timeline(), target, 1e-5, 1.0)
    content = target.read_text(encoding="utf-8")
    assert "<svg" in content


def test_only_frequent_macrostates_are_drawn(tmp_path):
    drawn = plot_occupancy_over_time(_timeline(), tmp_path / "a.svg", 1e-5, 1.0)
    assert [idx for idx, _ in drawn] == [1]


def test_series_follow_timeline_occupancy(tmp_path):
    timeline = _timeline()
    drawn = plot_occupancy_over_time(timeline, tmp_path / "b.svg", 1e-5, 1.0)
    (idx, series), = drawn
    assert [t for t, _ in series] == TIMES
    assert [o for _, o in series] == [tp.occupancy(idx) for tp in timeline.points]


def test_threshold_is_inclusive(tmp_path):
    timeline = Timeline(TIMES, _registry())
    for t_idx in range(len(TIMES)):
        for _ in range(9):
            timeline.assign_structure(t_idx, HAIRPIN)
        timeline.assign_structure(t_idx, OPEN)
    drawn = plot_occupancy_over_time(timeline, tmp_path / "c.svg", 1e-5, 1.0)
    assert sorted(idx for idx, _ in drawn) == [0, 1]


def test_empty_timeline_draws_nothing(tmp_path):
    timeline = Timeline(TIMES, _registry())
    target = tmp_path / "d.svg"
    drawn = plot_occupancy_over_time(timeline, target, 1e-5, 1.0)
    assert drawn == []
    assert target.exists()


@pytest.mark.parametrize("t_lin,t_log", [(0.0, 1.0), (1.0, 1.0), (2.0, 1.0), (-1.0, 1.0)])
def test_invalid_time_ranges_are_rejected(tmp_path, t_lin, t_log):
    with pytest.raises(ValueError, match="Require 0 < t_lin < t_log"):
        plot_occupancy_over_time(_timeline(), tmp_path / "e.svg", t_lin, t_log)


def test_timeline_without_points_is_rejected(tmp_path):
    timeline = Timeline([], _registry())
    with pytest.raises(ValueError):
        plot_occupancy_over_time(timeline, tmp_path / "f.svg", 1e-5, 1.0)