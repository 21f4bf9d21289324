import math

import pytest

from fuzzyfold.parameters import RateModelParams, TimelineParameters


def test_rate_model_default():
    assert RateModelParams().k0 == 1e6


def test_default_times_shape():
    params = TimelineParameters()
    times = params.get_output_times()
    assert len(times) == 1 + params.t_lin + (params.t_log - 1) + 1
    assert times[0] == 0.0
    assert times[1] == pytest.approx(params.t_ext)
    assert times[-1] == params.t_end


def test_times_strictly_increasing():
    times = TimelineParameters(t_ext=0.01, t_end=10.0, t_lin=5, t_log=7).get_output_times()
    assert all(a < b for a, b in zip(times, times[1:]))


def test_linear_part_evenly_spaced():
    params = TimelineParameters(t_ext=1.0, t_end=100.0, t_lin=4, t_log=3)
    linear = params.get_output_times()[: params.t_lin + 1]
    gaps = [b - a for a, b in zip(linear, linear[1:])]
    assert all(g == pytest.approx(params.t_ext / params.t_lin) for g in gaps)


def test_log_part_geometric():
    params = TimelineParameters(t_ext=1e-3, t_end=1.0, t_lin=1, t_log=6)
    tail = params.get_output_times()[params.t_lin:]
    ratios = [b / a for a, b in zip(tail, tail[1:])]
    assert all(r == pytest.approx(ratios[0]) for r in ratios)
    assert math.prod(ratios) == pytest.approx(params.t_end / params.t_ext)


def test_validate_accepts_defaults():
    params = TimelineParameters()
    params.validate()
    assert params.t_end > params.t_ext


def test_validate_rejects_end_before_ext():
    with pytest.raises(ValueError, match="must be greater than"):
        TimelineParameters(t_ext=1.0, t_end=1.0).validate()


def test_validate_rejects_missing_linear_points():
    with pytest.raises(ValueError, match="t_lin must be > 0"):
        TimelineParameters(t_lin=0, t_log=5).validate()


def test_no_linear_single_log_point():
    params = TimelineParameters(t_ext=0.5, t_end=2.0, t_lin=0, t_log=1)
    params.validate()
    assert params.get_output_times() == [0.0, 2.0]