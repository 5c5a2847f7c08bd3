from __future__ import annotations

import math

import numpy as np
import pytest

from normal_map import Log2Map


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_bounds_saturate(dtype: type) -> None:
    log_map = Log2Map(20.0, 20480.0, dtype)
    assert log_map.normalize(20.0) == 0.0
    assert log_map.normalize(18.0) == 0.0
    assert log_map.normalize(0.0) == 0.0
    assert log_map.normalize(-5.0) == 0.0
    assert log_map.normalize(20480.0) == 1.0
    assert log_map.normalize(20500.0) == 1.0

    assert log_map.denormalize(0.0) == 20.0
    assert log_map.denormalize(1.0) == 20480.0


@pytest.mark.parametrize(
    ("hz", "normalized"),
    [
        (40.0, 0.1),
        (1000.0, 0.5643856189774724),
        (10000.0, 0.8965784284662086),
    ],
)
def test_normalize_double(hz: float, normalized: float) -> None:
    log_map = Log2Map(20.0, 20480.0)
    assert log_map.normalize(hz) == pytest.approx(normalized, abs=1e-12)


@pytest.mark.parametrize(
    ("normalized", "hz"),
    [
        (0.1, 40.0),
        (0.5, 640.0),
        (0.75, 3620.3867196751216),
    ],
)
def test_denormalize_double(normalized: float, hz: float) -> None:
    log_map = Log2Map(20.0, 20480.0)
    assert log_map.denormalize(normalized) == pytest.approx(hz, rel=1e-12)


def test_single_precision_values() -> None:
    log_map = Log2Map(20.0, 20480.0, np.float32)
    assert log_map.normalize(40.0) == pytest.approx(0.1, abs=1e-4)
    assert log_map.normalize(1000.0) == pytest.approx(0.5643856, abs=1e-4)
    assert log_map.denormalize(0.5) == pytest.approx(640.0, rel=1e-5)
    assert isinstance(log_map.denormalize(0.5), np.float32)


def test_octaves_are_evenly_spaced() -> None:
    log_map = Log2Map(20.0, 20480.0)
    steps = [log_map.normalize(20.0 * 2**octave) for octave in range(1, 10)]
    for low, high in zip(steps, steps[1:]):
        assert high - low == pytest.approx(0.1)


@pytest.mark.parametrize(("min_value", "max_value"), [(0.0, 100.0), (-20.0, 100.0), (20.0, 0.0), (20.0, -1.0), (math.nan, 1.0)])
def test_non_positive_bounds_rejected(min_value: float, max_value: float) -> None:
    with pytest.raises(ValueError):
        Log2Map(min_value, max_value)


def test_degenerate_range() -> None:
    log_map = Log2Map(5.0, 5.0)
    assert log_map.normalize(5.0) == 0.0
    assert log_map.normalize(6.0) == 1.0
    assert log_map.denormalize(0.5) == pytest.approx(5.0)


def test_arrays_truncate_without_warnings() -> None:
    log_map = Log2Map(20.0, 20480.0)
    in_values = np.array([-1.0, 0.0, 40.0, 640.0, 30000.0])
    out = np.zeros(4)

    with np.errstate(all="raise"):
        assert log_map.normalize_array(in_values, out) == 4
    np.testing.assert_allclose(out, [0.0, 0.0, 0.1, 0.5])

    hz = [0.0] * 6
    assert log_map.denormalize_array([0.0, 0.5, 1.0, 2.0], hz) == 4
    assert hz == pytest.approx([20.0, 640.0, 20480.0, 20480.0, 0.0, 0.0])
