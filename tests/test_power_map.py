from __future__ import annotations

import math

import numpy as np
import pytest

from normal_map import Decibels, Generic, PowerMap, db_to_coeff

TOLERANCE = {np.float32: 1e-4, np.float64: 1e-12}


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_bounds_saturate(dtype: type) -> None:
    pow_map = PowerMap(-50.0, 50.0, 0.5, Generic(), dtype)
    assert pow_map.normalize(-50.0) == 0.0
    assert pow_map.normalize(-52.0) == 0.0
    assert pow_map.normalize(50.0) == 1.0
    assert pow_map.normalize(52.0) == 1.0

    assert pow_map.denormalize(0.0) == -50.0
    assert pow_map.denormalize(1.0) == 50.0


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
@pytest.mark.parametrize(
    ("value", "normalized"),
    [
        (0.0, 0.25),
        (-25.0, 0.0625),
        (25.0, 0.5625),
    ],
)
def test_square_root_taper(dtype: type, value: float, normalized: float) -> None:
    pow_map = PowerMap(-50.0, 50.0, 0.5, Generic(), dtype)
    tol = TOLERANCE[dtype]
    assert pow_map.normalize(value) == pytest.approx(normalized, abs=tol)
    assert pow_map.denormalize(normalized) == pytest.approx(value, abs=tol)


def test_unit_exponent_is_linear() -> None:
    pow_map = PowerMap(0.0, 10.0, 1.0)
    assert pow_map.normalize(5.0) == pytest.approx(0.5)
    assert pow_map.denormalize(0.3) == pytest.approx(3.0)


@pytest.mark.parametrize("exponent", [0.25, 0.5, 2.0, 3.0])
def test_roundtrip_positive_exponents(exponent: float) -> None:
    pow_map = PowerMap(20.0, 400.0, exponent)
    for value in (21.0, 100.0, 250.0, 399.0):
        restored = pow_map.denormalize(pow_map.normalize(value))
        assert math.isclose(restored, value, rel_tol=1e-12)


@pytest.mark.parametrize("exponent", [0.0, -0.0, -1.0, -2.0, math.inf, math.nan])
def test_invalid_exponent_rejected(exponent: float) -> None:
    with pytest.raises(ValueError):
        PowerMap(0.0, 1.0, exponent)


def test_exponent_is_exposed() -> None:
    pow_map = PowerMap(0.0, 1.0, 2)
    assert pow_map.exponent == 2.0
    assert "exponent=2.0" in repr(pow_map)


def test_decibels_are_curved_after_the_linear_step() -> None:
    pow_map = PowerMap(-90.0, 0.0, 2.0, Decibels(floor_db=-90.0))
    assert pow_map.normalize(db_to_coeff(-45.0)) == pytest.approx(math.sqrt(0.5))
    assert pow_map.denormalize(math.sqrt(0.5)) == pytest.approx(db_to_coeff(-45.0))
    assert pow_map.normalize(0.0) == 0.0
    assert pow_map.denormalize(0.0) == 0.0

    wide_map = PowerMap(-100.0, 0.0, 2.0, Decibels(floor_db=-90.0))
    # 0.2 ** 2 -> -96 dB, below the floor.
    assert wide_map.denormalize(0.2) == 0.0
    assert wide_map.denormalize(0.5) == pytest.approx(db_to_coeff(-75.0))


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_arrays_truncate_and_match_scalar(dtype: type) -> None:
    pow_map = PowerMap(-50.0, 50.0, 0.5, Generic(), dtype)
    in_values = np.array([-60.0, -25.0, 0.0, 25.0, 60.0], dtype=dtype)
    out = np.full(3, -1.0, dtype=dtype)

    assert pow_map.normalize_array(in_values, out) == 3
    np.testing.assert_allclose(out, [0.0, 0.0625, 0.25], atol=TOLERANCE[dtype])

    restored = np.full(5, 7.0, dtype=dtype)
    assert pow_map.denormalize_array(out, restored) == 3
    np.testing.assert_allclose(restored, [-50.0, -25.0, 0.0, 7.0, 7.0], atol=1e-3)
