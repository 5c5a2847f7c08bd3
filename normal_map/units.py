from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from .precision import FloatType, cast

DEFAULT_FLOOR_DB = -90.0


@dataclass(frozen=True)
class Generic:
    """Values are mapped as they are."""


@dataclass(frozen=True)
class Decibels:
    """Decibel units.

    Values in and out of the mapping are raw amplitudes (coefficients); the
    range bounds are in dB and the decibels are what gets mapped.

    ``floor_db`` is the silence point: amplitudes at or below its coefficient
    map as ``floor_db`` and dB values at or below it come back as exactly
    ``0.0``. ``None`` keeps the fixed ``DEFAULT_FLOOR_DB`` guard instead.
    """

    floor_db: float | None = None

    def __post_init__(self) -> None:
        if self.floor_db is None:
            return
        floor = float(self.floor_db)
        if not math.isfinite(floor):
            raise ValueError(f"floor_db must be finite, got {self.floor_db!r}")
        object.__setattr__(self, "floor_db", floor)


Unit = Union[Generic, Decibels]


def db_to_coeff(db: Any, floor_db: float = DEFAULT_FLOOR_DB, inclusive: bool = False) -> Any:
    """Convert decibels to a raw amplitude, ``0.0`` below ``floor_db``."""
    db = np.asarray(db)
    with np.errstate(over="ignore"):
        coeff = np.power(10.0, 0.05 * db)
    silent = db <= floor_db if inclusive else db < floor_db
    return np.where(silent, 0.0, coeff)[()]


def coeff_to_db(coeff: Any, floor_db: float = DEFAULT_FLOOR_DB) -> Any:
    """Convert a raw amplitude to decibels, ``floor_db`` at or below its coefficient."""
    coeff = np.asarray(coeff)
    floor_coeff = 10.0 ** (0.05 * floor_db)
    with np.errstate(divide="ignore", invalid="ignore"):
        db = 20.0 * np.log10(coeff)
    return np.where(coeff <= floor_coeff, floor_db, db)[()]


# ----------------------------------------------------------------------
# Per-mapping transforms
# ----------------------------------------------------------------------
class UnitTransform:
    """Identity transform used by ``Generic`` units."""

    __slots__ = ("_dtype",)

    def __init__(self, dtype: FloatType) -> None:
        self._dtype = dtype

    def to_mapped(self, value: Any) -> Any:
        return value

    def to_raw(self, value: Any) -> Any:
        return value


class DecibelTransform(UnitTransform):
    """Amplitude <-> dB transform applied around the linear range math."""

    __slots__ = ("_floor_db", "_inclusive")

    def __init__(self, dtype: FloatType, floor_db: float, inclusive: bool) -> None:
        super().__init__(dtype)
        self._floor_db = float(floor_db)
        self._inclusive = inclusive

    @property
    def floor_db(self) -> float:
        return self._floor_db

    def to_mapped(self, value: Any) -> Any:
        return cast(self._dtype, coeff_to_db(value, self._floor_db))

    def to_raw(self, value: Any) -> Any:
        return cast(self._dtype, db_to_coeff(value, self._floor_db, self._inclusive))


def make_transform(unit: Unit, dtype: FloatType) -> UnitTransform:
    if isinstance(unit, Generic):
        return UnitTransform(dtype)
    if isinstance(unit, Decibels):
        if unit.floor_db is None:
            return DecibelTransform(dtype, DEFAULT_FLOOR_DB, inclusive=False)
        return DecibelTransform(dtype, unit.floor_db, inclusive=True)
    raise TypeError(f"Unknown unit {unit!r}. Use Generic() or Decibels(...)")
