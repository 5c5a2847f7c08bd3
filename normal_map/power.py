from __future__ import annotations

import math
from typing import Any

from .linear import LinearMap
from .precision import DEFAULT_DTYPE
from .units import Generic, Unit


class PowerMap(LinearMap):
    """Exponential mapping where the normalized value is raised to ``exponent``.

    Order of operations when normalizing: clamp, dB transform (if any),
    linear normalize, then ``t ** (1 / exponent)``. Denormalizing runs the
    same steps backwards. An exponent of 0.5 gives a square-root taper.
    """

    __slots__ = ("_exponent", "_exponent_inv")

    def __init__(
        self,
        min_value: float,
        max_value: float,
        exponent: float,
        unit: Unit = Generic(),
        dtype: Any = DEFAULT_DTYPE,
    ) -> None:
        exponent = float(exponent)
        if exponent <= 0.0 or not math.isfinite(exponent):
            raise ValueError(f"exponent must be a finite number > 0, got {exponent!r}")

        self._exponent = exponent
        self._exponent_inv = 1.0 / exponent
        super().__init__(min_value, max_value, unit, dtype)

    @property
    def exponent(self) -> float:
        return self._exponent

    def _curve(self, linear: Any) -> Any:
        return linear ** self.dtype(self._exponent_inv)

    def _uncurve(self, normalized: Any) -> Any:
        return normalized ** self.dtype(self._exponent)

    def __repr__(self) -> str:
        return (
            f"PowerMap(min_value={float(self.min_value)}, max_value={float(self.max_value)}, "
            f"exponent={self._exponent}, unit={self._unit!r}, dtype={self.dtype.__name__})"
        )
