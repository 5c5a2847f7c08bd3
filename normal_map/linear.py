from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .precision import DEFAULT_DTYPE, FloatType, InBuffer, OutBuffer, cast, overlap, prefix, write_prefix
from .range_base import RangeBase
from .units import Generic, Unit, make_transform

logger = logging.getLogger(__name__)


class LinearMap:
    """Linear mapping between ``[min_value, max_value]`` and ``[0.0, 1.0]``.

    With ``Decibels`` units the bounds are in dB and the decibels are what
    get linearly mapped, not the raw amplitude.
    """

    __slots__ = ("_base", "_unit", "_transform", "_raw_min", "_raw_max")

    def __init__(
        self,
        min_value: float,
        max_value: float,
        unit: Unit = Generic(),
        dtype: Any = DEFAULT_DTYPE,
    ) -> None:
        self._base = RangeBase(min_value, max_value, dtype)
        self._unit = unit
        self._transform = make_transform(unit, self._base.dtype)
        self._raw_min = self._transform.to_raw(self._base.min_value)
        self._raw_max = self._transform.to_raw(self._base.max_value)
        logger.debug("Created %r", self)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def min_value(self) -> float:
        return self._base.min_value

    @property
    def max_value(self) -> float:
        return self._base.max_value

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def dtype(self) -> FloatType:
        return self._base.dtype

    # ------------------------------------------------------------------
    # Scalar API
    # ------------------------------------------------------------------
    def normalize(self, value: float) -> float:
        """Map a value to the normalized range ``[0.0, 1.0]``."""
        # Decibel bounds are in dB: convert the amplitude before clamping.
        mapped = self._transform.to_mapped(self.dtype(value))
        if mapped <= self._base.min_value:
            return self.dtype(0.0)
        if mapped >= self._base.max_value:
            return self.dtype(1.0)

        return cast(self.dtype, self._curve(self._base.normalize_raw(mapped)))

    def denormalize(self, normalized: float) -> float:
        """Un-map a normalized value to the corresponding value."""
        normalized = self.dtype(normalized)
        if normalized <= 0.0:
            return self._raw_min
        if normalized >= 1.0:
            return self._raw_max

        linear = self._base.denormalize_raw(self._uncurve(normalized))
        return cast(self.dtype, self._transform.to_raw(linear))

    # ------------------------------------------------------------------
    # Array API
    # ------------------------------------------------------------------
    def normalize_array(self, in_values: InBuffer, out_normalized: OutBuffer) -> int:
        """Map values into ``out_normalized``.

        Values are processed up to the length of the shorter buffer; the
        number of processed values is returned.
        """
        count = overlap(in_values, out_normalized)
        values = prefix(in_values, count, self.dtype)

        with np.errstate(all="ignore"):
            mapped = self._transform.to_mapped(values)
            curved = self._curve(self._base.normalize_raw(mapped))
        result = np.where(
            mapped <= self._base.min_value,
            0.0,
            np.where(mapped >= self._base.max_value, 1.0, curved),
        )

        write_prefix(out_normalized, cast(self.dtype, result))
        return count

    def denormalize_array(self, in_normalized: InBuffer, out_values: OutBuffer) -> int:
        """Un-map normalized values into ``out_values``.

        Values are processed up to the length of the shorter buffer; the
        number of processed values is returned.
        """
        count = overlap(in_normalized, out_values)
        normalized = prefix(in_normalized, count, self.dtype)

        with np.errstate(all="ignore"):
            linear = self._base.denormalize_raw(self._uncurve(normalized))
            raw = self._transform.to_raw(linear)
        result = np.where(
            normalized <= 0.0,
            self._raw_min,
            np.where(normalized >= 1.0, self._raw_max, raw),
        )

        write_prefix(out_values, cast(self.dtype, result))
        return count

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------
    def _curve(self, linear: Any) -> Any:
        return linear

    def _uncurve(self, normalized: Any) -> Any:
        return normalized

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(min_value={float(self.min_value)}, "
            f"max_value={float(self.max_value)}, unit={self._unit!r}, "
            f"dtype={self.dtype.__name__})"
        )
