from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .precision import DEFAULT_DTYPE, FloatType, InBuffer, OutBuffer, cast, overlap, prefix, resolve_dtype, write_prefix

logger = logging.getLogger(__name__)


class Log2Map:
    """Logarithmic mapping using ``log2``. Useful for frequency (Hz) values.

    Both bounds must be greater than zero.
    """

    __slots__ = ("_dtype", "_min", "_max", "_min_log2", "_range_log2", "_range_log2_inv")

    def __init__(self, min_value: float, max_value: float, dtype: Any = DEFAULT_DTYPE) -> None:
        dtype = resolve_dtype(dtype)
        lo = dtype(min_value)
        hi = dtype(max_value)
        if not lo > 0.0:
            raise ValueError(f"min_value must be > 0 for log2 mapping, got {min_value!r}")
        if not hi > 0.0:
            raise ValueError(f"max_value must be > 0 for log2 mapping, got {max_value!r}")

        min_log2 = np.log2(lo)
        range_log2 = dtype(np.log2(hi) - min_log2)

        self._dtype = dtype
        self._min = lo
        self._max = hi
        self._min_log2 = min_log2
        self._range_log2 = range_log2
        self._range_log2_inv = dtype(0.0) if range_log2 == 0.0 else dtype(dtype(1.0) / range_log2)
        logger.debug("Created %r", self)

    @property
    def min_value(self) -> float:
        return self._min

    @property
    def max_value(self) -> float:
        return self._max

    @property
    def dtype(self) -> FloatType:
        return self._dtype

    def normalize(self, value: float) -> float:
        """Map a value to the normalized range ``[0.0, 1.0]``."""
        value = self._dtype(value)
        if value <= self._min:
            return self._dtype(0.0)
        if value >= self._max:
            return self._dtype(1.0)

        return cast(self._dtype, (np.log2(value) - self._min_log2) * self._range_log2_inv)

    def denormalize(self, normalized: float) -> float:
        """Un-map a normalized value to the corresponding value."""
        normalized = self._dtype(normalized)
        if normalized <= 0.0:
            return self._min
        if normalized >= 1.0:
            return self._max

        return cast(self._dtype, np.exp2(normalized * self._range_log2 + self._min_log2))

    def normalize_array(self, in_values: InBuffer, out_normalized: OutBuffer) -> int:
        """Values are processed up to the length of the shorter buffer."""
        count = overlap(in_values, out_normalized)
        values = prefix(in_values, count, self._dtype)

        with np.errstate(all="ignore"):
            mapped = (np.log2(values) - self._min_log2) * self._range_log2_inv
        result = np.where(values <= self._min, 0.0, np.where(values >= self._max, 1.0, mapped))

        write_prefix(out_normalized, cast(self._dtype, result))
        return count

    def denormalize_array(self, in_normalized: InBuffer, out_values: OutBuffer) -> int:
        """Values are processed up to the length of the shorter buffer."""
        count = overlap(in_normalized, out_values)
        normalized = prefix(in_normalized, count, self._dtype)

        with np.errstate(all="ignore"):
            raw = np.exp2(normalized * self._range_log2 + self._min_log2)
        result = np.where(normalized <= 0.0, self._min, np.where(normalized >= 1.0, self._max, raw))

        write_prefix(out_values, cast(self._dtype, result))
        return count

    def __repr__(self) -> str:
        return (
            f"Log2Map(min_value={float(self._min)}, max_value={float(self._max)}, "
            f"dtype={self._dtype.__name__})"
        )
