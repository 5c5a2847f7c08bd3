from __future__ import annotations

import logging
import operator
from typing import Any, Callable

import numpy as np

from .precision import (
    DEFAULT_DTYPE,
    FloatType,
    InBuffer,
    OutBuffer,
    cast,
    overlap,
    prefix,
    round_half_away,
    write_prefix,
)
from .range_base import RangeBase

logger = logging.getLogger(__name__)


class DiscreteMap:
    """Discrete integer mapping.

    Bounds and values may be ints or anything with ``__index__`` (e.g. an
    ``IntEnum``). ``kind`` turns an ``int`` back into the caller's type and is
    only applied on the way out of ``denormalize``/``denormalize_array``.
    """

    __slots__ = ("_base", "_kind", "_min_int", "_max_int")

    def __init__(
        self,
        min_value: Any,
        max_value: Any,
        kind: Callable[[int], Any] = int,
        dtype: Any = DEFAULT_DTYPE,
    ) -> None:
        self._min_int = _require_int("min_value", min_value)
        self._max_int = _require_int("max_value", max_value)
        self._kind = kind
        self._base = RangeBase(self._min_int, self._max_int, dtype)
        logger.debug("Created %r", self)

    @property
    def min_value(self) -> Any:
        return self._kind(self._min_int)

    @property
    def max_value(self) -> Any:
        return self._kind(self._max_int)

    @property
    def kind(self) -> Callable[[int], Any]:
        return self._kind

    @property
    def dtype(self) -> FloatType:
        return self._base.dtype

    # ------------------------------------------------------------------
    # Normalize
    # ------------------------------------------------------------------
    def normalize(self, value: Any) -> float:
        """Map a discrete value to the normalized range ``[0.0, 1.0]``."""
        return self._normalize_step(self.dtype(operator.index(value)))

    def normalize_float(self, value: float) -> float:
        """Map a float value, snapped to the nearest step, to ``[0.0, 1.0]``."""
        value = self.dtype(value)
        if value <= self._base.min_value:
            return self.dtype(0.0)
        if value >= self._base.max_value:
            return self.dtype(1.0)

        return self._normalize_step(cast(self.dtype, round_half_away(value)))

    def normalize_array(self, in_values: InBuffer, out_normalized: OutBuffer) -> int:
        """Values are processed up to the length of the shorter buffer."""
        count = overlap(in_values, out_normalized)
        steps = np.array([operator.index(v) for v in in_values[:count]], dtype=self.dtype)
        write_prefix(out_normalized, self._normalize_steps(steps, steps))
        return count

    def normalize_array_float(self, in_values: InBuffer, out_normalized: OutBuffer) -> int:
        """Values are processed up to the length of the shorter buffer."""
        count = overlap(in_values, out_normalized)
        values = prefix(in_values, count, self.dtype)
        steps = cast(self.dtype, round_half_away(values))
        write_prefix(out_normalized, self._normalize_steps(values, steps))
        return count

    # ------------------------------------------------------------------
    # Denormalize
    # ------------------------------------------------------------------
    def denormalize(self, normalized: float) -> Any:
        """Un-map a normalized value to the corresponding discrete value."""
        return self._kind(int(self.denormalize_float(normalized)))

    def denormalize_float(self, normalized: float) -> float:
        """Un-map a normalized value to the corresponding step as a float."""
        normalized = self.dtype(normalized)
        if normalized <= 0.0:
            return self._base.min_value
        if normalized >= 1.0:
            return self._base.max_value

        return cast(self.dtype, round_half_away(self._base.denormalize_raw(normalized)))

    def denormalize_array(self, in_normalized: InBuffer, out_values: OutBuffer) -> int:
        """Write discrete values; numpy buffers receive plain integers.

        Values are processed up to the length of the shorter buffer.
        """
        count = overlap(in_normalized, out_values)
        steps = self._denormalize_steps(prefix(in_normalized, count, self.dtype))
        if isinstance(out_values, np.ndarray):
            out_values[:count] = steps
        else:
            out_values[:count] = [self._kind(int(step)) for step in steps]
        return count

    def denormalize_array_float(self, in_normalized: InBuffer, out_values: OutBuffer) -> int:
        """Values are processed up to the length of the shorter buffer."""
        count = overlap(in_normalized, out_values)
        steps = self._denormalize_steps(prefix(in_normalized, count, self.dtype))
        write_prefix(out_values, steps)
        return count

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------
    def _normalize_step(self, step: Any) -> float:
        if step <= self._base.min_value:
            return self.dtype(0.0)
        if step >= self._base.max_value:
            return self.dtype(1.0)
        return cast(self.dtype, self._base.normalize_raw(step))

    def _normalize_steps(self, values: np.ndarray, steps: np.ndarray) -> np.ndarray:
        # Clamp on the unrounded values, map the rounded steps.
        result = np.where(
            values <= self._base.min_value,
            0.0,
            np.where(values >= self._base.max_value, 1.0, self._base.normalize_raw(steps)),
        )
        return cast(self.dtype, result)

    def _denormalize_steps(self, normalized: np.ndarray) -> np.ndarray:
        steps = round_half_away(self._base.denormalize_raw(normalized))
        result = np.where(
            normalized <= 0.0,
            self._base.min_value,
            np.where(normalized >= 1.0, self._base.max_value, steps),
        )
        return cast(self.dtype, result)

    def __repr__(self) -> str:
        kind_name = getattr(self._kind, "__name__", repr(self._kind))
        return (
            f"DiscreteMap(min_value={self._min_int}, max_value={self._max_int}, "
            f"kind={kind_name}, dtype={self.dtype.__name__})"
        )


def _require_int(name: str, value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError as exc:
        raise ValueError(f"{name} must be an integer or integer-like enum, got {value!r}") from exc
