from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .precision import DEFAULT_DTYPE, FloatType, resolve_dtype


@dataclass(frozen=True)
class RangeBase:
    """Precomputed linear range arithmetic shared by the mapping kinds.

    No clamping happens here; each mapping clamps where it needs to.
    A degenerate range (``min_value == max_value``) gets ``range_inv == 0``.
    """

    min_value: float
    max_value: float
    dtype: FloatType = DEFAULT_DTYPE
    range: float = field(init=False)
    range_inv: float = field(init=False)

    def __post_init__(self) -> None:
        dtype = resolve_dtype(self.dtype)
        lo = dtype(self.min_value)
        hi = dtype(self.max_value)
        span = dtype(hi - lo)
        span_inv = dtype(0.0) if span == 0.0 else dtype(dtype(1.0) / span)

        object.__setattr__(self, "dtype", dtype)
        object.__setattr__(self, "min_value", lo)
        object.__setattr__(self, "max_value", hi)
        object.__setattr__(self, "range", span)
        object.__setattr__(self, "range_inv", span_inv)

    def normalize_raw(self, value: Any) -> Any:
        return (value - self.min_value) * self.range_inv

    def denormalize_raw(self, normalized: Any) -> Any:
        return normalized * self.range + self.min_value
