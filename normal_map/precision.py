from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any, Union

import numpy as np

DEFAULT_DTYPE = np.float64
SUPPORTED_DTYPES = frozenset({np.float32, np.float64})

FloatType = type[np.floating]
InBuffer = Union[Sequence[Any], np.ndarray]
OutBuffer = Union[MutableSequence[Any], np.ndarray]


def resolve_dtype(dtype: Any) -> FloatType:
    """Return the numpy scalar type for ``dtype`` (float32 or float64 only)."""
    if dtype is None:
        raise ValueError("dtype is required. Use numpy.float32 or numpy.float64")
    try:
        resolved = np.dtype(dtype).type
    except TypeError as exc:
        raise ValueError(f"Unsupported dtype {dtype!r}. Use numpy.float32 or numpy.float64") from exc

    if resolved not in SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported dtype {dtype!r}. Use numpy.float32 or numpy.float64")
    return resolved


def cast(dtype: FloatType, value: Any) -> Any:
    """Cast a scalar or array result back to the mapping precision."""
    if isinstance(value, np.ndarray):
        return value.astype(dtype, copy=False)
    return dtype(value)


def overlap(in_values: InBuffer, out_values: OutBuffer) -> int:
    return min(len(in_values), len(out_values))


def prefix(values: InBuffer, count: int, dtype: FloatType) -> np.ndarray:
    return np.asarray(values[:count], dtype=dtype)


def write_prefix(out_values: OutBuffer, result: np.ndarray) -> None:
    """Write ``result`` over the leading elements of ``out_values`` in place."""
    count = len(result)
    if isinstance(out_values, np.ndarray):
        out_values[:count] = result
    else:
        out_values[:count] = result.tolist()


def round_half_away(value: Any) -> Any:
    # np.round rounds half to even; steps need 2.5 -> 3 and -2.5 -> -3.
    return np.copysign(np.floor(np.abs(value) + 0.5), value)
