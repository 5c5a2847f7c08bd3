from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

import numpy as np

from .discrete import DiscreteMap
from .linear import LinearMap
from .log2 import Log2Map
from .power import PowerMap
from .precision import DEFAULT_DTYPE, FloatType, InBuffer, OutBuffer, resolve_dtype
from .units import Generic, Unit

Mapper = Union[LinearMap, PowerMap, Log2Map, DiscreteMap]


class MapperKind(Enum):
    LINEAR = "linear"
    POWER = "power"
    LOG2 = "log2"
    DISCRETE = "discrete"


_KIND_BY_TYPE: dict[type, MapperKind] = {
    LinearMap: MapperKind.LINEAR,
    PowerMap: MapperKind.POWER,
    Log2Map: MapperKind.LOG2,
    DiscreteMap: MapperKind.DISCRETE,
}


class NormalMap:
    """Maps a range of values to and from the normalized range ``[0.0, 1.0]``.

    Holds exactly one mapper and forwards every call to it. Discrete mappers
    are driven through their float API so all kinds share one signature.
    """

    __slots__ = ("_mapper", "_kind")

    def __init__(self, mapper: Mapper) -> None:
        try:
            kind = _KIND_BY_TYPE[type(mapper)]
        except KeyError as exc:
            known = ", ".join(t.__name__ for t in _KIND_BY_TYPE)
            raise TypeError(f"Unsupported mapper {mapper!r}. Known mappers: [{known}]") from exc
        self._mapper = mapper
        self._kind = kind

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def linear(
        cls,
        min_value: float,
        max_value: float,
        unit: Unit = Generic(),
        dtype: Any = DEFAULT_DTYPE,
    ) -> NormalMap:
        return cls(LinearMap(min_value, max_value, unit, dtype))

    @classmethod
    def power(
        cls,
        min_value: float,
        max_value: float,
        exponent: float,
        unit: Unit = Generic(),
        dtype: Any = DEFAULT_DTYPE,
    ) -> NormalMap:
        """Raises ``ValueError`` when ``exponent`` is 0."""
        return cls(PowerMap(min_value, max_value, exponent, unit, dtype))

    @classmethod
    def log2(cls, min_value: float, max_value: float, dtype: Any = DEFAULT_DTYPE) -> NormalMap:
        """Raises ``ValueError`` when either bound is <= 0."""
        return cls(Log2Map(min_value, max_value, dtype))

    @classmethod
    def discrete(
        cls,
        min_value: Any,
        max_value: Any,
        kind: Callable[[int], Any] = int,
        dtype: Any = DEFAULT_DTYPE,
    ) -> NormalMap:
        return cls(DiscreteMap(min_value, max_value, kind, dtype))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def mapper(self) -> Mapper:
        return self._mapper

    @property
    def kind(self) -> MapperKind:
        return self._kind

    @property
    def dtype(self) -> FloatType:
        return self._mapper.dtype

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def normalize(self, value: float) -> float:
        if self._kind is MapperKind.DISCRETE:
            return self._mapper.normalize_float(value)
        return self._mapper.normalize(value)

    def denormalize(self, normalized: float) -> float:
        if self._kind is MapperKind.DISCRETE:
            return self._mapper.denormalize_float(normalized)
        return self._mapper.denormalize(normalized)

    def normalize_array(self, in_values: InBuffer, out_normalized: OutBuffer) -> int:
        if self._kind is MapperKind.DISCRETE:
            return self._mapper.normalize_array_float(in_values, out_normalized)
        return self._mapper.normalize_array(in_values, out_normalized)

    def denormalize_array(self, in_normalized: InBuffer, out_values: OutBuffer) -> int:
        if self._kind is MapperKind.DISCRETE:
            return self._mapper.denormalize_array_float(in_normalized, out_values)
        return self._mapper.denormalize_array(in_normalized, out_values)

    def __repr__(self) -> str:
        return f"NormalMap({self._mapper!r})"


@dataclass(frozen=True)
class PrecisionFactory:
    """``NormalMap`` factories bound to one precision (see ``f32``/``f64``)."""

    dtype: FloatType

    def __post_init__(self) -> None:
        object.__setattr__(self, "dtype", resolve_dtype(self.dtype))

    def linear(self, min_value: float, max_value: float, unit: Unit = Generic()) -> NormalMap:
        return NormalMap.linear(min_value, max_value, unit, self.dtype)

    def power(
        self,
        min_value: float,
        max_value: float,
        exponent: float,
        unit: Unit = Generic(),
    ) -> NormalMap:
        return NormalMap.power(min_value, max_value, exponent, unit, self.dtype)

    def log2(self, min_value: float, max_value: float) -> NormalMap:
        return NormalMap.log2(min_value, max_value, self.dtype)

    def discrete(self, min_value: Any, max_value: Any, kind: Callable[[int], Any] = int) -> NormalMap:
        return NormalMap.discrete(min_value, max_value, kind, self.dtype)


f32 = PrecisionFactory(np.float32)
f64 = PrecisionFactory(np.float64)
