"""Map parameter ranges to and from the normalized range ``[0.0, 1.0]``.

Linear, power, log2 and discrete mappings in single (``f32``) or double
(``f64``) precision, aimed at DSP parameter handling::

    from normal_map import Generic, f32

    lin_map = f32.linear(-50.0, 50.0, Generic())
    lin_map.normalize(25.0)     # 0.75
    lin_map.denormalize(0.25)   # -25.0
"""

from __future__ import annotations

import logging

from .discrete import DiscreteMap
from .linear import LinearMap
from .log2 import Log2Map
from .mapper import Mapper, MapperKind, NormalMap, PrecisionFactory, f32, f64
from .power import PowerMap
from .precision import DEFAULT_DTYPE, SUPPORTED_DTYPES
from .range_base import RangeBase
from .units import DEFAULT_FLOOR_DB, Decibels, Generic, Unit, coeff_to_db, db_to_coeff

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_DTYPE",
    "DEFAULT_FLOOR_DB",
    "SUPPORTED_DTYPES",
    "Decibels",
    "DiscreteMap",
    "Generic",
    "LinearMap",
    "Log2Map",
    "Mapper",
    "MapperKind",
    "NormalMap",
    "PowerMap",
    "PrecisionFactory",
    "RangeBase",
    "Unit",
    "coeff_to_db",
    "db_to_coeff",
    "f32",
    "f64",
]
