"""Domain model for filtercalc.

Re-exports all public types for convenient access:
    from filtercalc.domain import FilterRequest, BloomParameters, InvalidInput
"""
from filtercalc.domain.errors import (
    CalculatorError,
    InvalidInput,
    UnsupportedConfiguration,
)
from filtercalc.domain.kinds import FilterKind
from filtercalc.domain.params import (
    BloomParameters,
    Capacity,
    ComparisonResult,
    CuckooParameters,
    LowerBound,
)
from filtercalc.domain.request import CapacityRequest, FilterRequest
from filtercalc.domain.types import Bits, Probability

__all__ = [
    "CalculatorError",
    "InvalidInput",
    "UnsupportedConfiguration",
    "FilterKind",
    "BloomParameters",
    "Capacity",
    "CapacityRequest",
    "ComparisonResult",
    "CuckooParameters",
    "LowerBound",
    "FilterRequest",
    "Bits",
    "Probability",
]
