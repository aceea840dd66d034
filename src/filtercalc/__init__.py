"""filtercalc -- optimal parameters for Bloom and cuckoo filters.

    from filtercalc import FilterRequest, compare
    result = compare(FilterRequest(expected_elements=1_000_000,
                                   target_false_positive_rate=0.01))
"""

from filtercalc.calculator import (
    CuckooConfig,
    compare,
    compute_bloom_parameters,
    compute_capacity,
    compute_cuckoo_parameters,
)
from filtercalc.domain import (
    BloomParameters,
    CalculatorError,
    Capacity,
    CapacityRequest,
    ComparisonResult,
    CuckooParameters,
    FilterKind,
    FilterRequest,
    InvalidInput,
    LowerBound,
    UnsupportedConfiguration,
)

__version__ = "0.1.0"

__all__ = [
    "BloomParameters",
    "CalculatorError",
    "Capacity",
    "CapacityRequest",
    "ComparisonResult",
    "CuckooConfig",
    "CuckooParameters",
    "FilterKind",
    "FilterRequest",
    "InvalidInput",
    "LowerBound",
    "UnsupportedConfiguration",
    "compare",
    "compute_bloom_parameters",
    "compute_capacity",
    "compute_cuckoo_parameters",
]
