"""Parameter calculators for probabilistic membership filters.

Public API:
    compute_bloom_parameters: bit array size and hash count
    compute_cuckoo_parameters: bucket layout and fingerprint size
    compare: both layouts plus a recommendation
    compute_capacity: most elements a budget holds at a target rate
    lower_bound / space_overhead: information-theoretic reference point
"""

from filtercalc.calculator.bloom import bloom_capacity, compute_bloom_parameters
from filtercalc.calculator.compare import CALCULATORS, compare, compute, compute_capacity
from filtercalc.calculator.cuckoo import (
    RECOMMENDED_LOAD_FACTORS,
    CuckooConfig,
    compute_cuckoo_parameters,
    cuckoo_capacity,
)
from filtercalc.calculator.theory import lower_bound, max_elements, space_overhead

__all__ = [
    "CALCULATORS",
    "RECOMMENDED_LOAD_FACTORS",
    "CuckooConfig",
    "bloom_capacity",
    "compare",
    "compute",
    "compute_bloom_parameters",
    "compute_capacity",
    "compute_cuckoo_parameters",
    "cuckoo_capacity",
    "lower_bound",
    "max_elements",
    "space_overhead",
]
