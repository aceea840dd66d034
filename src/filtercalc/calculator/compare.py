"""Side-by-side comparison of Bloom and cuckoo layouts, and capacity lookup.

Each filter kind is a plain function registered in CALCULATORS; a new
kind is a new entry, not a change to compare().
"""
from __future__ import annotations

import logging
import sys
from types import MappingProxyType
from typing import Callable, Mapping, TypeAlias

from filtercalc.calculator.bloom import bloom_capacity, compute_bloom_parameters
from filtercalc.calculator.cuckoo import (
    CuckooConfig,
    compute_cuckoo_parameters,
    cuckoo_capacity,
)
from filtercalc.calculator.theory import lower_bound, space_overhead
from filtercalc.domain.kinds import FilterKind
from filtercalc.domain.params import (
    BloomParameters,
    Capacity,
    ComparisonResult,
    CuckooParameters,
)
from filtercalc.domain.request import CapacityRequest, FilterRequest

log = logging.getLogger(__name__)

Calculator: TypeAlias = Callable[[FilterRequest], "BloomParameters | CuckooParameters"]

CALCULATORS: Mapping[FilterKind, Calculator] = MappingProxyType({
    FilterKind.BLOOM: compute_bloom_parameters,
    FilterKind.CUCKOO: compute_cuckoo_parameters,
})


def compute(kind: FilterKind, request: FilterRequest) -> BloomParameters | CuckooParameters:
    """Run the calculator registered for `kind`."""
    return CALCULATORS[kind](request)


def _recommend(
    bloom: BloomParameters, cuckoo: CuckooParameters
) -> FilterKind:
    # Normalising by log2(1/achieved) compares both at equal achieved
    # rate. Ties go to Bloom.
    if space_overhead(cuckoo) < space_overhead(bloom):
        return FilterKind.CUCKOO
    return FilterKind.BLOOM


def compare(
    request: FilterRequest,
    cuckoo_config: CuckooConfig | None = None,
) -> ComparisonResult:
    """Size both filter kinds for `request` and recommend one.

    The bound is taken at the requested rate, or at the better of the
    two achieved rates when only a memory budget was given.
    """
    bloom = compute_bloom_parameters(request)
    cuckoo = compute_cuckoo_parameters(request, cuckoo_config)

    if request.rate_driven:
        rate = request.target_false_positive_rate
    else:
        rate = min(bloom.achieved_false_positive_rate, cuckoo.achieved_false_positive_rate)
        rate = min(max(rate, sys.float_info.min), 1.0 - sys.float_info.epsilon)

    result = ComparisonResult(
        bloom=bloom,
        cuckoo=cuckoo,
        lower_bound=lower_bound(request.expected_elements, rate),
        recommended=_recommend(bloom, cuckoo),
    )
    log.debug("compare n=%d recommended=%s", request.expected_elements, result.recommended.value)
    return result


def compute_capacity(
    kind: FilterKind,
    request: CapacityRequest,
    cuckoo_config: CuckooConfig | None = None,
) -> Capacity:
    """Most elements a `kind` filter fits in the budget at the target rate."""
    if kind is FilterKind.CUCKOO:
        capacity = cuckoo_capacity(request, cuckoo_config)
    else:
        capacity = bloom_capacity(request)
    log.debug("capacity kind=%s elements=%d", kind.value, capacity.elements)
    return capacity
