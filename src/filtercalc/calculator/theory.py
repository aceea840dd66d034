"""Information-theoretic lower bound for approximate membership.

Any structure answering membership queries with false positive rate p
needs at least log2(1/p) bits per element (Carter et al., 1978). The
ratio between a concrete layout's bits per element and this bound is
its space overhead: ~1.44 for an optimal Bloom filter, ~(f/alpha)/log2(1/p)
for a cuckoo filter.
"""
from __future__ import annotations

import math

from filtercalc.calculator.cuckoo import CANDIDATE_BUCKETS
from filtercalc.domain.errors import InvalidInput
from filtercalc.domain.params import BloomParameters, CuckooParameters, LowerBound


def lower_bound(elements: int, fp_rate: float) -> LowerBound:
    """Minimum space for `elements` items at false positive rate `fp_rate`."""
    if elements <= 0:
        raise InvalidInput(f"elements must be positive, got {elements}")
    if not (0.0 < fp_rate < 1.0):
        raise InvalidInput(f"fp_rate must be in (0, 1), got {fp_rate}")
    bits = -math.log2(fp_rate)
    return LowerBound(
        false_positive_rate=fp_rate,
        bits_per_element=bits,
        storage_bits=int(math.ceil(elements * bits)),
    )


def max_elements(storage_bits: int, fp_rate: float) -> int:
    """Most elements any structure fits in `storage_bits` at `fp_rate`."""
    if storage_bits <= 0:
        raise InvalidInput(f"storage_bits must be positive, got {storage_bits}")
    if not (0.0 < fp_rate < 1.0):
        raise InvalidInput(f"fp_rate must be in (0, 1), got {fp_rate}")
    return math.floor(storage_bits / -math.log2(fp_rate))


def _bits_of_filtering(params: BloomParameters | CuckooParameters) -> float:
    """log2(1 / achieved rate), from the layout when the rate underflowed."""
    achieved = params.achieved_false_positive_rate
    if achieved > 0.0:
        return -math.log2(achieved)
    if isinstance(params, CuckooParameters):
        return params.fingerprint_bits - math.log2(
            CANDIDATE_BUCKETS * params.entries_per_bucket
        )
    # (1 - e^(-k/c))^k with c bits per element, in log space
    k = params.num_hash_functions
    return -k * math.log1p(-math.exp(-k / params.bits_per_element)) / math.log(2)


def space_overhead(params: BloomParameters | CuckooParameters) -> float:
    """Bits per element relative to the bound at the rate actually achieved.

    Returns inf when the layout achieves no filtering at all (rate 1).
    """
    if params.achieved_false_positive_rate >= 1.0:
        return math.inf
    return params.bits_per_element / _bits_of_filtering(params)
