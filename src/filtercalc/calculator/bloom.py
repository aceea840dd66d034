"""Bloom filter sizing.

A Bloom filter is a bit array of m bits probed by k hash functions.
For n elements and target false positive rate p the optimum is

    m = -(n * ln(p)) / (ln(2)^2)
    k = (m / n) * ln(2)

Both are rounded to integers, so the rate actually achieved is
recomputed from the rounded values:

    p' = (1 - e^(-k * n / m))^k

Inverting the size formula gives the capacity of an m-bit filter.

References:
    Bloom, "Space/time trade-offs in hash coding with allowable errors", 1970.
    Broder & Mitzenmacher, "Network applications of Bloom filters", 2004.
"""

from __future__ import annotations

import logging
import math

from filtercalc.domain.errors import InvalidInput
from filtercalc.domain.params import BloomParameters, Capacity
from filtercalc.domain.request import CapacityRequest, FilterRequest

log = logging.getLogger(__name__)

_LN2 = math.log(2)


def _optimal_size(expected: int, fp_rate: float) -> int:
    """Compute optimal bit array size m for given capacity and FP rate.

    m = -(n * ln(p)) / (ln(2)^2)
    """
    m = -(expected * math.log(fp_rate)) / (_LN2 ** 2)
    return max(1, int(math.ceil(m)))


def _optimal_hashes(m: int, expected: int) -> int:
    """Compute optimal number of hash functions k.

    k = (m / n) * ln(2)
    """
    k = (m / expected) * _LN2
    return max(1, int(round(k)))


def false_positive_rate(m: int, k: int, n: int) -> float:
    """FP rate of an m-bit filter with k hashes holding n elements."""
    return (1.0 - math.exp(-k * n / m)) ** k


def _parameters(n: int, m: int) -> BloomParameters:
    k = _optimal_hashes(m, n)
    params = BloomParameters(
        bit_array_size=m,
        num_hash_functions=k,
        achieved_false_positive_rate=false_positive_rate(m, k, n),
        bits_per_element=m / n,
    )
    log.debug(
        "bloom n=%d m=%d k=%d fp=%.6g", n, m, k, params.achieved_false_positive_rate
    )
    return params


def compute_bloom_parameters(request: FilterRequest) -> BloomParameters:
    """Size a Bloom filter for `request`.

    The target rate decides m when present; otherwise m is the whole
    memory budget and the rate follows from it.
    """
    n = request.expected_elements
    if request.rate_driven:
        m = _optimal_size(n, request.target_false_positive_rate)
    else:
        m = request.memory_budget_bits
    return _parameters(n, m)


def bloom_capacity(request: CapacityRequest) -> Capacity:
    """Most elements an m-bit Bloom filter holds at the target rate.

    n = floor(m * ln(2)^2 / -ln(p))

    Raises:
        InvalidInput: the budget cannot hold a single element.
    """
    m = request.memory_budget_bits
    fp_rate = request.target_false_positive_rate
    n = math.floor(m * _LN2 ** 2 / -math.log(fp_rate))
    if n < 1:
        raise InvalidInput(
            f"memory budget of {m} bits cannot hold one element at rate {fp_rate:g}"
        )
    return Capacity(elements=n, parameters=_parameters(n, m))
