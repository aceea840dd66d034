"""Cuckoo filter sizing.

A cuckoo filter stores an f-bit fingerprint of each element in one of
two candidate buckets, each bucket holding b fingerprints. A lookup
compares against at most 2b stored fingerprints, so

    p ~= 2b / 2^f   =>   f = ceil(log2(2b / p))

The table can only be filled up to a load factor alpha that depends on
b before insertions start failing, so the bucket count is sized as

    buckets = ceil(n / (alpha * b))

and, by default, rounded up to a power of two so bucket indices can be
taken with a bit mask.

References:
    Fan, Andersen, Kaminsky & Mitzenmacher, "Cuckoo Filter: Practically
    Better Than Bloom", CoNEXT 2014.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType

from filtercalc.domain.errors import InvalidInput, UnsupportedConfiguration
from filtercalc.domain.params import Capacity, CuckooParameters
from filtercalc.domain.request import CapacityRequest, FilterRequest

log = logging.getLogger(__name__)

# Candidate buckets per element (partial-key cuckoo hashing).
CANDIDATE_BUCKETS = 2

# Maximum load factor reached in practice, Fan et al. 2014, section 5.1
# (b=1 reaches only 50%; 0.84 is the b=2 figure).
RECOMMENDED_LOAD_FACTORS = MappingProxyType({
    1: 0.50,
    2: 0.84,
    4: 0.95,
    8: 0.98,
})

# Occupancy above the recommended load factor that power-of-two sizing
# accepts before doubling the table (reference implementation: 0.96 at b=4).
# Only applied to table defaults; an explicit load_factor is a hard limit.
POWER_OF_TWO_TOLERANCE = 0.01

DEFAULT_ENTRIES_PER_BUCKET = 4

# Budget mode never widens fingerprints past a 64-bit hash.
MAX_FINGERPRINT_BITS = 64


@dataclass(frozen=True, slots=True)
class CuckooConfig:
    """Hyper parameters for cuckoo sizing.

    entries_per_bucket: fingerprints per bucket, one of 1, 2, 4, 8.
    load_factor: occupancy target; None picks the recommended value for
        entries_per_bucket. Power-of-two sizing may overshoot the
        recommended value by POWER_OF_TWO_TOLERANCE, never an explicit one.
    power_of_two_buckets: round the bucket count up to a power of two.
    """
    entries_per_bucket: int = DEFAULT_ENTRIES_PER_BUCKET
    load_factor: float | None = None
    power_of_two_buckets: bool = True

    def __post_init__(self) -> None:
        b = self.entries_per_bucket
        if isinstance(b, bool) or b not in RECOMMENDED_LOAD_FACTORS:
            supported = ", ".join(str(size) for size in RECOMMENDED_LOAD_FACTORS)
            raise UnsupportedConfiguration(
                f"entries_per_bucket={b!r} is not supported "
                f"(choose one of {supported})"
            )
        alpha = self.load_factor
        if alpha is not None and (math.isnan(alpha) or not (0.0 < alpha <= 1.0)):
            raise InvalidInput(f"load_factor must be in (0, 1], got {alpha!r}")

    @property
    def effective_load_factor(self) -> float:
        if self.load_factor is not None:
            return self.load_factor
        return RECOMMENDED_LOAD_FACTORS[self.entries_per_bucket]


def next_power_of_two(value: int) -> int:
    """Smallest power of two >= value (1 for value <= 1)."""
    if value <= 1:
        return 1
    return 1 << (value - 1).bit_length()


def previous_power_of_two(value: int) -> int:
    """Largest power of two <= value (0 for value < 1)."""
    if value < 1:
        return 0
    return 1 << (value.bit_length() - 1)


def _fingerprint_bits(fp_rate: float, entries_per_bucket: int) -> int:
    """f = ceil(log2(2b) - log2(p)), at least 1."""
    # subtracting logs keeps subnormal rates finite
    exact = math.log2(CANDIDATE_BUCKETS * entries_per_bucket) - math.log2(fp_rate)
    f = max(1, math.ceil(exact))
    # log2 can land a hair under an exact integer
    if false_positive_rate(f, entries_per_bucket) > fp_rate:
        f += 1
    return f


def _bucket_count(n: int, config: CuckooConfig) -> int:
    b = config.entries_per_bucket
    alpha = config.effective_load_factor
    if not config.power_of_two_buckets:
        return max(1, math.ceil(n / (alpha * b)))
    # Round up, but accept a slightly fuller table before doubling it.
    ceiling = alpha
    if config.load_factor is None:
        ceiling = min(1.0, alpha + POWER_OF_TWO_TOLERANCE)
    return next_power_of_two(math.ceil(n / (ceiling * b)))


def false_positive_rate(fingerprint_bits: int, entries_per_bucket: int) -> float:
    """Upper bound 2b / 2^f, capped at 1."""
    return min(1.0, math.ldexp(CANDIDATE_BUCKETS * entries_per_bucket, -fingerprint_bits))


def _parameters(
    n: int, buckets: int, f: int, config: CuckooConfig
) -> CuckooParameters:
    b = config.entries_per_bucket
    params = CuckooParameters(
        num_buckets=buckets,
        entries_per_bucket=b,
        fingerprint_bits=f,
        load_factor=config.effective_load_factor,
        achieved_false_positive_rate=false_positive_rate(f, b),
        bits_per_element=buckets * b * f / n,
    )
    log.debug(
        "cuckoo n=%d buckets=%d b=%d f=%d fp=%.6g",
        n, buckets, b, f, params.achieved_false_positive_rate,
    )
    return params


def compute_cuckoo_parameters(
    request: FilterRequest,
    config: CuckooConfig | None = None,
) -> CuckooParameters:
    """Size a cuckoo filter for `request`.

    With a target rate the fingerprint size follows from the rate. With
    only a memory budget the fingerprint takes every bit the bucket
    layout leaves room for, up to MAX_FINGERPRINT_BITS.

    Raises:
        InvalidInput: the budget cannot hold even 1-bit fingerprints.
    """
    config = config or CuckooConfig()
    n = request.expected_elements
    b = config.entries_per_bucket
    buckets = _bucket_count(n, config)

    if request.rate_driven:
        f = _fingerprint_bits(request.target_false_positive_rate, b)
    else:
        f = min(MAX_FINGERPRINT_BITS, request.memory_budget_bits // (buckets * b))
        if f < 1:
            raise InvalidInput(
                f"memory budget of {request.memory_budget_bits} bits is too small "
                f"for {n} elements ({buckets * b} slots need at least 1 bit each)"
            )
    return _parameters(n, buckets, f, config)


def cuckoo_capacity(
    request: CapacityRequest,
    config: CuckooConfig | None = None,
) -> Capacity:
    """Most elements a cuckoo filter within the budget holds at the target rate.

    The fingerprint follows from the rate; the budget then buys as many
    buckets as fit, and the load factor says how many of their slots
    can be filled.

    Raises:
        InvalidInput: the budget cannot hold a single element.
    """
    config = config or CuckooConfig()
    b = config.entries_per_bucket
    f = _fingerprint_bits(request.target_false_positive_rate, b)
    buckets = request.memory_budget_bits // (f * b)
    if config.power_of_two_buckets:
        buckets = previous_power_of_two(buckets)
    elements = math.floor(buckets * b * config.effective_load_factor)
    if elements < 1:
        raise InvalidInput(
            f"memory budget of {request.memory_budget_bits} bits cannot hold one "
            f"element at {f}-bit fingerprints"
        )
    return Capacity(elements=elements, parameters=_parameters(elements, buckets, f, config))
