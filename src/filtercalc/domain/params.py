"""Result records returned by the calculators.

All records are frozen and display-only. to_dict() gives plain values
for JSON output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from filtercalc.domain.kinds import FilterKind
from filtercalc.domain.types import Bits, Probability


@dataclass(frozen=True, slots=True)
class BloomParameters:
    bit_array_size: Bits
    num_hash_functions: int
    achieved_false_positive_rate: Probability
    bits_per_element: float

    @property
    def kind(self) -> FilterKind:
        return FilterKind.BLOOM

    @property
    def storage_bits(self) -> Bits:
        return self.bit_array_size

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True, slots=True)
class CuckooParameters:
    """Cuckoo filter layout.

    load_factor is the occupancy target used for sizing, not the
    occupancy the layout ends up with (see occupancy()).
    """
    num_buckets: int
    entries_per_bucket: int
    fingerprint_bits: int
    load_factor: float
    achieved_false_positive_rate: Probability
    bits_per_element: float

    @property
    def kind(self) -> FilterKind:
        return FilterKind.CUCKOO

    @property
    def capacity(self) -> int:
        """Total fingerprint slots."""
        return self.num_buckets * self.entries_per_bucket

    @property
    def storage_bits(self) -> Bits:
        return self.capacity * self.fingerprint_bits

    def occupancy(self, elements: int) -> float:
        """Fraction of slots filled once `elements` items are stored."""
        return elements / self.capacity

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            **asdict(self),
            "storage_bits": self.storage_bits,
        }


@dataclass(frozen=True, slots=True)
class LowerBound:
    """Space any approximate-membership structure needs for a given rate.

    bits_per_element = log2(1/p)
    """
    false_positive_rate: Probability
    bits_per_element: float
    storage_bits: Bits

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Side-by-side Bloom and Cuckoo layouts for one request."""
    bloom: BloomParameters
    cuckoo: CuckooParameters
    lower_bound: LowerBound
    recommended: FilterKind

    def for_kind(self, kind: FilterKind) -> BloomParameters | CuckooParameters:
        return self.bloom if kind is FilterKind.BLOOM else self.cuckoo

    def to_dict(self) -> dict[str, Any]:
        return {
            "bloom": self.bloom.to_dict(),
            "cuckoo": self.cuckoo.to_dict(),
            "lower_bound": self.lower_bound.to_dict(),
            "recommended": self.recommended.value,
        }


@dataclass(frozen=True, slots=True)
class Capacity:
    """Most elements a filter fits in a memory budget at a target rate.

    parameters is the layout sized for exactly that many elements.
    """
    elements: int
    parameters: BloomParameters | CuckooParameters

    @property
    def kind(self) -> FilterKind:
        return self.parameters.kind

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "elements": self.elements,
            "parameters": self.parameters.to_dict(),
        }
