"""Report generation for calculator results.

Formats parameter records into aligned plain-text tables for terminal
output. JSON output goes through the records' own to_dict().
"""
from __future__ import annotations

from filtercalc.calculator.cuckoo import CANDIDATE_BUCKETS
from filtercalc.calculator.theory import space_overhead
from filtercalc.domain.params import (
    BloomParameters,
    Capacity,
    ComparisonResult,
    CuckooParameters,
    LowerBound,
)
from filtercalc.units import format_bits


def _rate(p: float) -> str:
    return f"{p:.6g} ({p * 100:.4g}%)"


def format_bloom(params: BloomParameters, label: str = "Bloom filter") -> str:
    """Format BloomParameters as a readable report string."""
    lines = [
        f"=== {label} ===",
        f"Bit array size:      {params.bit_array_size:,} bits ({format_bits(params.storage_bits)})",
        f"Hash functions:      {params.num_hash_functions}",
        f"Bits per element:    {params.bits_per_element:.3f}",
        f"False positive rate: {_rate(params.achieved_false_positive_rate)}",
    ]
    return "\n".join(lines)


def format_cuckoo(
    params: CuckooParameters,
    elements: int | None = None,
    label: str = "Cuckoo filter",
) -> str:
    """Format CuckooParameters; occupancy is shown when `elements` is known."""
    lines = [
        f"=== {label} ===",
        f"Buckets:             {params.num_buckets:,}",
        f"Entries per bucket:  {params.entries_per_bucket}",
        f"Fingerprint size:    {params.fingerprint_bits} bits",
        f"Load factor target:  {params.load_factor:.2f}",
    ]
    if elements is not None:
        lines.append(f"Occupancy:           {params.occupancy(elements):.4f}")
    lines += [
        f"Storage:             {params.storage_bits:,} bits ({format_bits(params.storage_bits)})",
        f"Bits per element:    {params.bits_per_element:.3f}",
        f"False positive rate: {_rate(params.achieved_false_positive_rate)}",
    ]
    return "\n".join(lines)


def format_lower_bound(bound: LowerBound) -> str:
    return (
        f"Lower bound at p={bound.false_positive_rate:.6g}: "
        f"{bound.bits_per_element:.3f} bits/element, "
        f"{bound.storage_bits:,} bits ({format_bits(bound.storage_bits)})"
    )


def format_comparison(result: ComparisonResult) -> str:
    """Format a Bloom vs cuckoo comparison table."""
    bloom, cuckoo = result.bloom, result.cuckoo
    lines = [
        f"{'Metric':<24} {'Bloom':>16} {'Cuckoo':>16}",
        "-" * 58,
        f"{'Storage (bits)':<24} {bloom.storage_bits:>16,} {cuckoo.storage_bits:>16,}",
        f"{'Bits per element':<24} {bloom.bits_per_element:>16.3f} "
        f"{cuckoo.bits_per_element:>16.3f}",
        f"{'False positive rate':<24} {bloom.achieved_false_positive_rate:>16.6g} "
        f"{cuckoo.achieved_false_positive_rate:>16.6g}",
        f"{'Overhead vs bound':<24} {space_overhead(bloom):>15.3f}x "
        f"{space_overhead(cuckoo):>15.3f}x",
        f"{'Hash functions':<24} {bloom.num_hash_functions:>16} {CANDIDATE_BUCKETS:>16}",
        f"{'Fingerprint (bits)':<24} {'-':>16} {cuckoo.fingerprint_bits:>16}",
        f"{'Buckets x entries':<24} {'-':>16} "
        f"{f'{cuckoo.num_buckets:,} x {cuckoo.entries_per_bucket}':>16}",
        "",
        format_lower_bound(result.lower_bound),
        f"Recommended: {result.recommended.label}",
    ]
    return "\n".join(lines)


def format_capacity(capacity: Capacity, bound_elements: int | None = None) -> str:
    """Format a capacity lookup: item count first, then the layout."""
    params = capacity.parameters
    lines = [f"Number of items in filter: {capacity.elements:,}"]
    if bound_elements is not None:
        lines.append(f"Lower-bound capacity:      {bound_elements:,}")
    lines.append("")
    if isinstance(params, CuckooParameters):
        lines.append(format_cuckoo(params, elements=capacity.elements))
    else:
        lines.append(format_bloom(params))
    return "\n".join(lines)
