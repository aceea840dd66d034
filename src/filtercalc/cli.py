"""filtercalc CLI entry point.

Usage: filtercalc {bloom,cuckoo,compare} --elements 1M --rate 1% [--memory 2MiB]
       filtercalc capacity --kind cuckoo --rate 1% --memory 2MiB
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, TypeVar

from filtercalc.calculator.bloom import compute_bloom_parameters
from filtercalc.calculator.compare import compare, compute_capacity
from filtercalc.calculator.cuckoo import (
    DEFAULT_ENTRIES_PER_BUCKET,
    RECOMMENDED_LOAD_FACTORS,
    CuckooConfig,
    compute_cuckoo_parameters,
)
from filtercalc.calculator.theory import max_elements
from filtercalc.domain.errors import CalculatorError
from filtercalc.domain.kinds import FilterKind
from filtercalc.domain.request import CapacityRequest, FilterRequest
from filtercalc.report import (
    format_bloom,
    format_capacity,
    format_comparison,
    format_cuckoo,
)
from filtercalc.units import parse_count, parse_rate, parse_storage

log = logging.getLogger(__name__)

T = TypeVar("T")


def _unit_type(parse: Callable[[str], T]) -> Callable[[str], T]:
    """Adapt a units parser to argparse's type= protocol."""
    def convert(text: str) -> T:
        try:
            return parse(text)
        except CalculatorError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None
    convert.__name__ = parse.__name__
    return convert


def _add_request_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-n", "--elements", type=_unit_type(parse_count), required=True,
        help="Expected number of elements, e.g. 1000000 or 1M",
    )
    p.add_argument(
        "-p", "--rate", type=_unit_type(parse_rate), default=None,
        help="Target false positive rate, e.g. 0.01 or 1%%",
    )
    p.add_argument(
        "-m", "--memory", type=_unit_type(parse_storage), default=None,
        help="Memory budget: bits, or with a unit (Kb, MB, MiB, ...)",
    )
    p.add_argument(
        "--json", action="store_true",
        help="Print the result as JSON instead of a table.",
    )


def _add_capacity_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-k", "--kind", choices=[kind.value for kind in FilterKind],
        default=FilterKind.BLOOM.value,
        help="Filter kind (default: bloom)",
    )
    p.add_argument(
        "-p", "--rate", type=_unit_type(parse_rate), required=True,
        help="Target false positive rate, e.g. 0.01 or 1%%",
    )
    p.add_argument(
        "-m", "--memory", type=_unit_type(parse_storage), required=True,
        help="Memory budget: bits, or with a unit (Kb, MB, MiB, ...)",
    )
    p.add_argument(
        "--json", action="store_true",
        help="Print the result as JSON instead of a table.",
    )


def _add_cuckoo_arguments(p: argparse.ArgumentParser) -> None:
    choices = sorted(RECOMMENDED_LOAD_FACTORS)
    p.add_argument(
        "-b", "--entries-per-bucket", type=int, default=DEFAULT_ENTRIES_PER_BUCKET,
        help=f"Fingerprints per bucket, one of {choices} "
             f"(default: {DEFAULT_ENTRIES_PER_BUCKET})",
    )
    p.add_argument(
        "--load-factor", type=float, default=None,
        help="Occupancy target in (0, 1] (default: recommended for the bucket size)",
    )
    p.add_argument(
        "--exact-buckets", action="store_true",
        help="Keep the exact bucket count instead of rounding to a power of two.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filtercalc",
        description="Compute and compare optimal Bloom and cuckoo filter parameters.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log computed parameters at DEBUG level.",
    )
    subparsers = parser.add_subparsers(dest="command")

    bloom = subparsers.add_parser("bloom", help="Size a Bloom filter.")
    _add_request_arguments(bloom)

    cuckoo = subparsers.add_parser("cuckoo", help="Size a cuckoo filter.")
    _add_request_arguments(cuckoo)
    _add_cuckoo_arguments(cuckoo)

    both = subparsers.add_parser("compare", help="Size both and compare.")
    _add_request_arguments(both)
    _add_cuckoo_arguments(both)

    capacity = subparsers.add_parser(
        "capacity", help="Most elements a memory budget holds at a target rate."
    )
    _add_capacity_arguments(capacity)
    _add_cuckoo_arguments(capacity)
    return parser


def _cuckoo_config(args: argparse.Namespace) -> CuckooConfig:
    return CuckooConfig(
        entries_per_bucket=args.entries_per_bucket,
        load_factor=args.load_factor,
        power_of_two_buckets=not args.exact_buckets,
    )


def _run_capacity(args: argparse.Namespace) -> str:
    request = CapacityRequest(
        target_false_positive_rate=args.rate,
        memory_budget_bits=args.memory,
    )
    kind = FilterKind(args.kind)
    config = _cuckoo_config(args) if kind is FilterKind.CUCKOO else None
    result = compute_capacity(kind, request, config)
    if args.json:
        return json.dumps(result.to_dict(), indent=2)
    bound = max_elements(request.memory_budget_bits, request.target_false_positive_rate)
    return format_capacity(result, bound_elements=bound)


def _run(args: argparse.Namespace) -> str:
    if args.command == "capacity":
        return _run_capacity(args)
    request = FilterRequest(
        expected_elements=args.elements,
        target_false_positive_rate=args.rate,
        memory_budget_bits=args.memory,
    )
    if args.command == "bloom":
        result = compute_bloom_parameters(request)
        text = format_bloom(result)
    elif args.command == "cuckoo":
        result = compute_cuckoo_parameters(request, _cuckoo_config(args))
        text = format_cuckoo(result, elements=request.expected_elements)
    else:
        result = compare(request, _cuckoo_config(args))
        text = format_comparison(result)

    if args.json:
        return json.dumps(result.to_dict(), indent=2)
    return text


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        output = _run(args)
    except CalculatorError as exc:
        log.debug("calculation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
