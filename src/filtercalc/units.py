"""Parsing and formatting of human-entered quantities.

    parse_rate("1%")       -> 0.01
    parse_count("10M")     -> 10_000_000
    parse_storage("2MiB")  -> 16_777_216  (bits)

Storage suffixes: a bare number is bits; K/Kb, M/Mb, G/Gb, T/Tb are SI
bits; KB, MB, GB, TB are SI bytes; KiB, MiB, GiB, TiB are binary bytes.
"""
from __future__ import annotations

import re

from filtercalc.domain.errors import InvalidInput

_RATE_RE = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)(?:[eE]([-+]?\d+))?\s*(%)?\s*$")
_COUNT_RE = re.compile(r"^\s*(\d+)\s*([KMGT])?\s*$")
_STORAGE_RE = re.compile(r"^\s*(\d+)\s*([KMGT](?:i?B|b)?)?\s*$")

_SI = {"K": 10**3, "M": 10**6, "G": 10**9, "T": 10**12}
_BINARY = {"K": 2**10, "M": 2**20, "G": 2**30, "T": 2**40}

_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def parse_rate(text: str) -> float:
    """Parse a false positive rate, either a fraction or a percentage."""
    match = _RATE_RE.match(text)
    if match is None:
        raise InvalidInput(f"not a false positive rate: {text!r}")
    mantissa, exponent, percent = match.groups()
    rate = float(mantissa + (f"e{exponent}" if exponent else ""))
    if percent:
        rate /= 100.0
    if not (0.0 < rate < 1.0):
        raise InvalidInput(f"false positive rate must be in (0, 1), got {text!r}")
    return rate


def parse_count(text: str) -> int:
    """Parse an element count with an optional SI suffix."""
    match = _COUNT_RE.match(text)
    if match is None:
        raise InvalidInput(f"not an element count: {text!r}")
    number, suffix = match.groups()
    count = int(number) * (_SI[suffix] if suffix else 1)
    if count <= 0:
        raise InvalidInput(f"element count must be positive, got {text!r}")
    return count


def parse_storage(text: str) -> int:
    """Parse a storage size and return it in bits."""
    match = _STORAGE_RE.match(text)
    if match is None:
        raise InvalidInput(f"not a storage size: {text!r}")
    number, unit = match.groups()
    bits = int(number)
    if unit:
        prefix, rest = unit[0], unit[1:]
        if rest in ("", "b"):
            bits *= _SI[prefix]
        elif rest == "B":
            bits *= 8 * _SI[prefix]
        else:  # iB
            bits *= 8 * _BINARY[prefix]
    if bits <= 0:
        raise InvalidInput(f"storage size must be positive, got {text!r}")
    return bits


def format_bits(bits: int) -> str:
    """Render a bit count with a binary byte unit, e.g. '1.14 MiB'."""
    if bits < 8:
        return f"{bits} bits"
    value = bits / 8
    exp = 0
    while value >= 1024 and exp < len(_BYTE_UNITS) - 1:
        value /= 1024
        exp += 1
    if exp == 0:
        return f"{value:.0f} B" if value.is_integer() else f"{value:.1f} B"
    return f"{value:.2f} {_BYTE_UNITS[exp]}"
