"""FilterRequest and CapacityRequest -- the user's sizing constraints.

A request is built once from user input, handed to a calculator, and
discarded. Validation happens at construction time so every calculator
can assume a well-formed request.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from filtercalc.domain.errors import InvalidInput
from filtercalc.domain.types import Bits, Probability

# Upper limits that keep sizing arithmetic within float range.
MAX_EXPECTED_ELEMENTS = 2 ** 64
MAX_MEMORY_BUDGET_BITS = 2 ** 64


def _is_integer(value: object) -> bool:
    # bool is an int subclass; True elements is a typo, not a count
    return isinstance(value, int) and not isinstance(value, bool)


def _check_rate(p: object) -> None:
    if isinstance(p, bool) or not isinstance(p, (int, float)):
        raise InvalidInput(f"target_false_positive_rate must be a number, got {p!r}")
    if math.isnan(p) or not (0.0 < p < 1.0):
        raise InvalidInput(f"target_false_positive_rate must be in (0, 1), got {p!r}")


def _check_budget(budget: object) -> None:
    if not _is_integer(budget) or budget <= 0:
        raise InvalidInput(f"memory_budget_bits must be a positive integer, got {budget!r}")
    if budget > MAX_MEMORY_BUDGET_BITS:
        raise InvalidInput(
            f"memory_budget_bits must be at most {MAX_MEMORY_BUDGET_BITS}, got {budget}"
        )


@dataclass(frozen=True, slots=True)
class FilterRequest:
    """Immutable sizing request.

    At least one of target_false_positive_rate / memory_budget_bits must
    be given. When both are given the target rate drives sizing.
    """
    expected_elements: int
    target_false_positive_rate: Probability | None = None
    memory_budget_bits: Bits | None = None

    def __post_init__(self) -> None:
        n = self.expected_elements
        if not _is_integer(n) or n <= 0:
            raise InvalidInput(f"expected_elements must be a positive integer, got {n!r}")
        if n > MAX_EXPECTED_ELEMENTS:
            raise InvalidInput(
                f"expected_elements must be at most {MAX_EXPECTED_ELEMENTS}, got {n}"
            )

        p = self.target_false_positive_rate
        if p is not None:
            _check_rate(p)

        budget = self.memory_budget_bits
        if budget is not None:
            _check_budget(budget)

        if p is None and budget is None:
            raise InvalidInput(
                "either target_false_positive_rate or memory_budget_bits is required"
            )

    @property
    def rate_driven(self) -> bool:
        """True when sizing follows the target rate rather than the budget."""
        return self.target_false_positive_rate is not None


@dataclass(frozen=True, slots=True)
class CapacityRequest:
    """How many elements fit in a budget at a target rate. Both are required."""
    target_false_positive_rate: Probability
    memory_budget_bits: Bits

    def __post_init__(self) -> None:
        _check_rate(self.target_false_positive_rate)
        _check_budget(self.memory_budget_bits)
