"""Tests for FilterRequest validation."""
from __future__ import annotations

import dataclasses
import math

import pytest

from filtercalc.domain.errors import CalculatorError, InvalidInput
from filtercalc.domain.request import (
    MAX_EXPECTED_ELEMENTS,
    MAX_MEMORY_BUDGET_BITS,
    CapacityRequest,
    FilterRequest,
)


class TestValidRequests:
    def test_rate_only(self):
        req = FilterRequest(expected_elements=1000, target_false_positive_rate=0.01)
        assert req.rate_driven
        assert req.memory_budget_bits is None

    def test_budget_only(self):
        req = FilterRequest(expected_elements=1000, memory_budget_bits=8192)
        assert not req.rate_driven

    def test_both_given_is_rate_driven(self):
        req = FilterRequest(1000, 0.01, 8192)
        assert req.rate_driven

    def test_frozen(self):
        req = FilterRequest(expected_elements=10, target_false_positive_rate=0.1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.expected_elements = 20  # type: ignore[misc]

    def test_equality_by_fields(self):
        assert FilterRequest(10, 0.1) == FilterRequest(10, 0.1)
        assert FilterRequest(10, 0.1) != FilterRequest(10, 0.2)


class TestInvalidRequests:
    @pytest.mark.parametrize("n", [0, -5, -1])
    def test_non_positive_elements(self, n):
        with pytest.raises(InvalidInput):
            FilterRequest(expected_elements=n, target_false_positive_rate=0.01)

    @pytest.mark.parametrize("n", [1.5, "100", True, None])
    def test_non_integer_elements(self, n):
        with pytest.raises(InvalidInput):
            FilterRequest(expected_elements=n, target_false_positive_rate=0.01)

    @pytest.mark.parametrize("p", [0, 0.0, 1, 1.0, 1.5, -0.1, math.nan])
    def test_rate_outside_open_interval(self, p):
        with pytest.raises(InvalidInput):
            FilterRequest(expected_elements=100, target_false_positive_rate=p)

    def test_rate_wrong_type(self):
        with pytest.raises(InvalidInput):
            FilterRequest(expected_elements=100, target_false_positive_rate="0.01")

    @pytest.mark.parametrize("budget", [0, -8, 2.5])
    def test_bad_budget(self, budget):
        with pytest.raises(InvalidInput):
            FilterRequest(expected_elements=100, memory_budget_bits=budget)

    def test_limits(self):
        FilterRequest(MAX_EXPECTED_ELEMENTS, memory_budget_bits=MAX_MEMORY_BUDGET_BITS)
        with pytest.raises(InvalidInput, match="at most"):
            FilterRequest(MAX_EXPECTED_ELEMENTS + 1, 0.01)
        with pytest.raises(InvalidInput, match="at most"):
            FilterRequest(100, memory_budget_bits=MAX_MEMORY_BUDGET_BITS + 1)

    def test_neither_rate_nor_budget(self):
        with pytest.raises(InvalidInput, match="required"):
            FilterRequest(expected_elements=100)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            FilterRequest(expected_elements=0, target_false_positive_rate=0.01)
        with pytest.raises(CalculatorError):
            FilterRequest(expected_elements=0, target_false_positive_rate=0.01)


class TestCapacityRequest:
    def test_valid(self):
        req = CapacityRequest(target_false_positive_rate=0.01, memory_budget_bits=8192)
        assert req == CapacityRequest(0.01, 8192)

    @pytest.mark.parametrize("p, budget", [
        (0.0, 8192),
        (1.5, 8192),
        (math.nan, 8192),
        (0.01, 0),
        (0.01, None),
        (None, 8192),
        (0.01, MAX_MEMORY_BUDGET_BITS + 1),
    ])
    def test_invalid(self, p, budget):
        with pytest.raises(InvalidInput):
            CapacityRequest(target_false_positive_rate=p, memory_budget_bits=budget)
