"""Shared type aliases used across the domain."""
from __future__ import annotations

from typing import TypeAlias

Bits: TypeAlias = int
Probability: TypeAlias = float  # open interval (0, 1)
