"""Shared type aliases used across sendcov."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias

HitMap: TypeAlias = Mapping[int, int]
"""1-based line number -> number of times the line executed."""

CoverageArray: TypeAlias = list[int | None]
"""Dense per-line hit counts; ``None`` marks a line not relevant to coverage."""

BranchArray: TypeAlias = list[int]
"""Flat ``line, block, branch, hits`` quadruples, one per branch record."""


__all__ = [
    "BranchArray",
    "CoverageArray",
    "HitMap",
]
