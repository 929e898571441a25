"""
Supports
========

Support descriptors of univariate continuous distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf
from typing import Protocol, overload, runtime_checkable

from pysatl_random.types import BoolArray, Interval1D, Number, NumericArray


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """
    Interval support of a continuous distribution.

    Examples
    --------
    >>> ContinuousSupport(left=0.0, left_closed=False).contains(0.0)
    False
    """

    @property
    def is_bounded_left(self) -> bool:
        return self.left > -inf

    @property
    def is_bounded_right(self) -> bool:
        return self.right < inf


REAL_LINE = ContinuousSupport()
"""Support (-∞, ∞)."""

POSITIVE_HALF_LINE = ContinuousSupport(left=0.0, left_closed=False)
"""Support (0, ∞)."""


__all__ = [
    "Support",
    "ContinuousSupport",
    "REAL_LINE",
    "POSITIVE_HALF_LINE",
]
