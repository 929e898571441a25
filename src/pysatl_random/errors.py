"""
Exception Hierarchy
===================

All errors raised by PySATL Random inherit from :class:`DistributionError`.
Validation failures additionally inherit from :class:`ValueError` and
numerical failures from :class:`RuntimeError`, so callers may catch either
the library-specific or the built-in category.

Notes
-----
- Parameter validation is eager: an invalid value never reaches the
  parameter store.
- A solver that does not converge raises :class:`WrongReturnError` instead
  of returning its last iterate.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class DistributionError(Exception):
    """Base exception for all PySATL Random errors."""


class InvalidParameterError(DistributionError, ValueError):
    """
    A parameter value violates its parametrization constraint.

    Attributes
    ----------
    constraint : str or None
        Description of the violated constraint (e.g. ``"shape > 0"``).
    """

    def __init__(self, message: str, constraint: str | None = None) -> None:
        super().__init__(message)
        self.constraint = constraint


class WrongSampleError(DistributionError, ValueError):
    """A sample element cannot be produced by the distribution."""


class TooFewElementsError(DistributionError, ValueError):
    """
    The sample is smaller than the estimator requires.

    Attributes
    ----------
    required : int
        Minimal number of elements.
    actual : int
        Number of elements passed.
    """

    def __init__(self, message: str, required: int, actual: int) -> None:
        super().__init__(message)
        self.required = required
        self.actual = actual


class WrongLevelError(DistributionError, ValueError):
    """
    A probability level lies outside of ``[0, 1]``.

    Attributes
    ----------
    level : float
        The offending probability.
    """

    def __init__(self, message: str, level: float) -> None:
        super().__init__(message)
        self.level = level


class NotApplicableError(DistributionError, ValueError):
    """The estimator cannot be applied to this sample or configuration."""


class WrongReturnError(DistributionError, RuntimeError):
    """
    An iterative numerical routine failed to produce a valid result.

    Raised by the root finders behind quantiles and shape estimation, and by
    rejection samplers which exhausted their attempt budget.

    Attributes
    ----------
    iterations : int
        Number of iterations performed.
    residual : float or None
        Last residual, if the routine tracks one.
    """

    def __init__(self, message: str, iterations: int, residual: float | None = None) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class BufferSizeWarning(RuntimeWarning):
    """A bulk evaluation was skipped because the output buffer is too short."""


__all__ = [
    "DistributionError",
    "InvalidParameterError",
    "WrongSampleError",
    "TooFewElementsError",
    "WrongLevelError",
    "NotApplicableError",
    "WrongReturnError",
    "BufferSizeWarning",
]
