"""
Sample Validation and Statistics
================================

Helpers shared by the parameter estimators of all families.

Every estimator first calls :func:`validate_sample`, which copies the input
into a private float array and checks size and support before any
accumulation happens. The statistics below operate on that validated copy.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

from pysatl_random.errors import TooFewElementsError, WrongSampleError

if TYPE_CHECKING:
    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.types import FloatArray, SampleLike


def validate_sample(
    sample: SampleLike,
    *,
    support: ContinuousSupport | None = None,
    min_size: int = 1,
    owner: str = "Distribution",
) -> FloatArray:
    """
    Copy and validate a sample.

    Parameters
    ----------
    sample : Sequence[float] or numpy.ndarray
        Caller-owned data; never modified.
    support : ContinuousSupport, optional
        Every element must lie inside this support.
    min_size : int, default 1
        Minimal number of elements required by the estimator.
    owner : str
        Name used as the error message prefix.

    Returns
    -------
    numpy.ndarray
        1D float64 copy of the sample.

    Raises
    ------
    TooFewElementsError
        If the sample has fewer than ``min_size`` elements.
    WrongSampleError
        If an element is not finite or lies outside ``support``.
    """
    data = np.array(sample, dtype=np.float64).ravel()
    required = max(min_size, 1)
    if data.size < required:
        raise TooFewElementsError(
            f"{owner}: Sample is too small. At least {required} elements are required, "
            f"got {data.size}.",
            required=required,
            actual=int(data.size),
        )
    if not np.all(np.isfinite(data)):
        raise WrongSampleError(
            f"{owner}: Sample can't be returned by this distribution. "
            "All elements should be finite."
        )
    if support is not None and not np.all(support.contains(data)):
        raise WrongSampleError(
            f"{owner}: Sample can't be returned by this distribution. "
            f"All elements should lie in {_describe(support)}."
        )
    return data


def _describe(support: ContinuousSupport) -> str:
    left = "[" if support.left_closed else "("
    right = "]" if support.right_closed else ")"
    return f"{left}{support.left}, {support.right}{right}"


def sample_mean(data: FloatArray) -> float:
    return float(np.mean(data))


def sample_variance(data: FloatArray, mean: float | None = None) -> float:
    """Biased (``1/n``) second central moment."""
    if mean is None:
        mean = sample_mean(data)
    return float(np.mean((data - mean) ** 2))


def sample_log_mean(data: FloatArray) -> float:
    """Mean of ``log(x)``; the sample must be positive."""
    return float(np.mean(np.log(data)))


def sample_skewness(data: FloatArray, mean: float | None = None) -> float:
    """Biased sample skewness ``m3 / m2^1.5``."""
    if mean is None:
        mean = sample_mean(data)
    centered = data - mean
    m2 = float(np.mean(centered**2))
    m3 = float(np.mean(centered**3))
    return m3 / m2**1.5


def sample_quantile(data: FloatArray, level: float) -> float:
    """Lower empirical quantile: the smallest order statistic with ``F_n(x) >= level``."""
    return float(np.quantile(data, level, method="inverted_cdf"))


__all__ = [
    "validate_sample",
    "sample_mean",
    "sample_variance",
    "sample_log_mean",
    "sample_skewness",
    "sample_quantile",
]
