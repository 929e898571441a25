"""
Sampling Interfaces
===================

Sample containers and the bounded rejection loop shared by variate
generators.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

from pysatl_random.errors import WrongReturnError
from pysatl_random.sources import MAX_REJECTION_ITERATIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed univariate sample.

    The backing array is one-dimensional and marked read-only, so a sample
    handed to estimators can never be modified through this container.

    Parameters
    ----------
    data : numpy.ndarray
        1D floating-point array of shape (n,).

    Raises
    ------
    ValueError
        If data is not 1D.
    """

    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 1:
            raise ValueError("ArraySample expects 1D array of shape (n,).")
        self.data = data
        self.data.flags.writeable = False

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[float]:
        """Iterate over the sampled values."""
        for value in self.data:
            yield float(value)

    def __array__(self, dtype: Any = None, copy: Any = None) -> npt.NDArray[np.floating[Any]]:
        if dtype is None:
            return self.data
        return self.data.astype(dtype)

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n,)."""
        return (len(self),)


def rejection_loop(attempt: Callable[[], float | None], algorithm: str) -> float:
    """
    Run ``attempt`` until it accepts a candidate.

    Parameters
    ----------
    attempt : Callable[[], float or None]
        One proposal/acceptance round; returns ``None`` on rejection.
    algorithm : str
        Algorithm name used in the error message.

    Returns
    -------
    float
        The accepted variate.

    Raises
    ------
    WrongReturnError
        If every one of :data:`MAX_REJECTION_ITERATIONS` rounds rejected.
    """
    for _ in range(MAX_REJECTION_ITERATIONS):
        value = attempt()
        if value is not None:
            return value
    raise WrongReturnError(
        f"{algorithm} rejected {MAX_REJECTION_ITERATIONS} candidates in a row.",
        iterations=MAX_REJECTION_ITERATIONS,
    )


__all__ = [
    "Sample",
    "ArraySample",
    "rejection_loop",
]
