"""
Uniform Sources
===============

Entropy providers consumed by variate generators.

- :class:`UniformSource` – protocol every source implements: ``draw()``
  returns an unsigned integer in ``[0, max_value]``.
- :class:`PCG64Source` – default source backed by NumPy's ``PCG64`` bit
  generator, reproducible from a seed.

The helpers :func:`standard_uniform`, :func:`standard_exponential` and
:func:`standard_normal` turn raw draws into the building blocks used by the
rejection and transform algorithms of the distribution families.

Notes
-----
- Distributions never create a source on their own; every call that needs
  randomness receives the source explicitly.
- Sources are not synchronized. Share one per thread or lock externally.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import Protocol, runtime_checkable

import numpy as np

from pysatl_random.errors import WrongReturnError

MAX_REJECTION_ITERATIONS = 1000
"""Hard cap on attempts of a single rejection loop."""


@runtime_checkable
class UniformSource(Protocol):
    """Protocol for raw uniform integer sources."""

    @property
    def max_value(self) -> int: ...

    def draw(self) -> int: ...

    def seed(self, seed: int | None) -> None: ...


class PCG64Source:
    """
    Uniform source backed by :class:`numpy.random.PCG64`.

    Parameters
    ----------
    seed : int or None, default None
        Seed of the underlying bit generator. ``None`` pulls fresh entropy
        from the operating system.

    Examples
    --------
    >>> a, b = PCG64Source(7), PCG64Source(7)
    >>> [a.draw() for _ in range(3)] == [b.draw() for _ in range(3)]
    True
    """

    __slots__ = ("_bit_generator",)

    _MAX_VALUE = 2**64 - 1

    def __init__(self, seed: int | None = None) -> None:
        self._bit_generator = np.random.PCG64(seed)

    @property
    def max_value(self) -> int:
        """Largest value :meth:`draw` can return."""
        return self._MAX_VALUE

    def draw(self) -> int:
        """Return the next raw 64-bit draw."""
        return int(self._bit_generator.random_raw())

    def seed(self, seed: int | None) -> None:
        """Restart the sequence from ``seed``."""
        self._bit_generator = np.random.PCG64(seed)


def standard_uniform(source: UniformSource) -> float:
    """
    Draw ``U ~ Uniform(0, 1)`` from the open interval.

    Both endpoints are excluded so the result can be passed to ``log``
    and to negative powers without checks.
    """
    u = (source.draw() + 0.5) / (source.max_value + 1.0)
    if u >= 1.0:
        return math.nextafter(1.0, 0.0)
    return u


def standard_exponential(source: UniformSource) -> float:
    """Draw ``E ~ Exp(1)`` by inversion."""
    return -math.log(standard_uniform(source))


def standard_normal(source: UniformSource) -> float:
    """
    Draw ``N ~ Normal(0, 1)`` with Marsaglia's polar method.

    The second variate of each accepted pair is discarded so that the
    function stays stateless. The acceptance probability is ``π/4``.

    Raises
    ------
    WrongReturnError
        If no pair is accepted within :data:`MAX_REJECTION_ITERATIONS`.
    """
    for _ in range(MAX_REJECTION_ITERATIONS):
        v1 = 2.0 * standard_uniform(source) - 1.0
        v2 = 2.0 * standard_uniform(source) - 1.0
        s = v1 * v1 + v2 * v2
        if 0.0 < s < 1.0:
            return v1 * math.sqrt(-2.0 * math.log(s) / s)
    raise WrongReturnError(
        "Polar method did not accept a pair of uniforms.",
        iterations=MAX_REJECTION_ITERATIONS,
    )


__all__ = [
    "MAX_REJECTION_ITERATIONS",
    "UniformSource",
    "PCG64Source",
    "standard_uniform",
    "standard_exponential",
    "standard_normal",
]
