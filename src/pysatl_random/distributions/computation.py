"""
Computation Primitives
======================

Named callables for distribution characteristics.

- :class:`Computation`: protocol of a callable computing one characteristic.
- :class:`AnalyticalComputation`: a characteristic provided by the
  distribution itself, bound to its current parameters.

Notes
-----
Computations returned by ``query_method`` are bound to the distribution
object, not to a parameter snapshot: after a setter or a fit they evaluate
with the new parameters.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from mypy_extensions import KwArg

from pysatl_random.types import (
    GenericCharacteristicName,
)

In = TypeVar("In")
Out = TypeVar("Out")


@runtime_checkable
class Computation(Protocol[In, Out]):
    """Callable for a single characteristic.

    Attributes
    ----------
    target : str
        The characteristic name this computation represents.

    Methods
    -------
    __call__(data, **options)
        Evaluate the characteristic at ``data``.
    """

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation(Generic[In, Out]):
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)


def constant_characteristic(value: Callable[[], Out]) -> Callable[[Any, KwArg(Any)], Out]:
    """
    Adapt a zero-argument moment to the ``(data, **options)`` signature.

    The data argument is ignored, so ``mean(None)`` and ``mean(x)`` agree.
    """

    def _func(_: Any, **options: Any) -> Out:
        return value(**options)

    return _func


__all__ = [
    "Computation",
    "AnalyticalComputation",
    "constant_characteristic",
]
