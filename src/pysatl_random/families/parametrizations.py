"""
Parametrizations and parameter storage for distribution families.

This module provides the core abstractions for describing the parameters of a
distribution family, validating them against declared constraints, converting
alternative parametrizations to the base one, and keeping the validated
parameters together with the quantities derived from them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
from abc import ABC
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, Generic, ParamSpec, TypeVar

from pysatl_random.errors import InvalidParameterError
from pysatl_random.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Named predicate over the values of a parametrization.

    Parameters
    ----------
    description : str
        Text reported by ``InvalidParameterError``, e.g. ``"shape > 0"``.
    check : Callable[[Any], bool]
        Predicate called with the parametrization instance.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Base of the frozen parameter dataclasses of every family.

    Subclasses are declared with ``@parametrization`` and list their
    invariants as ``@constraint`` methods.
    """

    # set by @parametrization
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Name given to ``@parametrization``."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Field values keyed by field name."""
        fields = getattr(self, "__dataclass_fields__", None)
        if fields is not None:
            return {f: getattr(self, f) for f in fields}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Constraints collected from the class and its bases."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        InvalidParameterError
            If any constraint is not satisfied. NaN parameters fail every
            comparison-based constraint.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise InvalidParameterError(
                    f'Constraint "{constraint.description}" does not hold',
                    constraint=constraint.description,
                )

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        The base parametrization of a family returns itself; alternative
        ones (e.g. Gamma ``scale``) override this.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method of a parametrization as a constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The wrapper coerces the result to ``bool`` and carries the
    ``__is_constraint`` and ``__constraint_description`` markers read by
    ``@parametrization``.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


T = TypeVar("T", bound=Parametrization)


def parametrization(*, name: str) -> Callable[[type[T]], type[T]]:
    """
    Decorator to declare a class as a named parametrization.

    Parameters
    ----------
    name : str
        Name of the parametrization (e.g. ``"rate"``).

    Returns
    -------
    Callable[[type[T]], type[T]]
        Class decorator producing a frozen dataclass.

    Notes
    -----
    A class that is not yet a dataclass becomes a frozen, slotted one.
    Constraints are gathered along the MRO, so a subclass inherits the
    constraints of its bases unless it overrides the method.
    """

    def _collect_constraints(cls: type[T]) -> list[ParametrizationConstraint]:
        constraints: list[ParametrizationConstraint] = []
        seen: set[str] = set()
        for klass in cls.__mro__:
            for attr_name, attr in klass.__dict__.items():
                if attr_name in seen:
                    continue
                if isinstance(attr, staticmethod | classmethod):
                    if getattr(attr.__func__, "__is_constraint", False):
                        raise TypeError(
                            f"@constraint '{attr_name}' must be an instance method, "
                            f"not @{type(attr).__name__}"
                        )
                    continue
                if not isfunction(attr):
                    continue
                seen.add(attr_name)
                if getattr(attr, "__is_constraint", False):
                    desc = getattr(attr, "__constraint_description", attr.__name__)
                    constraints.append(ParametrizationConstraint(description=desc, check=attr))
        return constraints

    def decorator(cls: type[T]) -> type[T]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)
        return cls

    return decorator


PT = TypeVar("PT", bound=Parametrization)
C = TypeVar("C")


class ParameterStore(Generic[PT, C]):
    """
    Validated parameters together with their derived cache.

    The store holds a base parametrization and the immutable cache produced
    from it by a family-specific ``derive`` function. Both live in a single
    tuple that is swapped in one assignment, so a reader never observes new
    parameters with an old cache.

    Parameters
    ----------
    parameters : Parametrization
        Initial parameters; alternative parametrizations are converted to the
        base one.
    derive : Callable[[PT, C | None], C]
        Builds the cache for new parameters. The second argument is the
        previous cache (``None`` initially), which lets a family reuse the
        parts that depend only on unchanged parameters.

    Raises
    ------
    InvalidParameterError
        If the initial parameters violate a constraint.
    """

    __slots__ = ("_derive", "_state")

    def __init__(self, parameters: Parametrization, derive: Callable[[PT, C | None], C]) -> None:
        self._derive = derive
        self._state: tuple[PT, C] = self._build(parameters, None)

    def _build(self, parameters: Parametrization, previous: C | None) -> tuple[PT, C]:
        parameters.validate()
        base = parameters.transform_to_base_parametrization()
        if base is not parameters:
            base.validate()
        return base, self._derive(base, previous)  # type: ignore[return-value, arg-type]

    @property
    def parameters(self) -> PT:
        """Current base parametrization."""
        return self._state[0]

    @property
    def cache(self) -> C:
        """Quantities derived from the current parameters."""
        return self._state[1]

    def replace(self, parameters: Parametrization) -> None:
        """
        Replace all parameters at once.

        Validation and derivation happen before the swap; on failure the
        store is left untouched.
        """
        self._state = self._build(parameters, self._state[1])

    def update(self, **changes: Any) -> None:
        """Replace some base parameters by name, keeping the others."""
        self.replace(dataclasses.replace(self.parameters, **changes))  # type: ignore[type-var]


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "ParameterStore",
    "constraint",
    "parametrization",
]
