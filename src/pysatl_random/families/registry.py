"""
Global registry for distribution families using singleton pattern.

This module implements a centralized registry that maintains references to all
defined distribution families, enabling construction of distributions by
family name and parametrization name.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, ClassVar

    from pysatl_random.distributions.distribution import ContinuousDistribution
    from pysatl_random.types import ParametrizationName


class FamilyRegister:
    """
    Singleton registry for distribution families.

    Maintains a global registry of distribution classes, allowing
    them to be accessed by family name.
    """

    _instance: ClassVar[FamilyRegister | None] = None
    _registered_families: dict[str, type[ContinuousDistribution]]

    def __new__(cls) -> FamilyRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def contains(cls, name: str) -> bool:
        """Check whether a family with the given name is registered."""
        return name in cls()._registered_families

    @classmethod
    def names(cls) -> list[str]:
        """Names of all registered families in registration order."""
        return list(cls()._registered_families)

    @classmethod
    def get(cls, name: str) -> type[ContinuousDistribution]:
        """
        Retrieve a distribution family by name.

        Parameters
        ----------
        name : str
            Name of the family to retrieve.

        Returns
        -------
        type[ContinuousDistribution]
            The requested distribution class.

        Raises
        ------
        ValueError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered_families:
            raise ValueError(f"No family {name} found in register")
        return self._registered_families[name]

    @classmethod
    def register(cls, family: type[ContinuousDistribution]) -> None:
        """
        Register a new distribution family.

        Parameters
        ----------
        family : type[ContinuousDistribution]
            The distribution class to register under its ``family_name``.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        if family.family_name in self._registered_families:
            raise ValueError(f"Family {family.family_name} already found in register")
        self._registered_families[family.family_name] = family

    @classmethod
    def create(
        cls,
        name: str,
        parametrization_name: ParametrizationName | None = None,
        **values: Any,
    ) -> ContinuousDistribution:
        """
        Construct a distribution of a registered family.

        Parameters
        ----------
        name : str
            Family name (e.g. ``"Gamma"``).
        parametrization_name : str, optional
            Parametrization of ``values``; the family's base parametrization
            is used by default.
        **values
            Parameter values.

        Raises
        ------
        ValueError
            If the family or the parametrization is unknown.
        InvalidParameterError
            If the values violate a constraint.
        """
        family = cls.get(name)
        key = parametrization_name or family.base_parametrization
        if key not in family.parametrizations:
            raise ValueError(f"Family {name} has no parametrization {key}")
        return family.from_parametrization(family.parametrizations[key](**values))

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
