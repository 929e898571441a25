from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_random.errors import InvalidParameterError
from pysatl_random.families import FamilyRegister
from pysatl_random.families.builtins import GammaDistribution, configure_gamma_families
from tests.utils.mocks import WedgeDistribution


class TestFamilyRegister:
    def test_is_singleton(self) -> None:
        assert FamilyRegister() is FamilyRegister()

    def test_register_and_get(self) -> None:
        FamilyRegister.register(WedgeDistribution)
        assert FamilyRegister.contains("Wedge")
        assert FamilyRegister.get("Wedge") is WedgeDistribution
        assert FamilyRegister.names() == ["Wedge"]

    def test_duplicate_registration(self) -> None:
        FamilyRegister.register(WedgeDistribution)
        with pytest.raises(ValueError, match="already found"):
            FamilyRegister.register(WedgeDistribution)

    def test_missing_family(self) -> None:
        with pytest.raises(ValueError, match="No family Wedge"):
            FamilyRegister.get("Wedge")

    def test_create_with_base_parametrization(self) -> None:
        FamilyRegister.register(WedgeDistribution)
        distr = FamilyRegister.create("Wedge", width=3.0)
        assert isinstance(distr, WedgeDistribution)
        assert distr.parameters == {"width": 3.0}

    def test_create_with_alternative_parametrization(self) -> None:
        configure_gamma_families()
        distr = FamilyRegister.create("Gamma", "scale", shape=2.0, scale=4.0)
        assert isinstance(distr, GammaDistribution)
        assert distr.rate == 0.25

    def test_create_unknown_parametrization(self) -> None:
        configure_gamma_families()
        with pytest.raises(ValueError, match="no parametrization mean"):
            FamilyRegister.create("Gamma", "mean", shape=1.0)

    def test_create_validates(self) -> None:
        configure_gamma_families()
        with pytest.raises(InvalidParameterError):
            FamilyRegister.create("Gamma", shape=-1.0, rate=1.0)

    def test_configure_is_idempotent(self) -> None:
        configure_gamma_families()
        configure_gamma_families()
        assert FamilyRegister.names() == ["Gamma", "Erlang", "ChiSquared"]
