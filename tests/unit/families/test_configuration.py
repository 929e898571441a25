from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_random.families import (
    FamilyRegister,
    configure_families_register,
    reset_families_register,
)
from pysatl_random.types import FamilyName

DEFAULTS = {
    FamilyName.GAMMA: {"shape": 2.0, "rate": 1.0},
    FamilyName.ERLANG: {"shape": 3, "rate": 2.0},
    FamilyName.CHI_SQUARED: {"degree": 4},
    FamilyName.LAPLACE: {"location": 0.0, "scale": 1.0, "asymmetry": 2.0},
    FamilyName.LEVY: {"location": 1.0, "scale": 2.0},
    FamilyName.PARETO: {"shape": 3.0, "scale": 1.0},
    FamilyName.STUDENT_T: {"degree": 5.0, "location": 0.0, "scale": 1.0},
    FamilyName.LOG_NORMAL: {"location": 0.0, "scale": 0.5},
    FamilyName.RAISED_COSINE: {"location": 1.0, "scale": 2.0},
    FamilyName.RAAB_GREEN: {},
    FamilyName.TRIANGULAR: {"lower": 0.0, "mode": 1.0, "upper": 3.0},
    FamilyName.MAXWELL_BOLTZMANN: {"scale": 1.5},
}


class TestConfiguration:
    def test_every_builtin_family_is_registered(self) -> None:
        register = configure_families_register()
        assert set(register.names()) == set(FamilyName)

    def test_configuration_is_cached(self) -> None:
        assert configure_families_register() is configure_families_register()

    def test_reset_clears_register(self) -> None:
        configure_families_register()
        reset_families_register()
        assert FamilyRegister.names() == []
        assert FamilyRegister.contains(FamilyName.GAMMA) is False
        configure_families_register()
        assert FamilyRegister.contains(FamilyName.GAMMA)

    @pytest.mark.parametrize("name", list(FamilyName))
    def test_create_by_name(self, name: FamilyName) -> None:
        configure_families_register()
        distr = FamilyRegister.create(name, **DEFAULTS[name])
        assert distr.family_name == name
        assert distr.parameters == DEFAULTS[name]
        assert distr.cdf(distr.quantile(0.3)) == pytest.approx(0.3, rel=1e-9)
