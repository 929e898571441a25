"""
Distribution Families Configuration
====================================

This module registers the built-in distribution families of PySATL Random:

- Gamma-type families: :class:`GammaDistribution`, :class:`ErlangDistribution`
  and :class:`ChiSquaredDistribution`.
- Heavy-tailed families: Levy, Pareto, Student's t and log-normal.
- Bounded and other families: asymmetric Laplace, raised cosine, Raab-Green,
  triangular and Maxwell-Boltzmann.

Notes
-----
- All families are registered in the global :class:`FamilyRegister`.
- Configuration is idempotent; repeated calls return the cached register.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_random.families.builtins import (
    configure_gamma_families,
    configure_laplace_family,
    configure_levy_family,
    configure_log_normal_family,
    configure_maxwell_boltzmann_family,
    configure_pareto_family,
    configure_raised_cosine_families,
    configure_student_t_family,
    configure_triangular_family,
)
from pysatl_random.families.registry import FamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> FamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    FamilyRegister
        The global registry of distribution families.
    """
    configure_gamma_families()
    configure_laplace_family()
    configure_levy_family()
    configure_pareto_family()
    configure_student_t_family()
    configure_log_normal_family()
    configure_raised_cosine_families()
    configure_triangular_family()
    configure_maxwell_boltzmann_family()
    return FamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    FamilyRegister._reset()
