"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_random.families.builtins.continuous.gamma import (
    ChiSquaredDistribution,
    ErlangDistribution,
    GammaDistribution,
    configure_gamma_families,
)
from pysatl_random.families.builtins.continuous.laplace import (
    LaplaceDistribution,
    configure_laplace_family,
)
from pysatl_random.families.builtins.continuous.levy import LevyDistribution, configure_levy_family
from pysatl_random.families.builtins.continuous.log_normal import (
    LogNormalDistribution,
    configure_log_normal_family,
)
from pysatl_random.families.builtins.continuous.maxwell_boltzmann import (
    MaxwellBoltzmannDistribution,
    configure_maxwell_boltzmann_family,
)
from pysatl_random.families.builtins.continuous.pareto import (
    ParetoDistribution,
    configure_pareto_family,
)
from pysatl_random.families.builtins.continuous.raised_cosine import (
    RaabGreenDistribution,
    RaisedCosineDistribution,
    configure_raised_cosine_families,
)
from pysatl_random.families.builtins.continuous.student_t import (
    StudentTDistribution,
    configure_student_t_family,
)
from pysatl_random.families.builtins.continuous.triangular import (
    TriangularDistribution,
    configure_triangular_family,
)

__all__ = [
    "GammaDistribution",
    "ErlangDistribution",
    "ChiSquaredDistribution",
    "LaplaceDistribution",
    "LevyDistribution",
    "ParetoDistribution",
    "StudentTDistribution",
    "LogNormalDistribution",
    "RaisedCosineDistribution",
    "RaabGreenDistribution",
    "TriangularDistribution",
    "MaxwellBoltzmannDistribution",
    "configure_gamma_families",
    "configure_laplace_family",
    "configure_levy_family",
    "configure_pareto_family",
    "configure_student_t_family",
    "configure_log_normal_family",
    "configure_raised_cosine_families",
    "configure_triangular_family",
    "configure_maxwell_boltzmann_family",
]
