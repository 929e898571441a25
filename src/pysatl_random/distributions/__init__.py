"""
Distributions subpackage

Interfaces and shared machinery for probability distributions used by
PySATL Random:

- distribution protocol and continuous base class (:mod:`.distribution`);
- characteristic lookup primitives (:mod:`.computation`);
- root finding for quantiles and estimators (:mod:`.solvers`);
- sample validation and statistics (:mod:`.estimation`);
- sampling protocol, array-backed samples and rejection loops (:mod:`.sampling`);
- supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .computation import AnalyticalComputation, Computation
from .distribution import ContinuousDistribution, Distribution
from .sampling import ArraySample, Sample
from .solvers import DEFAULT_SOLVER_SETTINGS, RootResult, SolverSettings
from .support import POSITIVE_HALF_LINE, REAL_LINE, ContinuousSupport

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "Computation",
    # distribution
    "Distribution",
    "ContinuousDistribution",
    # sampling
    "Sample",
    "ArraySample",
    # solvers
    "SolverSettings",
    "DEFAULT_SOLVER_SETTINGS",
    "RootResult",
    # supports
    "ContinuousSupport",
    "REAL_LINE",
    "POSITIVE_HALF_LINE",
]
