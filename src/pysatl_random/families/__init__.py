"""
Parametric families of continuous distributions.

This package provides parametrizations with declared constraints, the
parameter store shared by all families, the global family registry and the
built-in families themselves.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import *
from .builtins import __all__ as _builtins_all
from .configuration import configure_families_register, reset_families_register
from .parametrizations import (
    ParameterStore,
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import FamilyRegister

__all__ = [
    "FamilyRegister",
    "ParameterStore",
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
    *_builtins_all,
]

del _builtins_all
