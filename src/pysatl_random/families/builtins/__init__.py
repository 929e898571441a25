"""
Built-in distribution families for PySATL Random.

This package contains implementations of standard statistical distribution families
that are available by default in PySATL Random.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_random.families.builtins.continuous import *
from pysatl_random.families.builtins.continuous import __all__ as _continuous_all

__all__ = [*_continuous_all]

del _continuous_all
