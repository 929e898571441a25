from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_random.errors import WrongReturnError
from pysatl_random.sources import (
    PCG64Source,
    UniformSource,
    standard_exponential,
    standard_normal,
    standard_uniform,
)


class _ConstantSource:
    """Source that always returns the same raw value."""

    def __init__(self, value: int, max_value: int = 2**64 - 1) -> None:
        self._value = value
        self._max = max_value

    @property
    def max_value(self) -> int:
        return self._max

    def draw(self) -> int:
        return self._value

    def seed(self, seed: int | None) -> None:
        pass


class TestPCG64Source:
    def test_is_uniform_source(self) -> None:
        assert isinstance(PCG64Source(1), UniformSource)

    def test_same_seed_same_sequence(self) -> None:
        a, b = PCG64Source(42), PCG64Source(42)
        assert [a.draw() for _ in range(10)] == [b.draw() for _ in range(10)]

    def test_reseed_restarts_sequence(self) -> None:
        src = PCG64Source(3)
        first = [src.draw() for _ in range(5)]
        src.seed(3)
        assert [src.draw() for _ in range(5)] == first

    def test_draws_within_range(self) -> None:
        src = PCG64Source(5)
        for _ in range(100):
            assert 0 <= src.draw() <= src.max_value


class TestStandardDraws:
    def test_uniform_excludes_endpoints(self) -> None:
        assert 0.0 < standard_uniform(_ConstantSource(0)) < 1.0
        top = _ConstantSource(2**64 - 1)
        assert 0.0 < standard_uniform(top) < 1.0

    def test_uniform_moments(self, source: PCG64Source) -> None:
        values = np.array([standard_uniform(source) for _ in range(20000)])
        assert values.mean() == pytest.approx(0.5, abs=0.01)
        assert values.var() == pytest.approx(1.0 / 12.0, abs=0.005)

    def test_exponential_moments(self, source: PCG64Source) -> None:
        values = np.array([standard_exponential(source) for _ in range(20000)])
        assert (values > 0.0).all()
        assert values.mean() == pytest.approx(1.0, abs=0.03)

    def test_normal_moments(self, source: PCG64Source) -> None:
        values = np.array([standard_normal(source) for _ in range(20000)])
        assert values.mean() == pytest.approx(0.0, abs=0.03)
        assert values.std() == pytest.approx(1.0, abs=0.03)

    def test_normal_fails_on_degenerate_source(self) -> None:
        # U = 1/2 everywhere gives v1 = v2 = 0, which the polar method rejects
        src = _ConstantSource(2**63 - 1)
        assert math.isclose(standard_uniform(src), 0.5, abs_tol=1e-15)
        with pytest.raises(WrongReturnError):
            standard_normal(src)
