from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_random.distributions.estimation import (
    sample_log_mean,
    sample_mean,
    sample_quantile,
    sample_skewness,
    sample_variance,
    validate_sample,
)
from pysatl_random.distributions.support import POSITIVE_HALF_LINE, ContinuousSupport
from pysatl_random.errors import TooFewElementsError, WrongSampleError


class TestValidateSample:
    def test_returns_private_copy(self) -> None:
        original = np.array([1.0, 2.0, 3.0])
        data = validate_sample(original)
        data[0] = 100.0
        assert original[0] == 1.0

    def test_accepts_lists(self) -> None:
        data = validate_sample([1, 2, 3])
        assert data.dtype == np.float64
        np.testing.assert_array_equal(data, [1.0, 2.0, 3.0])

    def test_empty_sample(self) -> None:
        with pytest.raises(TooFewElementsError, match="Gamma: Sample is too small") as info:
            validate_sample([], owner="Gamma")
        assert info.value.required == 1
        assert info.value.actual == 0

    def test_min_size(self) -> None:
        with pytest.raises(TooFewElementsError) as info:
            validate_sample([1.0], min_size=2)
        assert info.value.required == 2

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_elements(self, bad: float) -> None:
        with pytest.raises(WrongSampleError, match="finite"):
            validate_sample([1.0, bad])

    def test_support_violation(self) -> None:
        with pytest.raises(WrongSampleError, match=r"\(0.0, inf\)"):
            validate_sample([1.0, 0.0], support=POSITIVE_HALF_LINE)

    def test_closed_support_message(self) -> None:
        support = ContinuousSupport(left=0.0, right=1.0)
        with pytest.raises(WrongSampleError, match=r"\[0.0, 1.0\]"):
            validate_sample([2.0], support=support)


class TestStatistics:
    data = np.array([1.0, 2.0, 4.0, 8.0])

    def test_mean_and_variance(self) -> None:
        assert sample_mean(self.data) == 3.75
        assert sample_variance(self.data) == pytest.approx(np.var(self.data))
        assert sample_variance(self.data, mean=0.0) == pytest.approx(np.mean(self.data**2))

    def test_log_mean(self) -> None:
        assert sample_log_mean(self.data) == pytest.approx(1.5 * math.log(2.0))

    def test_skewness(self) -> None:
        assert sample_skewness(np.array([1.0, 2.0, 3.0])) == pytest.approx(0.0, abs=1e-15)
        assert sample_skewness(self.data) > 0.0

    def test_lower_empirical_quantile(self) -> None:
        assert sample_quantile(self.data, 0.5) == 2.0
        assert sample_quantile(self.data, 0.51) == 4.0
        assert sample_quantile(self.data, 0.0) == 1.0
