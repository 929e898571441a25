"""
Tests for the Triangular Distribution Family
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_random.distributions.distribution import ContinuousDistribution
from pysatl_random.errors import InvalidParameterError
from pysatl_random.families.builtins.continuous.triangular import TriangularDistribution
from pysatl_random.sources import PCG64Source
from pysatl_random.types import FamilyName

from .base import BaseDistributionTest

# (lower, mode, upper): interior peak and both degenerate sides
SHAPES = [(-1.0, 0.5, 3.0), (0.0, 0.0, 2.0), (1.0, 4.0, 4.0)]


def reference_of(lower: float, mode: float, upper: float):
    return stats.triang(c=(mode - lower) / (upper - lower), loc=lower, scale=upper - lower)


class TestTriangularFamily(BaseDistributionTest):
    def test_family_properties(self):
        distr = TriangularDistribution(lower=-1.0, mode=0.5, upper=3.0)
        assert distr.family_name == FamilyName.TRIANGULAR
        assert distr.parameters == {"lower": -1.0, "mode": 0.5, "upper": 3.0}
        assert distr.peak == 0.5
        assert distr.mode() == 0.5
        assert distr.support.left == -1.0
        assert distr.support.right == 3.0

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"lower": 2.0, "mode": 2.0, "upper": 2.0}, "lower < upper"),
            ({"lower": 0.0, "mode": 1.5, "upper": 1.0}, "lower <= mode <= upper"),
            ({"lower": -math.inf, "mode": 0.0, "upper": 1.0}, "finite"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(InvalidParameterError, match=message):
            TriangularDistribution(**kwargs)

    @pytest.mark.parametrize("lower, mode, upper", SHAPES)
    def test_characteristics_match_scipy(self, lower, mode, upper):
        distr = TriangularDistribution(lower, mode, upper)
        reference = reference_of(lower, mode, upper)
        fractions = np.array([-0.1, 0.03, 0.2, 0.45, 0.6, 0.85, 0.99, 1.2])
        points = lower + (upper - lower) * fractions
        np.testing.assert_allclose(distr.pdf(points), reference.pdf(points), rtol=1e-9)
        np.testing.assert_allclose(distr.cdf(points), reference.cdf(points), rtol=1e-9, atol=1e-15)
        np.testing.assert_allclose(distr.sf(points), reference.sf(points), rtol=1e-9, atol=1e-15)
        self.assert_quantiles_match(distr, reference, rtol=1e-8)

    @pytest.mark.parametrize("lower, mode, upper", SHAPES)
    def test_moments_match_scipy(self, lower, mode, upper):
        distr = TriangularDistribution(lower, mode, upper)
        reference = reference_of(lower, mode, upper)
        mean, var, skew, kurt = reference.stats(moments="mvsk")
        assert distr.mean() == pytest.approx(mean)
        assert distr.var() == pytest.approx(var)
        assert distr.skewness() == pytest.approx(skew, abs=1e-12)
        assert distr.excess_kurtosis() == pytest.approx(kurt)
        assert distr.entropy() == pytest.approx(reference.entropy())
        assert distr.median() == pytest.approx(reference.median())

    def test_symmetric_skewness(self):
        assert TriangularDistribution(0.0, 1.0, 2.0).skewness() == 0.0

    def test_pdf_at_peak(self):
        distr = TriangularDistribution(0.0, 0.0, 2.0)
        assert distr.pdf(0.0) == 1.0
        assert distr.pdf(-1e-12) == 0.0
        assert distr.cdf(0.0) == 0.0

    @pytest.mark.parametrize("lower, mode, upper", SHAPES)
    def test_characteristic_function(self, lower, mode, upper):
        distr = TriangularDistribution(lower, mode, upper)
        for t in (-1.3, 0.4, 2.0):
            numeric = ContinuousDistribution._cf_impl(distr, t)
            assert distr.cf(t) == pytest.approx(numeric, abs=1e-9)
        self.assert_cf_is_valid(distr)

    def test_peak_setter(self):
        distr = TriangularDistribution()
        distr.peak = 0.9
        assert distr.mode() == 0.9
        with pytest.raises(InvalidParameterError):
            distr.peak = 1.5
        assert distr.peak == 0.9
        distr.upper = 4.0
        distr.lower = -4.0
        assert distr.mean() == pytest.approx(0.3)

    @pytest.mark.parametrize("lower, mode, upper", SHAPES)
    def test_sample_fits_reference(self, lower, mode, upper):
        distr = TriangularDistribution(lower, mode, upper)
        self.assert_sample_fits(distr, reference_of(lower, mode, upper))

    def test_variate_with(self):
        source = PCG64Source(14)
        values = [TriangularDistribution.variate_with(0.0, 0.2, 1.0, source) for _ in range(4000)]
        assert stats.kstest(values, reference_of(0.0, 0.2, 1.0).cdf).pvalue > self.KS_LEVEL
        with pytest.raises(InvalidParameterError):
            TriangularDistribution.variate_with(0.0, 2.0, 1.0, source)
