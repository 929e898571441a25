"""
Tests for the Asymmetric Laplace Distribution Family
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math

import numpy as np
import pytest
from scipy import stats

from pysatl_random.distributions.distribution import ContinuousDistribution
from pysatl_random.errors import InvalidParameterError, NotApplicableError, TooFewElementsError
from pysatl_random.families.builtins.continuous.laplace import LaplaceDistribution
from pysatl_random.sources import PCG64Source

from .base import BaseDistributionTest

ASYMMETRIES = [0.4, 1.0, 2.5]


def reference_of(location: float, scale: float, asymmetry: float):
    return stats.laplace_asymmetric(asymmetry, loc=location, scale=scale)


class TestLaplaceFamily(BaseDistributionTest):
    def setup_method(self):
        self.laplace = LaplaceDistribution(location=1.0, scale=2.0, asymmetry=0.7)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"scale": 0.0}, "scale > 0"),
            ({"asymmetry": -1.0}, "asymmetry > 0"),
            ({"location": math.inf}, "location"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(InvalidParameterError, match=message):
            LaplaceDistribution(**kwargs)

    def test_accessors(self):
        self.laplace.location = -3.0
        self.laplace.scale = 0.5
        self.laplace.asymmetry = 4.0
        assert self.laplace.parameters == {"location": -3.0, "scale": 0.5, "asymmetry": 4.0}
        with pytest.raises(InvalidParameterError):
            self.laplace.scale = -1.0
        assert self.laplace.scale == 0.5

    @pytest.mark.parametrize("asymmetry", ASYMMETRIES)
    def test_characteristics_match_scipy(self, asymmetry):
        distr = LaplaceDistribution(1.0, 2.0, asymmetry)
        reference = reference_of(1.0, 2.0, asymmetry)
        points = np.array([-20.0, -3.0, 0.0, 1.0, 1.5, 4.0, 25.0])
        self.assert_matches_reference(distr, reference, points)
        self.assert_quantiles_match(distr, reference)

    @pytest.mark.parametrize("asymmetry", ASYMMETRIES)
    def test_moments_match_scipy(self, asymmetry):
        distr = LaplaceDistribution(1.0, 2.0, asymmetry)
        mean, var, skew, kurt = reference_of(1.0, 2.0, asymmetry).stats(moments="mvsk")
        assert distr.mean() == pytest.approx(mean)
        assert distr.var() == pytest.approx(var)
        assert distr.skewness() == pytest.approx(skew)
        assert distr.excess_kurtosis() == pytest.approx(kurt)
        assert distr.median() == pytest.approx(reference_of(1.0, 2.0, asymmetry).median())
        assert distr.entropy() == pytest.approx(reference_of(1.0, 2.0, asymmetry).entropy())
        assert distr.mode() == 1.0

    def test_symmetric_case(self):
        distr = LaplaceDistribution(0.0, 1.0, 1.0)
        assert distr.mean() == 0.0
        assert distr.median() == 0.0
        assert distr.skewness() == 0.0
        assert distr.excess_kurtosis() == pytest.approx(3.0)

    def test_extreme_tails(self):
        distr = LaplaceDistribution(0.0, 1.0, 1.0)
        assert distr.cdf(-800.0) == 0.0
        assert distr.logpdf(-800.0) == pytest.approx(-800.0 - math.log(2.0))
        assert distr.quantile1m(1e-300) == pytest.approx(-math.log(2e-300))
        assert distr.quantile(1e-300) == pytest.approx(math.log(2e-300))

    @pytest.mark.parametrize("asymmetry", ASYMMETRIES)
    def test_characteristic_function(self, asymmetry):
        centered = LaplaceDistribution(0.0, 1.5, asymmetry)
        for t in (-2.0, 0.3, 1.7):
            numeric = ContinuousDistribution._cf_impl(centered, t)
            assert centered.cf(t) == pytest.approx(numeric, abs=1e-7)

        shifted = LaplaceDistribution(2.0, 1.5, asymmetry)
        assert shifted.cf(0.8) == pytest.approx(cmath.exp(1.6j) * centered.cf(0.8))
        self.assert_cf_is_valid(shifted)

    @pytest.mark.parametrize("asymmetry", ASYMMETRIES)
    def test_sample_fits_reference(self, asymmetry):
        distr = LaplaceDistribution(-1.0, 0.5, asymmetry)
        self.assert_sample_fits(distr, reference_of(-1.0, 0.5, asymmetry))

    def test_variate_with(self):
        source = PCG64Source(8)
        values = [LaplaceDistribution.variate_with(0.0, 1.0, 2.0, source) for _ in range(4000)]
        assert stats.kstest(values, reference_of(0.0, 1.0, 2.0).cdf).pvalue > self.KS_LEVEL
        with pytest.raises(InvalidParameterError):
            LaplaceDistribution.variate_with(0.0, 1.0, 0.0, source)


class TestLaplaceMaximumLikelihood:
    @staticmethod
    def sample(location, scale, asymmetry, n, seed=0):
        return reference_of(location, scale, asymmetry).rvs(size=n, random_state=seed)

    def test_location(self):
        distr = LaplaceDistribution()
        distr.fit_location_mle([1.0, 2.0, 3.0, 4.0, 10.0])
        assert distr.location == 3.0

    def test_location_uses_asymmetry_level(self):
        # κ = 1/2 puts a fifth of the mass left of the location
        distr = LaplaceDistribution(asymmetry=0.5)
        distr.fit_location_mle([1.0, 2.0, 3.0, 4.0])
        assert distr.location == 1.0

    def test_scale(self):
        distr = LaplaceDistribution()
        distr.fit_scale_mle([-1.0, 2.0, 3.0])
        assert distr.scale == pytest.approx(2.0)

    def test_scale_of_constant_sample(self):
        distr = LaplaceDistribution(location=5.0)
        with pytest.raises(NotApplicableError):
            distr.fit_scale_mle([5.0, 5.0])
        assert distr.scale == 1.0

    def test_asymmetry(self):
        distr = LaplaceDistribution(0.0, 1.0, 1.0)
        distr.fit_asymmetry_mle(self.sample(0.0, 1.0, 2.0, 20000))
        assert distr.asymmetry == pytest.approx(2.0, rel=0.05)

    def test_scale_and_asymmetry_closed_form(self):
        distr = LaplaceDistribution()
        distr.fit_scale_and_asymmetry_mle([-1.0, 4.0])
        assert distr.asymmetry == pytest.approx(1.0 / math.sqrt(2.0))
        assert distr.scale == pytest.approx(math.sqrt(2.0) + math.sqrt(0.5))
        assert distr.location == 0.0

    def test_scale_and_asymmetry_one_sided(self):
        with pytest.raises(NotApplicableError, match="both sides"):
            LaplaceDistribution().fit_scale_and_asymmetry_mle([1.0, 2.0])

    def test_location_and_scale(self):
        distr = LaplaceDistribution(asymmetry=1.0)
        distr.fit_location_and_scale_mle(self.sample(3.0, 2.0, 1.0, 20000, seed=1))
        assert distr.location == pytest.approx(3.0, abs=0.05)
        assert distr.scale == pytest.approx(2.0, rel=0.05)

    def test_location_and_asymmetry(self):
        distr = LaplaceDistribution(scale=1.5)
        distr.fit_location_and_asymmetry_mle(self.sample(-2.0, 1.5, 0.6, 1000, seed=2))
        assert distr.location == pytest.approx(-2.0, abs=0.2)
        assert distr.asymmetry == pytest.approx(0.6, rel=0.15)
        assert distr.scale == 1.5

    def test_joint(self):
        data = self.sample(1.0, 2.0, 0.7, 20000, seed=3)
        distr = LaplaceDistribution()
        distr.fit_mle(data)
        assert distr.location == pytest.approx(1.0, abs=0.1)
        assert distr.scale == pytest.approx(2.0, rel=0.05)
        assert distr.asymmetry == pytest.approx(0.7, rel=0.05)

    def test_joint_maximizes_likelihood(self):
        data = self.sample(0.0, 1.0, 1.5, 200, seed=4)
        distr = LaplaceDistribution()
        distr.fit_mle(data)
        best = distr.log_likelihood(data)
        m, s, k = distr.location, distr.scale, distr.asymmetry
        for dm, ds, dk in [(0.05, 0, 0), (-0.05, 0, 0), (0, 0.05, 0), (0, 0, 0.05), (0, 0, -0.05)]:
            other = LaplaceDistribution(m + dm, s * (1 + ds), k * (1 + dk))
            assert other.log_likelihood(data) <= best + 1e-9

    def test_joint_degenerate_samples(self):
        with pytest.raises(TooFewElementsError):
            LaplaceDistribution().fit_mle([1.0])
        with pytest.raises(NotApplicableError):
            LaplaceDistribution().fit_mle([3.0, 3.0, 3.0])


class TestLaplaceMethodOfMoments:
    def test_location(self):
        distr = LaplaceDistribution(scale=1.0, asymmetry=2.0)
        distr.fit_location_mm([0.0, 1.0])
        assert distr.location == pytest.approx(2.0)

    def test_scale(self):
        distr = LaplaceDistribution()
        distr.fit_scale_mm([-1.0, 1.0])
        assert distr.scale == pytest.approx(1.0 / math.sqrt(2.0))
        with pytest.raises(NotApplicableError):
            distr.fit_scale_mm([2.0, 2.0])

    def test_asymmetry(self):
        distr = LaplaceDistribution()
        distr.fit_asymmetry_mm([1.0, 2.0])
        assert distr.asymmetry == pytest.approx(0.5)
        assert distr.mean() == pytest.approx(1.5)

    def test_location_and_scale(self):
        distr = LaplaceDistribution(asymmetry=2.0)
        distr.fit_location_and_scale_mm([0.0, 2.0, 4.0])
        assert distr.mean() == pytest.approx(2.0)
        assert distr.var() == pytest.approx(8.0 / 3.0)

    def test_location_and_asymmetry(self):
        data = stats.laplace_asymmetric(0.5, loc=1.0, scale=1.0).rvs(size=50000, random_state=5)
        distr = LaplaceDistribution(scale=1.0)
        distr.fit_location_and_asymmetry_mm(data)
        assert distr.asymmetry == pytest.approx(0.5, rel=0.05)
        assert distr.location == pytest.approx(1.0, abs=0.1)

    def test_location_and_asymmetry_small_variance(self):
        with pytest.raises(NotApplicableError, match="2σ²"):
            LaplaceDistribution(scale=10.0).fit_location_and_asymmetry_mm([0.0, 1.0, 2.0])

    def test_joint(self):
        data = stats.laplace_asymmetric(0.7, loc=1.0, scale=2.0).rvs(size=50000, random_state=6)
        distr = LaplaceDistribution()
        distr.fit_mm(data)
        assert distr.asymmetry == pytest.approx(0.7, rel=0.1)
        assert distr.scale == pytest.approx(2.0, rel=0.1)
        assert distr.mean() == pytest.approx(float(np.mean(data)))

    def test_scale_and_asymmetry(self):
        data = stats.laplace_asymmetric(1.5, loc=0.0, scale=1.0).rvs(size=50000, random_state=7)
        distr = LaplaceDistribution(location=0.0)
        distr.fit_scale_and_asymmetry_mm(data)
        assert distr.asymmetry == pytest.approx(1.5, rel=0.1)
        assert distr.location == 0.0

    def test_skewness_out_of_range(self):
        data = [0.0] * 99 + [100.0]
        with pytest.raises(NotApplicableError, match="skewness"):
            LaplaceDistribution().fit_mm(data)
