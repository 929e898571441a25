"""
Tests for the Levy Distribution Family
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_random.errors import InvalidParameterError, WrongSampleError
from pysatl_random.families.builtins.continuous.levy import LevyDistribution
from pysatl_random.sources import PCG64Source
from pysatl_random.types import FamilyName

from .base import BaseDistributionTest


class TestLevyFamily(BaseDistributionTest):
    def setup_method(self):
        self.levy = LevyDistribution(location=0.5, scale=2.0)
        self.reference = stats.levy(loc=0.5, scale=2.0)

    def test_family_properties(self):
        assert self.levy.family_name == FamilyName.LEVY
        assert self.levy.parameters == {"location": 0.5, "scale": 2.0}
        assert self.levy.support.left == 0.5
        assert not self.levy.support.contains(0.5)
        assert self.levy.support.contains(1e9)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"scale": 0.0}, "scale > 0"), ({"location": math.nan}, "location is finite")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(InvalidParameterError, match=message):
            LevyDistribution(**kwargs)

    def test_characteristics_match_scipy(self):
        points = np.array([-1.0, 0.6, 1.0, 3.0, 10.0, 1e4])
        self.assert_matches_reference(self.levy, self.reference, points)

    def test_quantiles_match_scipy(self):
        self.assert_quantiles_match(self.levy, self.reference, rtol=1e-7)

    def test_quantile_round_trip(self):
        for p in (1e-12, 0.3, 0.999999):
            assert self.levy.cdf(self.levy.quantile(p)) == pytest.approx(p, rel=1e-9)
            assert self.levy.sf(self.levy.quantile1m(p)) == pytest.approx(p, rel=1e-9)

    def test_moments(self):
        assert self.levy.mean() == math.inf
        assert self.levy.var() == math.inf
        assert math.isnan(self.levy.skewness())
        assert math.isnan(self.levy.excess_kurtosis())
        assert self.levy.mode() == pytest.approx(0.5 + 2.0 / 3.0)
        assert self.levy.median() == pytest.approx(self.reference.median())
        assert self.levy.entropy() == pytest.approx(self.reference.entropy())

    def test_pdf_vanishes_at_location(self):
        assert self.levy.pdf(0.5) == 0.0
        assert self.levy.logpdf(0.0) == -math.inf

    def test_characteristic_function(self):
        t = 0.7
        expected = np.exp(0.5j * t - np.sqrt(-4j * t))
        assert self.levy.cf(t) == pytest.approx(complex(expected))
        assert self.levy.cf(-t) == pytest.approx(np.conj(self.levy.cf(t)))
        self.assert_cf_is_valid(self.levy)

    def test_accessors(self):
        self.levy.scale = 3.0
        self.levy.location = -1.0
        assert self.levy.mode() == pytest.approx(0.0)
        with pytest.raises(InvalidParameterError):
            self.levy.scale = -2.0
        assert self.levy.scale == 3.0

    def test_sample_fits_reference(self):
        self.assert_sample_fits(self.levy, self.reference)

    def test_variate_with(self):
        source = PCG64Source(5)
        values = [LevyDistribution.variate_with(-1.0, 0.5, source) for _ in range(4000)]
        assert stats.kstest(values, stats.levy(loc=-1.0, scale=0.5).cdf).pvalue > self.KS_LEVEL
        with pytest.raises(InvalidParameterError):
            LevyDistribution.variate_with(0.0, 0.0, source)

    def test_fit_scale_mle(self):
        distr = LevyDistribution()
        distr.fit_scale_mle([1.0, 2.0, 4.0])
        assert distr.scale == pytest.approx(12.0 / 7.0)

    def test_fit_scale_mle_large_sample(self):
        data = stats.levy(loc=1.0, scale=3.0).rvs(size=20000, random_state=9)
        distr = LevyDistribution(location=1.0)
        distr.fit_scale_mle(data)
        assert distr.scale == pytest.approx(3.0, rel=0.05)

    def test_fit_scale_rejects_points_below_location(self):
        distr = LevyDistribution(location=1.0)
        with pytest.raises(WrongSampleError):
            distr.fit_scale_mle([2.0, 1.0])
        assert distr.scale == 1.0
