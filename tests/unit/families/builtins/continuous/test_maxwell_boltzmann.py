"""
Tests for the Maxwell-Boltzmann Distribution Family
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_random.errors import InvalidParameterError, WrongSampleError
from pysatl_random.families.builtins.continuous.maxwell_boltzmann import (
    MaxwellBoltzmannDistribution,
)
from pysatl_random.types import FamilyName

from .base import BaseDistributionTest


class TestMaxwellBoltzmannFamily(BaseDistributionTest):
    def setup_method(self):
        self.distr = MaxwellBoltzmannDistribution(scale=1.7)
        self.reference = stats.maxwell(scale=1.7)

    def test_family_properties(self):
        assert self.distr.family_name == FamilyName.MAXWELL_BOLTZMANN
        assert self.distr.parameters == {"scale": 1.7}
        assert not self.distr.support.contains(0.0)

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="scale > 0"):
            MaxwellBoltzmannDistribution(scale=-1.0)

    def test_characteristics_match_scipy(self):
        points = np.array([-1.0, 1e-3, 0.5, 1.7, 3.0, 8.0, 20.0])
        self.assert_matches_reference(self.distr, self.reference, points)
        self.assert_quantiles_match(self.distr, self.reference, rtol=1e-8)

    def test_log_tails(self):
        lower = np.array([1e-3, 1.0, 3.0])
        upper = np.array([1.0, 3.0, 30.0])
        np.testing.assert_allclose(self.distr.logcdf(lower), self.reference.logcdf(lower))
        np.testing.assert_allclose(self.distr.logsf(upper), self.reference.logsf(upper))

    def test_moments_match_scipy(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.distr.mean() == pytest.approx(mean)
        assert self.distr.var() == pytest.approx(var)
        assert self.distr.skewness() == pytest.approx(skew)
        assert self.distr.excess_kurtosis() == pytest.approx(kurt)
        assert self.distr.entropy() == pytest.approx(self.reference.entropy())
        assert self.distr.median() == pytest.approx(self.reference.median())
        assert self.distr.mode() == pytest.approx(1.7 * math.sqrt(2.0))

    def test_pdf_integrates_to_one(self):
        self.assert_pdf_integrates_to_one(self.distr)

    def test_characteristic_function_is_numeric(self):
        self.assert_cf_is_valid(self.distr)
        expected = self.reference.expect(lambda x: math.sin(0.6 * x))
        assert self.distr.cf(0.6).imag == pytest.approx(expected, abs=1e-6)

    def test_scale_update_keeps_engine(self):
        self.distr.scale = 0.5
        np.testing.assert_allclose(
            self.distr.cdf([0.2, 0.7, 1.5]), stats.maxwell(scale=0.5).cdf([0.2, 0.7, 1.5])
        )
        with pytest.raises(InvalidParameterError):
            self.distr.scale = 0.0
        assert self.distr.scale == 0.5

    def test_sample_fits_reference(self):
        self.assert_sample_fits(self.distr, self.reference)

    def test_fit_scale_mle(self):
        distr = MaxwellBoltzmannDistribution()
        distr.fit_scale_mle([1.0, 2.0, 2.0])
        assert distr.scale == pytest.approx(1.0)

    def test_fit_scale_mle_matches_scipy(self):
        data = self.reference.rvs(size=3000, random_state=10)
        distr = MaxwellBoltzmannDistribution()
        distr.fit_scale_mle(data)
        _, scale = stats.maxwell.fit(data, floc=0.0)
        assert distr.scale == pytest.approx(scale, rel=1e-3)
        assert distr.scale == pytest.approx(1.7, rel=0.05)

    def test_fit_scale_mle_rejects_non_positive(self):
        with pytest.raises(WrongSampleError):
            MaxwellBoltzmannDistribution().fit_scale_mle([1.0, 0.0])
