from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf

import numpy as np
import pytest

from pysatl_random.distributions.support import (
    POSITIVE_HALF_LINE,
    REAL_LINE,
    ContinuousSupport,
    Support,
)


class TestContinuousSupport:
    support_example = ContinuousSupport(left=0.0, right=1.0, left_closed=True, right_closed=False)

    @pytest.mark.parametrize(
        "point, expected_result",
        [
            (0, True),
            (1, False),
            (0.5, True),
            (-0.1, False),
            (inf, False),
            (-inf, False),
        ],
        ids=[
            "left_bound_closed",
            "right_bound_open",
            "inside_interval",
            "outside_interval",
            "+inf",
            "-inf",
        ],
    )
    def test_contains_scalar(self, point, expected_result):
        assert (point in self.support_example) is expected_result
        assert self.support_example.contains(point) is expected_result

    @pytest.mark.parametrize("infinity", [-inf, inf])
    def test_real_line_doesnt_contain_inf(self, infinity):
        # infinities are limits, not points of the support
        assert infinity not in REAL_LINE
        assert REAL_LINE.contains(infinity) is False

    def test_contains_array(self):
        points = np.array([-1.0, 0.0, 0.5, 1.0])
        np.testing.assert_array_equal(
            self.support_example.contains(points), [False, True, True, False]
        )

    def test_positive_half_line_excludes_zero(self):
        assert 0.0 not in POSITIVE_HALF_LINE
        assert 1e-300 in POSITIVE_HALF_LINE
        assert POSITIVE_HALF_LINE.is_bounded_left
        assert not POSITIVE_HALF_LINE.is_bounded_right

    def test_infinite_endpoints_are_open(self):
        assert REAL_LINE.left_closed is False
        assert REAL_LINE.right_closed is False
        assert not REAL_LINE.is_bounded_left

    def test_is_support(self):
        assert isinstance(self.support_example, Support)
