import numpy as np
import pytest

from square_percolation.analysis import extrapolate_threshold


def test_extrapolation_recovers_intercept():
    L = np.array([16, 32, 64, 128])
    means = 0.5927 + 0.3 * L ** -0.75
    fit = extrapolate_threshold(L, means)
    assert fit.pc_inf == pytest.approx(0.5927)
    assert fit.slope == pytest.approx(0.3)
    assert fit.r_squared == pytest.approx(1.0)


def test_extrapolation_custom_exponent():
    L = [10, 20, 40]
    means = [0.6 - 0.1 * x ** -0.5 for x in L]
    fit = extrapolate_threshold(L, means, exponent=-0.5)
    assert fit.pc_inf == pytest.approx(0.6)
    assert fit.line(0.0) == pytest.approx(0.6)


def test_extrapolation_needs_two_sizes():
    with pytest.raises(ValueError):
        extrapolate_threshold([50, 50], [0.59, 0.6])


def test_extrapolation_length_mismatch():
    with pytest.raises(ValueError):
        extrapolate_threshold([10, 20, 30], [0.59, 0.6])
