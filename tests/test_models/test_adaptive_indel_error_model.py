import math

import pytest

from callkit.models import AdaptiveIndelErrorModel, AdaptiveIndelErrorModelLogParams


def _homopolymer_curve() -> AdaptiveIndelErrorModel:
    return AdaptiveIndelErrorModel(1, 16,
                                   AdaptiveIndelErrorModelLogParams(math.log(4.9e-3), math.log(0.1)),
                                   AdaptiveIndelErrorModelLogParams(math.log(4.5e-2), math.log(0.5)))


def test_curve_endpoints_and_plateau():
    curve = _homopolymer_curve()
    assert curve.error_rate(2) == pytest.approx(4.9e-3)
    assert curve.error_rate(16) == pytest.approx(4.5e-2)
    assert curve.error_rate(40) == pytest.approx(4.5e-2)
    assert curve.noisy_locus_rate(2) == pytest.approx(0.1)
    assert curve.noisy_locus_rate(16) == pytest.approx(0.5)


def test_curve_is_log_linear_and_increasing():
    curve = _homopolymer_curve()
    rates = [curve.error_rate(count) for count in range(2, 17)]
    assert all(a < b for a, b in zip(rates, rates[1:]))
    # equal steps in log space
    steps = [math.log(b) - math.log(a) for a, b in zip(rates, rates[1:])]
    assert steps == pytest.approx([steps[0]] * len(steps))


def test_default_noisy_locus_rate():
    curve = AdaptiveIndelErrorModel(2, 9,
                                    AdaptiveIndelErrorModelLogParams(log_error_rate=math.log(1e-2)),
                                    AdaptiveIndelErrorModelLogParams(log_error_rate=math.log(1.8e-2)))
    assert curve.noisy_locus_rate(5) == pytest.approx(1.0)


def test_curve_contract():
    params = AdaptiveIndelErrorModelLogParams()
    with pytest.raises(AssertionError):
        AdaptiveIndelErrorModel(1, 2, params, params)
    with pytest.raises(AssertionError):
        _homopolymer_curve().error_rate(1)


def test_linear_fit():
    assert AdaptiveIndelErrorModel.linear_fit(5, 0, 0, 10, 10) == pytest.approx(5)
    assert AdaptiveIndelErrorModel.linear_fit(2, 2, -3, 4, 1) == pytest.approx(-3)
    assert AdaptiveIndelErrorModel.linear_fit(3, 2, -3, 4, 1) == pytest.approx(-1)


def test_decreasing_curve():
    curve = AdaptiveIndelErrorModel(2, 9,
                                    AdaptiveIndelErrorModelLogParams(log_error_rate=math.log(1e-2)),
                                    AdaptiveIndelErrorModelLogParams(log_error_rate=math.log(1e-4)))
    rates = [curve.error_rate(count) for count in range(2, 12)]
    assert all(a >= b for a, b in zip(rates, rates[1:]))
    assert rates[-1] == pytest.approx(1e-4)
