import math

import pytest

from thrivesim.mathutil import sigmoid


def test_sigmoid_at_zero():
    assert sigmoid(0) == 0.5


@pytest.mark.parametrize("x", [0.1, 1.0, 2.5, 7.0, 20.0])
def test_sigmoid_symmetry(x):
    assert sigmoid(x) + sigmoid(-x) == pytest.approx(1.0)


def test_sigmoid_is_increasing():
    values = [sigmoid(x / 4) for x in range(-40, 41)]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_sigmoid_bounds():
    for x in [-50.0, -5.0, 0.0, 5.0, 50.0]:
        assert 0.0 <= sigmoid(x) <= 1.0


def test_sigmoid_extremes():
    assert sigmoid(-1000) == 0.0
    assert sigmoid(1000) == 1.0


def test_sigmoid_matches_logistic_identity():
    x = 1.7
    assert sigmoid(x) == pytest.approx(math.exp(x) / (1 + math.exp(x)))