"""Miscellaneous math functions."""

import math


def sigmoid(x: float) -> float:
    """Logistic function with an S shaped curve."""
    try:
        return 1 / (1 + math.exp(-x))
    except OverflowError:
        return 0.0