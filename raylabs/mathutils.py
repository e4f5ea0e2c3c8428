"""Scalar helpers used by the vector and camera code."""

from __future__ import annotations

_PI = 3.14159265359
_NEWTON_STEPS = 10
_SERIES_TERMS = 8


def sqrt(x: float) -> float:
    """Square root by ten Newton iterations; non-positive input yields 0."""
    if x <= 0.0:
        return 0.0
    guess = x
    for _ in range(_NEWTON_STEPS):
        guess = (guess + x / guess) * 0.5
    return guess


def tan(x: float) -> float:
    """Angle function used for the camera's field of view.

    Reduces ``x`` by whole periods of 2*pi (truncating toward zero), then sums
    the alternating odd power series x - x^3/3! + x^5/5! - ... over eight terms.
    """
    period = 2.0 * _PI
    x -= int(x / period) * period

    result = x
    x2 = x * x
    numerator = x
    denominator = 1.0
    for i in range(1, _SERIES_TERMS):
        numerator *= x2
        denominator *= (2.0 * i) * (2.0 * i + 1.0)
        term = numerator / denominator
        result += term if i % 2 == 0 else -term
    return result