"""
Tolerance Comparator

Epsilon-aware comparison primitives shared by the interval model and the
arithmetic engine. Every ordering decision in the package goes through
these functions, so two floats closer than EPS are treated as equal.

NaN never compares equal to anything, so the NaN endpoints carried by the
empty interval fail every comparison made against them.
"""

from __future__ import annotations

import math


# Fixed process-wide tolerance. Read at call time, never mutated at runtime.
EPS = 1e-10


# =============================================================================
# Ordering
# =============================================================================

def approx_equal(a: float, b: float) -> bool:
    """|a - b| < EPS; False if either argument is NaN."""
    return abs(a - b) < EPS


def approx_le(a: float, b: float) -> bool:
    """a <= b up to tolerance."""
    return a < b or approx_equal(a, b)


def approx_ge(a: float, b: float) -> bool:
    """a >= b up to tolerance."""
    return a > b or approx_equal(a, b)


def is_approx_zero(a: float) -> bool:
    return approx_equal(a, 0.0)


def sign(a: float) -> int:
    """
    Sign of a with tolerance.

    Returns:
        0 if a is within EPS of zero or NaN
        -1 if a is negative
        1 otherwise
    """
    if is_approx_zero(a) or math.isnan(a):
        return 0
    if a < 0.0:
        return -1
    return 1


def is_signed_infinity(x: float, sgn: int) -> bool:
    """True iff x is infinite with the sign of sgn (which must be nonzero)."""
    assert sgn != 0, "sign of infinity must be nonzero"

    if not math.isinf(x):
        return False
    return (x < 0.0) == (sgn < 0)


# =============================================================================
# NaN-aware extremes
# =============================================================================

def nan_min(a: float, b: float) -> float:
    """
    Minimum treating NaN as an absent value.

    Folding nan_min over candidates starting from NaN behaves like folding
    over an empty accumulator: NaN products (0 * inf) are skipped.
    """
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a < b else b


def nan_max(a: float, b: float) -> float:
    """Maximum treating NaN as an absent value."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return b if a < b else a
