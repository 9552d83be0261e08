"""
Arithmetic Engine

Negation, reciprocal, addition, subtraction, multiplication and division
over Interval values. Every operation is total: undefined results come
back in-band as EMPTY (no value possible) or FULL_LINE (every value
possible), never as exceptions.

Binary operations are evaluated in this order:
    1. EMPTY operand -> EMPTY
    2. operation-specific degenerate guards
    3. dispatch on the complement flags of both operands
"""

from __future__ import annotations

import logging
import math

from .interval import (
    EMPTY,
    FULL_LINE,
    Interval,
    bounded,
    complement,
)
from .tolerance import (
    approx_equal,
    approx_le,
    is_approx_zero,
    nan_max,
    nan_min,
    sign,
)

logger = logging.getLogger(__name__)


def _build(low: float, high: float, complemented: bool) -> Interval:
    if complemented:
        return complement(low, high)
    return bounded(low, high)


def _invert(x: float) -> float:
    # IEEE semantics for a signed zero divisor instead of ZeroDivisionError
    if x == 0.0:
        return math.copysign(math.inf, x)
    return 1.0 / x


# =============================================================================
# Unary operations
# =============================================================================

def negate(w: Interval) -> Interval:
    """{x | -x in w}. Reflection about zero keeps the shape."""
    if w.is_empty:
        return EMPTY
    return _build(-w.high, -w.low, w.is_complement)


def reciprocal(w: Interval) -> Interval:
    """
    {x | 1/x in w}.

    [0, 0] has no reciprocal and maps to EMPTY. An interval straddling zero
    turns into a complement and vice versa. An endpoint sitting on zero
    maps to an unbounded tail, which overrides the straddle case.
    """
    if w.is_empty:
        return EMPTY
    if w.is_zero:
        logger.debug("reciprocal of zero interval is empty")
        return EMPTY

    low = _invert(w.high)
    high = _invert(w.low)
    complemented = w.is_complement

    if sign(w.low) * sign(w.high) == -1:
        complemented = not complemented
        if approx_equal(low, high):
            logger.debug("reciprocal of %r collapsed to full line", w)
            return FULL_LINE

    if is_approx_zero(w.low):
        high = math.inf
        complemented = False
    if is_approx_zero(w.high):
        low = -math.inf
        complemented = False

    return _build(low, high, complemented)


# =============================================================================
# Addition / Subtraction
# =============================================================================

def add(a: Interval, b: Interval) -> Interval:
    """{x + y | x in a, y in b}."""
    if a.is_empty or b.is_empty:
        return EMPTY

    # two sets unbounded both ways can sum to anything
    if a.is_complement and b.is_complement:
        return FULL_LINE

    low = a.low + b.low
    high = a.high + b.high
    complemented = a.is_complement or b.is_complement

    # the gap of the complement got filled by the other operand's width
    if complemented and approx_le(low, high):
        logger.debug("sum of %r and %r wraps to full line", a, b)
        return FULL_LINE

    return _build(low, high, complemented)


def subtract(a: Interval, b: Interval) -> Interval:
    """{x - y | x in a, y in b}."""
    return add(a, negate(b))


# =============================================================================
# Multiplication / Division
# =============================================================================

def _is_non_positive(w: Interval) -> bool:
    return approx_le(w.low, 0.0) and approx_le(w.high, 0.0)


def _multiply_bounded(a: Interval, b: Interval) -> Interval:
    assert a.is_bounded and b.is_bounded

    products = (a.low * b.low, a.low * b.high, a.high * b.low, a.high * b.high)
    low = math.nan
    high = math.nan
    for p in products:
        low = nan_min(low, p)
        high = nan_max(high, p)
    return bounded(low, high)


def _multiply_one_complement(a: Interval, b: Interval) -> Interval:
    assert a.is_complement != b.is_complement

    if a.is_complement:
        a, b = b, a
    # a is bounded, b is the complement

    # Negating non-positive operands reduces every sign case to one formula;
    # the result is negated back when an odd number of flips happened.
    flips = 0
    if _is_non_positive(a):
        a = negate(a)
        flips += 1
    if _is_non_positive(b):
        b = negate(b)
        flips += 1

    r1 = nan_min(a.low * b.low, a.high * b.low)
    r2 = nan_max(a.low * b.high, a.high * b.high)

    if approx_le(r1, r2):
        logger.debug("product of %r and %r overlaps itself, full line", a, b)
        return FULL_LINE

    result = complement(r1, r2)
    if flips % 2:
        result = negate(result)
    return result


def _multiply_both_complement(a: Interval, b: Interval) -> Interval:
    assert a.is_complement and b.is_complement

    if a.contains(0.0) or b.contains(0.0):
        return FULL_LINE

    return complement(
        nan_min(a.low * b.low, a.high * b.high),
        nan_max(a.low * b.high, a.high * b.low),
    )


def multiply(a: Interval, b: Interval) -> Interval:
    """{x * y | x in a, y in b}."""
    if a.is_empty or b.is_empty:
        return EMPTY

    # [0, 0] * [-∞, +∞] would otherwise yield NaN products
    if a.is_zero or b.is_zero:
        return Interval.exact(0.0)

    # [-∞, +∞] * [0, 1] likewise
    if a.is_full_line or b.is_full_line:
        return FULL_LINE

    if a.is_complement and b.is_complement:
        return _multiply_both_complement(a, b)
    if a.is_complement or b.is_complement:
        return _multiply_one_complement(a, b)
    return _multiply_bounded(a, b)


def divide(a: Interval, b: Interval) -> Interval:
    """{x / y | x in a, y in b, y != 0}."""
    return multiply(a, reciprocal(b))
