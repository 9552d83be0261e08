"""
tolerant-intervals: arithmetic on uncertain real values.

A value is an interval [low, high], the complement of one (two unbounded
tails, as produced by dividing by an interval straddling zero), or the
empty set. Values are built from an exact number, a range, or a nominal
value with a percentage tolerance, and combined with -, +, -, *, /.

All comparisons use a fixed tolerance (tolerance.EPS). Undefined results
are returned in-band as EMPTY or FULL_LINE; only malformed construction
raises.
"""

from tolerant_intervals.tolerance import EPS
from tolerant_intervals.interval import (
    EMPTY,
    FULL_LINE,
    Interval,
    IntervalKind,
    exact,
    from_range,
    from_tolerance,
)
from tolerant_intervals.arithmetic import (
    add,
    divide,
    multiply,
    negate,
    reciprocal,
    subtract,
)

__version__ = "0.1.0"

__all__ = [
    "EPS",
    "EMPTY",
    "FULL_LINE",
    "Interval",
    "IntervalKind",
    "exact",
    "from_range",
    "from_tolerance",
    "add",
    "divide",
    "multiply",
    "negate",
    "reciprocal",
    "subtract",
]
