"""
Interval Model

A value is one of three kinds of real sets:

    EMPTY       ∅
    BOUNDED     {x | low <= x <= high}, low <= high, endpoints may be ±∞
    COMPLEMENT  {x | x <= high} ∪ {x | x >= low}, high < low, finite endpoints

The kind tag is authoritative. The EMPTY value carries NaN endpoints only
so that it refuses every tolerance comparison; nothing else may carry NaN.

Instances are immutable. Public constructors validate their arguments and
raise ValueError on contract violations. The engine builds its results
through bounded() and complement(), which normalize degenerate shapes
instead of raising, so arithmetic stays total.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union
import math

from .tolerance import (
    approx_equal,
    approx_ge,
    approx_le,
    is_approx_zero,
    is_signed_infinity,
    nan_max,
    nan_min,
)


Number = Union[int, float]

INF = math.inf
NAN = math.nan


class IntervalKind(Enum):
    """Shape of the represented set."""
    EMPTY = auto()
    BOUNDED = auto()
    COMPLEMENT = auto()


@dataclass(frozen=True, slots=True, eq=False)
class Interval:
    """
    Set of reals produced by uncertain arithmetic.

    Examples:
        >>> Interval.from_range(0, 2)
        [0.0, 2.0]
        >>> Interval.exact(1.0) / Interval.from_range(-200.0, 100.0)
        ℝ \\ (-0.005, 0.01)
        >>> str(Interval.from_tolerance(1.0, 100))
        '[0.0000000000; 2.0000000000](0)'
    """
    low: float
    high: float
    kind: IntervalKind = IntervalKind.BOUNDED

    def __post_init__(self):
        object.__setattr__(self, 'low', float(self.low))
        object.__setattr__(self, 'high', float(self.high))

        if self.kind is IntervalKind.EMPTY:
            if not (math.isnan(self.low) and math.isnan(self.high)):
                raise ValueError("empty interval must carry NaN endpoints")
            return

        if math.isnan(self.low) or math.isnan(self.high):
            raise ValueError(f"NaN endpoint in non-empty interval ({self.low}, {self.high})")

        if self.kind is IntervalKind.BOUNDED:
            if self.low > self.high and not approx_equal(self.low, self.high):
                raise ValueError(f"bounded interval needs low <= high, got [{self.low}, {self.high}]")
        else:
            if math.isinf(self.low) or math.isinf(self.high):
                raise ValueError("complement interval endpoints must be finite")
            if approx_ge(self.high, self.low):
                raise ValueError(
                    f"complement interval needs high < low, got low={self.low}, high={self.high}"
                )

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def empty(cls) -> Interval:
        """The empty set."""
        return EMPTY

    @classmethod
    def full_line(cls) -> Interval:
        """All real numbers, [-∞, +∞]."""
        return FULL_LINE

    @classmethod
    def from_tolerance(cls, nominal: Number, percent: Number) -> Interval:
        """
        Nominal value with a relative tolerance, e.g. 1.0 ± 10%.

        Raises:
            ValueError: if percent is not positive, or an infinite nominal
                leaves a single point at infinity
        """
        if not percent > 0:
            raise ValueError(f"tolerance percentage must be positive, got {percent}")

        a = nominal * (100.0 - percent) / 100.0
        b = nominal * (100.0 + percent) / 100.0
        # negative nominals swap the order of a and b
        low, high = nan_min(a, b), nan_max(a, b)
        _check_not_point_at_infinity(low, high)
        return cls(low, high)

    @classmethod
    def from_range(cls, x: Number, y: Number) -> Interval:
        """
        Closed range [x, y].

        Raises:
            ValueError: if x > y, either end is NaN, or both ends are the
                same infinity
        """
        if not x <= y:
            raise ValueError(f"range needs x <= y, got [{x}, {y}]")
        _check_not_point_at_infinity(x, y)
        return cls(x, y)

    @classmethod
    def exact(cls, x: Number) -> Interval:
        """Single point [x, x]. x must be finite."""
        _check_not_point_at_infinity(x, x)
        return cls(x, x)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_empty(self) -> bool:
        return self.kind is IntervalKind.EMPTY

    @property
    def is_bounded(self) -> bool:
        """True for the [low, high] shape, whether or not the ends are finite."""
        return self.kind is IntervalKind.BOUNDED

    @property
    def is_complement(self) -> bool:
        return self.kind is IntervalKind.COMPLEMENT

    @property
    def is_full_line(self) -> bool:
        """True if this is [-∞, +∞]."""
        return (self.is_bounded
                and is_signed_infinity(self.low, -1)
                and is_signed_infinity(self.high, 1))

    @property
    def is_zero(self) -> bool:
        """True for the degenerate point [0, 0] (within tolerance)."""
        return is_approx_zero(self.low) and is_approx_zero(self.high)

    # =========================================================================
    # Extent Queries
    # =========================================================================

    def contains(self, x: Number) -> bool:
        """Tolerant membership test. Always False for the empty set."""
        if self.is_empty:
            return False
        if self.is_complement:
            return approx_ge(x, self.low) or approx_le(x, self.high)
        return approx_ge(x, self.low) and approx_le(x, self.high)

    def minimum(self) -> float:
        """
        Infimum of the set.

        A complement always reaches -∞ through its lower tail.
        NaN for the empty set.
        """
        if self.is_empty:
            return NAN
        if self.is_complement or is_signed_infinity(self.low, -1):
            return -INF
        return self.low

    def maximum(self) -> float:
        """Supremum of the set; +∞ for complements, NaN for the empty set."""
        if self.is_empty:
            return NAN
        if self.is_complement or is_signed_infinity(self.high, 1):
            return INF
        return self.high

    def midpoint(self) -> float:
        """
        (minimum + maximum) / 2.

        NaN when the set is empty or unbounded in both directions.
        """
        hi = self.maximum()
        lo = self.minimum()
        if is_signed_infinity(hi, 1) and is_signed_infinity(lo, -1):
            return NAN
        return (hi + lo) / 2.0

    def isclose(self, other: Interval) -> bool:
        """Same kind and endpoints equal up to tolerance."""
        if self.kind is not other.kind:
            return False
        if self.is_empty:
            return True
        return (_close(self.low, other.low) and _close(self.high, other.high))

    # =========================================================================
    # Operators
    # =========================================================================

    def __contains__(self, x: Number) -> bool:
        return self.contains(x)

    def __neg__(self) -> Interval:
        from .arithmetic import negate
        return negate(self)

    def __add__(self, other: Union[Interval, Number]) -> Interval:
        from .arithmetic import add
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return add(self, other)

    def __radd__(self, other: Number) -> Interval:
        return self + other

    def __sub__(self, other: Union[Interval, Number]) -> Interval:
        from .arithmetic import subtract
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other: Number) -> Interval:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __mul__(self, other: Union[Interval, Number]) -> Interval:
        from .arithmetic import multiply
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other: Number) -> Interval:
        return self * other

    def __truediv__(self, other: Union[Interval, Number]) -> Interval:
        from .arithmetic import divide
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other: Number) -> Interval:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other / self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.is_empty:
            return True
        return self.low == other.low and self.high == other.high

    def __hash__(self) -> int:
        if self.is_empty:
            return hash(self.kind)
        return hash((self.kind, self.low, self.high))

    # =========================================================================
    # Representation
    # =========================================================================

    def __repr__(self) -> str:
        if self.is_empty:
            return "Interval(⊥)"
        if self.is_full_line:
            return "Interval(⊤)"
        if self.is_complement:
            return f"ℝ \\ ({self.high}, {self.low})"

        lo_str = "-∞" if is_signed_infinity(self.low, -1) else f"{self.low}"
        hi_str = "+∞" if is_signed_infinity(self.high, 1) else f"{self.high}"
        return f"[{lo_str}, {hi_str}]"

    def __str__(self) -> str:
        """Debug rendering: [low; high](flag) with ten decimals."""
        return f"[{self.low:.10f}; {self.high:.10f}]({int(self.is_complement)})"


EMPTY = Interval(NAN, NAN, IntervalKind.EMPTY)
FULL_LINE = Interval(-INF, INF)


def _close(a: float, b: float) -> bool:
    # approx_equal(inf, inf) is False since inf - inf is NaN
    return a == b or approx_equal(a, b)


def _check_not_point_at_infinity(low, high):
    # [-∞, -∞] and [+∞, +∞] hold no real number; only overflow in the
    # engine may produce them
    if math.isinf(low) and low == high:
        raise ValueError(f"[{low}, {high}] is not a range of real numbers")


def _coerce(value):
    if isinstance(value, Interval):
        return value
    if isinstance(value, (int, float)):
        return Interval.exact(value)
    return NotImplemented


# =============================================================================
# Normalizing builders (used by the arithmetic engine)
# =============================================================================

def bounded(low: float, high: float) -> Interval:
    """
    Build [low, high] from raw engine output.

    NaN ends come from ∞ - ∞ or 0 * ∞ on overflowed operands; they are
    widened to the matching infinity.
    """
    if math.isnan(low):
        low = -INF
    if math.isnan(high):
        high = INF
    return Interval(low, high)


def complement(low: float, high: float) -> Interval:
    """
    Build ℝ \\ (high, low) from raw engine output.

    Tails that touch or cross collapse to the full line. A tail pushed to
    infinity by overflow leaves a bounded set.
    """
    if math.isnan(low) or math.isnan(high) or approx_ge(high, low):
        return FULL_LINE
    if is_signed_infinity(low, 1):
        return Interval(-INF, high)
    if is_signed_infinity(high, -1):
        return Interval(low, INF)
    return Interval(low, high, IntervalKind.COMPLEMENT)


from_tolerance = Interval.from_tolerance
from_range = Interval.from_range
exact = Interval.exact
