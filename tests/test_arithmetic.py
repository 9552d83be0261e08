"""
Tests for the arithmetic engine.

Covers the dispatch over bounded/complement/empty operands, the degenerate
guards of multiplication, and the zero handling of the reciprocal.
"""

import math

import pytest

from tolerant_intervals.arithmetic import (
    add,
    divide,
    multiply,
    negate,
    reciprocal,
    subtract,
)
from tolerant_intervals.interval import (
    EMPTY,
    FULL_LINE,
    Interval,
    IntervalKind,
    exact,
    from_range,
)


def comp(low, high):
    return Interval(low, high, IntervalKind.COMPLEMENT)


SAMPLE_BOUNDED = [
    exact(3.0),
    exact(-2.5),
    from_range(-200.0, 100.0),
    from_range(0.0, 1.0),
    from_range(-4.0, 0.0),
    from_range(1.0, math.inf),
    from_range(-math.inf, -1.0),
    FULL_LINE,
]


# ============================================================================
# Negation
# ============================================================================

class TestNegate:

    def test_bounded(self):
        assert negate(from_range(1.0, 3.0)) == from_range(-3.0, -1.0)

    def test_complement_keeps_shape(self):
        assert negate(comp(2.0, -1.0)) == comp(1.0, -2.0)

    def test_empty(self):
        assert negate(EMPTY) is EMPTY

    def test_infinite_ends(self):
        w = negate(from_range(1.0, math.inf))
        assert w.low == -math.inf and w.high == -1.0

    @pytest.mark.parametrize("w", SAMPLE_BOUNDED)
    def test_double_negation(self, w):
        assert negate(negate(w)).isclose(w)

    def test_operator(self):
        assert -from_range(1.0, 3.0) == negate(from_range(1.0, 3.0))


# ============================================================================
# Reciprocal
# ============================================================================

class TestReciprocal:

    def test_positive(self):
        assert reciprocal(from_range(2.0, 4.0)).isclose(from_range(0.25, 0.5))

    def test_negative(self):
        assert reciprocal(from_range(-4.0, -2.0)).isclose(from_range(-0.5, -0.25))

    def test_zero_point_is_empty(self):
        assert reciprocal(exact(0.0)) is EMPTY
        assert reciprocal(from_range(-1e-12, 1e-12)) is EMPTY

    def test_empty(self):
        assert reciprocal(EMPTY) is EMPTY

    def test_straddling_becomes_complement(self):
        w = reciprocal(from_range(-200.0, 100.0))
        assert w.is_complement
        assert w.low == pytest.approx(0.01)
        assert w.high == pytest.approx(-0.005)

    def test_straddling_complement_becomes_bounded(self):
        w = reciprocal(comp(2.0, -1.0))
        assert w.is_bounded
        assert w.isclose(from_range(-1.0, 0.5))

    def test_round_trip_of_straddling(self):
        w = from_range(-200.0, 100.0)
        assert reciprocal(reciprocal(w)).isclose(w)

    def test_full_line_collapses(self):
        assert reciprocal(FULL_LINE) is FULL_LINE

    def test_huge_straddle_collapses(self):
        assert reciprocal(from_range(-1e20, 1e20)) is FULL_LINE

    def test_low_endpoint_on_zero(self):
        w = reciprocal(from_range(0.0, 4.0))
        assert w.is_bounded
        assert w.low == 0.25 and w.high == math.inf

    def test_high_endpoint_on_zero(self):
        w = reciprocal(from_range(-4.0, 0.0))
        assert w.is_bounded
        assert w.low == -math.inf and w.high == -0.25

    def test_negative_zero_endpoint(self):
        w = reciprocal(from_range(-4.0, -0.0))
        assert w.low == -math.inf and w.high == -0.25

    def test_near_zero_endpoint_overrides_straddle(self):
        """An endpoint within tolerance of zero is not a genuine straddle."""
        w = reciprocal(from_range(-1e-11, 5.0))
        assert w.is_bounded
        assert w.low == pytest.approx(0.2)
        assert w.high == math.inf

    def test_complement_with_endpoint_on_zero(self):
        # (-inf, -3] u [0, inf)
        w = reciprocal(comp(0.0, -3.0))
        assert w.is_bounded
        assert w.low == pytest.approx(-1.0 / 3.0)
        assert w.high == math.inf

    def test_complement_not_straddling(self):
        # (-inf, 2] u [5, inf)
        w = reciprocal(comp(5.0, 2.0))
        assert w.is_complement
        assert w.low == pytest.approx(0.5)
        assert w.high == pytest.approx(0.2)

    def test_half_line(self):
        w = reciprocal(from_range(-math.inf, 5.0))
        assert w.is_complement
        assert w.low == pytest.approx(0.2)
        assert w.high == 0.0


# ============================================================================
# Addition / Subtraction
# ============================================================================

class TestAdd:

    def test_bounded(self):
        assert add(from_range(1.0, 3.0), from_range(2.0, 4.0)) == from_range(3.0, 7.0)

    def test_empty_propagates(self):
        assert add(EMPTY, exact(1.0)) is EMPTY
        assert add(comp(2.0, -1.0), EMPTY) is EMPTY

    def test_two_complements_give_full_line(self):
        assert add(comp(2.0, -1.0), comp(10.0, 5.0)) is FULL_LINE

    def test_complement_shifted(self):
        w = add(comp(10.0, -10.0), exact(-20.0))
        assert w == comp(-10.0, -30.0)

    def test_complement_gap_filled(self):
        # gap (-1, 2) has width 3, the bounded operand has width 4
        assert add(comp(2.0, -1.0), from_range(0.0, 4.0)) is FULL_LINE
        assert add(from_range(0.0, 3.0), comp(2.0, -1.0)) is FULL_LINE

    def test_complement_gap_narrowed(self):
        w = add(comp(2.0, -1.0), from_range(0.0, 1.0))
        assert w == comp(2.0, 0.0)

    def test_opposite_half_lines(self):
        assert add(from_range(1.0, math.inf), from_range(-math.inf, -1.0)) == FULL_LINE

    def test_operators_accept_numbers(self):
        w = from_range(1.0, 2.0)
        assert w + 1 == from_range(2.0, 3.0)
        assert 1 + w == from_range(2.0, 3.0)
        assert w - 1 == from_range(0.0, 1.0)
        assert 1 - w == from_range(-1.0, 0.0)


class TestSubtract:

    def test_bounded(self):
        assert subtract(from_range(1.0, 3.0), from_range(2.0, 4.0)) == from_range(-3.0, 1.0)

    def test_is_add_of_negation(self):
        a, b = comp(2.0, -1.0), from_range(0.0, 0.5)
        assert subtract(a, b) == add(a, negate(b))

    def test_self_subtraction_is_not_zero(self):
        w = from_range(0.0, 1.0)
        assert subtract(w, w) == from_range(-1.0, 1.0)

    @pytest.mark.parametrize("w", SAMPLE_BOUNDED + [comp(2.0, -1.0)])
    def test_empty_propagates(self, w):
        assert subtract(EMPTY, w) is EMPTY
        assert subtract(w, EMPTY) is EMPTY


# ============================================================================
# Multiplication
# ============================================================================

class TestMultiplyGuards:

    def test_empty_propagates(self):
        assert multiply(EMPTY, exact(0.0)) is EMPTY
        assert multiply(FULL_LINE, EMPTY) is EMPTY
        assert multiply(EMPTY, comp(2.0, -1.0)) is EMPTY
        assert multiply(comp(2.0, -1.0), EMPTY) is EMPTY

    @pytest.mark.parametrize("w", SAMPLE_BOUNDED + [comp(2.0, -1.0)])
    def test_zero_absorbs(self, w):
        assert multiply(exact(0.0), w) == exact(0.0)
        assert multiply(w, exact(0.0)) == exact(0.0)

    @pytest.mark.parametrize("w", [
        exact(3.0),
        from_range(-200.0, 100.0),
        from_range(0.0, 1.0),
        from_range(1.0, math.inf),
        comp(2.0, -1.0),
    ])
    def test_full_line_absorbs(self, w):
        assert multiply(FULL_LINE, w) is FULL_LINE
        assert multiply(w, FULL_LINE) is FULL_LINE


class TestMultiplyBounded:

    def test_mixed_signs(self):
        assert multiply(from_range(-2.0, 3.0), from_range(1.0, 2.0)) == from_range(-4.0, 6.0)

    def test_negative_by_positive(self):
        assert multiply(from_range(-6.0, -5.0), from_range(2.0, 3.0)) == from_range(-18.0, -10.0)

    def test_nan_products_skipped(self):
        """0 * inf products do not poison the bounds."""
        w = multiply(from_range(0.0, 5.0), from_range(1.0, math.inf))
        assert w.low == 0.0 and w.high == math.inf

    def test_half_line_by_negative(self):
        w = multiply(from_range(193.5, math.inf), from_range(-3.0, -2.0))
        assert w.low == -math.inf
        assert w.high == pytest.approx(-387.0)

    def test_operators_accept_numbers(self):
        w = from_range(1.0, 2.0)
        assert w * 2 == from_range(2.0, 4.0)
        assert 2 * w == from_range(2.0, 4.0)


class TestMultiplyOneComplement:

    def test_positive_bounded(self):
        # (-inf, -3] u [2, inf) times [5, 10]
        w = multiply(comp(2.0, -3.0), from_range(5.0, 10.0))
        assert w == comp(10.0, -15.0)

    def test_negative_bounded(self):
        w = multiply(comp(2.0, -3.0), from_range(-10.0, -5.0))
        assert w == comp(15.0, -10.0)

    def test_argument_order_irrelevant(self):
        a, b = from_range(-10.0, -5.0), comp(2.0, -3.0)
        assert multiply(a, b) == multiply(b, a)

    def test_non_positive_complement(self):
        # (-inf, -5] u [-1, inf) times [1, 2]
        w = multiply(comp(-1.0, -5.0), from_range(1.0, 2.0))
        assert w.is_complement
        assert w.low == pytest.approx(-2.0)
        assert w.high == pytest.approx(-5.0)

    def test_straddling_bounded_fills_line(self):
        assert multiply(comp(2.0, -3.0), from_range(-1.0, 1.0)) is FULL_LINE

    def test_tiny_gap_collapses(self):
        w = multiply(comp(1e-8, -1e-8), from_range(1e-3, 2e-3))
        assert w is FULL_LINE

    def test_scaled_reciprocal(self):
        w = multiply(exact(1.0), reciprocal(from_range(-200.0, 100.0)))
        assert w.is_complement
        assert w.low == pytest.approx(0.01)


class TestMultiplyBothComplement:

    def test_gap_around_zero(self):
        w = multiply(comp(2.0, -3.0), comp(5.0, -1.0))
        assert w == comp(3.0, -2.0)

    def test_zero_reachable(self):
        # (-inf, -10] u [-0.0333, inf) contains 0
        assert multiply(comp(1000.0, -1000.0), comp(-1.0 / 30.0, -0.1)) is FULL_LINE

    def test_symmetric(self):
        w = multiply(comp(1000.0, -1000.0), comp(10.0, -10.0))
        assert w == comp(10000.0, -10000.0)
        assert w.contains(-10000.0)
        assert not w.contains(9999.9)


# ============================================================================
# Division
# ============================================================================

class TestDivide:

    def test_is_multiply_by_reciprocal(self):
        a, b = from_range(1.0, 2.0), from_range(-3.0, 4.0)
        assert divide(a, b) == multiply(a, reciprocal(b))

    @pytest.mark.parametrize("w", SAMPLE_BOUNDED + [comp(2.0, -1.0)])
    def test_empty_propagates(self, w):
        assert divide(EMPTY, w) is EMPTY
        assert divide(w, EMPTY) is EMPTY

    def test_by_exact_zero_is_empty(self):
        for w in (exact(1.0), from_range(1.0, 2.0), from_range(-5.0, -1.0)):
            assert divide(w, exact(0.0)) is EMPTY

    def test_by_interval_touching_zero(self):
        w = divide(exact(1.0), from_range(0.0, 1.0))
        assert w == from_range(1.0, math.inf)

    def test_operators(self):
        w = from_range(2.0, 4.0)
        assert (w / 2).isclose(from_range(1.0, 2.0))
        assert (8 / w).isclose(from_range(2.0, 4.0))

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            from_range(1.0, 2.0) / "2"
