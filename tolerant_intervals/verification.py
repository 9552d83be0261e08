"""
Soundness Verification

Checks with Z3 that an engine result really encloses every concrete value
of the operation over its operands:

    ∀x ∈ γ(a), y ∈ γ(b):  x ⊙ y ∈ γ(a ⊙̂ b)

The negation of this property is handed to the solver. UNSAT proves the
result sound; a model is a concrete counterexample.

Float results carry rounding error, so result bounds are widened by a
relative slack before the check. Operands are encoded exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from fractions import Fraction
from typing import Callable, Dict, Optional
import logging
import math

import z3

from . import arithmetic
from .interval import Interval

logger = logging.getLogger(__name__)


@dataclass
class VerificationConfig:
    """
    Configuration for soundness checks.

    Attributes:
        timeout_ms: Z3 timeout for each check
        relative_slack: result bounds are widened by slack * max(1, |bound|)
    """
    timeout_ms: int = 5000
    relative_slack: float = 1e-9


class Verdict(Enum):
    SOUND = auto()
    UNSOUND = auto()
    UNKNOWN = auto()


@dataclass
class SoundnessResult:
    """
    Outcome of one soundness check.

    Attributes:
        verdict: SOUND (proved), UNSOUND (counterexample), UNKNOWN (solver gave up)
        operation: name of the checked operation
        result: the interval the engine produced
        counterexample: operand values (and the escaping value) when UNSOUND
    """
    verdict: Verdict
    operation: str
    result: Interval
    counterexample: Dict[str, float] = field(default_factory=dict)

    @property
    def is_sound(self) -> bool:
        return self.verdict is Verdict.SOUND


BINARY_OPERATIONS: Dict[str, Callable[[Interval, Interval], Interval]] = {
    "add": arithmetic.add,
    "subtract": arithmetic.subtract,
    "multiply": arithmetic.multiply,
    "divide": arithmetic.divide,
}

UNARY_OPERATIONS: Dict[str, Callable[[Interval], Interval]] = {
    "negate": arithmetic.negate,
    "reciprocal": arithmetic.reciprocal,
}


# =============================================================================
# Encoding
# =============================================================================

def real_constant(value: float) -> z3.ArithRef:
    """Exact rational Z3 constant for a finite float."""
    frac = Fraction(value)
    return z3.Q(frac.numerator, frac.denominator)


def _widened(bound: float, relative_slack: float, direction: int) -> z3.ArithRef:
    slack = relative_slack * max(1.0, abs(bound))
    if slack == 0.0:
        return real_constant(bound)
    return real_constant(bound) + direction * real_constant(slack)


def membership(w: Interval, var: z3.ArithRef, relative_slack: float = 0.0) -> z3.BoolRef:
    """
    Z3 formula for var ∈ γ(w).

    Infinite bounds impose no constraint. With a nonzero slack every finite
    bound is moved outward.
    """
    if w.is_empty:
        return z3.BoolVal(False)

    lower = None
    upper = None
    if not math.isinf(w.low):
        lower = var >= _widened(w.low, relative_slack, -1)
    if not math.isinf(w.high):
        upper = var <= _widened(w.high, relative_slack, 1)

    if w.is_complement:
        # complement endpoints are finite by construction
        return z3.Or(lower, upper)

    constraints = [c for c in (lower, upper) if c is not None]
    if not constraints:
        return z3.BoolVal(True)
    return z3.And(*constraints)


def _model_value(model: z3.ModelRef, var: z3.ArithRef) -> float:
    value = model.eval(var, model_completion=True)
    if z3.is_rational_value(value):
        return float(Fraction(value.numerator_as_long(), value.denominator_as_long()))
    # algebraic numbers from nonlinear constraints
    return float(value.approx(20).as_fraction())


def _solve(solver: z3.Solver, operation: str, result: Interval,
           variables: Dict[str, z3.ArithRef]) -> SoundnessResult:
    status = solver.check()
    logger.debug("soundness check %s -> %s", operation, status)

    if status == z3.unsat:
        return SoundnessResult(Verdict.SOUND, operation, result)
    if status == z3.unknown:
        return SoundnessResult(Verdict.UNKNOWN, operation, result)

    model = solver.model()
    counterexample = {name: _model_value(model, var) for name, var in variables.items()}
    logger.info("counterexample for %s yielding %s: %s", operation, result, counterexample)
    return SoundnessResult(Verdict.UNSOUND, operation, result, counterexample)


def _make_solver(config: VerificationConfig) -> z3.Solver:
    solver = z3.Solver()
    solver.set("timeout", config.timeout_ms)
    return solver


# =============================================================================
# Checks
# =============================================================================

def check_binary(operation: str, a: Interval, b: Interval,
                 config: Optional[VerificationConfig] = None) -> SoundnessResult:
    """
    Prove or refute that operation(a, b) encloses every x ⊙ y.

    Raises:
        ValueError: for an unknown operation name
    """
    if operation not in BINARY_OPERATIONS:
        raise ValueError(f"Unknown binary operation: {operation}")
    config = config or VerificationConfig()

    result = BINARY_OPERATIONS[operation](a, b)

    x, y = z3.Reals("x y")
    solver = _make_solver(config)
    solver.add(membership(a, x), membership(b, y))

    if operation == "add":
        term = x + y
    elif operation == "subtract":
        term = x - y
    elif operation == "multiply":
        term = x * y
    else:
        solver.add(y != 0)
        term = x / y

    z = z3.Real("z")
    solver.add(z == term)
    solver.add(z3.Not(membership(result, z, config.relative_slack)))
    return _solve(solver, operation, result, {"x": x, "y": y, "z": z})


def check_unary(operation: str, w: Interval,
                config: Optional[VerificationConfig] = None) -> SoundnessResult:
    """
    Prove or refute that operation(w) encloses every -x or 1/x.

    Raises:
        ValueError: for an unknown operation name
    """
    if operation not in UNARY_OPERATIONS:
        raise ValueError(f"Unknown unary operation: {operation}")
    config = config or VerificationConfig()

    result = UNARY_OPERATIONS[operation](w)

    x = z3.Real("x")
    solver = _make_solver(config)
    solver.add(membership(w, x))

    if operation == "negate":
        term = -x
    else:
        solver.add(x != 0)
        term = 1 / x

    z = z3.Real("z")
    solver.add(z == term)
    solver.add(z3.Not(membership(result, z, config.relative_slack)))
    return _solve(solver, operation, result, {"x": x, "z": z})
