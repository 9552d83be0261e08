#!/usr/bin/env python3
"""
CLI entrypoint for tolerant-intervals.

Usage:
    tolerant-intervals <op> LOW HIGH [LOW HIGH] [--verify] [--verbose]

Returns:
    0: result computed (and proved sound with --verify)
    1: UNSOUND (counterexample found)
    2: UNKNOWN (solver timed out)
    3: Error (malformed range, wrong operand count)
"""

import argparse
import logging
import sys

from .interval import Interval
from .verification import (
    BINARY_OPERATIONS,
    UNARY_OPERATIONS,
    VerificationConfig,
    Verdict,
    check_binary,
    check_unary,
)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tolerant-intervals",
        description="tolerant-intervals: uncertainty arithmetic over intervals and their complements"
    )
    parser.add_argument(
        "operation",
        choices=sorted(BINARY_OPERATIONS) + sorted(UNARY_OPERATIONS),
        help="Operation to apply",
    )
    parser.add_argument(
        "bounds",
        type=float,
        nargs="+",
        metavar="BOUND",
        help="LOW HIGH for each operand (two numbers for unary, four for binary operations)",
    )
    parser.add_argument("--verify", action="store_true", help="Prove the result sound with Z3")
    parser.add_argument("--timeout-ms", type=int, default=5000, help="Z3 timeout per check")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    expected = 2 if args.operation in UNARY_OPERATIONS else 4
    if len(args.bounds) != expected:
        print(f"Error: {args.operation} takes {expected} bounds, got {len(args.bounds)}",
              file=sys.stderr)
        return 3

    try:
        operands = [
            Interval.from_range(args.bounds[i], args.bounds[i + 1])
            for i in range(0, expected, 2)
        ]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3

    for name, operand in zip("ab", operands):
        print(f"{name} = {operand}")

    if not args.verify:
        if args.operation in UNARY_OPERATIONS:
            result = UNARY_OPERATIONS[args.operation](*operands)
        else:
            result = BINARY_OPERATIONS[args.operation](*operands)
        print(f"{args.operation} = {result}")
        return 0

    config = VerificationConfig(timeout_ms=args.timeout_ms)
    if args.operation in UNARY_OPERATIONS:
        outcome = check_unary(args.operation, operands[0], config)
    else:
        outcome = check_binary(args.operation, operands[0], operands[1], config)

    print(f"{args.operation} = {outcome.result}")

    print(f"Verdict: {outcome.verdict.name}")
    if outcome.verdict is Verdict.UNSOUND:
        for var, value in outcome.counterexample.items():
            print(f"  {var} = {value!r}")
        return 1
    if outcome.verdict is Verdict.UNKNOWN:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
