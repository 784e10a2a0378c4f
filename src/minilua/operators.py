## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from typing import Any

from .types import nil
from .syntax import Operation
from .errors import InvalidArithmetic


## ARITHMETIC
def op_add(b: float, a: float) -> float: return b + a
def op_sub(b: float, a: float) -> float: return b - a
def op_mul(b: float, a: float) -> float: return b * a
def op_div(b: float, a: float) -> float:
    if a != 0: return b / a
    # IEEE-754 semantics rather than ZeroDivisionError.
    if b == 0 or math.isnan(b): return math.nan
    return math.copysign(math.inf, b) * math.copysign(1.0, a)

## COMPARISON
def op_equal_q(b: float, a: float) -> bool: return b == a
def op_gt(b: float, a: float) -> bool: return b > a
def op_lt(b: float, a: float) -> bool: return b < a
def op_gte(b: float, a: float) -> bool: return b >= a
def op_lte(b: float, a: float) -> bool: return b <= a


ARITHMETIC = {
    Operation.ADD: op_add,
    Operation.SUBTRACT: op_sub,
    Operation.MULTIPLY: op_mul,
    Operation.DIVIDE: op_div,
}

COMPARISON = {
    Operation.EQUALS: op_equal_q,
    Operation.GREATER_THAN: op_gt,
    Operation.LESS_THAN: op_lt,
    Operation.GREATER_OR_EQUAL: op_gte,
    Operation.LESS_OR_EQUAL: op_lte,
}


def is_number(x: Any) -> bool:
    return isinstance(x, float) or (isinstance(x, int) and not isinstance(x, bool))


def arithmetic(op: Operation, lhs: Any, rhs: Any) -> float:
    """Numbers only; the first non-number operand is reported, left before right."""
    for operand in (lhs, rhs):
        if not is_number(operand):
            raise InvalidArithmetic(operand)
    return float(ARITHMETIC[op](lhs, rhs))


def compare(op: Operation, lhs: Any, rhs: Any) -> Any:
    """Numbers compare to a boolean, any other pairing yields nil without raising."""
    if is_number(lhs) and is_number(rhs):
        return COMPARISON[op](lhs, rhs)
    return nil


def binary(op: Operation, lhs: Any, rhs: Any) -> Any:
    if op.is_arithmetic:
        return arithmetic(op, lhs, rhs)
    return compare(op, lhs, rhs)
