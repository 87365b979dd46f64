"""Runtime values of the cinder language and the rules that combine them.

A value is one of four kinds, carried by the matching native Python type:

    nil     -> None
    number  -> float (IEEE-754 double)
    string  -> str
    boolean -> bool

Every operator rule lives here as a plain function over these values so it can be tested on its own. Rule
violations raise EvalError.
"""

import math

from cinder.lang.error import EvalError


def kind(value):
    """Returns the kind name of value: 'nil', 'number', 'string' or 'boolean'."""
    if value is None:
        return "nil"
    elif isinstance(value, bool):  # before float/int: bool is an int subclass
        return "boolean"
    elif isinstance(value, float):
        return "number"
    elif isinstance(value, str):
        return "string"
    raise TypeError(f"not a cinder value: {value!r}")


def stringify(value):
    """Canonical text of value, as written by print."""
    if value is None:
        return "nil"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        if value.is_integer():
            return str(int(value)) if value or math.copysign(1.0, value) > 0 else "-0"
        return repr(value)
    return value


def is_truthy(value):
    """nil, false, zero and the empty string are falsy; everything else is truthy."""
    if value is None:
        return False
    elif isinstance(value, bool):
        return value
    elif isinstance(value, float):
        return value != 0
    return len(value) > 0


def is_equal(left, right):
    """Values of different kinds are never equal. Never raises."""
    if kind(left) != kind(right):
        return False
    return left == right


def check_kinds(left, right):
    if kind(left) != kind(right):
        raise EvalError(f"Invalid operation. Mismatched types {kind(left)} and {kind(right)}.")


def check_numbers(op, left, right):
    check_kinds(left, right)
    if kind(left) != "number":
        raise EvalError(f"Operands of '{op}' must be numbers.")


def add(left, right):
    """'+': concatenates two strings or adds two numbers."""
    check_kinds(left, right)
    if kind(left) not in ("number", "string"):
        raise EvalError("Operands of '+' must be two numbers or two strings.")
    return left + right


def divide(left, right):
    """IEEE-754 division: dividing by zero gives a signed infinity (or nan for 0/0) instead of raising."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


ARITHMETIC = {
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": divide,
}

COMPARISON = {
    ">": lambda left, right: left > right,
    ">=": lambda left, right: left >= right,
    "<": lambda left, right: left < right,
    "<=": lambda left, right: left <= right,
}


def arithmetic(op, left, right):
    """'-', '*' and '/' on two numbers."""
    check_numbers(op, left, right)
    return ARITHMETIC[op](left, right)


def compare(op, left, right):
    """'>', '>=', '<' and '<=' on two numbers."""
    check_numbers(op, left, right)
    return COMPARISON[op](left, right)


def negate(value):
    """Unary '-'."""
    if kind(value) != "number":
        raise EvalError("Operand of '-' must be a number.")
    return -value
