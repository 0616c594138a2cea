"""Runtime values for EZLang.

Values are plain Python objects: ``int`` (Integer), ``str`` (Text) and
``bool`` (Boolean). Every operator goes through ``OPERATORS``, a closed
table keyed by ``(op, left kind, right kind)``. Any combination missing
from the table is rejected with an ``EZLangRuntimeError``. Python's own
coercions (``True + 1``, ``"a" * 3``) are never used.
"""

import operator

from errors import EZLangRuntimeError

INTEGER = "Integer"
TEXT = "Text"
BOOLEAN = "Boolean"

# Integers are signed 64-bit
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def kind_of(value) -> str:
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, str):
        return TEXT
    raise EZLangRuntimeError(f"not an EZLang value: {type(value).__name__}")


def display(value) -> str:
    kind = kind_of(value)
    if kind == BOOLEAN:
        return "True" if value else "False"
    if kind == INTEGER:
        return str(value)
    return value


def is_truthy(value) -> bool:
    kind = kind_of(value)
    if kind == BOOLEAN:
        return value
    if kind == INTEGER:
        return value != 0
    return value != ""


def floor_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError
    return a // b


OPERATORS = {
    ("+", INTEGER, INTEGER): operator.add,
    ("+", TEXT, TEXT): operator.add,
    ("-", INTEGER, INTEGER): operator.sub,
    ("*", INTEGER, INTEGER): operator.mul,
    ("/", INTEGER, INTEGER): floor_div,

    ("<", INTEGER, INTEGER): operator.lt,
    (">", INTEGER, INTEGER): operator.gt,
    ("<=", INTEGER, INTEGER): operator.le,
    (">=", INTEGER, INTEGER): operator.ge,
    ("<", TEXT, TEXT): operator.lt,
    (">", TEXT, TEXT): operator.gt,
    ("<=", TEXT, TEXT): operator.le,
    (">=", TEXT, TEXT): operator.ge,

    ("==", INTEGER, INTEGER): operator.eq,
    ("==", TEXT, TEXT): operator.eq,
    ("==", BOOLEAN, BOOLEAN): operator.eq,
}


def apply_operator(op: str, left, right, line: int | None = None):
    left_kind = kind_of(left)
    right_kind = kind_of(right)

    func = OPERATORS.get((op, left_kind, right_kind))
    if func is None:
        # values of different kinds are never equal
        if op == "==" and left_kind != right_kind:
            return False
        raise EZLangRuntimeError(
            f"unsupported operand types for {op}: '{left_kind}' and '{right_kind}'", line
        )

    try:
        result = func(left, right)
    except ZeroDivisionError:
        raise EZLangRuntimeError("Division by zero", line) from None

    if kind_of(result) == INTEGER and not INT_MIN <= result <= INT_MAX:
        raise EZLangRuntimeError(f"Integer out of range for {op}", line)
    return result
