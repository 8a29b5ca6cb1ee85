"""Signed 32-bit integers, the only value type in tinycalc. Arithmetic is checked: a result outside of
[INT_MIN, INT_MAX] raises Overflow instead of wrapping.
"""

from tinycalc.lang.error import Overflow

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def in_range(num):
    """Whether or not num fits in a signed 32-bit integer."""
    return INT_MIN <= num <= INT_MAX


def number(text):
    """Returns int value of a digit run. Raises ValueError if it does not fit in a signed 32-bit integer."""
    num = int(text)
    if not in_range(num):
        raise ValueError(f"{text} is out of range [{INT_MIN}, {INT_MAX}]")
    return num


def apply(operator, left, right):
    """Returns left <operator> right, where operator is a tree.Operator."""
    result = operator.function(left, right)
    if not in_range(result):
        raise Overflow(f"{left} {operator.value} {right}")
    return result
