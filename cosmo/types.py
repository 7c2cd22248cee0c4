"""Runtime value helpers for Cosmo.

Cosmo values map directly onto Python objects: numbers are `float`,
strings are `str`, booleans are `bool`, nil is `None`, and callables are
instances of `cosmo.callable.Callable`. This module holds the rules that
the interpreter applies to those values: display form, truthiness,
equality and type names for error messages.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from .callable import Callable


def is_number(value: Any) -> bool:
    # bool is a subclass of int; Cosmo booleans are never numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; every other value, including 0 and "", is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # No coercion between kinds: true != 1 and "1" != 1
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def format_number(value: float) -> str:
    """Shortest round-trip digits, in plain notation for magnitudes in
    [1e-6, 1e21) and as `1.5e+21` / `1e-7` outside that range."""
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    sign = '-' if value < 0 else ''
    # shortest round-trip digits, with value == 0.digits * 10**point
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    stripped = digits.rstrip('0')
    exponent += len(digits) - len(stripped)
    digits = stripped
    point = len(digits) + exponent
    if len(digits) <= point <= 21:
        return sign + digits + '0' * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + '.' + digits[point:]
    if -6 < point <= 0:
        return sign + '0.' + '0' * -point + digits
    mantissa = digits[0] + ('.' + digits[1:] if len(digits) > 1 else '')
    power = point - 1
    return f"{sign}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def to_string(value: Any) -> str:
    """Convert a Cosmo value to the text shown by `output` and string concatenation."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    return repr(value)


def type_name(value: Any) -> str:
    """Return the Cosmo type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, Callable):
        return 'function'
    return type(value).__name__
