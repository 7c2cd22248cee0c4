import math

from cosmo.errors import CosmoError
from cosmo.types import is_number, type_name


class BasicNumeric:
    def add(self, a: float, b: float) -> float:
        if not is_number(a) or not is_number(b):
            raise CosmoError('TypeError', f"Arguments to 'add' must be numbers, got {type_name(a)} and {type_name(b)}.")
        return float(a + b)

    def sqrt(self, a: float) -> float:
        if not is_number(a):
            raise CosmoError('TypeError', f"Argument to 'sqrt' must be a number, got {type_name(a)}.")
        if a < 0:
            return math.nan
        return math.sqrt(a)
