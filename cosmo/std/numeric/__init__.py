from .basic_numeric import BasicNumeric
from cosmo.callable import BuiltinFunction
from cosmo.environment import Environment
from typing import List, Any


def populate_numeric_environment() -> Environment:
    basic_numeric = BasicNumeric()
    numeric_env = Environment()

    def std_add(args: List[Any]) -> Any:
        a, b = args
        return basic_numeric.add(a, b)

    def std_sqrt(args: List[Any]) -> Any:
        return basic_numeric.sqrt(args[0])

    numeric_env.define('add', BuiltinFunction('add', 2, std_add))
    numeric_env.define('sqrt', BuiltinFunction('sqrt', 1, std_sqrt))

    return numeric_env
