# Cosmo language package
# This package provides a scanner, parser and tree-walking interpreter for the Cosmo language.
from .errors import CosmoError, CosmoSyntaxError, Diagnostics
from .interpreter import Interpreter, parse_program, run_program
from .parser import parse
from .scanner import scan

__all__ = [
    'scan',
    'parse',
    'parse_program',
    'run_program',
    'Interpreter',
    'CosmoError',
    'CosmoSyntaxError',
    'Diagnostics',
]
