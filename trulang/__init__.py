# trulang language package
# This package provides a type-checking parser and an interpreter for trulang.
from .interpreter import run, parse_program, interpret, Interpreter
from .errors import TruError

__all__ = [
    'run',
    'parse_program',
    'interpret',
    'Interpreter',
    'TruError',
]
