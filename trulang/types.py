"""Type definitions and helpers for trulang.

This module defines the static type model shared by the parser and the
interpreter, the runtime value classes produced by evaluation, and the
display helpers used by the print built-in.

There is exactly one numeric type. The surface keyword ``Int`` names it,
but it is backed by a Python float.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class TypeSpec:
    """Represents a trulang type.

    A type is described by its `kind` (one of 'Number', 'Bool', 'None',
    'Any' or 'Function'). Function types also carry their parameter types
    and return type, e.g. ``[[Int][Int] ~> [Int]]`` becomes
    ``TypeSpec('Function', (NUMBER, NUMBER), NUMBER)``.

    The generated ``==`` is strictly structural. Use `matches` for the
    type-checking equality, where ``Any`` matches everything.
    """
    kind: str
    params: Tuple['TypeSpec', ...] = ()
    ret: Optional['TypeSpec'] = None

    def __str__(self) -> str:
        if self.kind != 'Function':
            return self.kind
        params = ''.join(f"[{p}]" for p in self.params)
        return f"[{params} ~> [{self.ret}]]"

    def matches(self, other: 'TypeSpec') -> bool:
        return types_equal(self, other)

    @property
    def is_function(self) -> bool:
        return self.kind == 'Function'

    # Convenience constructors
    @staticmethod
    def number() -> 'TypeSpec':
        return TypeSpec('Number')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('Bool')

    @staticmethod
    def none() -> 'TypeSpec':
        return TypeSpec('None')

    @staticmethod
    def any() -> 'TypeSpec':
        return TypeSpec('Any')

    @staticmethod
    def function(params, ret: 'TypeSpec') -> 'TypeSpec':
        return TypeSpec('Function', tuple(params), ret)


TYPE_KEYWORDS = {
    'Int': TypeSpec.number(),
    'Bool': TypeSpec.boolean(),
    'None': TypeSpec.none(),
}


def types_equal(a: TypeSpec, b: TypeSpec) -> bool:
    """Structural type equality with ``Any`` as a wildcard on either side.

    Function types are equal when they have the same arity, pairwise equal
    parameter types and equal return types. An arity mismatch is simply
    unequal.
    """
    if a.kind == 'Any' or b.kind == 'Any':
        return True
    if a.kind != b.kind:
        return False
    if a.kind == 'Function':
        if len(a.params) != len(b.params):
            return False
        if not all(types_equal(x, y) for x, y in zip(a.params, b.params)):
            return False
        return types_equal(a.ret, b.ret)
    return True


class NoneVal:
    """Marker object for the trulang `None` value."""
    def __repr__(self) -> str:
        return 'None'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NoneVal)

    def __hash__(self) -> int:
        return hash(NoneVal)


NONE = NoneVal()


@dataclass
class FunctionVal:
    """A user-defined function used as a value."""
    function: Any  # ast.UserDefinedFunction

    def __repr__(self) -> str:
        return f"<function {to_string(self)}>"


@dataclass
class BuiltinRef:
    """A reference to a built-in taken with ``name!`` but not yet invoked."""
    name: str

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def format_number(n: float) -> str:
    """Render a number the way the language prints it: ``5`` or ``2.5``."""
    if math.isfinite(n) and n.is_integer() and abs(n) < 1e16:
        return str(int(n))
    return repr(n)


def type_name(value: Any) -> str:
    """Return the trulang runtime tag of a value."""
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, (FunctionVal, BuiltinRef)):
        return 'Function'
    if isinstance(value, NoneVal):
        return 'None'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a runtime value to its display form for printing."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, NoneVal):
        return '()'
    if isinstance(value, FunctionVal):
        func = value.function
        params = ' '.join(f"[{p.type_spec}] {p.name}" for p in func.params)
        return f"[{params} ~> [{func.return_type}]]" if params else f"[~> [{func.return_type}]]"
    if isinstance(value, BuiltinRef):
        return value.name
    return str(value)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality of two runtime values with matching tags."""
    if type_name(a) != type_name(b):
        return False
    if type(a) is not type(b):
        return False
    return a == b
