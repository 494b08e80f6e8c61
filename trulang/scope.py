"""Compile-time scope: which names are visible and what type they have.

A scope is a flat list of bindings searched from the most recent one
backwards, with the built-in table consulted last. Entering a block or
function body branches the scope: the child starts with a copy of the
parent's bindings, and whatever it defines is dropped with it when the
block ends. Nothing is ever merged back into the parent.

Each binding remembers how many function literals enclosed it (`depth`).
A name bound directly to a function literal also carries the names that
literal's body takes from outside itself (`free_names`).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .builtin_function import find_builtin
from .lexer import Token
from .types import TypeSpec


@dataclass
class Binding:
    type_spec: TypeSpec
    depth: int = 0
    free_names: Optional[Dict[Tuple[str, Any], Token]] = None
    builtin: bool = False


class Scope:
    def __init__(self, defined: Optional[List[Tuple[Tuple[str, Any], Binding]]] = None):
        self.defined: List[Tuple[Tuple[str, Any], Binding]] = defined if defined is not None else []

    def branch(self) -> 'Scope':
        return Scope(list(self.defined))

    def define(self, name: Token, type_spec: TypeSpec, depth: int = 0,
               free_names: Optional[Dict[Tuple[str, Any], Token]] = None):
        self.defined.append((name.key, Binding(type_spec, depth, free_names)))

    def lookup(self, name: Token) -> Optional[Binding]:
        for key, binding in reversed(self.defined):
            if key == name.key:
                return binding
        if name.type == 'WORD':
            builtin = find_builtin(name.value)
            if builtin is not None:
                return Binding(builtin.signature, builtin=True)
        return None

    def find(self, name: Token) -> Optional[TypeSpec]:
        binding = self.lookup(name)
        return binding.type_spec if binding is not None else None
