"""Abstract Syntax Tree (AST) definitions for trulang.

The parser type checks while it builds the tree, so every node already
knows its static type (`type_spec`) and its source span (`position`) by
the time it is constructed. Nodes are never mutated afterwards.

The ``__str__`` forms are the compact dump printed by ``--ast``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .errors import Position
from .lexer import Token
from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class NumberLit(Node):
    token: Token

    @property
    def value(self) -> float:
        return self.token.value

    @property
    def type_spec(self) -> TypeSpec:
        return TypeSpec.number()

    @property
    def position(self) -> Position:
        return self.token.position

    def __str__(self) -> str:
        return f"Number[{self.token}]"


@dataclass
class BoolLit(Node):
    token: Token

    @property
    def value(self) -> bool:
        return self.token.value == 'true'

    @property
    def type_spec(self) -> TypeSpec:
        return TypeSpec.boolean()

    @property
    def position(self) -> Position:
        return self.token.position

    def __str__(self) -> str:
        return f"Bool[{self.token}]"


@dataclass
class Call(Node):
    callee: Token
    args: List[Node]
    type_spec: TypeSpec  # callee's return type

    @property
    def position(self) -> Position:
        return self.callee.position

    def __str__(self) -> str:
        return f"Call[{self.callee}][{', '.join(str(a) for a in self.args)}]"


@dataclass
class Define(Node):
    name: Token
    value: Node

    @property
    def type_spec(self) -> TypeSpec:
        return TypeSpec.none()

    @property
    def position(self) -> Position:
        return self.name.position

    def __str__(self) -> str:
        return f"Define[{self.name}][{self.value}]"


@dataclass
class FuncParam:
    type_spec: TypeSpec
    name: Token


@dataclass
class UserDefinedFunction:
    params: List[FuncParam]
    return_type: TypeSpec
    body: List[Node]
    name: Optional[Token] = None  # set when the literal is bound by a definition

    @property
    def signature(self) -> TypeSpec:
        return TypeSpec.function([p.type_spec for p in self.params], self.return_type)


@dataclass
class FunctionLit(Node):
    function: UserDefinedFunction
    position: Position

    @property
    def type_spec(self) -> TypeSpec:
        return self.function.signature

    def __str__(self) -> str:
        params = ' '.join(f"[{p.type_spec}] {p.name}" for p in self.function.params)
        body = '; '.join(str(n) for n in self.function.body)
        return f"Function[{params}] ~> [{self.function.return_type}] | {body} |"


@dataclass
class FuncRef(Node):
    """A function named with ``name!``: passed as a value, not called."""
    name: Token
    params: List[TypeSpec]
    return_type: TypeSpec

    @property
    def type_spec(self) -> TypeSpec:
        return TypeSpec.function(self.params, self.return_type)

    @property
    def position(self) -> Position:
        return self.name.position

    def __str__(self) -> str:
        params = ', '.join(f"[{p}]" for p in self.params)
        return f"Function[{self.name}][{params}] ~> [{self.return_type}]"


@dataclass
class Var(Node):
    name: Token
    type_spec: TypeSpec

    @property
    def position(self) -> Position:
        return self.name.position

    def __str__(self) -> str:
        return f"Var[{self.name}]"


@dataclass
class If(Node):
    condition: Node
    then_branch: Node
    else_branch: Node
    position: Position

    @property
    def type_spec(self) -> TypeSpec:
        return self.then_branch.type_spec

    def __str__(self) -> str:
        return f"If[{self.condition}][{self.then_branch}][{self.else_branch}]"


@dataclass
class Block(Node):
    statements: List[Node]
    type_spec: TypeSpec  # type of the last statement, None when empty
    position: Position

    def __str__(self) -> str:
        return '| ' + ';\n'.join(str(s) for s in self.statements) + ' |'
