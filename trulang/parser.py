"""Parser and static type checker for trulang.

Parsing and type checking happen in a single recursive-descent pass over
the token stream. The parser carries a `Scope` recording the type of
every visible name, so a call is checked for arity and argument types at
the moment it is recognised, and a function literal's body is checked
against its declared return type before the literal is accepted. The
first problem found aborts the parse with a `TruError`; there is no
recovery and no multi-error reporting.

Function bodies run against the environment of the call site, so the
checker keeps two rules that make every call safe wherever it happens:

* a name that is already visible may only be rebound (by a definition or
  a parameter) with the same type;
* a function used as a value, either a literal that is not directly
  bound by a definition or a ``name!`` reference, must not use any name
  from outside its own body. Only built-ins and its own name are allowed.

Grammar, by leading token::

    NUMBER                      number literal
    true | false                boolean literal
    WORD ':' expr               definition
    WORD '!'                    function reference (function names only)
    WORD arg*                   call, one argument per parameter
    WORD                        variable reference
    '[' ('[' type ']' WORD)* '~>' '[' type ']' '|' stmt* '|' ']'
                                function literal
    '|' stmt* '|'               block
    '?' expr expr expr          conditional

    type := 'Int' | 'Bool' | 'None' | '[' ('[' type ']')* '~>' '[' type ']' ']'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .ast import (
    Node, NumberLit, BoolLit, Call, Define, FuncParam, UserDefinedFunction,
    FunctionLit, FuncRef, Var, If, Block,
)
from .builtin_function import find_builtin
from .errors import syntax_error, type_error, undefined_function
from .lexer import Token
from .scope import Binding, Scope
from .types import TypeSpec, TYPE_KEYWORDS


@dataclass
class FunctionFrame:
    """Bookkeeping for a function literal whose body is being parsed."""
    free_names: Dict[Tuple[str, Any], Token] = field(default_factory=dict)
    self_refs: List[Token] = field(default_factory=list)


def describe_names(names: Dict[Tuple[str, Any], Token]) -> str:
    return ', '.join(str(name) for name in names.values())


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != 'EOF':
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens
        self.pos = 0
        self.frames: List[FunctionFrame] = []

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self) -> Token:
        """The token after the current one (EOF at the end of input)."""
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current
        if token.type != 'EOF':
            self.pos += 1
        return token

    def match(self, expected: str) -> bool:
        return self.current.type == expected

    def consume(self, expected: str, message: str) -> Token:
        if not self.match(expected):
            raise syntax_error(self.current.position, message)
        return self.advance()

    def parse_program(self) -> Block:
        start = self.current
        scope = Scope()
        statements, type_spec, end = self.parse_statements(scope, 'EOF')
        return Block(statements, type_spec, start.position.to(end.position))

    def parse_statements(self, scope: Scope, end_type: str) -> Tuple[List[Node], TypeSpec, Token]:
        """Parse statements up to and including the `end_type` token.

        The sequence takes the type of its last statement, or None when it
        is empty.
        """
        statements: List[Node] = []
        type_spec = TypeSpec.none()
        while not self.match(end_type):
            stmt = self.parse_expression(scope)
            type_spec = stmt.type_spec
            statements.append(stmt)
        end = self.advance()
        return statements, type_spec, end

    def parse_expression(self, scope: Scope) -> Node:
        token = self.current
        if token.type == 'NUMBER':
            self.advance()
            return NumberLit(token)
        if token.type == 'KEYWORD' and token.value in ('true', 'false'):
            self.advance()
            return BoolLit(token)
        if token.type == 'WORD':
            if self.peek().type == 'COLON':
                return self.parse_definition(scope)
            return self.parse_name(scope)
        if token.type == 'LBRACKET':
            return self.parse_function_literal(scope)
        if token.type == 'PIPE':
            return self.parse_block(scope)
        if token.type == 'QUESTION':
            return self.parse_conditional(scope)
        raise syntax_error(token.position, f"Unexpected token: {token}")

    def check_not_builtin(self, name: Token):
        if find_builtin(name.value) is not None:
            raise syntax_error(name.position, f"Cannot redefine built-in {name}")

    def bind(self, scope: Scope, name: Token, type_spec: TypeSpec,
             free_names: Optional[Dict[Tuple[str, Any], Token]] = None):
        visible = scope.find(name)
        if visible is not None and visible != type_spec:
            raise type_error(name.position,
                             f"Cannot rebind {name} of type {visible} to type {type_spec}")
        scope.define(name, type_spec, len(self.frames), free_names)

    def note_use(self, name: Token, binding: Binding):
        """Record `name` as free in every open literal it was bound outside of."""
        if binding.builtin:
            return
        for frame in self.frames[binding.depth:]:
            frame.free_names.setdefault(name.key, name)

    def check_function_value(self, name: Token, binding: Binding):
        if binding.free_names is None:
            return
        for frame in self.frames:
            if frame.free_names is binding.free_names:
                # Still being parsed; decided when its body is complete.
                frame.self_refs.append(name)
                return
        if binding.free_names:
            raise type_error(name.position,
                             f"{name} uses {describe_names(binding.free_names)} from outside "
                             f"its body and cannot be used as a value")

    def parse_definition(self, scope: Scope) -> Define:
        name = self.advance()
        self.check_not_builtin(name)
        self.advance()  # ':'
        # Only a function literal gets to see the name it is bound to.
        if self.match('LBRACKET'):
            function, frame = self.parse_function(scope, self_name=name)
            self.bind(scope, name, function.type_spec, frame.free_names)
            return Define(name, function)
        value = self.parse_expression(scope)
        self.bind(scope, name, value.type_spec)
        return Define(name, value)

    def parse_name(self, scope: Scope) -> Node:
        token = self.current
        binding = scope.lookup(token)
        if binding is None:
            raise undefined_function(token.position, f"Undefined Function : {token}")
        self.advance()
        self.note_use(token, binding)
        type_spec = binding.type_spec
        if not type_spec.is_function:
            return Var(token, type_spec)
        if self.match('BANG'):
            self.advance()
            self.check_function_value(token, binding)
            return FuncRef(token, list(type_spec.params), type_spec.ret)
        args: List[Node] = []
        for param in type_spec.params:
            arg = self.parse_expression(scope)
            if not param.matches(arg.type_spec):
                raise type_error(arg.position, f"Expected type {param}, but got {arg.type_spec}")
            args.append(arg)
        return Call(token, args, type_spec.ret)

    def parse_type(self) -> TypeSpec:
        token = self.current
        if token.type == 'KEYWORD' and token.value in TYPE_KEYWORDS:
            self.advance()
            return TYPE_KEYWORDS[token.value]
        if token.type == 'LBRACKET':
            self.advance()
            params: List[TypeSpec] = []
            while self.match('LBRACKET'):
                self.advance()
                params.append(self.parse_type())
                self.consume('RBRACKET', "Expected ']' after type")
            self.consume('ARROW', "Expected '~>'")
            self.consume('LBRACKET', "Expected '['")
            ret = self.parse_type()
            self.consume('RBRACKET', "Expected ']' after type")
            self.consume('RBRACKET', "Expected ']'")
            return TypeSpec.function(params, ret)
        raise syntax_error(token.position, f"Expected type, found {token}")

    def parse_function_literal(self, scope: Scope) -> FunctionLit:
        """Parse a function literal used as a value rather than bound to a name."""
        function, frame = self.parse_function(scope)
        if frame.free_names:
            raise type_error(function.position,
                             f"Function value uses {describe_names(frame.free_names)} "
                             f"from outside its body")
        return function

    def parse_function(self, scope: Scope,
                       self_name: Optional[Token] = None) -> Tuple[FunctionLit, FunctionFrame]:
        start = self.consume('LBRACKET', "Expected '['")
        params: List[FuncParam] = []
        while not self.match('ARROW'):
            if self.match('PIPE'):
                raise syntax_error(self.current.position, "No return Type mentioned")
            self.consume('LBRACKET', "Expected '['")
            type_spec = self.parse_type()
            self.consume('RBRACKET', "Expected ']' after type")
            if not self.match('WORD'):
                raise syntax_error(self.current.position, "Expected parameter name")
            name = self.advance()
            self.check_not_builtin(name)
            params.append(FuncParam(type_spec, name))
        self.advance()  # '~>'
        self.consume('LBRACKET', "Expected '['")
        ret = self.parse_type()
        self.consume('RBRACKET', "Expected ']' after type")
        body_start = self.consume('PIPE', "Expected '|'")

        frame = FunctionFrame()
        self.frames.append(frame)
        body_scope = scope.branch()
        if self_name is not None:
            self.bind(body_scope, self_name, TypeSpec.function([p.type_spec for p in params], ret),
                      frame.free_names)
        for param in params:
            self.bind(body_scope, param.name, param.type_spec)
        body, body_type, _ = self.parse_statements(body_scope, 'PIPE')
        self.frames.pop()
        if not ret.matches(body_type):
            culprit = body[-1].position if body else body_start.position
            raise type_error(culprit, f"Return type mismatch, expected {ret}, found {body_type}")
        if frame.free_names and frame.self_refs:
            raise type_error(frame.self_refs[0].position,
                             f"{self_name} uses {describe_names(frame.free_names)} from outside "
                             f"its body and cannot be used as a value")
        end = self.consume('RBRACKET', "Expected ']'")
        function = UserDefinedFunction(params, ret, body, self_name)
        return FunctionLit(function, start.position.to(end.position)), frame

    def parse_block(self, scope: Scope) -> Block:
        start = self.advance()  # '|'
        statements, type_spec, end = self.parse_statements(scope.branch(), 'PIPE')
        return Block(statements, type_spec, start.position.to(end.position))

    def parse_conditional(self, scope: Scope) -> If:
        start = self.advance()  # '?'
        condition = self.parse_expression(scope)
        if not condition.type_spec.matches(TypeSpec.boolean()):
            raise type_error(condition.position,
                             f"Expected condition of type Bool, but got {condition.type_spec}")
        # Definitions inside a branch stay local to it.
        then_branch = self.parse_expression(scope.branch())
        else_branch = self.parse_expression(scope.branch())
        if not then_branch.type_spec.matches(else_branch.type_spec):
            raise type_error(else_branch.position,
                             f"Branch type mismatch, expected {then_branch.type_spec}, "
                             f"found {else_branch.type_spec}")
        return If(condition, then_branch, else_branch, start.position.to(else_branch.position))


def parse(tokens: List[Token]) -> Block:
    """Parse and type check a token stream into a typed AST."""
    return Parser(tokens).parse_program()
