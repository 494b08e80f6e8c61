"""Tree-walking evaluator for trulang.

The interpreter walks a tree the parser has already type checked, so
undefined names, arity mismatches and type mismatches cannot occur here.
Division by zero is the only error evaluation raises on its own;
InternalError marks a state the checker should have ruled out.

Function values are "shallow" closures: a body is evaluated against a
branch of the environment active at the call site, extended with the
parameter bindings, not against the environment of the definition site.
A body that refers to an outer name therefore sees the value that name
has where the call happens. A function bound by a definition also sees
its own name, so recursion works wherever the function value is called.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .ast import (
    Node, NumberLit, BoolLit, Call, Define, FunctionLit, FuncRef, Var, If, Block,
    UserDefinedFunction,
)
from .environment import Environment
from .errors import Position, division_by_zero, internal_error
from .lexer import Token, tokenize
from .parser import parse
from .types import NONE, BuiltinRef, FunctionVal, to_string, values_equal


class Interpreter:
    """Core interpreter that evaluates a typed trulang AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.builtins: Dict[str, Callable[[List[Any], Position], Any]] = {}
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def load_builtins(self):
        # Arity and operand types were checked by the parser.

        def std_add(args: List[Any], position: Position) -> Any:
            return args[0] + args[1]

        def std_sub(args: List[Any], position: Position) -> Any:
            return args[0] - args[1]

        def std_mul(args: List[Any], position: Position) -> Any:
            return args[0] * args[1]

        def std_div(args: List[Any], position: Position) -> Any:
            if args[1] == 0.0:
                raise division_by_zero(position, 'Cannot divide by zero')
            return args[0] / args[1]

        def std_print(args: List[Any], position: Position) -> Any:
            print(to_string(args[0]))
            return NONE

        def std_choose(args: List[Any], position: Position) -> Any:
            cond, then_value, else_value = args
            return then_value if cond else else_value

        def std_equals(args: List[Any], position: Position) -> Any:
            return values_equal(args[0], args[1])

        self.builtins['+'] = std_add
        self.builtins['-'] = std_sub
        self.builtins['*'] = std_mul
        self.builtins['/'] = std_div
        self.builtins['.'] = std_print
        self.builtins['?'] = std_choose
        self.builtins['=='] = std_equals

    # Public API
    def run(self, program: Block, env: Optional[Environment] = None) -> Any:
        """Evaluate a program's statements and return the last value."""
        if env is None:
            env = self.global_env
        try:
            return self.execute_block(program.statements, env)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Node], env: Environment) -> Any:
        result: Any = NONE
        for stmt in statements:
            result = self.evaluate(stmt, env)
        return result

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, NumberLit):
            return node.value
        if isinstance(node, BoolLit):
            return node.value
        if isinstance(node, Define):
            value = self.evaluate(node.value, env)
            env.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name} = {to_string(value)}")
            return NONE
        if isinstance(node, FunctionLit):
            return FunctionVal(node.function)
        if isinstance(node, FuncRef):
            value = env.lookup(node.name)
            if isinstance(value, (FunctionVal, BuiltinRef)):
                return value
            return BuiltinRef(node.name.value)
        if isinstance(node, Var):
            if node.name not in env:
                raise internal_error(node.position, f"{node.name} is not bound at run time")
            return env.lookup(node.name)
        if isinstance(node, Call):
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(node.callee, args, env)
        if isinstance(node, Block):
            return self.execute_block(node.statements, env.branch())
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            if not isinstance(cond, bool):
                raise internal_error(node.condition.position,
                                     f"condition evaluated to {to_string(cond)}")
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            branch = node.then_branch if cond else node.else_branch
            return self.evaluate(branch, env.branch())
        raise internal_error(getattr(node, 'position', None), f"cannot evaluate {type(node).__name__}")

    def call_function(self, callee: Token, args: List[Any], env: Environment) -> Any:
        func = env.lookup(callee)
        if self.debug_level >= 3:
            self.debug(f"call {callee} with ({', '.join(to_string(a) for a in args)})")
        if isinstance(func, FunctionVal):
            return self.invoke(func.function, args, env)
        name = func.name if isinstance(func, BuiltinRef) else callee.value
        if func is not None and not isinstance(func, BuiltinRef):
            raise internal_error(callee.position, f"{callee} is not callable")
        if name not in self.builtins:
            raise internal_error(callee.position, f"{callee} is not bound at run time")
        return self.builtins[name](args, callee.position)

    def invoke(self, function: UserDefinedFunction, args: List[Any], env: Environment) -> Any:
        call_env = env.branch()
        if function.name is not None:
            call_env.define(function.name, FunctionVal(function))
        for param, arg in zip(function.params, args):
            call_env.define(param.name, arg)
        return self.execute_block(function.body, call_env)


def parse_program(source: str, file_name: str = '<input>') -> Block:
    """Tokenize, parse and type check trulang source into a typed AST."""
    return parse(tokenize(source, file_name))


def interpret(ast: Block, debug_level: int = 0) -> Any:
    """Evaluate an already type-checked AST with a fresh interpreter."""
    return Interpreter(debug_level=debug_level).run(ast)


def run(source: str, file_name: str = '<input>', debug_level: int = 0) -> Any:
    """Parse, check and evaluate a program, returning its final value.

    Errors are raised as `TruError`; formatting and reporting them is up
    to the caller.
    """
    ast_program = parse_program(source, file_name)
    return interpret(ast_program, debug_level=debug_level)
