from typing import Any, Dict, Optional, Tuple
from trulang.lexer import Token


class Environment:
    """Run-time mapping from names to values.

    Like the compile-time `Scope`, a block or call works on a branch
    holding a copy of the enclosing bindings; definitions made in the
    branch never reach the environment it was taken from.
    """
    def __init__(self, values: Optional[Dict[Tuple[str, Any], Any]] = None):
        self.values: Dict[Tuple[str, Any], Any] = dict(values) if values else {}

    def branch(self) -> 'Environment':
        return Environment(self.values)

    def define(self, name: Token, value: Any):
        self.values[name.key] = value

    def lookup(self, name: Token) -> Any:
        """Return the bound value, or None when `name` is unbound."""
        return self.values.get(name.key)

    def __contains__(self, name: Token) -> bool:
        return name.key in self.values
