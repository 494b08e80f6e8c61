from dataclasses import dataclass
from typing import Any, Dict, Tuple
from trulang.types import TypeSpec


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    params: Tuple[TypeSpec, ...]
    return_type: TypeSpec

    @property
    def signature(self) -> TypeSpec:
        return TypeSpec.function(self.params, self.return_type)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


_NUM = TypeSpec.number()
_ANY = TypeSpec.any()

# Fixed primitive table; built before any parsing and never mutated.
BUILTINS: Dict[str, BuiltinFunction] = {
    f.name: f for f in (
        BuiltinFunction('+', (_NUM, _NUM), _NUM),
        BuiltinFunction('-', (_NUM, _NUM), _NUM),
        BuiltinFunction('*', (_NUM, _NUM), _NUM),
        BuiltinFunction('/', (_NUM, _NUM), _NUM),
        BuiltinFunction('.', (_ANY,), TypeSpec.none()),
        BuiltinFunction('?', (TypeSpec.boolean(), _ANY, _ANY), _ANY),
        BuiltinFunction('==', (_ANY, _ANY), TypeSpec.boolean()),
    )
}


def find_builtin(name: Any) -> Any:
    """Return the built-in called `name`, or None."""
    return BUILTINS.get(name) if isinstance(name, str) else None
