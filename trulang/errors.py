from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Source span of a token or node (1-based lines and columns)."""
    line: int
    column: int
    line_end: int
    column_end: int
    file: str

    def to(self, other: 'Position') -> 'Position':
        """Span from the start of this position to the end of `other`."""
        return Position(self.line, self.column, other.line_end, other.column_end, self.file)


@dataclass
class ErrorInfo:
    """A trulang error: its kind, where it happened and what went wrong."""
    kind: str
    position: Optional[Position]
    details: str

    def __str__(self) -> str:
        p = self.position
        if p is None:
            return f"{self.kind} ~> {self.details}"
        return (f"{self.kind} at {p.line}:{p.column} to {p.line_end}:{p.column_end} "
                f"in {p.file} ~> {self.details}")


class TruError(Exception):
    """Exception type used to propagate parse-time and run-time errors."""
    def __init__(self, err: ErrorInfo):
        super().__init__(str(err))
        self.err = err

    @property
    def kind(self) -> str:
        return self.err.kind

    @property
    def position(self) -> Optional[Position]:
        return self.err.position


def syntax_error(position: Position, details: str) -> TruError:
    return TruError(ErrorInfo('SyntaxError', position, details))


def type_error(position: Position, details: str) -> TruError:
    return TruError(ErrorInfo('TypeError', position, details))


def undefined_function(position: Position, details: str) -> TruError:
    return TruError(ErrorInfo('UndefinedFunction', position, details))


def division_by_zero(position: Position, details: str) -> TruError:
    return TruError(ErrorInfo('DivisionByZero', position, details))


def internal_error(position: Optional[Position], details: str) -> TruError:
    """A state the parser should have ruled out was reached at run time."""
    return TruError(ErrorInfo('InternalError', position, details))
