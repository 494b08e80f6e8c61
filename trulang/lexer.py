"""Tokenizer for trulang source text.

The character-level work is done by a Lark lexer built from a small
terminal grammar. Each Lark token is then converted into a trulang
`Token`, which carries a `Position` with the file name so that every
later error can point back at the source.

Words are maximal runs of characters that are not whitespace or control
characters, not one of the punctuation marks ``[ ] ! : ? | ;`` and not the
``~>`` arrow. Any other control character is a syntax error. That
makes operators such as ``+`` or ``==`` ordinary words. A word that reads
as a decimal number becomes a ``NUMBER`` token, and a handful of reserved
words become ``KEYWORD`` tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import Position, syntax_error
from .types import format_number


KEYWORDS = ('Int', 'Bool', 'None', 'true', 'false')

TRU_LEXER_GRAMMAR = r"""
    start: _token*
    _token: NUMBER | WORD | COLON | PIPE | LBRACKET | RBRACKET
          | ARROW | BANG | QUESTION

    NUMBER.2: /-?\d+(?:\.\d+)?(?=[\[\]!:?|;#\s]|~>|$)/
    WORD: /(?:[^\[\]!:?|;#\s~\x00-\x1f\x7f]|~(?!>))+/
    COLON: ":"
    PIPE: "|"
    LBRACKET: "["
    RBRACKET: "]"
    ARROW: "~>"
    BANG: "!"
    QUESTION: "?"

    SEMICOLON: ";"
    COMMENT: /#[^\n]*/

    %import common.WS
    %ignore WS
    %ignore SEMICOLON
    %ignore COMMENT
"""

TRU_LEXER = Lark(TRU_LEXER_GRAMMAR, parser='lalr', lexer='basic')


@dataclass(frozen=True)
class Token:
    """A lexical unit.

    Two tokens are equal when their kind and payload are equal; the
    position is ignored. This lets a token stand in for the name it
    spells when looking up bindings.
    """
    type: str
    value: Any
    position: Position = field(compare=False, repr=False)

    @property
    def key(self) -> Tuple[str, Any]:
        return (self.type, self.value)

    def __str__(self) -> str:
        if self.type == 'NUMBER':
            return format_number(self.value)
        if self.type == 'EOF':
            return 'EOF'
        return str(self.value)


def tokenize(source: str, file_name: str = '<input>') -> List[Token]:
    """Convert source text into a list of tokens ending with an EOF token."""
    tokens: List[Token] = []
    try:
        for tok in TRU_LEXER.lex(source):
            position = Position(tok.line, tok.column, tok.end_line, tok.end_column, file_name)
            if tok.type == 'NUMBER':
                tokens.append(Token('NUMBER', float(tok.value), position))
            elif tok.type == 'WORD' and tok.value in KEYWORDS:
                tokens.append(Token('KEYWORD', str(tok.value), position))
            else:
                tokens.append(Token(tok.type, str(tok.value), position))
    except UnexpectedCharacters as e:
        position = Position(e.line, e.column, e.line, e.column + 1, file_name)
        raise syntax_error(position, f"unexpected character {e.char!r}")
    lines = source.split('\n')
    end_line = len(lines)
    end_column = len(lines[-1]) + 1
    tokens.append(Token('EOF', None, Position(end_line, end_column, end_line, end_column, file_name)))
    return tokens
