import pytest

from trulang.errors import TruError
from trulang.lexer import tokenize, Token


def kinds(source):
    return [(t.type, t.value) for t in tokenize(source)]


def test_punctuation_and_words():
    assert kinds('x : [[Int] n ~> [Int] | + n n |]') == [
        ('WORD', 'x'), ('COLON', ':'),
        ('LBRACKET', '['), ('LBRACKET', '['), ('KEYWORD', 'Int'), ('RBRACKET', ']'),
        ('WORD', 'n'), ('ARROW', '~>'),
        ('LBRACKET', '['), ('KEYWORD', 'Int'), ('RBRACKET', ']'),
        ('PIPE', '|'), ('WORD', '+'), ('WORD', 'n'), ('WORD', 'n'), ('PIPE', '|'),
        ('RBRACKET', ']'), ('EOF', None),
    ]


def test_numbers_are_floats():
    assert kinds('1 2.5 -3') == [('NUMBER', 1.0), ('NUMBER', 2.5), ('NUMBER', -3.0), ('EOF', None)]


def test_operators_are_words():
    assert kinds('- == . f! ?') == [
        ('WORD', '-'), ('WORD', '=='), ('WORD', '.'), ('WORD', 'f'), ('BANG', '!'),
        ('QUESTION', '?'), ('EOF', None),
    ]


def test_word_containing_digits_is_not_a_number():
    assert kinds('x1 12abc') == [('WORD', 'x1'), ('WORD', '12abc'), ('EOF', None)]


def test_arrow_splits_words():
    assert kinds('a~>b') == [('WORD', 'a'), ('ARROW', '~>'), ('WORD', 'b'), ('EOF', None)]


def test_separators_and_comments_are_skipped():
    assert kinds('| 1; 2 | # trailing\n3') == [
        ('PIPE', '|'), ('NUMBER', 1.0), ('NUMBER', 2.0), ('PIPE', '|'), ('NUMBER', 3.0), ('EOF', None),
    ]


def test_keywords():
    assert kinds('Int Bool None true false Integer') == [
        ('KEYWORD', 'Int'), ('KEYWORD', 'Bool'), ('KEYWORD', 'None'),
        ('KEYWORD', 'true'), ('KEYWORD', 'false'), ('WORD', 'Integer'), ('EOF', None),
    ]


def test_positions_carry_line_column_and_file():
    tokens = tokenize('+ 2 3\n  foo', 'main.tru')
    foo = tokens[3]
    assert foo.value == 'foo'
    assert (foo.position.line, foo.position.column) == (2, 3)
    assert foo.position.column_end == 6
    assert foo.position.file == 'main.tru'
    assert tokens[-1].type == 'EOF'
    assert tokens[-1].position.line == 2


def test_token_equality_ignores_position():
    a, b = tokenize('foo\n\n   foo')[:2]
    assert a == b
    assert hash(a) == hash(b)
    assert a.position != b.position
    assert a.key == ('WORD', 'foo')
    keyword = Token('KEYWORD', 'foo', a.position)
    assert keyword != a


def test_empty_source_is_just_eof():
    tokens = tokenize('')
    assert [t.type for t in tokens] == ['EOF']


def test_control_character_is_a_syntax_error():
    with pytest.raises(TruError) as excinfo:
        tokenize('a \x07 b', 'bad.tru')
    assert excinfo.value.kind == 'SyntaxError'
    position = excinfo.value.position
    assert (position.line, position.column, position.file) == (1, 3, 'bad.tru')


def test_control_character_ends_a_word():
    with pytest.raises(TruError) as excinfo:
        tokenize('. 1\nab\x00c')
    assert excinfo.value.kind == 'SyntaxError'
    assert (excinfo.value.position.line, excinfo.value.position.column) == (2, 3)


def test_tabs_and_newlines_are_still_whitespace():
    assert kinds('a\tb\r\nc') == [('WORD', 'a'), ('WORD', 'b'), ('WORD', 'c'), ('EOF', None)]
