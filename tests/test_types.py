from trulang.types import (
    TypeSpec, types_equal, to_string, values_equal, format_number,
    NONE, FunctionVal, BuiltinRef,
)
from trulang.ast import FuncParam, UserDefinedFunction
from trulang.lexer import tokenize

NUM = TypeSpec.number()
BOOL = TypeSpec.boolean()
ANY = TypeSpec.any()


def test_same_kinds_are_equal():
    assert types_equal(NUM, NUM)
    assert types_equal(TypeSpec.none(), TypeSpec.none())
    assert not types_equal(NUM, BOOL)
    assert not types_equal(BOOL, TypeSpec.none())


def test_any_matches_everything_in_either_position():
    fn = TypeSpec.function([NUM], BOOL)
    for t in (NUM, BOOL, TypeSpec.none(), fn):
        assert types_equal(ANY, t)
        assert types_equal(t, ANY)


def test_function_types_compare_structurally():
    a = TypeSpec.function([NUM, NUM], NUM)
    assert types_equal(a, TypeSpec.function([NUM, NUM], NUM))
    assert not types_equal(a, TypeSpec.function([NUM], NUM))
    assert not types_equal(a, TypeSpec.function([NUM, BOOL], NUM))
    assert not types_equal(a, TypeSpec.function([NUM, NUM], BOOL))
    assert types_equal(a, TypeSpec.function([ANY, NUM], NUM))
    assert not types_equal(a, NUM)


def test_nested_function_types():
    inner = TypeSpec.function([NUM], NUM)
    outer = TypeSpec.function([inner, NUM], NUM)
    assert outer.matches(TypeSpec.function([TypeSpec.function([NUM], NUM), NUM], NUM))
    assert not outer.matches(TypeSpec.function([TypeSpec.function([BOOL], NUM), NUM], NUM))
    assert str(outer) == '[[[[Number] ~> [Number]]][Number] ~> [Number]]'


def test_display_forms():
    assert format_number(5.0) == '5'
    assert format_number(-3.0) == '-3'
    assert format_number(2.5) == '2.5'
    assert format_number(float('inf')) == 'inf'
    assert to_string(True) == 'true'
    assert to_string(False) == 'false'
    assert to_string(NONE) == '()'
    assert to_string(BuiltinRef('+')) == '+'
    n = tokenize('n')[0]
    func = UserDefinedFunction([FuncParam(NUM, n)], NUM, [])
    assert to_string(FunctionVal(func)) == '[[Number] n ~> [Number]]'


def test_values_equal_requires_matching_tags():
    assert values_equal(1.0, 1.0)
    assert not values_equal(1.0, 2.0)
    assert values_equal(True, True)
    assert not values_equal(True, 1.0)
    assert not values_equal(0.0, False)
    assert values_equal(NONE, NONE)
