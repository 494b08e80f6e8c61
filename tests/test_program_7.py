from pathlib import Path

import pytest

from trulang.errors import TruError
from trulang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_division_by_zero_stops_evaluation(capsys):
    with open(EXAMPLES / 'program_7.tru', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source, 'program_7.tru')
    interp = Interpreter()
    with pytest.raises(TruError) as excinfo:
        interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['2', '0.25']
    assert excinfo.value.kind == 'DivisionByZero'
    assert excinfo.value.position.line == 3
    assert str(excinfo.value).startswith('DivisionByZero at 3:3 to 3:4 in program_7.tru ~> ')
