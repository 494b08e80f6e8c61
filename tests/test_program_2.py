from pathlib import Path
from trulang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_define_and_call(capsys):
    with open(EXAMPLES / 'program_2.tru', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source, 'program_2.tru')
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['8', '12']
