"""CLI entry point for the trulang interpreter.

Usage:
    python -m trulang [-v|-vv|-vvv] <program_file>
    python -m trulang --tokens <program_file>
    python -m trulang --ast <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token stream instead of running the program
  --ast         Parse and type check the program, print its typed AST

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported on stderr as
`<Kind> at <line>:<col> to <line>:<col> in <file> ~> <details>` and the
process exits with status 1.
"""

import argparse
import sys
from pathlib import Path

from .errors import TruError
from .interpreter import Interpreter, parse_program
from .lexer import tokenize


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="trulang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_true', help='print the token stream and exit')
    group.add_argument('--ast', action='store_true', help='print the typed AST and exit')
    parser.add_argument('program', help='trulang program file to execute')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()
    file_name = str(program_file)

    try:
        if args.tokens:
            print(' '.join(f"{t.type}({t})" for t in tokenize(source, file_name)))
            return
        ast_program = parse_program(source, file_name)
        if args.ast:
            print(ast_program)
            return
        Interpreter(debug_level=args.v).run(ast_program)
    except TruError as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
