"""CLI entry point for the Cosmo interpreter.

Usage:
    python -m cosmo [-v|-vv|-vvv|-vvvv] <program_file>
    python -m cosmo [-v...] --emit-ast <program_file>
    python -m cosmo [-v...] --ast <ast_json_file>
    python -m cosmo --grammar <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .cosmo file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --grammar     Parse with the Lark grammar front end instead of the
                recursive-descent parser

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .ast_json import ast_to_obj, ast_from_obj
from .errors import CosmoError, CosmoSyntaxError
from .grammar import parse_with_grammar
from .interpreter import Interpreter, parse_program

EXIT_SYNTAX_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def execute(statements: List, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.interpret(statements)
    except CosmoError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='cosmo', description="Cosmo language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='COSMO_FILE', help='emit AST JSON for the given .cosmo file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('--grammar', action='store_true', help='parse with the Lark grammar front end')
    parser.add_argument('program', nargs='?', help='Cosmo program file (.cosmo) to execute')
    args = parser.parse_args(argv)

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        execute(ast_from_obj(data), args.v)
        return

    if not args.emit_ast and not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    program_file = Path(args.emit_ast or args.program)
    source = read_source(program_file)
    try:
        if args.grammar:
            statements = parse_with_grammar(source)
        else:
            statements = parse_program(source)
    except CosmoSyntaxError as e:
        if args.grammar:
            # the recursive-descent parser has already echoed its diagnostics
            print(e, file=sys.stderr)
        sys.exit(EXIT_SYNTAX_ERROR)

    # Emit AST mode
    if args.emit_ast:
        obj = ast_to_obj(statements)
        if program_file.suffix != '':
            out_path = program_file.with_suffix(program_file.suffix + '.ast.json')
        else:
            out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    execute(statements, args.v)


if __name__ == '__main__':
    main()
