from pathlib import Path

from cosmo.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_if_else(capsys):
    with open(EXAMPLES / 'program_2.cosmo', 'r', encoding='utf-8') as f:
        source = f.read()
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip()
    assert out == 'big'
