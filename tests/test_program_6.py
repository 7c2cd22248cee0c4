from pathlib import Path

from cosmo.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_recursive_fib(capsys):
    with open(EXAMPLES / 'program_6.cosmo', 'r', encoding='utf-8') as f:
        source = f.read()
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip()
    assert out.splitlines() == ['0', '1', '1', '2', '3', '5', '8', '13', '21', '34']
