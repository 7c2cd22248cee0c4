import sys

import pytest

from cosmo.environment import Environment
from cosmo.errors import CosmoError
from cosmo.interpreter import Interpreter, parse_program, run_program
from cosmo.types import format_number


def run(source, capsys):
    run_program(source)
    return capsys.readouterr().out.splitlines()


def run_error(source, capsys):
    with pytest.raises(CosmoError) as excinfo:
        run_program(source)
    return excinfo.value, capsys.readouterr().out.splitlines()


def test_precedence_and_grouping(capsys):
    assert run('output 1 + 2 * 3; output (1 + 2) * 3;', capsys) == ['7', '9']


def test_number_display(capsys):
    assert run('output 10 / 4; output 6 / 3; output -0; output 0.1 + 0.2;', capsys) == [
        '2.5', '2', '0', '0.30000000000000004',
    ]


def test_display_of_nil_booleans_and_functions(capsys):
    assert run('func f() {} output nil; output true; output !true; output f; output sqrt;', capsys) == [
        'nil', 'true', 'false', '<fn f>', '<native fn sqrt>',
    ]


def test_string_concatenation_uses_display_form(capsys):
    assert run('output "n=" + 3; output 1.5 + "!"; output "a" + nil; output true + "";', capsys) == [
        'n=3', '1.5!', 'anil', 'true',
    ]


def test_truthiness(capsys):
    source = '''
    if (0) output "zero"; else output "no";
    if ("") output "empty"; else output "no";
    if (nil) output "nil"; else output "falsy nil";
    if (false) output "false"; else output "falsy false";
    '''
    assert run(source, capsys) == ['zero', 'empty', 'falsy nil', 'falsy false']


def test_equality_has_no_coercion(capsys):
    source = '''
    output nil == nil;
    output nil == false;
    output 1 == 1;
    output "1" == 1;
    output true == 1;
    output "a" != "b";
    output 0 == -0;
    '''
    assert run(source, capsys) == ['true', 'false', 'true', 'false', 'false', 'true', 'true']


def test_functions_compare_by_identity(capsys):
    assert run('func f() {} create g = f; output f == g; output f == sqrt;', capsys) == ['true', 'false']


def test_comparisons(capsys):
    assert run('output 1 < 2; output 2 <= 2; output 3 > 4; output 4 >= 5;', capsys) == [
        'true', 'true', 'false', 'false',
    ]


def test_logical_operators_short_circuit(capsys):
    assert run('output false and (1/0); output true or (1/0);', capsys) == ['false', 'true']


def test_logical_operators_return_operands(capsys):
    assert run('output nil or "x"; output "a" and "b"; output nil and "b"; output 1 or 2;', capsys) == [
        'x', 'b', 'nil', '1',
    ]


def test_assignment_is_an_expression(capsys):
    assert run('create a; create b; a = b = 4; output a; output b;', capsys) == ['4', '4']


def test_uninitialized_variable_is_nil(capsys):
    assert run('create a; output a;', capsys) == ['nil']


def test_shadowing_in_nested_block(capsys):
    source = '''
    create a = 1;
    {
        create a = 2;
        { create a = 3; output a; }
        output a;
    }
    output a;
    '''
    assert run(source, capsys) == ['3', '2', '1']


def test_assignment_in_block_updates_outer_binding(capsys):
    assert run('create a = 1; { a = 2; } output a;', capsys) == ['2']


def test_while_loop(capsys):
    assert run('create i = 0; while (i < 3) { output i; i = i + 1; }', capsys) == ['0', '1', '2']


def test_for_loop_scope_ends_with_loop(capsys):
    error, out = run_error('for (create i = 0; i < 2; i = i + 1) output i; output i;', capsys)
    assert out == ['0', '1']
    assert error.name == 'NameError'


def test_function_without_return_yields_nil(capsys):
    assert run('func f() { output "side"; } output f();', capsys) == ['side', 'nil']


def test_bare_return_yields_nil(capsys):
    assert run('func f() { return; output "never"; } output f();', capsys) == ['nil']


def test_recursion_by_declared_name(capsys):
    source = '''
    func fact(n) {
        if (n <= 1) return 1;
        return n * fact(n - 1);
    }
    output fact(10);
    '''
    assert run(source, capsys) == ['3628800']


def test_mutual_recursion_through_globals(capsys):
    source = '''
    func isEven(n) { if (n == 0) return true; return isOdd(n - 1); }
    func isOdd(n) { if (n == 0) return false; return isEven(n - 1); }
    output isEven(10);
    output isOdd(7);
    '''
    assert run(source, capsys) == ['true', 'true']


def test_closures_capture_by_reference(capsys):
    source = '''
    func makeCounter() {
        create count = 0;
        func next() { count = count + 1; return count; }
        return next;
    }
    create a = makeCounter();
    create b = makeCounter();
    output a();
    output a();
    output b();
    output a();
    '''
    assert run(source, capsys) == ['1', '2', '1', '3']


def test_closure_sees_later_mutation_of_captured_variable(capsys):
    source = '''
    create x = "before";
    func show() { output x; }
    x = "after";
    show();
    '''
    assert run(source, capsys) == ['after']


def test_function_body_does_not_see_callers_locals(capsys):
    source = '''
    func peek() { return secret; }
    {
        create secret = 1;
        peek();
    }
    '''
    error, _ = run_error(source, capsys)
    assert error.name == 'NameError'


def test_return_unwinds_nested_blocks_and_loops(capsys):
    source = '''
    func find() {
        for (create i = 0; i < 10; i = i + 1) {
            while (true) {
                { if (i == 3) return i; }
                i = i + 1;
            }
        }
        return -1;
    }
    output find();
    '''
    assert run(source, capsys) == ['3']


def test_environment_restored_after_return(capsys):
    interpreter = Interpreter()
    statements = parse_program('func f() { { return 1; } } create r = f();')
    interpreter.interpret(statements)
    assert interpreter.environment is interpreter.globals
    assert interpreter.globals.values['r'] == 1.0


def test_environment_restored_after_runtime_error():
    interpreter = Interpreter()
    statements = parse_program('{ { create a = 1; a = -"x"; } }')
    with pytest.raises(CosmoError):
        interpreter.interpret(statements)
    assert interpreter.environment is interpreter.globals


def test_arity_mismatch(capsys):
    error, _ = run_error('func f(a, b) {} f(1);', capsys)
    assert error.name == 'ArityError'
    assert error.message == 'Expected 2 arguments but got 1.'
    error, _ = run_error('func f(a) {} f(1, 2);', capsys)
    assert error.name == 'ArityError'


def test_arity_mismatch_binds_nothing(capsys):
    source = '''
    create a = "outer";
    func f(a) { output "entered"; }
    f(1, 2);
    '''
    error, out = run_error(source, capsys)
    assert error.name == 'ArityError'
    assert out == []


def test_calling_a_non_callable(capsys):
    error, _ = run_error('create x = "text"; x();', capsys)
    assert error.name == 'TypeError'
    assert error.message == 'Can only call functions, not string.'


def test_arguments_evaluated_left_to_right_before_call(capsys):
    source = '''
    func show(v) { output v; return v; }
    func pair(a, b) { output "called"; }
    pair(show(1), show(2));
    '''
    assert run(source, capsys) == ['1', '2', 'called']


@pytest.mark.parametrize('source', [
    'output -"a";',
    'output 1 - "a";',
    'output "a" * 2;',
    'output nil / 2;',
    'output 1 < "2";',
    'output true >= false;',
    'output true + 1;',
    'output nil + nil;',
])
def test_operand_type_errors(source, capsys):
    error, _ = run_error(source, capsys)
    assert error.name == 'TypeError'


def test_division_by_zero_stops_the_program(capsys):
    error, out = run_error('output "first"; create a = 1 / 0; output "unreached";', capsys)
    assert error.name == 'ZeroDivisionError'
    assert out == ['first']


def test_division_by_negative_zero_is_also_an_error(capsys):
    error, _ = run_error('output 1 / -0;', capsys)
    assert error.name == 'ZeroDivisionError'


def test_undefined_variable_reports_line(capsys):
    error, _ = run_error('create a = 1;\n\noutput b;', capsys)
    assert error.name == 'NameError'
    assert error.token.line == 3
    assert str(error) == "NameError: Undefined variable 'b'.\n[line 3]"


def test_assigning_undeclared_variable_fails(capsys):
    error, _ = run_error('b = 1;', capsys)
    assert error.name == 'NameError'


def test_top_level_return_is_an_error(capsys):
    error, out = run_error('output 1; return 2; output 3;', capsys)
    assert error.name == 'ReturnError'
    assert out == ['1']


def test_runaway_recursion_becomes_a_cosmo_error(capsys):
    error, _ = run_error('func f() { return f(); } f();', capsys)
    assert error.name == 'RecursionError'


def test_interpreters_are_independent():
    first = Interpreter()
    first.interpret(parse_program('create shared = 1;'))
    second = Interpreter()
    assert 'shared' not in second.globals.values
    assert isinstance(second.globals, Environment)


def test_debug_log_written_when_verbose(tmp_path, capsys):
    log = tmp_path / 'debug.txt'
    interpreter = Interpreter(debug_level=4, debug_file=str(log))
    interpreter.interpret(parse_program('func f(x) { return x; } create a = f(2); if (a) output a;'))
    assert capsys.readouterr().out == '2\n'
    text = log.read_text(encoding='utf-8')
    assert 'define function f/1' in text
    assert 'create a = 2' in text
    assert 'if condition 2 -> True' in text
    assert 'call <fn f> with (2)' in text
    assert interpreter.debug_fp is None


def test_no_debug_log_by_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Interpreter().interpret(parse_program('create a = 1;'))
    assert not (tmp_path / 'debug.txt').exists()


def test_deep_recursion_by_declared_name(capsys):
    source = '''
    func count(n) {
        if (n == 0) return 0;
        return 1 + count(n - 1);
    }
    output count(1000);
    '''
    assert run(source, capsys) == ['1000']


def test_recursion_limit_restored_after_run(capsys):
    before = sys.getrecursionlimit()
    run('func f(n) { if (n > 0) f(n - 1); } f(300);', capsys)
    assert sys.getrecursionlimit() == before
    run_error('func f() { return f(); } f();', capsys)
    assert sys.getrecursionlimit() == before


def test_deeply_nested_groupings_run(capsys):
    depth = 200
    assert run('output ' + '(' * depth + '1 + 1' + ')' * depth + ';', capsys) == ['2']


@pytest.mark.parametrize('value, text', [
    (1e-7, '1e-7'),
    (0.000001, '0.000001'),
    (1.5e-10, '1.5e-10'),
    (1e21, '1e+21'),
    (-2.5e22, '-2.5e+22'),
    (1e20, '100000000000000000000'),
    (2.0 ** 60, '1152921504606847000'),
    (123.456, '123.456'),
    (-0.0, '0'),
])
def test_number_display_at_the_extremes(value, text):
    assert format_number(value) == text


def test_unknown_nodes_are_rejected():
    interpreter = Interpreter()
    with pytest.raises(TypeError):
        interpreter.execute(object())
    with pytest.raises(TypeError):
        interpreter.evaluate(object())
