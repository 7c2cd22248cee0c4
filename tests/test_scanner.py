from cosmo.errors import Diagnostics
from cosmo.scanner import scan
from cosmo.tokens import TokenType


def kinds(tokens):
    return [t.kind for t in tokens]


def test_empty_source_yields_only_eof():
    tokens = scan('', Diagnostics())
    assert kinds(tokens) == [TokenType.EOF]
    assert tokens[0].lexeme == ''
    assert tokens[0].line == 1


def test_one_and_two_character_operators():
    tokens = scan('! != = == < <= > >= ( ) { } , . - + ; / *', Diagnostics())
    assert kinds(tokens) == [
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
        TokenType.SLASH, TokenType.STAR, TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    tokens = scan('create func output outputs _tmp1 and or', Diagnostics())
    assert kinds(tokens) == [
        TokenType.CREATE, TokenType.FUNC, TokenType.OUTPUT, TokenType.IDENTIFIER,
        TokenType.IDENTIFIER, TokenType.AND, TokenType.OR, TokenType.EOF,
    ]
    assert tokens[3].lexeme == 'outputs'


def test_value_keywords_carry_literals():
    tokens = scan('true false nil', Diagnostics())
    assert [t.literal for t in tokens[:3]] == [True, False, None]


def test_numbers_are_floats_without_sign_or_exponent():
    tokens = scan('12 3.25 -4 7.', Diagnostics())
    assert kinds(tokens) == [
        TokenType.NUMBER, TokenType.NUMBER, TokenType.MINUS, TokenType.NUMBER,
        TokenType.NUMBER, TokenType.DOT, TokenType.EOF,
    ]
    assert tokens[0].literal == 12.0
    assert isinstance(tokens[0].literal, float)
    assert tokens[1].literal == 3.25
    assert tokens[3].literal == 4.0


def test_string_literal_has_no_escapes():
    tokens = scan('"a\\nb"', Diagnostics())
    assert tokens[0].kind == TokenType.STRING
    assert tokens[0].literal == 'a\\nb'
    assert tokens[0].lexeme == '"a\\nb"'


def test_comments_are_skipped_and_lines_counted():
    source = 'create a = 1; // trailing comment\n// full line\noutput a;'
    tokens = scan(source, Diagnostics())
    assert kinds(tokens) == [
        TokenType.CREATE, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.NUMBER,
        TokenType.SEMICOLON, TokenType.OUTPUT, TokenType.IDENTIFIER, TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[5].line == 3
    assert tokens[-1].line == 3


def test_multiline_string_advances_line_counter():
    tokens = scan('"one\ntwo"\nx', Diagnostics())
    assert tokens[0].line == 1
    assert tokens[1].line == 3


def test_unterminated_string_is_reported_and_scanning_finishes():
    diagnostics = Diagnostics()
    tokens = scan('output "never closed', diagnostics)
    assert kinds(tokens) == [TokenType.OUTPUT, TokenType.EOF]
    assert diagnostics.had_error
    assert diagnostics.items[0].message == 'Unterminated string.'


def test_unexpected_character_is_skipped():
    diagnostics = Diagnostics()
    tokens = scan('a @ b # c', diagnostics)
    assert [t.lexeme for t in tokens] == ['a', 'b', 'c', '']
    assert len(diagnostics.items) == 2
    assert str(diagnostics.items[0]) == "[line 1] Error: Unexpected character '@'."


def test_scanning_is_total_for_awkward_input():
    for source in ['"', '/', '1.', '!!==', '\n\n', 'é', '\0']:
        tokens = scan(source, Diagnostics())
        assert tokens[-1].kind == TokenType.EOF
        assert kinds(tokens).count(TokenType.EOF) == 1


def test_default_diagnostics_echo_to_stderr(capsys):
    scan('$')
    assert "Unexpected character '$'" in capsys.readouterr().err
