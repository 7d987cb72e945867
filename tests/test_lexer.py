import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_constants import TokenKind
from monkey.monkey_lexer import CharacterStream, Lexer, Token, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "=+(){},;"
    expected = [
        TokenKind.ASSIGN,
        TokenKind.PLUS,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.COMMA,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]
    assert kinds(code) == expected


def test_program_tokens() -> None:
    source = """let five = 5;
    let ten = 10;
    let add = fn(x, y) {
        x + y;
    };

    let result = add(five, ten);
    !-/*5;
    5 < 10 > 5;

    if (5 < 10) {
        return true;
    } else {
        return false;
    }

    10 == 10;
    10 != 9;"""

    expected = [
        (TokenKind.LET, "let"),
        (TokenKind.IDENT, "five"),
        (TokenKind.ASSIGN, "="),
        (TokenKind.INT, "5"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"),
        (TokenKind.IDENT, "ten"),
        (TokenKind.ASSIGN, "="),
        (TokenKind.INT, "10"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"),
        (TokenKind.IDENT, "add"),
        (TokenKind.ASSIGN, "="),
        (TokenKind.FUNCTION, "fn"),
        (TokenKind.LPAREN, "("),
        (TokenKind.IDENT, "x"),
        (TokenKind.COMMA, ","),
        (TokenKind.IDENT, "y"),
        (TokenKind.RPAREN, ")"),
        (TokenKind.LBRACE, "{"),
        (TokenKind.IDENT, "x"),
        (TokenKind.PLUS, "+"),
        (TokenKind.IDENT, "y"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.RBRACE, "}"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"),
        (TokenKind.IDENT, "result"),
        (TokenKind.ASSIGN, "="),
        (TokenKind.IDENT, "add"),
        (TokenKind.LPAREN, "("),
        (TokenKind.IDENT, "five"),
        (TokenKind.COMMA, ","),
        (TokenKind.IDENT, "ten"),
        (TokenKind.RPAREN, ")"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.BANG, "!"),
        (TokenKind.MINUS, "-"),
        (TokenKind.SLASH, "/"),
        (TokenKind.ASTERISK, "*"),
        (TokenKind.INT, "5"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.INT, "5"),
        (TokenKind.LT, "<"),
        (TokenKind.INT, "10"),
        (TokenKind.GT, ">"),
        (TokenKind.INT, "5"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.IF, "if"),
        (TokenKind.LPAREN, "("),
        (TokenKind.INT, "5"),
        (TokenKind.LT, "<"),
        (TokenKind.INT, "10"),
        (TokenKind.RPAREN, ")"),
        (TokenKind.LBRACE, "{"),
        (TokenKind.RETURN, "return"),
        (TokenKind.TRUE, "true"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.RBRACE, "}"),
        (TokenKind.ELSE, "else"),
        (TokenKind.LBRACE, "{"),
        (TokenKind.RETURN, "return"),
        (TokenKind.FALSE, "false"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.RBRACE, "}"),
        (TokenKind.INT, "10"),
        (TokenKind.EQ, "=="),
        (TokenKind.INT, "10"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.INT, "10"),
        (TokenKind.NOT_EQ, "!="),
        (TokenKind.INT, "9"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.EOF, ""),
    ]

    assert [(tok.kind, tok.literal) for tok in tokenize(source)] == expected


def test_double_equals_is_one_token() -> None:
    assert kinds("==") == [TokenKind.EQ, TokenKind.EOF]
    assert kinds("= =") == [TokenKind.ASSIGN, TokenKind.ASSIGN, TokenKind.EOF]


def test_not_equals_is_one_token() -> None:
    assert kinds("!=") == [TokenKind.NOT_EQ, TokenKind.EOF]
    assert kinds("! =") == [TokenKind.BANG, TokenKind.ASSIGN, TokenKind.EOF]


def test_triple_equals_splits_longest_first() -> None:
    toks = tokenize("===")
    assert [(t.kind, t.literal) for t in toks] == [
        (TokenKind.EQ, "=="),
        (TokenKind.ASSIGN, "="),
        (TokenKind.EOF, ""),
    ]


@pytest.mark.parametrize(
    "word,kind",
    [
        ("fn", TokenKind.FUNCTION),
        ("let", TokenKind.LET),
        ("return", TokenKind.RETURN),
        ("true", TokenKind.TRUE),
        ("false", TokenKind.FALSE),
        ("if", TokenKind.IF),
        ("else", TokenKind.ELSE),
    ],
)
def test_keywords(word: str, kind: TokenKind) -> None:
    tok = Lexer(word).next_token()
    assert tok.kind is kind
    assert tok.literal == word


@pytest.mark.parametrize("word", ["lets", "fnord", "iffy", "Let", "_let", "elsewhere"])
def test_keyword_is_exact_match_only(word: str) -> None:
    tok = Lexer(word).next_token()
    assert tok.kind is TokenKind.IDENT
    assert tok.literal == word


def test_identifier_stops_at_digit() -> None:
    toks = tokenize("abc123")
    assert [(t.kind, t.literal) for t in toks] == [
        (TokenKind.IDENT, "abc"),
        (TokenKind.INT, "123"),
        (TokenKind.EOF, ""),
    ]


def test_underscore_identifier() -> None:
    tok = Lexer("_foo_bar").next_token()
    assert tok.kind is TokenKind.IDENT
    assert tok.literal == "_foo_bar"


def test_number_literal_is_unparsed_text() -> None:
    tok = Lexer("00042").next_token()
    assert tok.kind is TokenKind.INT
    assert tok.literal == "00042"


def test_illegal_character() -> None:
    toks = tokenize("@ 5")
    assert toks[0].kind is TokenKind.ILLEGAL
    assert toks[0].literal == "@"
    assert toks[1].kind is TokenKind.INT


def test_non_ascii_is_illegal_and_single_character() -> None:
    toks = tokenize("é+ü")
    assert [(t.kind, t.literal) for t in toks] == [
        (TokenKind.ILLEGAL, "é"),
        (TokenKind.PLUS, "+"),
        (TokenKind.ILLEGAL, "ü"),
        (TokenKind.EOF, ""),
    ]


def test_multibyte_text_keeps_character_positions() -> None:
    toks = tokenize("λ let x")
    assert toks[1].literal == "let"
    assert toks[1].col == 3
    assert toks[2].literal == "x"
    assert toks[2].col == 7


def test_whitespace_is_skipped() -> None:
    assert kinds(" \t\r\n  5 \n") == [TokenKind.INT, TokenKind.EOF]


def test_empty_input_returns_eof() -> None:
    tok = Lexer("").next_token()
    assert tok.kind is TokenKind.EOF
    assert tok.literal == ""


def test_eof_is_idempotent() -> None:
    lexer = Lexer("x")
    assert lexer.next_token().kind is TokenKind.IDENT
    for _ in range(5):
        tok = lexer.next_token()
        assert tok.kind is TokenKind.EOF
        assert tok.literal == ""


def test_line_and_column_tracking() -> None:
    toks = tokenize("let x = 1;\n  y")
    assert (toks[0].line, toks[0].col) == (1, 1)
    assert (toks[3].line, toks[3].col) == (1, 9)
    assert (toks[5].line, toks[5].col) == (2, 3)


def test_lexer_accepts_character_stream() -> None:
    lexer = Lexer(CharacterStream("x", 0, 4, 2))
    tok = lexer.next_token()
    assert (tok.line, tok.col) == (4, 2)


def test_iterating_lexer_stops_after_eof() -> None:
    toks = list(Lexer("a b"))
    assert [t.kind for t in toks] == [TokenKind.IDENT, TokenKind.IDENT, TokenKind.EOF]


def test_character_stream_methods() -> None:
    stream = CharacterStream("abc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.peek() == "b"
    assert not stream.end_of_file()
    stream.next()
    stream.next()
    assert stream.end_of_file()
    assert stream.peek() == ""
    assert stream.peek(5) == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(
        IndexError, match="CharacterStreamError: Attempted to read past end of source"
    ):
        stream.next()


def test_token_repr_and_eq() -> None:
    t1 = Token(TokenKind.INT, "42", 1, 2)
    t2 = Token(TokenKind.INT, "42", 1, 2)
    t3 = Token(TokenKind.IDENT, "x")

    assert repr(t1) == "Token(INT, '42')"
    assert t1 == t2
    assert t1 != t3

    token_set = {t1, t2, t3}
    assert len(token_set) == 2


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_does_not_crash_on_random_input(input_str: str) -> None:
    toks = tokenize(input_str)
    assert toks[-1].kind is TokenKind.EOF
    assert all(t.kind is not TokenKind.EOF for t in toks[:-1])


@given(st.text(alphabet=st.characters(exclude_categories=["Cs"]), max_size=80))  # type: ignore[misc]
def test_literals_are_substrings_at_scan_position(text: str) -> None:
    lines = text.split("\n")
    for tok in tokenize(text):
        if tok.kind is TokenKind.EOF:
            continue
        assert tok.literal
        line = lines[tok.line - 1]
        start = tok.col - 1
        assert line[start : start + len(tok.literal)] == tok.literal
