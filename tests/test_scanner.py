import pytest
from lox.scanner import (
    LexError, LexErrors, UnexpectedCharacter, UnterminatedString, scan, tokenize,
)
from lox.token import KEYWORDS, Token, TokenType


def types(src):
    return [item.type for item in scan(src)]


# --- Punctuation and operators ---

@pytest.mark.parametrize("ch,expected", [
    ("(", TokenType.LEFT_PAREN),
    (")", TokenType.RIGHT_PAREN),
    ("{", TokenType.LEFT_BRACE),
    ("}", TokenType.RIGHT_BRACE),
    (",", TokenType.COMMA),
    (".", TokenType.DOT),
    ("-", TokenType.MINUS),
    ("+", TokenType.PLUS),
    (";", TokenType.SEMICOLON),
    ("*", TokenType.STAR),
    ("/", TokenType.SLASH),
])
def test_single_punctuation(ch, expected):
    assert types(ch) == [expected, TokenType.EOF]


@pytest.mark.parametrize("src,expected", [
    ("!=", TokenType.BANG_EQUAL),
    ("==", TokenType.EQUAL_EQUAL),
    (">=", TokenType.GREATER_EQUAL),
    ("<=", TokenType.LESS_EQUAL),
])
def test_compound_operators(src, expected):
    assert types(src) == [expected, TokenType.EOF]


@pytest.mark.parametrize("src,expected", [
    ("!", TokenType.BANG),
    ("=", TokenType.EQUAL),
    (">", TokenType.GREATER),
    ("<", TokenType.LESS),
])
def test_simple_operators(src, expected):
    assert types(src) == [expected, TokenType.EOF]


def test_greater_followed_by_number_is_not_greater_equal():
    items = scan(">5")
    assert items == [
        Token(TokenType.GREATER, ">", None, 1),
        Token(TokenType.NUMBER, "5", 5.0, 1),
        Token(TokenType.EOF, "", None, 1),
    ]


def test_bang_then_equal_equal():
    # "!==" is "!=" then "="
    assert types("!==") == [TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EOF]


def test_operator_sequence():
    assert types("<<=>") == [
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.EOF,
    ]


# --- Whitespace, lines, comments ---

def test_empty_source():
    assert scan("") == [Token(TokenType.EOF, "", None, 1)]


def test_whitespace_skipped():
    assert types(" \t\r+ ") == [TokenType.PLUS, TokenType.EOF]


def test_newlines_count_lines():
    items = scan("1\n2\n\n3")
    assert [t.line for t in items] == [1, 2, 4, 4]


def test_comment_discarded():
    items = scan("// comment\nprint 1;")
    assert [t.type for t in items] == [
        TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]


def test_comment_newline_counts_as_a_line():
    items = scan("// comment\nprint 1;")
    assert items[0] == Token(TokenType.PRINT, "print", None, 2)
    assert items[-1].line == 2


def test_comment_at_end_of_input():
    assert types("1 // trailing") == [TokenType.NUMBER, TokenType.EOF]


def test_slash_not_comment():
    assert types("4 / 2") == [
        TokenType.NUMBER, TokenType.SLASH, TokenType.NUMBER, TokenType.EOF,
    ]


def test_eof_stamped_with_final_line():
    assert scan("1\n\n")[-1] == Token(TokenType.EOF, "", None, 3)


# --- Strings ---

def test_string_literal():
    items = scan('"hello world"')
    assert items[0] == Token(TokenType.STRING, '"hello world"', "hello world", 1)


def test_empty_string():
    assert scan('""')[0].literal == ""


def test_multiline_string_starts_on_opening_line():
    items = scan('"a\nb" 1')
    assert items[0].literal == "a\nb"
    assert items[0].line == 1
    assert items[1].line == 2


def test_escaped_quote_does_not_terminate():
    items = scan(r'"say \"hi\""')
    assert items[0].literal == 'say "hi"'
    assert len(items) == 2


def test_escaped_backslash():
    assert scan(r'"a\\b"')[0].literal == "a\\b"


def test_other_backslash_kept_verbatim():
    assert scan(r'"a\nb"')[0].literal == "a\\nb"


def test_unterminated_string():
    items = scan('"abc')
    assert len(items) == 2
    assert isinstance(items[0], UnterminatedString)
    assert items[0].line == 1
    assert items[1].type is TokenType.EOF
    assert not any(isinstance(i, Token) and i.type is TokenType.STRING for i in items)


def test_unterminated_string_reports_opening_line():
    items = scan('1\n"abc\ndef')
    err = items[1]
    assert isinstance(err, UnterminatedString)
    assert err.line == 2
    assert items[-1].line == 3


# --- Numbers ---

def test_integer_number():
    assert scan("123")[0] == Token(TokenType.NUMBER, "123", 123.0, 1)


def test_fractional_number():
    assert scan("3.25")[0].literal == 3.25


def test_trailing_dot_not_part_of_number():
    assert types("123.") == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert scan("123.")[0].literal == 123.0


def test_leading_dot_not_part_of_number():
    assert types(".5") == [TokenType.DOT, TokenType.NUMBER, TokenType.EOF]


def test_number_then_method_dot():
    assert types("1.2.3") == [TokenType.NUMBER, TokenType.DOT, TokenType.NUMBER, TokenType.EOF]


# --- Identifiers and keywords ---

@pytest.mark.parametrize("word", sorted(KEYWORDS))
def test_keywords(word):
    items = scan(word)
    assert items[0].type is KEYWORDS[word]
    assert items[0].literal is None


def test_identifier():
    assert scan("_foo42")[0] == Token(TokenType.IDENTIFIER, "_foo42", "_foo42", 1)


def test_keyword_prefix_is_identifier():
    item = scan("classy")[0]
    assert item.type is TokenType.IDENTIFIER
    assert item.literal == "classy"


def test_digit_then_letters():
    assert types("1abc") == [TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.EOF]


def test_unicode_identifier():
    assert scan("café")[0].literal == "café"


# --- Error recovery ---

def test_unexpected_character():
    items = scan("@")
    assert isinstance(items[0], UnexpectedCharacter)
    assert items[0].char == "@"
    assert items[1].type is TokenType.EOF


def test_scanning_continues_after_bad_characters():
    items = scan("1 @ 2 #\n3")
    errors = [i for i in items if isinstance(i, LexError)]
    tokens = [i for i in items if isinstance(i, Token)]
    assert [e.char for e in errors] == ["@", "#"]
    assert [e.line for e in errors] == [1, 1]
    assert [t.literal for t in tokens] == [1.0, 2.0, 3.0, None]


def test_multiple_errors_collected():
    items = scan("@#")
    assert [type(i) for i in items[:2]] == [UnexpectedCharacter, UnexpectedCharacter]
    assert items[2].type is TokenType.EOF


def test_error_message_has_line():
    err = scan("\n\n$")[0]
    assert str(err) == "[line 3] Error: Unexpected character '$'."


# --- tokenize ---

def test_tokenize_clean_source():
    tokens = tokenize("1 + 2")
    assert [t.type for t in tokens] == [
        TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER, TokenType.EOF,
    ]


def test_tokenize_raises_all_errors():
    with pytest.raises(LexErrors) as exc:
        tokenize('@ 1 "open')
    assert [type(e) for e in exc.value.errors] == [UnexpectedCharacter, UnterminatedString]
