"""Single-pass scanner for Lox source text.

scan() never raises on bad input: lexical errors are collected alongside the
tokens so one pass can report every problem in the source.
"""

from typing import Any, Optional, Union

from .token import KEYWORDS, OPERATORS, PUNCTUATION, Token, TokenType, eof


class LexError(Exception):
    def __init__(self, message: str, line: int):
        super().__init__(f"[line {line}] Error: {message}")
        self.message = message
        self.line = line


class UnterminatedString(LexError):
    def __init__(self, line: int):
        super().__init__("Unterminated string.", line)


class InvalidNumber(LexError):
    def __init__(self, lexeme: str, line: int):
        super().__init__(f"Invalid number '{lexeme}'.", line)
        self.lexeme = lexeme


class UnexpectedCharacter(LexError):
    def __init__(self, char: str, line: int):
        super().__init__(f"Unexpected character '{char}'.", line)
        self.char = char


class LexErrors(Exception):
    """Raised by tokenize() with every lexical error found in one pass."""

    def __init__(self, errors: list[LexError]):
        super().__init__("\n".join(str(e) for e in errors))
        self.errors = list(errors)


Scanned = Union[Token, LexError]


class _Cursor:
    __slots__ = ("source", "start", "current", "line", "items")

    def __init__(self, source: str):
        self.source = source
        self.start = 0
        self.current = 0
        self.line = 1
        self.items: list[Scanned] = []

    def at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        ch = self.source[self.current]
        self.current += 1
        return ch

    def peek(self) -> str:
        if self.at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def match(self, expected: str) -> bool:
        if self.at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def add(self, type: TokenType, literal: Any = None, line: Optional[int] = None) -> None:
        lexeme = self.source[self.start:self.current]
        self.items.append(Token(type, lexeme, literal, self.line if line is None else line))


def scan(source: str) -> list[Scanned]:
    """Scan source into tokens and lexical errors, in source order.

    The result always ends with exactly one EOF token stamped with the final
    line number, even for empty input.
    """
    cur = _Cursor(source)
    while not cur.at_end():
        cur.start = cur.current
        _scan_token(cur)
    cur.items.append(eof(cur.line))
    return cur.items


def tokenize(source: str) -> list[Token]:
    """Like scan(), but raise LexErrors if the source has any lexical error."""
    items = scan(source)
    errors = [item for item in items if isinstance(item, LexError)]
    if errors:
        raise LexErrors(errors)
    return items


def _scan_token(cur: _Cursor) -> None:
    ch = cur.advance()

    if ch in (" ", "\t", "\r"):
        return
    if ch == "\n":
        cur.line += 1
        return

    if ch in PUNCTUATION:
        cur.add(PUNCTUATION[ch])
        return

    # Maximal munch: "!=" "==" ">=" "<=" win over their one-char prefix
    if ch in OPERATORS:
        compound, simple = OPERATORS[ch]
        cur.add(compound if cur.match("=") else simple)
        return

    if ch == "/":
        if cur.match("/"):
            _comment(cur)
        else:
            cur.add(TokenType.SLASH)
        return

    if ch == '"':
        _string(cur)
        return
    if _is_digit(ch):
        _number(cur)
        return
    if _is_alpha(ch):
        _identifier(cur)
        return

    cur.items.append(UnexpectedCharacter(ch, cur.line))


def _comment(cur: _Cursor) -> None:
    while not cur.at_end():
        if cur.advance() == "\n":
            cur.line += 1
            return


def _string(cur: _Cursor) -> None:
    opened_at = cur.line
    chars: list[str] = []
    while not cur.at_end():
        ch = cur.advance()
        if ch == '"':
            cur.add(TokenType.STRING, "".join(chars), line=opened_at)
            return
        if ch == "\\" and cur.peek() in ('"', "\\"):
            chars.append(cur.advance())
            continue
        if ch == "\n":
            cur.line += 1
        chars.append(ch)
    cur.items.append(UnterminatedString(opened_at))


def _number(cur: _Cursor) -> None:
    while _is_digit(cur.peek()):
        cur.advance()
    # A fractional part needs at least one digit after the dot
    if cur.peek() == "." and _is_digit(cur.peek_next()):
        cur.advance()
        while _is_digit(cur.peek()):
            cur.advance()

    text = cur.source[cur.start:cur.current]
    try:
        value = float(text)
    except ValueError:
        cur.items.append(InvalidNumber(text, cur.line))
        return
    cur.add(TokenType.NUMBER, value)


def _identifier(cur: _Cursor) -> None:
    while _is_alpha(cur.peek()) or _is_digit(cur.peek()):
        cur.advance()
    text = cur.source[cur.start:cur.current]
    keyword = KEYWORDS.get(text)
    if keyword is not None:
        cur.add(keyword)
    else:
        cur.add(TokenType.IDENTIFIER, text)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ch == "_" or ch.isalpha()
