"""Recursive-descent parser for Lox expressions.

Grammar, lowest to highest precedence:

    equality   := comparison (("==" | "!=") comparison)*
    comparison := term (("<" | "<=" | ">" | ">=") term)*
    term       := factor (("+" | "-") factor)*
    factor     := unary (("*" | "/") unary)*
    unary      := ("!" | "-") unary | primary
    primary    := NUMBER | STRING | "true" | "false" | "nil"
                | "(" equality ")"

Binary levels fold left, so `a - b - c` is `(a - b) - c`. The parser looks
at one token to decide whether a level continues and never backtracks.
"""

from typing import Iterable

from .expr import Binary, BinaryOp, Expr, Grouping, Literal, Unary, UnaryOp
from .token import Token, TokenType, eof

# Each nesting level costs about ten Python frames (one per grammar rule)
MAX_DEPTH = 64


class ParseError(SyntaxError):
    def __init__(self, message: str, token: Token):
        where = "at end" if token.type is TokenType.EOF else f"at '{token.lexeme}'"
        super().__init__(f"[line {token.line}] Error {where}: {message}")
        self.message = message
        self.token = token
        self.line = token.line


class ExpectedExpression(ParseError):
    def __init__(self, token: Token):
        super().__init__("Expect expression.", token)


class UnclosedGrouping(ParseError):
    def __init__(self, token: Token):
        super().__init__("Expect ')' after expression.", token)


class TrailingInput(ParseError):
    def __init__(self, token: Token):
        super().__init__("Unexpected input after expression.", token)


class NestingTooDeep(ParseError):
    def __init__(self, token: Token, max_depth: int):
        super().__init__(f"Expression nested deeper than {max_depth} levels.", token)


_EQUALITY = {
    TokenType.EQUAL_EQUAL: BinaryOp.EQUAL_EQUAL,
    TokenType.BANG_EQUAL: BinaryOp.BANG_EQUAL,
}

_COMPARISON = {
    TokenType.LESS: BinaryOp.LESS,
    TokenType.LESS_EQUAL: BinaryOp.LESS_EQUAL,
    TokenType.GREATER: BinaryOp.GREATER,
    TokenType.GREATER_EQUAL: BinaryOp.GREATER_EQUAL,
}

_TERM = {
    TokenType.PLUS: BinaryOp.PLUS,
    TokenType.MINUS: BinaryOp.MINUS,
}

_FACTOR = {
    TokenType.STAR: BinaryOp.STAR,
    TokenType.SLASH: BinaryOp.SLASH,
}

_UNARY = {
    TokenType.BANG: UnaryOp.NOT,
    TokenType.MINUS: UnaryOp.NEGATE,
}

_KEYWORD_LITERALS = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}


class _Parser:
    __slots__ = ("tokens", "pos", "depth", "max_depth")

    def __init__(self, tokens: list[Token], max_depth: int):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            tokens.append(eof(tokens[-1].line if tokens else 1))
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type is not TokenType.EOF:
            self.pos += 1
        return tok

    def equality(self) -> Expr:
        return self._binary(_EQUALITY, self.comparison)

    def comparison(self) -> Expr:
        return self._binary(_COMPARISON, self.term)

    def term(self) -> Expr:
        return self._binary(_TERM, self.factor)

    def factor(self) -> Expr:
        return self._binary(_FACTOR, self.unary)

    def _binary(self, ops: dict[TokenType, BinaryOp], operand) -> Expr:
        expr = operand()
        while self.peek().type in ops:
            tok = self.advance()
            right = operand()
            expr = Binary(expr, ops[tok.type], right, tok.line)
        return expr

    def unary(self) -> Expr:
        tok = self.peek()
        if tok.type not in _UNARY:
            return self.primary()
        self.advance()
        self._enter(tok)
        try:
            operand = self.unary()
        finally:
            self.depth -= 1
        return Unary(_UNARY[tok.type], operand, tok.line)

    def primary(self) -> Expr:
        tok = self.peek()
        if tok.type in _KEYWORD_LITERALS:
            self.advance()
            return Literal(_KEYWORD_LITERALS[tok.type])
        if tok.type in (TokenType.NUMBER, TokenType.STRING):
            self.advance()
            return Literal(tok.literal)
        if tok.type is TokenType.LEFT_PAREN:
            self.advance()
            self._enter(tok)
            try:
                inner = self.equality()
            finally:
                self.depth -= 1
            if self.peek().type is not TokenType.RIGHT_PAREN:
                raise UnclosedGrouping(self.peek())
            self.advance()
            return Grouping(inner)
        raise ExpectedExpression(tok)

    def _enter(self, tok: Token) -> None:
        if self.depth >= self.max_depth:
            raise NestingTooDeep(tok, self.max_depth)
        self.depth += 1


def parse(tokens: Iterable[Token], *, max_depth: int = MAX_DEPTH) -> Expr:
    """Parse a token sequence into a single expression tree.

    Takes tokenize() output. scan() output still holding LexError items is
    rejected with TypeError. Raises the first ParseError met; there is no
    recovery.
    """
    tokens = list(tokens)
    for item in tokens:
        if not isinstance(item, Token):
            raise TypeError(f"parse() takes tokens, got {type(item).__name__}: {item}")
    p = _Parser(tokens, max_depth)
    expr = p.equality()
    if p.peek().type is not TokenType.EOF:
        raise TrailingInput(p.peek())
    return expr
