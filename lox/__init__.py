from .scanner import (
    scan, tokenize, LexError, LexErrors, UnterminatedString, InvalidNumber, UnexpectedCharacter,
)
from .parser import (
    parse, ParseError, ExpectedExpression, UnclosedGrouping, TrailingInput, NestingTooDeep,
)
from .evaluator import (
    evaluate, EvalError, DepthExceeded, LoxTypeError, ExpectedNumber, ExpectedBoolean,
    NilOperand, UnsupportedOperator, MismatchedOperands,
)
from .interpreter import interpret, stringify
from .types import Config

__all__ = [
    "scan", "tokenize", "parse", "evaluate", "interpret", "stringify", "Config",
    "LexError", "LexErrors", "UnterminatedString", "InvalidNumber", "UnexpectedCharacter",
    "ParseError", "ExpectedExpression", "UnclosedGrouping", "TrailingInput", "NestingTooDeep",
    "EvalError", "DepthExceeded", "LoxTypeError", "ExpectedNumber", "ExpectedBoolean",
    "NilOperand", "UnsupportedOperator", "MismatchedOperands",
]
