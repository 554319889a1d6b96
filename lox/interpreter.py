"""Top-level API: run Lox source through scan, parse and evaluate."""

import math
from typing import Any, Optional

from .evaluator import evaluate
from .parser import parse
from .scanner import tokenize
from .types import Config, Value


def interpret(source: str, config: Optional[Any] = None) -> Value:
    """Evaluate a Lox expression given as source text.

    Args:
        source: Lox source holding a single expression
        config: Either a Config dataclass or a dict with keys:
                max_parse_depth/maxParseDepth, max_eval_depth/maxEvalDepth

    Returns:
        The runtime value: None, bool, float or str

    Raises LexErrors (every lexical error in the source), then the first
    ParseError, then any EvalError; each stage only runs if the previous
    one succeeded.
    """
    cfg = _config(config)
    tokens = tokenize(source)
    tree = parse(tokens, max_depth=cfg.max_parse_depth)
    return evaluate(tree, max_depth=cfg.max_eval_depth)


def _config(config: Optional[Any]) -> Config:
    if config is None:
        return Config()
    if isinstance(config, dict):
        defaults = Config()
        return Config(
            max_parse_depth=_lookup(config, ("max_parse_depth", "maxParseDepth"), defaults.max_parse_depth),
            max_eval_depth=_lookup(config, ("max_eval_depth", "maxEvalDepth"), defaults.max_eval_depth),
        )
    return config


def _lookup(config: dict, keys: tuple[str, ...], default: int) -> int:
    # An explicit 0 is a real limit, not a missing key
    return next((config[k] for k in keys if k in config), default)


def stringify(value: Value) -> str:
    """Render a runtime value the way `print` shows it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        text = repr(value)
        # repr is the shortest round-trip form; Lox drops a bare ".0"
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return value
