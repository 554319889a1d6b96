from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Runtime values: None (nil), bool, float, str.
# No wrapper needed: Python's native types map directly.
Value = Optional[Union[bool, float, str]]


class ValueKind(Enum):
    NIL = "nil"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


def kind_of(value: Value) -> ValueKind:
    # bool is checked before anything numeric: bool is an int subclass
    if value is None:
        return ValueKind.NIL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    raise TypeError(f"not a Lox value: {value!r}")


@dataclass
class Config:
    max_parse_depth: int = 64
    max_eval_depth: int = 256
