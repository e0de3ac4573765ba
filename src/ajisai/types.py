## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction
from collections import namedtuple
from dataclasses import dataclass, field


class Symbol(bytes):
    """Opaque identifier for a word name carried as data inside a vector."""

    @classmethod
    def from_name(cls, name: str | bytes) -> "Symbol":
        return cls(name if isinstance(name, bytes) else name.encode("utf-8"))

    @property
    def name(self) -> str:
        return self.decode("utf-8")

    def __repr__(self):
        return f"Symbol({self.name})"


class NilType:
    __slots__ = ()
    _nil_singleton = None

    def __new__(cls):
        # Only one instance may exist, and it's the `nil` created just below.
        if cls._nil_singleton is None:
            cls._nil_singleton = super().__new__(cls)
        return cls._nil_singleton

    def __repr__(self):
        return "NIL"

    def __bool__(self):
        return False


# All checks for the NIL value must be done by comparing identity to this.
nil = NilType()


class Token(namedtuple('Token', ['type', 'value'])):
    __slots__ = ()

    NUMBER = 'NUMBER'
    STRING = 'STRING'
    BOOLEAN = 'BOOLEAN'
    SYMBOL = 'SYMBOL'
    VECTOR_START = 'VECTOR_START'
    VECTOR_END = 'VECTOR_END'
    NIL = 'NIL'
    DESCRIPTION = 'DESCRIPTION'

    def __repr__(self):
        if self.type in (Token.VECTOR_START, Token.VECTOR_END, Token.NIL):
            return f"<{self.type}>"
        return f"<{self.type} {self.value!r}>"


VECTOR_START = Token(Token.VECTOR_START, '[')
VECTOR_END = Token(Token.VECTOR_END, ']')
NIL_TOKEN = Token(Token.NIL, None)


@dataclass
class WordDefinition:
    tokens: list                                  # list[Token], empty for built-ins
    is_builtin: bool = False
    description: str | None = None
    dependencies: frozenset = field(default_factory=frozenset)  # custom words referenced


def type_name(value) -> str:
    """Name of the runtime type of a value, as shown in error messages."""
    if isinstance(value, bool): return 'boolean'
    if isinstance(value, Fraction): return 'number'
    if isinstance(value, Symbol): return 'symbol'
    if isinstance(value, str): return 'string'
    if isinstance(value, list): return 'vector'
    if value is nil: return 'nil'
    return type(value).__name__


def values_equal(a, b) -> bool:
    """Structural equality; values of different types are never equal."""
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b


def iter_symbols(values: list):
    """Yield the names of all symbols in a vector, recursively through nested vectors."""
    for value in values:
        if isinstance(value, Symbol):
            yield value.name
        elif isinstance(value, list):
            yield from iter_symbols(value)


def value_to_tokens(value) -> list:
    if isinstance(value, bool): return [Token(Token.BOOLEAN, value)]
    if isinstance(value, Fraction): return [Token(Token.NUMBER, value)]
    if isinstance(value, Symbol): return [Token(Token.SYMBOL, value.name)]
    if isinstance(value, str): return [Token(Token.STRING, value)]
    if isinstance(value, list): return [VECTOR_START, *quotation_to_tokens(value), VECTOR_END]
    if value is nil: return [NIL_TOKEN]
    raise ValueError(f"Value of type {type(value).__name__} has no token form.")


def quotation_to_tokens(values: list) -> list:
    """Re-expand a vector used as a quotation into the token stream it stands for."""
    tokens = []
    for value in values:
        tokens.extend(value_to_tokens(value))
    return tokens
