## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, TypeVar
from fractions import Fraction

from . import rational as R
from .types import type_name, values_equal
from .errors import AjisaiTypeError, AjisaiIndexError, AjisaiLengthMismatch


## BROADCASTING
def _is_operand(x) -> bool:
    return isinstance(x, (Fraction, list))

def _element(name, fn, x, y, keep, compare):
    if _is_operand(x) and _is_operand(y):
        return _broadcast(name, fn, x, y, compare)
    # Non-numeric elements pass through arithmetic unchanged, and never compare as true.
    return False if compare else keep

def _broadcast(name, fn, b, a, compare=False):
    if isinstance(b, Fraction) and isinstance(a, Fraction):
        return fn(b, a)
    if isinstance(b, list) and isinstance(a, list):
        if len(b) != len(a):
            raise AjisaiLengthMismatch(f"`{name}` needs vectors of equal length, got {len(b)} and {len(a)}.",
                                       lengths=(len(b), len(a)), word=name)
        return [_element(name, fn, x, y, x, compare) for x, y in zip(b, a)]
    if isinstance(b, list) and isinstance(a, Fraction):
        return [_element(name, fn, x, a, x, compare) for x in b]
    if isinstance(b, Fraction) and isinstance(a, list):
        return [_element(name, fn, b, y, y, compare) for y in a]
    raise AjisaiTypeError(f"`{name}` expects numbers or vectors, got {type_name(b)} and {type_name(a)}.",
                          operation=name, expected='number or vector')

## ARITHMETIC
def op_add(b: Any, a: Any) -> Any: return _broadcast('+', R.add, b, a)
def op_sub(b: Any, a: Any) -> Any: return _broadcast('-', R.sub, b, a)
def op_mul(b: Any, a: Any) -> Any: return _broadcast('*', R.mul, b, a)
def op_div(b: Any, a: Any) -> Any: return _broadcast('/', R.div, b, a)
## COMPARISON
def op_gt(b: Any, a: Any) -> Any: return _broadcast('>', R.gt, b, a, compare=True)
def op_gte(b: Any, a: Any) -> Any: return _broadcast('>=', R.gte, b, a, compare=True)
def op_lt(b: Any, a: Any) -> Any: return _broadcast('<', R.lt, b, a, compare=True)
def op_lte(b: Any, a: Any) -> Any: return _broadcast('<=', R.lte, b, a, compare=True)
def op_equal(b: Any, a: Any) -> Any:
    """Scalars broadcast across vectors; any other pair compares structurally, across types too."""
    if isinstance(b, list) != isinstance(a, list) and (isinstance(b, Fraction) or isinstance(a, Fraction)):
        return _broadcast('=', R.eq, b, a, compare=True)
    return values_equal(b, a)

## STACK OPERATIONS
X, Y, Z = (TypeVar(v, bound=Any) for v in ('X', 'Y', 'Z'))
def op_dup(x: X) -> tuple[X, X]: return (x, x)
def op_drop(_: Any) -> None: return None
def op_swap(b: Y, a: X) -> tuple[X, Y]: return (a, b)
def op_over(b: Y, a: X) -> tuple[Y, X, Y]: return (b, a, b)
def op_rot(c: Z, b: Y, a: X) -> tuple[Y, X, Z]: return (b, a, c)
def op_nip(_: Any, a: X) -> X: return a

## VECTOR MANIPULATION
def _non_empty(name: str, v: list) -> list:
    if not v:
        raise AjisaiIndexError(f"`{name}` of an empty vector.", index=0, length=0, word=name)
    return v

def op_length(v: list) -> Fraction: return Fraction(len(v))
def op_head(v: list) -> Any: return _non_empty('HEAD', v)[0]
def op_tail(v: list) -> list: return _non_empty('TAIL', v)[1:]
def op_uncons(v: list) -> tuple[Any, list]: return (_non_empty('UNCONS', v)[0], v[1:])
def op_cons(b: Any, a: list) -> list: return [b] + a
def op_append(b: Any, a: list) -> list: return a + [b]
def op_reverse(v: list) -> list: return list(reversed(v))
def op_empty_q(v: list) -> bool: return len(v) == 0

def op_nth(v: list, index: Fraction) -> Any:
    """Element at an integer index, negative ones counting from the end."""
    length = len(v)
    if not R.is_integer(index) or not -length <= index.numerator < length:
        raise AjisaiIndexError(f"Index {R.format_fraction(index)} out of bounds for vector of length {length}.",
                               index=index, length=length, word='NTH')
    return v[index.numerator]
