## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from fractions import Fraction
from typing import Any, TypeVar, Callable, get_origin, get_args

from .types import type_name
from .errors import AjisaiStackUnderflow, AjisaiTypeError


_EXPECTED_NAMES = {Fraction: 'number', list: 'vector', str: 'string', bool: 'boolean'}


def get_word_name(py_name: str) -> str:
    """Map a Python operator function name to its word, e.g. `op_empty_q` to `EMPTY?`."""
    assert py_name.startswith("op_"), f"Operator function `{py_name}` requires prefix `op_` by convention."
    return py_name[3:].replace('_b', '!').replace('_q', '?').replace('_', '-').upper()


def describe_type(tp) -> str:
    return _EXPECTED_NAMES.get(tp, getattr(tp, '__name__', str(tp)))


def _normalize_expected_type(tp):
    if tp is inspect.Parameter.empty: return Any
    if isinstance(tp, TypeVar): return tp.__bound__ or Any
    return tp


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations from Python to determine the stack effects of a word.

    Arity is the number of items popped, the leftmost parameter being the deepest one.
    Valency is 0 for `None`, the tuple size for `tuple[...]`, otherwise 1.
    """
    sig = inspect.signature(fn)
    positional = [p for p in sig.parameters.values()
                  if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]

    ret_ann = sig.return_annotation
    returns_none = (ret_ann is None or ret_ann is type(None))
    returns_tuple = (get_origin(ret_ann) is tuple)
    outputs = [] if returns_none else list(get_args(ret_ann) if returns_tuple else (ret_ann,))

    return {
        'name': name or fn.__name__,
        'arity': len(positional),
        'valency': len(outputs),
        'inputs': [_normalize_expected_type(p.annotation) for p in positional],
        'outputs': [_normalize_expected_type(t) for t in outputs],
    }


def check_arguments(name: str, stack: list, inputs: list) -> list:
    """Validate the top of the stack against expected types (bottom-first), returning those items unpopped."""
    arity = len(inputs)
    if len(stack) < arity:
        raise AjisaiStackUnderflow(f"`{name}` needs {arity} item(s) on the stack, but {len(stack)} available.",
                                   needed=arity, available=len(stack), word=name)

    args = stack[len(stack) - arity:]
    for i, (actual, expected) in enumerate(zip(args, inputs)):
        if expected is Any or isinstance(actual, expected): continue
        position = arity - i
        raise AjisaiTypeError(f"`{name}` expects {describe_type(expected)} at position {position} from top, got {type_name(actual)}.",
                              operation=name, expected=describe_type(expected))
    return args


def make_operation(fn: Callable, name: str) -> Callable[[list], None]:
    """Wrap a plain function so it pops its arguments from the stack and pushes its results."""
    meta = get_stack_effects(fn=fn, name=name)
    arity, inputs, valency = meta['arity'], meta['inputs'], meta['valency']

    def operation(stack: list) -> None:
        args = check_arguments(name, stack, inputs)
        result = fn(*args)
        del stack[len(stack) - arity:]
        match valency:
            case 0: pass
            case 1: stack.append(result)
            case _: stack.extend(result)

    operation.__name__ = fn.__name__
    operation.__doc__ = fn.__doc__
    operation.__ajisai_meta__ = meta
    return operation
