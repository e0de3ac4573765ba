## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from fractions import Fraction

from .types import Symbol, Token, nil
from .rational import format_fraction


class OutputBuffer:
    """Append-only text written by print-family words, drained by the host between turns."""

    def __init__(self):
        self._chunks: list[str] = []

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def drain(self) -> str:
        text, self._chunks = ''.join(self._chunks), []
        return text


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def _format_item(it, width=None, indent=0):
    if isinstance(it, list):
        if not it: return '[ ]'
        formatted_items = [_format_item(i, width, indent + 4) for i in it]
        single_line = '[ ' + ' '.join(formatted_items) + ' ]'
        # If it fits on one line, use single line format.
        if width is None or len(single_line) + indent <= width: return single_line
        # Otherwise use multi-line format...
        result = '[   '
        for i, item in enumerate(formatted_items):
            if i > 0: result += '\n' + (' ' * (indent + 4))
            result += item
        result += '\n' + (' ' * indent) + ']'
        return result
    if isinstance(it, bool): return str(it).lower()
    if isinstance(it, Fraction): return format_fraction(it)
    if isinstance(it, Symbol): return it.name
    if isinstance(it, str): return '"' + it.replace('\\', '\\\\').replace('"', '\\"') + '"'
    if it is nil: return 'NIL'
    return str(it)

def format_item(it, width=None, indent=0):
    """Display form of a value, which the tokenizer reads back as an equal literal."""
    return _format_item(it, width=width, indent=indent)

def format_output(it) -> str:
    """Text written to the output buffer by `.` and `PRINT`; strings appear without quotes."""
    return it if isinstance(it, str) else format_item(it)

def format_token(token: Token) -> str:
    match token.type:
        case Token.VECTOR_START: return '['
        case Token.VECTOR_END: return ']'
        case Token.NIL: return 'NIL'
        case Token.SYMBOL: return token.value
        case Token.DESCRIPTION: return f'( {token.value} )'
        case _: return format_item(token.value)

def show_stack(stack, width=72, end='\n', file=None):
    if not stack:
        stack_str = '∅'
    else:
        stack_str = ' '.join(_format_item(s, width=width) for s in stack)

    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_program_and_stack(program, stack, width=72) -> str:
    """One-line trace of remaining tokens against the stack, as logged by the interpreter."""
    prog_str = ' '.join(format_token(p) for p in program) if program else '∅'
    if len(prog_str) > width:
        prog_str = prog_str[:+width-2] + ' …'
    stack_str = ' '.join(format_item(s) for s in stack) if stack else '∅'
    if len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    return f"{stack_str:>{width}}  <=>  {prog_str}"
