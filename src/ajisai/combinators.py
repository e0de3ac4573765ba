## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from fractions import Fraction

from . import rational as R
from .types import Token, quotation_to_tokens
from .errors import AjisaiParseError, AjisaiTypeError, AjisaiRegisterEmpty, AjisaiLoopLimit
from .parser import is_word_name
from .signatures import check_arguments
from .formatting import format_output
from .interpreter import Machine, interpret


class LeaveLoop(Exception):
    """Raised by `LEAVE` and caught by the innermost running loop."""


def _take(this: str, machine: Machine, *expected) -> list:
    """Check the top items against types listed bottom-first, then pop and return them."""
    args = check_arguments(this, machine.stack, list(expected))
    del machine.stack[len(machine.stack) - len(expected):]
    return args

def _as_quotation(value) -> list:
    return quotation_to_tokens(value if isinstance(value, list) else [value])

def _pop_condition(this: str, machine: Machine) -> bool:
    cond, = _take(this, machine, bool)
    return cond

def _run_loop(this: str, machine: Machine, step, check=None) -> None:
    """Call `step` until it returns false, `LEAVE` is used, or the iteration cap is hit.

    After the last allowed `step`, the optional `check` gets one more chance to end the loop.
    """
    limit = machine.config.max_iterations
    machine.loops += 1
    try:
        for _ in range(limit):
            if not step(): return
        if check is not None and not check(): return
        raise AjisaiLoopLimit(f"`{this}` exceeded the limit of {limit:,} iterations.", limit=limit, word=this)
    except LeaveLoop:
        pass
    finally:
        machine.loops -= 1


_BEGIN_STOPS, _BEGIN_ENDS = {'WHILE', 'UNTIL', 'AGAIN', 'REPEAT'}, {'UNTIL', 'AGAIN', 'REPEAT'}

def _collect_span(this: str, queue, stops: set, ends: set) -> tuple[list, str]:
    """Consume upcoming tokens up to a terminator at the same nesting level, skipping vector contents."""
    body, depth, brackets = [], 0, 0
    while queue:
        token = queue.popleft()
        if token.type == Token.VECTOR_START:
            brackets += 1
        elif token.type == Token.VECTOR_END:
            brackets -= 1
        elif brackets == 0 and token.type == Token.SYMBOL:
            if token.value == this:
                depth += 1
            elif depth == 0 and token.value in stops:
                return body, token.value
            elif depth > 0 and token.value in ends:
                depth -= 1
        body.append(token)
    terminator = '` or `'.join(sorted(stops))
    raise AjisaiParseError(f"`{this}` without matching `{terminator}`.", token=this)


## CONDITIONALS
def comb_if(this: str, queue, machine: Machine):
    """Runs the first quotation if the condition is true, otherwise the second: ( bool [then] [else] -- )"""
    cond, then_branch, else_branch = _take(this, machine, bool, list, list)
    interpret(quotation_to_tokens(then_branch if cond else else_branch), machine)

def comb_when(this: str, queue, machine: Machine):
    cond, body = _take(this, machine, bool, list)
    if cond: interpret(quotation_to_tokens(body), machine)

def comb_unless(this: str, queue, machine: Machine):
    cond, body = _take(this, machine, bool, list)
    if not cond: interpret(quotation_to_tokens(body), machine)

def comb_case(this: str, queue, machine: Machine):
    """Tries `[condition action]` clauses in order on a value: ( value [[cond action] ...] -- ... )

    Each condition receives the value and must leave exactly one boolean in its place.  The action of
    the first matching clause receives the value.  If no clause matches, the value stays on the stack.
    """
    value, clauses = _take(this, machine, Any, list)
    for clause in clauses:
        if not isinstance(clause, list) or len(clause) != 2:
            raise AjisaiTypeError(f"`{this}` expects clauses of form [condition action].",
                                  operation=this, expected='[condition action] pair')
        cond, action = clause
        base = len(machine.stack)
        machine.stack.append(value)
        interpret(_as_quotation(cond), machine)
        if len(machine.stack) != base + 1 or not isinstance(machine.stack[-1], bool):
            raise AjisaiTypeError(f"`{this}` condition must replace the value with exactly one boolean.",
                                  operation=this, expected='boolean')
        if machine.stack.pop():
            machine.stack.append(value)
            interpret(_as_quotation(action), machine)
            return
    machine.stack.append(value)


## LOOPS
def comb_loop(this: str, queue, machine: Machine):
    """Evaluates the body while the condition quotation yields true: ( [cond] [body] -- )"""
    cond, body = _take(this, machine, list, list)
    cond_tokens, body_tokens = quotation_to_tokens(cond), quotation_to_tokens(body)

    def check():
        interpret(cond_tokens, machine)
        return _pop_condition(this, machine)

    def step():
        if not check(): return False
        interpret(body_tokens, machine)
        return True
    _run_loop(this, machine, step, check=check)

def comb_do(this: str, queue, machine: Machine):
    """Runs the tokens up to `LOOP` once per index in [start, limit): ( start limit -- )

    The limit then the running index are kept on the return stack, where `I` and `J` find them.
    """
    body, _ = _collect_span(this, queue, {'LOOP'}, {'LOOP'})
    start, limit = _take(this, machine, Fraction, Fraction)

    base, index = len(machine.rstack), start
    machine.rstack.extend([limit, index])
    machine.loops += 1
    try:
        while R.lt(index, limit):
            interpret(body, machine)
            if len(machine.rstack) < base + 2:
                raise AjisaiRegisterEmpty("`LOOP` found its DO frame removed from the return stack.", word='LOOP')
            index += 1
            machine.rstack[base + 1] = index
    except LeaveLoop:
        pass
    finally:
        del machine.rstack[base:]
        machine.loops -= 1

def comb_begin(this: str, queue, machine: Machine):
    """Indefinite loops: `BEGIN body AGAIN`, `BEGIN body cond UNTIL` and `BEGIN cond WHILE body REPEAT`."""
    first, stop = _collect_span(this, queue, _BEGIN_STOPS, _BEGIN_ENDS)

    match stop:
        case 'AGAIN':
            def step():
                interpret(first, machine)
                return True
        case 'UNTIL':
            def step():
                interpret(first, machine)
                return not _pop_condition('UNTIL', machine)
        case 'WHILE':
            body, _ = _collect_span(this, queue, {'REPEAT'}, _BEGIN_ENDS)
            def check():
                interpret(first, machine)
                return _pop_condition('WHILE', machine)
            def step():
                if not check(): return False
                interpret(body, machine)
                return True
            return _run_loop(this, machine, step, check=check)
        case _:
            raise AjisaiParseError(f"`{stop}` needs a `WHILE` after `BEGIN`.", token=stop)
    _run_loop(this, machine, step)

def comb_leave(this: str, queue, machine: Machine):
    if machine.loops == 0:
        raise AjisaiParseError(f"`{this}` used outside of a loop.", token=this)
    raise LeaveLoop()

def comb_unmatched(this: str, queue, machine: Machine):
    raise AjisaiParseError(f"`{this}` without matching `BEGIN`.", token=this)


## RETURN STACK
def comb_to_r(this: str, queue, machine: Machine):
    value, = _take(this, machine, Any)
    machine.rstack.append(value)

def comb_from_r(this: str, queue, machine: Machine):
    if not machine.rstack:
        raise AjisaiRegisterEmpty(f"`{this}` found the return stack empty.", word=this)
    machine.stack.append(machine.rstack.pop())

def comb_fetch_r(this: str, queue, machine: Machine):
    if not machine.rstack:
        raise AjisaiRegisterEmpty(f"`{this}` found the return stack empty.", word=this)
    machine.stack.append(machine.rstack[-1])

def _loop_index(this: str, machine: Machine, frames: int):
    # Each DO frame is [limit, index], so the index of the n-th frame from the top is at -(2n - 1).
    if len(machine.rstack) < 2 * frames:
        raise AjisaiRegisterEmpty(f"`{this}` used outside of {frames} nested DO loop(s).", word=this)
    machine.stack.append(machine.rstack[1 - 2 * frames])

def comb_i(this: str, queue, machine: Machine):
    """Pushes the index of the innermost DO loop."""
    _loop_index(this, machine, 1)

def comb_j(this: str, queue, machine: Machine):
    """Pushes the index of the enclosing DO loop."""
    _loop_index(this, machine, 2)


## DICTIONARY
def comb_def(this: str, queue, machine: Machine):
    """Defines a custom word from a quotation: ( [body] "NAME" -- )"""
    body, name = check_arguments(this, machine.stack, [list, str])
    if not is_word_name(name):
        raise AjisaiTypeError(f"`{this}` cannot use {name!r} as a word name.", operation=this, expected='word name')
    description, machine.description = machine.description, None
    machine.dictionary.define(name, body, description)
    del machine.stack[-2:]

def comb_del(this: str, queue, machine: Machine):
    """Deletes a custom word that no other word depends on: ( "NAME" -- )"""
    name, = check_arguments(this, machine.stack, [str])
    machine.dictionary.delete(name)
    machine.stack.pop()

def comb_words(this: str, queue, machine: Machine):
    machine.stack.append(machine.dictionary.names())

def comb_words_q(this: str, queue, machine: Machine):
    prefix, = _take(this, machine, str)
    machine.stack.append(machine.dictionary.names(prefix.upper()))


## OUTPUT
def _count(this: str, value: Fraction, low: int, high: int | None = None) -> int:
    if not R.is_integer(value) or value < low or (high is not None and value > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise AjisaiTypeError(f"`{this}` expects an integer {bounds}, got {R.format_fraction(value)}.",
                              operation=this, expected=f"integer {bounds}")
    return value.numerator

def comb_dot(this: str, queue, machine: Machine):
    value, = _take(this, machine, Any)
    machine.output.write(format_output(value) + ' ')

def comb_print(this: str, queue, machine: Machine):
    value, = check_arguments(this, machine.stack, [Any])
    machine.output.write(format_output(value) + ' ')

def comb_cr(this: str, queue, machine: Machine):
    machine.output.write('\n')

def comb_space(this: str, queue, machine: Machine):
    machine.output.write(' ')

def comb_spaces(this: str, queue, machine: Machine):
    count, = check_arguments(this, machine.stack, [Fraction])
    text = ' ' * _count(this, count, 0)
    machine.stack.pop()
    machine.output.write(text)

def comb_emit(this: str, queue, machine: Machine):
    code, = check_arguments(this, machine.stack, [Fraction])
    text = chr(_count(this, code, 0, 127))
    machine.stack.pop()
    machine.output.write(text)
