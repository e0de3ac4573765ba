## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging
import collections

from typing import Callable
from dataclasses import dataclass, field

from .types import Token, Symbol, nil
from .config import EngineConfig
from .errors import AjisaiError, AjisaiParseError, AjisaiUnknownWord, AjisaiUnknownBuiltin, AjisaiRecursionLimit
from .dictionary import Dictionary
from .formatting import OutputBuffer, show_program_and_stack


log = logging.getLogger(__name__)


@dataclass
class Machine:
    """All mutable state one evaluation works on; owned by a single engine, never shared."""
    dictionary: Dictionary
    functions: dict[str, Callable]                # pure stack operations, `fn(stack)`
    combinators: dict[str, Callable]              # words needing the machine, `fn(name, queue, machine)`
    operators: dict[str, Callable]                # the nine arithmetic and comparison symbols
    config: EngineConfig = field(default_factory=EngineConfig)
    stack: list = field(default_factory=list)
    rstack: list = field(default_factory=list)
    output: OutputBuffer = field(default_factory=OutputBuffer)
    description: str | None = None                # pending `( ... )` handed to the next DEF
    depth: int = 0
    loops: int = 0


def collect_vector(queue: collections.deque) -> list:
    """Consume tokens up to the matching `]` and build the vector as inert data; symbols are never executed."""
    stack, output = [], []
    while queue:
        token = queue.popleft()
        match token.type:
            case Token.VECTOR_START:
                stack.append(output)
                output = []
            case Token.VECTOR_END:
                if not stack: return output
                stack[-1].append(output)
                output = stack.pop()
            case Token.SYMBOL:
                output.append(Symbol.from_name(token.value))
            case Token.NIL:
                output.append(nil)
            case Token.DESCRIPTION:
                pass
            case _:
                output.append(token.value)
    raise AjisaiParseError("Unterminated vector, missing `]`.")


def execute_word(name: str, queue: collections.deque, machine: Machine, description: str | None = None) -> None:
    if (op := machine.operators.get(name)) is not None:
        return op(machine.stack)

    if (word := machine.dictionary.lookup(name)) is None:
        raise AjisaiUnknownWord(f"Unknown word `{name}`.", name=name)
    if not word.is_builtin:
        return interpret(word.tokens, machine)

    if (fn := machine.functions.get(name)) is not None:
        return fn(machine.stack)
    if (comb := machine.combinators.get(name)) is not None:
        machine.description = description if name == 'DEF' else None
        return comb(name, queue, machine)
    raise AjisaiUnknownBuiltin(f"Built-in `{name}` has no implementation.", name=name)


def interpret(tokens, machine: Machine) -> None:
    """Evaluate tokens left to right; control-flow words re-enter here on expanded quotations."""
    if machine.depth >= machine.config.max_depth:
        raise AjisaiRecursionLimit(f"Nesting of words and quotations exceeded {machine.config.max_depth} levels.",
                                   limit=machine.config.max_depth)

    queue = collections.deque(tokens)
    pending = None
    machine.depth += 1
    try:
        while queue:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("%3d : %s", machine.depth, show_program_and_stack(queue, machine.stack))

            token = queue.popleft()
            description, pending = pending, None
            match token.type:
                case Token.DESCRIPTION:
                    pending = token.value
                case Token.NUMBER | Token.STRING | Token.BOOLEAN:
                    machine.stack.append(token.value)
                case Token.NIL:
                    machine.stack.append(nil)
                case Token.VECTOR_START:
                    machine.stack.append(collect_vector(queue))
                case Token.VECTOR_END:
                    raise AjisaiParseError("Unmatched `]` without opening `[`.")
                case Token.SYMBOL:
                    try:
                        execute_word(token.value, queue, machine, description)
                    except AjisaiError as exc:
                        if exc.word is None: exc.word = token.value
                        raise
    finally:
        machine.depth -= 1
