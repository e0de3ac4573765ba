## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators
from . import combinators as C
from .config import EngineConfig
from .signatures import get_word_name, make_operation
from .dictionary import Dictionary
from .interpreter import Machine


def load_builtins_machine(config: EngineConfig | None = None) -> Machine:
    # Combinators
    combinators = {
        'IF': C.comb_if, 'WHEN': C.comb_when, 'UNLESS': C.comb_unless, 'CASE': C.comb_case,
        'LOOP': C.comb_loop, 'DO': C.comb_do, 'BEGIN': C.comb_begin, 'LEAVE': C.comb_leave,
        'UNTIL': C.comb_unmatched, 'AGAIN': C.comb_unmatched, 'WHILE': C.comb_unmatched, 'REPEAT': C.comb_unmatched,
        'I': C.comb_i, 'J': C.comb_j, '>R': C.comb_to_r, 'R>': C.comb_from_r, 'R@': C.comb_fetch_r,
        'DEF': C.comb_def, 'DEL': C.comb_del, 'WORDS': C.comb_words, 'WORDS?': C.comb_words_q,
        '.': C.comb_dot, 'PRINT': C.comb_print, 'CR': C.comb_cr, 'SPACE': C.comb_space,
        'SPACES': C.comb_spaces, 'EMIT': C.comb_emit,
    }
    aliases = {
        'ADD': '+', 'SUB': '-', 'MUL': '*', 'DIV': '/',
        'GT': '>', 'GTE': '>=', 'EQUAL': '=', 'LT': '<', 'LTE': '<=',
    }

    # Functions (wrapped to pop their arguments and push their results)
    functions, symbols = {}, {}
    for k in dir(operators):
        if not k.startswith('op_'): continue
        word = get_word_name(k)
        target = symbols if word in aliases else functions
        name = aliases.get(word, word)
        target[name] = make_operation(getattr(operators, k), name)

    dictionary = Dictionary()
    for name, fn in (symbols | functions | combinators).items():
        doc = (fn.__doc__ or '').strip().split('\n')[0]
        dictionary.add_builtin(name, description=doc or None)

    return Machine(dictionary=dictionary, functions=functions, combinators=combinators, operators=symbols,
                   config=config or EngineConfig())
