## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

import lark
from .types import Token, VECTOR_START, VECTOR_END, NIL_TOKEN
from .errors import AjisaiError, AjisaiParseError
from .rational import make_fraction, parse_decimal, parse_fraction


GRAMMAR = r"""start: _item*
_item: DESCRIPTION | STRING | WORD | vector
vector: LSQB _item* RSQB

// COMMENTS
COMMENT.3: /#[^\r\n]*/

// TOKENS
DESCRIPTION.2: /\([^)]*\)/
STRING.2: /"(?:[^"\\]|\\.)*"/
LSQB: "["
RSQB: "]"
WORD: /[^\s\[\]()"]+/

// WHITESPACE
%import common.WS
%ignore WS
%ignore COMMENT
"""

_PARSER = lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="contextual", propagate_positions=True)

_INTEGER = re.compile(r'[+-]?\d+', re.ASCII)
_DECIMAL = re.compile(r'([+-]?)(\d+)\.(\d+)', re.ASCII)
_FRACTION = re.compile(r'([+-]?\d+)/([+-]?\d+)', re.ASCII)
_NUMERIC_PREFIX = re.compile(r'[+-]?\d+[./]', re.ASCII)

_UNTERMINATED = {
    '"': "Unterminated string literal.",
    '(': "Unterminated description, missing `)`.",
    ')': "Unmatched `)` without opening description.",
}


def classify_word(word: str) -> Token:
    """Classify a bare word: integer, decimal, fraction, boolean, nil, or else an upper-cased symbol."""
    if _INTEGER.fullmatch(word):
        return Token(Token.NUMBER, make_fraction(int(word)))
    if (m := _DECIMAL.fullmatch(word)):
        return Token(Token.NUMBER, parse_decimal(*m.groups()))
    if (m := _FRACTION.fullmatch(word)):
        return Token(Token.NUMBER, parse_fraction(*m.groups()))
    if _NUMERIC_PREFIX.match(word):
        raise AjisaiParseError(f"Malformed numeric literal `{word}`.", token=word)
    if word in ('true', 'false'):
        return Token(Token.BOOLEAN, word == 'true')
    if word.upper() == 'NIL':
        return NIL_TOKEN
    return Token(Token.SYMBOL, word.upper())


def _unescape(body: str) -> str:
    return re.sub(r'\\(.)', r'\1', body, flags=re.DOTALL)


def _flatten(node):
    if isinstance(node, lark.Tree):
        for child in node.children:
            yield from _flatten(child)
        return

    match node.type:
        case 'LSQB':
            yield VECTOR_START
        case 'RSQB':
            yield VECTOR_END
        case 'STRING':
            yield Token(Token.STRING, _unescape(node.value[1:-1]))
        case 'DESCRIPTION':
            yield Token(Token.DESCRIPTION, node.value[1:-1].strip())
        case 'WORD':
            try:
                yield classify_word(node.value)
            except AjisaiParseError as exc:
                exc.line, exc.column = node.line, node.column
                raise
        case _:
            raise NotImplementedError(f"Unexpected token `{node.type}` from parser.")


def _parse_error_from(exc: lark.exceptions.UnexpectedInput) -> AjisaiParseError:
    def attr(k): return getattr(exc, k, None)

    if isinstance(exc, lark.exceptions.UnexpectedCharacters):
        reason = _UNTERMINATED.get(exc.char, f"Unexpected character `{exc.char}`.")
        return AjisaiParseError(reason, line=attr('line'), column=attr('column'), token=exc.char)

    token = attr('token')
    token_type = getattr(token, 'type', '$END')
    if isinstance(exc, lark.exceptions.UnexpectedEOF) or token_type == '$END':
        return AjisaiParseError("Unterminated vector, missing `]`.", line=attr('line'), column=attr('column'), token='')
    if token_type == 'RSQB':
        return AjisaiParseError("Unmatched `]` without opening `[`.", line=attr('line'), column=attr('column'), token=']')
    return AjisaiParseError(str(exc), line=attr('line'), column=attr('column'), token=getattr(token, 'value', ''))


def tokenize(source: str) -> list:
    """Convert source text into a flat token list. Vector nesting is checked here, but resolved by the evaluator."""
    try:
        tree = _PARSER.parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        raise _parse_error_from(exc) from None
    return list(_flatten(tree))


def is_word_name(text: str) -> bool:
    """Check if the text names exactly one symbol, so it can be looked up after DEF."""
    try:
        tokens = tokenize(text)
    except AjisaiError:
        return False
    return len(tokens) == 1 and tokens[0].type == Token.SYMBOL


def format_parse_error_context(filename, line, column, token_value, source):
    lines = source.splitlines()
    if line is None or not lines:
        return f"\033[97m  File \"{filename}\"\033[0m"
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            width = max(1, len(token_value or ''))
            if column and 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
