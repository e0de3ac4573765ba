## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from ajisai.types import Symbol, Token
from ajisai.dictionary import Dictionary
from ajisai.errors import AjisaiDependencyError, AjisaiRedefineBuiltin, AjisaiDeleteBuiltin, AjisaiWordNotFound


def _sym(*names):
    return [Symbol.from_name(n) for n in names]


def _dictionary():
    d = Dictionary()
    for name in ('DUP', '*', '+'):
        d.add_builtin(name)
    return d


def test_define_stores_tokens_and_description():
    d = _dictionary()
    d.define('square', _sym('DUP', '*'), 'squares')
    word = d.lookup('SQUARE')
    assert word.tokens == [Token(Token.SYMBOL, 'DUP'), Token(Token.SYMBOL, '*')]
    assert word.description == 'squares'
    assert not word.is_builtin
    assert d.custom_words() == ['SQUARE']


def test_builtins_reference_creates_no_edges():
    d = _dictionary()
    d.define('SQUARE', _sym('DUP', '*'))
    assert d.dependents == {}


def test_dependency_blocks_delete_until_dependent_removed():
    d = _dictionary()
    d.define('SQUARE', _sym('DUP', '*'))
    d.define('DOUBLESQ', _sym('SQUARE', 'SQUARE'))
    assert d.get_dependents('square') == ['DOUBLESQ']
    assert d.is_protected('SQUARE')

    with pytest.raises(AjisaiDependencyError) as info:
        d.delete('SQUARE')
    assert info.value.word == 'SQUARE'
    assert info.value.dependents == ('DOUBLESQ',)

    d.delete('DOUBLESQ')
    assert d.get_dependents('SQUARE') == []
    d.delete('SQUARE')
    assert d.lookup('SQUARE') is None
    assert d.dependents == {}


def test_redefine_with_dependents_fails_like_delete():
    d = _dictionary()
    d.define('SQUARE', _sym('DUP', '*'))
    d.define('DOUBLESQ', _sym('SQUARE', 'SQUARE'))
    with pytest.raises(AjisaiDependencyError) as info:
        d.define('SQUARE', _sym('DUP', '+'))
    assert info.value.dependents == ('DOUBLESQ',)
    assert d.lookup('SQUARE').tokens[-1].value == '*'


def test_redefine_drops_stale_edges():
    d = _dictionary()
    d.define('A', _sym('DUP'))
    d.define('B', _sym('DUP'))
    d.define('USER', _sym('A'))
    assert d.get_dependents('A') == ['USER']

    d.define('USER', _sym('B'))
    assert d.get_dependents('A') == []
    assert d.get_dependents('B') == ['USER']
    d.delete('A')


def test_nested_quotation_references_count():
    d = _dictionary()
    d.define('INNER', _sym('DUP'))
    d.define('OUTER', [[Symbol.from_name('INNER')], Symbol.from_name('DUP')])
    assert d.get_dependents('INNER') == ['OUTER']


def test_self_reference_makes_no_edge():
    d = _dictionary()
    d.define('LOOPER', _sym('DUP'))
    d.define('LOOPER', _sym('LOOPER'))
    assert d.get_dependents('LOOPER') == []
    d.delete('LOOPER')


def test_forward_reference_gains_edge_once_defined():
    d = _dictionary()
    d.define('USER', _sym('HELPER'))
    assert d.lookup('USER').dependencies == frozenset()
    d.define('HELPER', _sym('DUP'))
    assert d.lookup('USER').dependencies == frozenset({'HELPER'})
    assert d.get_dependents('HELPER') == ['USER']
    with pytest.raises(AjisaiDependencyError):
        d.delete('HELPER')
    d.delete('USER')
    d.delete('HELPER')
    assert d.custom_words() == []


def test_mutually_recursive_words_pin_each_other():
    d = _dictionary()
    d.define('EVEN', _sym('ODD'))
    d.define('ODD', _sym('EVEN'))
    assert d.get_dependents('EVEN') == ['ODD']
    assert d.get_dependents('ODD') == ['EVEN']
    for name in ('EVEN', 'ODD'):
        with pytest.raises(AjisaiDependencyError):
            d.delete(name)


def test_builtins_cannot_be_redefined_or_deleted():
    d = _dictionary()
    with pytest.raises(AjisaiRedefineBuiltin) as info:
        d.define('dup', _sym('*'))
    assert info.value.kind == 'RedefineBuiltin'
    with pytest.raises(AjisaiDeleteBuiltin):
        d.delete('DUP')


def test_delete_unknown_word():
    with pytest.raises(AjisaiWordNotFound) as info:
        _dictionary().delete('nothing')
    assert info.value.word == 'NOTHING'
    assert 'NOTHING' in str(info.value)


def test_names_with_prefix():
    d = _dictionary()
    d.define('DOUBLE', _sym('DUP', '+'))
    assert d.names('D') == ['DOUBLE', 'DUP']
    assert d.names() == ['*', '+', 'DOUBLE', 'DUP']
