## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction as F

import pytest

import ajisai.api as A
from ajisai.runtime import Engine
from ajisai.config import EngineConfig


def test_run_string_add():
    A.reset()
    assert A.run("2 3 +") == [F(5)]


def test_api_reexports_errors():
    A.reset()
    with pytest.raises(A.AjisaiError):
        A.execute("DUP")
    with pytest.raises(A.AjisaiStackUnderflow):
        A.execute("DROP")


def test_engines_never_share_state():
    first, second = Engine(), Engine()
    first.execute('[ 1 ] "ONE" DEF 5')
    assert second.get_custom_words() == []
    assert second.get_stack() == []


def test_reset_discards_everything():
    engine = Engine()
    engine.execute('[ 1 ] "ONE" DEF 5 >R 7 .')
    engine.reset()
    assert engine.get_stack() == []
    assert engine.get_register() is None
    assert engine.get_custom_words() == []
    assert engine.drain_output() == ""


def test_custom_words_info():
    engine = Engine()
    engine.execute('[ DUP * ] "SQUARE" ( squares ) DEF  [ SQUARE SQUARE ] "QUAD" DEF')
    assert engine.get_custom_words() == ["QUAD", "SQUARE"]
    assert engine.get_custom_words_info() == [("QUAD", None, False), ("SQUARE", "squares", True)]


def test_dependencies_and_delete_for_host_tools():
    engine = Engine()
    engine.execute('[ DUP * ] "SQUARE" DEF  [ SQUARE SQUARE ] "QUAD" DEF')
    assert engine.get_dependencies("square") == ["QUAD"]
    with pytest.raises(A.AjisaiDependencyError):
        engine.delete_word("SQUARE")
    engine.delete_word("quad")
    assert engine.get_dependencies("SQUARE") == []
    with pytest.raises(A.AjisaiWordNotFound):
        engine.get_dependencies("QUAD")


def test_error_carries_stack_snapshot():
    engine = Engine()
    with pytest.raises(A.AjisaiIndexError) as info:
        engine.execute("1 [ ] HEAD")
    assert info.value.stack == [F(1), []]
    assert info.value.word == "HEAD"


def test_list_words_includes_builtins():
    names = Engine().list_words()
    assert {"+", "DUP", "DEF", "DO", "WORDS"} <= set(names)


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("AJISAI_MAX_ITERATIONS", "25")
    monkeypatch.setenv("AJISAI_MAX_DEPTH", "40")
    config = EngineConfig.from_env()
    assert config == EngineConfig(max_iterations=25, max_depth=40)

    monkeypatch.delenv("AJISAI_MAX_DEPTH")
    assert EngineConfig.from_env().max_depth == EngineConfig().max_depth
    assert Engine().config.max_iterations == 25


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        EngineConfig().max_depth = 3
