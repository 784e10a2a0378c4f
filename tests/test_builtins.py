## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from minilua.types import nil, NativeFunction
from minilua.builtins import load_builtins
from minilua.interpreter import Interpreter


@pytest.fixture
def lua():
    return load_builtins(Interpreter())


def test_builtins_are_native_globals(lua):
    for name in ('print', 'type', 'tostring'):
        assert isinstance(lua.global_scope.get(name), NativeFunction)


def test_print_joins_with_tabs(lua, capsys):
    lua.execute('print(1, "a", nil, true, 2.5)')
    assert capsys.readouterr().out == "1\ta\tnil\ttrue\t2.5\n"


def test_print_without_arguments_prints_empty_line_and_returns_nil(lua, capsys):
    assert lua.execute("return print()") is nil
    assert capsys.readouterr().out == "\n"


def test_print_to_custom_file():
    out = io.StringIO()
    lua = load_builtins(Interpreter(), file=out)
    lua.execute("for i = 1, 3 do print(i) end")
    assert out.getvalue() == "1\n2\n3\n"


@pytest.mark.parametrize("source, expected", [
    ("return type(nil)", "nil"),
    ("return type()", "nil"),
    ("return type(true)", "boolean"),
    ("return type(1)", "number"),
    ("return type('s')", "string"),
    ("return type({})", "table"),
    ("return type(print)", "function"),
    ("return type(function() end)", "function"),
])
def test_type(lua, source, expected):
    assert lua.execute(source) == expected


@pytest.mark.parametrize("source, expected", [
    ("return tostring(3)", "3"),
    ("return tostring(1 / 4)", "0.25"),
    ("return tostring(nil)", "nil"),
    ("return tostring(false)", "false"),
    ("return tostring('x')", "x"),
])
def test_tostring(lua, source, expected):
    assert lua.execute(source) == expected


def test_tostring_of_reference_values(lua):
    assert lua.execute("return tostring({})").startswith("table: 0x")
    assert lua.execute("return tostring(print)").startswith("function: 0x")


def test_builtins_can_be_shadowed_per_interpreter(lua):
    lua.execute("print = 1")
    assert lua.execute("return print") == 1.0
    assert isinstance(load_builtins(Interpreter()).global_scope.get('print'), NativeFunction)
