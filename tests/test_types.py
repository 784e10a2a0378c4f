## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import math

import pytest

from minilua.types import NilType, nil, Table, Closure, NativeFunction, type_name, is_truthy, to_index
from minilua.environment import Scope
from minilua.errors import InvalidIndex


def test_nil_is_a_singleton():
    assert NilType() is nil
    assert repr(nil) == "nil"


def test_nil_truth_value_is_ambiguous():
    with pytest.raises(TypeError):
        bool(nil)


@pytest.mark.parametrize("value, expected", [
    (nil, False), (False, False),
    (True, True), (0.0, True), ("", True), (Table(), True),
])
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


@pytest.mark.parametrize("value, name", [
    (nil, 'nil'), (True, 'boolean'), (1.5, 'number'), ("s", 'string'), (Table(), 'table'),
    (Closure((), (), Scope()), 'function'), (NativeFunction('f', lambda args: nil), 'function'),
])
def test_type_name(value, name):
    assert type_name(value) == name


@pytest.mark.parametrize("value, index", [
    (1.0, 1),
    (-3.0, -3),
    (-0.0, 0),
    (1e20, 10**20),
    (1.5, "1.5"),
    (1e-7, "1e-07"),
    (math.inf, "inf"),
    (-math.inf, "-inf"),
    (math.nan, "nan"),
    ("1", "1"),
    ("name", "name"),
])
def test_index_normalization(value, index):
    result = to_index(value)
    assert result == index
    assert type(result) is type(index)


@pytest.mark.parametrize("value", [nil, True, False, Table(), NativeFunction('f', lambda args: nil)])
def test_index_normalization_rejects_other_values(value):
    with pytest.raises(InvalidIndex) as exc:
        to_index(value)
    assert exc.value.value is value


def test_table_number_and_name_keys_are_distinct():
    t = Table()
    t.set(to_index(1.0), "number")
    t.set(to_index("1"), "name")
    assert t.get(1) == "number"
    assert t.get("1") == "name"
    assert len(t) == 2


def test_table_missing_key_and_nil_store():
    t = Table()
    t.set('a', 1.0)
    assert t.get('missing') is nil
    t.set('a', nil)
    assert 'a' not in t
    assert len(t) == 0


def test_tables_alias_share_store():
    a = Table()
    b = a
    b.set('x', 1.0)
    assert a.get('x') == 1.0


def test_native_function_wraps_python_callable():
    native = NativeFunction('double', lambda args: args[0] * 2)
    assert native([2.0]) == 4.0
    assert NativeFunction('none', lambda args: None)([]) is nil
    assert repr(native) == "<native function double>"
