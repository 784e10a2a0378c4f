## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from typing import Any, Callable
from dataclasses import dataclass, field

from .errors import InvalidIndex


class NilType:
    __slots__ = ()
    _nil_singleton = None

    def __new__(cls):
        # Only one instance is ever created, it's the one just below.
        if cls._nil_singleton is None:
            cls._nil_singleton = super().__new__(cls)
        return cls._nil_singleton

    def __repr__(self):
        return "nil"

    def __bool__(self):
        raise TypeError("Lua nil truth value is ambiguous; compare with `is nil` or use `is_truthy()`.")


# All checks for nil must be done by comparing to this.
nil = NilType()


# Table keys after normalization: `int` for integral numbers, `str` for names.
Index = int | str


class Table:
    """Shared mutable mapping from normalized Index to Value.  Aliases share the same store."""
    __slots__ = ('store',)

    def __init__(self):
        self.store: dict[Index, Any] = {}

    def get(self, key: Index):
        return self.store.get(key, nil)

    def set(self, key: Index, value) -> None:
        # Storing nil removes the entry, so missing and nil-valued keys read the same.
        if value is nil: self.store.pop(key, None)
        else: self.store[key] = value

    def items(self):
        return self.store.items()

    def __len__(self):
        return len(self.store)

    def __iter__(self):
        return iter(self.store)

    def __contains__(self, key):
        return key in self.store

    def __repr__(self):
        return f"Table({self.store!r})"


@dataclass
class Closure:
    parameters: tuple[str, ...]
    body: tuple                     # tuple[Statement, ...]
    capture: 'Scope'                # structural copy of the defining scope
    name: str | None = None         # declared name, None for function literals

    def __repr__(self):
        return f"<function {self.name or '?'}({', '.join(self.parameters)})>"


@dataclass(frozen=True)
class NativeFunction:
    name: str
    fn: Callable[[list], Any] = field(compare=False)

    def __call__(self, arguments: list):
        result = self.fn(arguments)
        return nil if result is None else result

    def __repr__(self):
        return f"<native function {self.name}>"


# All concrete Lua value types, `float` being the only number representation.
Value = NilType | float | str | bool | Table | Closure | NativeFunction


def type_name(value) -> str:
    match value:
        case NilType(): return 'nil'
        case bool(): return 'boolean'
        case float() | int(): return 'number'
        case str(): return 'string'
        case Table(): return 'table'
        case Closure() | NativeFunction(): return 'function'
    return type(value).__name__


def is_truthy(value) -> bool:
    return not (value is nil or value is False)


def number_key_name(n: float) -> str:
    """Decimal rendering used as the Name index of a non-integral number."""
    if math.isnan(n): return 'nan'
    if math.isinf(n): return 'inf' if n > 0 else '-inf'
    return repr(n)


def to_index(value) -> Index:
    """Normalize a runtime value into a table key, or raise `InvalidIndex` for unusable keys."""
    match value:
        case bool(): raise InvalidIndex(value)
        case float() | int():
            if math.isfinite(value) and value == math.trunc(value):
                return int(value)
            return number_key_name(float(value))
        case str(): return value
    raise InvalidIndex(value)
