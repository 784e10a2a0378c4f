## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from dataclasses import dataclass, field


class Cell:
    """Mutable box holding one binding's value, shared by every scope that captured it."""
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self):
        return f"Cell({self.value!r})"


@dataclass
class Scope:
    bindings: dict[str, Cell] = field(default_factory=dict)

    def put(self, name: str, value: Any) -> None:
        """Overwrite the bound cell in place if present, so all captures see it, otherwise bind a new cell."""
        if (cell := self.bindings.get(name)) is not None:
            cell.value = value
        else:
            self.bindings[name] = Cell(value)

    def has(self, name: str) -> bool:
        return name in self.bindings

    def get(self, name: str) -> Any | None:
        cell = self.bindings.get(name)
        return None if cell is None else cell.value

    def clone(self) -> 'Scope':
        # New map, same cells: names bound later diverge, existing names stay shared.
        return Scope(bindings=dict(self.bindings))

