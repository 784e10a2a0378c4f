## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from . import syntax as S
from .types import Table, Closure, NativeFunction, NilType


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_number(n: float) -> str:
    # Same rendering as the reference `%.14g`, so 3.0 prints as `3`.
    return f"{n:.14g}"


def format_value(value) -> str:
    """Plain `tostring` rendering, as used by `print`."""
    match value:
        case NilType(): return 'nil'
        case bool(): return str(value).lower()
        case float() | int(): return format_number(value)
        case str(): return value
        case Table(): return f'table: 0x{id(value):08x}'
        case Closure() | NativeFunction(): return f'function: 0x{id(value):08x}'
    return str(value)


def _format_key(key) -> str:
    if isinstance(key, str) and key.isidentifier(): return key
    return '[' + (str(key) if isinstance(key, int) else '"' + key.replace('"', '\\"') + '"') + ']'

def _format_item(it, width=None, indent=0, seen=None):
    if isinstance(it, Table):
        seen = set() if seen is None else seen
        if id(it) in seen: return '{…}'
        seen = seen | {id(it)}

        # Sequence part first, in order, then the remaining keys.
        position, formatted_items = 1, []
        while position in it:
            formatted_items.append(_format_item(it.get(position), width, indent + 4, seen))
            position += 1
        for key, value in it.items():
            if isinstance(key, int) and 1 <= key < position: continue
            formatted_items.append(f"{_format_key(key)} = {_format_item(value, width, indent + 4, seen)}")

        single_line = '{' + ', '.join(formatted_items) + '}'
        # If it fits on one line, use single line format.
        if width is None or len(single_line) + indent <= width: return single_line
        # Otherwise use multi-line format...
        result = '{   '
        for i, item in enumerate(formatted_items):
            if i > 0: result += ',\n' + (' ' * (indent + 4))
            result += item
        result += '\n' + (' ' * indent) + '}'
        return result
    if isinstance(it, str):
        return '"' + it.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n') + '"'
    if isinstance(it, Closure):
        return f'function {it.name}' if it.name else 'function'
    if isinstance(it, NativeFunction):
        return f'builtin {it.name}'
    return format_value(it)

def format_item(it, width=None, indent=0):
    """Readable rendering for the REPL, with table contents and quoted strings."""
    return _format_item(it, width=width, indent=indent)


def format_statement(statement) -> str:
    """One-line summary of a statement for execution traces."""
    match statement:
        case S.Local(name, _): return f"local {name}"
        case S.Assignment(S.Variable(name), _): return f"{name} = …"
        case S.Assignment(S.Dot(_, name), _): return f"….{name} = …"
        case S.Assignment(): return "…[…] = …"
        case S.FunctionDeclaration(name, parameters, _): return f"function {name}({', '.join(parameters)})"
        case S.NumericFor(variable=variable): return f"for {variable} = …"
        case S.If(_, _, elseifs, orelse): return f"if … ({1 + len(elseifs) + (orelse is not None)} branches)"
        case S.Return(): return "return …"
        case S.ExpressionStatement(S.Call(S.Variable(name), arguments)): return f"{name}({len(arguments)} args)"
        case S.ExpressionStatement(): return "expression"
    return type(statement).__name__
