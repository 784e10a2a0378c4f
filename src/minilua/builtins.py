## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import nil, type_name
from .formatting import format_value


def _first(arguments: list):
    return arguments[0] if arguments else nil


def load_builtins(interpreter, file=None):
    """Register the host-provided natives into the interpreter's global scope."""
    def lua_print(arguments: list):
        print(*(format_value(a) for a in arguments), sep='\t', file=file)
        return nil

    natives = {
        'print': lua_print,
        'type': lambda arguments: type_name(_first(arguments)),
        'tostring': lambda arguments: format_value(_first(arguments)),
    }
    for name, fn in natives.items():
        interpreter.define(name, fn)
    return interpreter
