## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class LuaError(Exception):
    def __init__(self, message: str = ""):
        """Base class for all Lua-raised errors."""
        super().__init__(message)

class LuaParseError(LuaError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class LuaIncompleteParse(LuaParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token)


class LuaTypeError(LuaError, TypeError):
    """Runtime errors caused by a value of the wrong type, carried in `.value`."""
    template = "attempt to use a {} value"

    def __init__(self, value, *, lua_function: str | None = None):
        from .types import type_name
        super().__init__(self.template.format(type_name(value)))
        self.value = value
        self.lua_function = lua_function

class InvalidIndex(LuaTypeError):
    template = "attempt to index a {} value"

class InvalidCall(LuaTypeError):
    template = "attempt to call a {} value"

class InvalidArithmetic(LuaTypeError):
    template = "attempt to perform arithmetic on a {} value"


class LuaForError(LuaTypeError):
    """A numeric `for` clause did not evaluate to a number."""

class BadForInitialValue(LuaForError):
    template = "'for' initial value must be a number, got {}"

class BadForLimit(LuaForError):
    template = "'for' limit must be a number, got {}"

class BadForStep(LuaForError):
    template = "'for' step must be a number, got {}"
