## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from typing import Any, Callable

from . import syntax as S
from .types import Table, Closure, NativeFunction, nil, is_truthy, to_index
from .errors import LuaTypeError, InvalidIndex, InvalidCall, BadForInitialValue, BadForLimit, BadForStep
from .operators import binary, is_number
from .environment import Scope
from .formatting import format_statement
from .parser import parse


def _require_table(value) -> Table:
    if not isinstance(value, Table):
        raise InvalidIndex(value)
    return value


class Interpreter:
    """Tree-walking evaluator that owns one isolated global scope for its whole lifetime."""

    def __init__(self, verbosity: int = 0, stats: dict | None = None):
        self.global_scope = Scope()
        self.verbosity = verbosity
        self.stats = stats
        self.steps = 0
        self.depth = 0

    # Host interface ──────────────────────────────────────────────────────────────────────────
    def define(self, name: str, fn: Callable[[list], Any]) -> None:
        self.global_scope.put(name, NativeFunction(name, fn))

    def execute(self, source: str, filename: str | None = None):
        return self.run(parse(source, filename=filename))

    def run(self, program: S.Program):
        """Evaluate a parsed program in a fresh scope; returns the top-level `return` value or nil."""
        scope, first_step = Scope(), self.steps
        try:
            result = self.execute_block(scope, program)
        finally:
            if self.stats is not None:
                self.stats['steps'] = self.stats.get('steps', 0) + (self.steps - first_step)
        return nil if result is None else result

    def apply(self, function, arguments: list):
        """Call a script or native function with already evaluated arguments."""
        if isinstance(function, NativeFunction):
            return function(list(arguments))
        if not isinstance(function, Closure):
            raise InvalidCall(function)

        function_scope = function.capture.clone()
        # Missing arguments are nil, extra ones are dropped.
        for i, parameter in enumerate(function.parameters):
            function_scope.put(parameter, arguments[i] if i < len(arguments) else nil)

        self.depth += 1
        try:
            result = self.execute_block(function_scope, function.body)
        except LuaTypeError as exc:
            if exc.lua_function is None: exc.lua_function = function.name or '<anonymous>'
            raise
        finally:
            self.depth -= 1
        return nil if result is None else result

    def lookup(self, scope: Scope, name: str):
        if (value := scope.get(name)) is not None: return value
        if (value := self.global_scope.get(name)) is not None: return value
        return nil

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def execute_block(self, scope: Scope, body) -> Any | None:
        """Run statements in order; returns None on fall-through, or the value of a `return`."""
        for statement in body:
            if (result := self.execute_statement(scope, statement)) is not None:
                return result
        return None

    def execute_statement(self, scope: Scope, statement) -> Any | None:
        self.steps += 1
        if self.verbosity > 0:
            print(f"\033[90m{self.steps:>3} :\033[0m  {'  ' * self.depth}{format_statement(statement)}", file=sys.stderr)

        match statement:
            case S.Assignment(target, value):
                self.execute_assign(scope, target, value)
            case S.Local(name, value):
                scope.put(name, self.evaluate(scope, value))
            case S.ExpressionStatement(expression):
                self.evaluate(scope, expression)
            case S.Return(value):
                return self.evaluate(scope, value)
            case S.FunctionDeclaration(name, parameters, body):
                self.global_scope.put(name, Closure(parameters, body, scope.clone(), name))
            case S.If():
                return self.execute_if(scope, statement)
            case S.NumericFor():
                return self.execute_for(scope, statement)
            case _:
                raise NotImplementedError(f"Unexpected statement `{type(statement).__name__}` from parser.")
        return None

    def execute_assign(self, scope: Scope, target, value) -> None:
        value = self.evaluate(scope, value)
        match target:
            case S.Variable(name):
                (scope if scope.has(name) else self.global_scope).put(name, value)
            case S.Dot(table, name):
                _require_table(self.evaluate(scope, table)).set(name, value)
            case S.Index(table, key):
                table = _require_table(self.evaluate(scope, table))
                table.set(to_index(self.evaluate(scope, key)), value)
            case _:
                raise NotImplementedError(f"Unexpected assignment target `{type(target).__name__}` from parser.")

    def execute_if(self, scope: Scope, statement: S.If) -> Any | None:
        # Branches share the enclosing scope, a `local` inside one stays visible afterwards.
        for condition, body in ((statement.condition, statement.body), *statement.elseifs):
            if is_truthy(self.evaluate(scope, condition)):
                return self.execute_block(scope, body)
        if statement.orelse is not None:
            return self.execute_block(scope, statement.orelse)
        return None

    def execute_for(self, scope: Scope, statement: S.NumericFor) -> Any | None:
        start = self.evaluate(scope, statement.start)
        if not is_number(start): raise BadForInitialValue(start)
        limit = self.evaluate(scope, statement.limit)
        if not is_number(limit): raise BadForLimit(limit)
        step = 1.0 if statement.step is None else self.evaluate(scope, statement.step)
        if not is_number(step): raise BadForStep(step)

        loop_scope, current = scope.clone(), float(start)
        while current <= limit:
            loop_scope.put(statement.variable, current)
            if (result := self.execute_block(loop_scope, statement.body)) is not None:
                return result
            current += step
        return None

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def evaluate(self, scope: Scope, expression):
        match expression:
            case S.Number(value) | S.String(value) | S.Boolean(value):
                return value
            case S.Nil():
                return nil
            case S.Variable(name):
                return self.lookup(scope, name)
            case S.TableConstructor(fields):
                return self.construct_table(scope, fields)
            case S.Binary(lhs, operation, rhs):
                lhs = self.evaluate(scope, lhs)
                rhs = self.evaluate(scope, rhs)
                return binary(operation, lhs, rhs)
            case S.Call(callee, arguments):
                function = self.evaluate(scope, callee)
                if not isinstance(function, (Closure, NativeFunction)):
                    raise InvalidCall(function)
                return self.apply(function, [self.evaluate(scope, a) for a in arguments])
            case S.Dot(table, name):
                return _require_table(self.evaluate(scope, table)).get(name)
            case S.Index(table, key):
                table = _require_table(self.evaluate(scope, table))
                return table.get(to_index(self.evaluate(scope, key)))
            case S.FunctionLiteral(parameters, body):
                return Closure(parameters, body, scope.clone())
        raise NotImplementedError(f"Unexpected expression `{type(expression).__name__}` from parser.")

    def construct_table(self, scope: Scope, fields) -> Table:
        table, position = Table(), 1
        for entry in fields:
            match entry.key:
                case None:
                    # Only positional entries advance the counter.
                    key, position = position, position + 1
                case str():
                    key = entry.key
                case _:
                    key = to_index(self.evaluate(scope, entry.key))
            table.set(key, self.evaluate(scope, entry.value))
        return table
