## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Syntax tree produced by the parser and walked by the interpreter.  Data only.
#

from enum import Enum
from dataclasses import dataclass


class Operation(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'

    EQUALS = '=='
    GREATER_THAN = '>'
    LESS_THAN = '<'
    GREATER_OR_EQUAL = '>='
    LESS_OR_EQUAL = '<='

    @property
    def is_arithmetic(self) -> bool:
        return self in (Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE)


## TERMS
@dataclass(frozen=True)
class Number:
    value: float

@dataclass(frozen=True)
class String:
    value: str

@dataclass(frozen=True)
class Boolean:
    value: bool

@dataclass(frozen=True)
class Nil:
    pass

@dataclass(frozen=True)
class Variable:
    name: str

@dataclass(frozen=True)
class TableField:
    key: 'str | Expression | None'    # field name, key expression, or None for positional
    value: 'Expression'

@dataclass(frozen=True)
class TableConstructor:
    fields: tuple[TableField, ...] = ()


## EXPRESSIONS
@dataclass(frozen=True)
class Binary:
    lhs: 'Expression'
    operation: Operation
    rhs: 'Expression'

@dataclass(frozen=True)
class Call:
    callee: 'Expression'
    arguments: tuple['Expression', ...] = ()

@dataclass(frozen=True)
class Dot:
    target: 'Expression'
    name: str

@dataclass(frozen=True)
class Index:
    target: 'Expression'
    key: 'Expression'

@dataclass(frozen=True)
class FunctionLiteral:
    parameters: tuple[str, ...]
    body: tuple['Statement', ...]


Term = Number | String | Boolean | Nil | Variable | TableConstructor
Expression = Term | Binary | Call | Dot | Index | FunctionLiteral


## STATEMENTS
@dataclass(frozen=True)
class Assignment:
    target: Expression
    value: Expression

@dataclass(frozen=True)
class Return:
    value: Expression

@dataclass(frozen=True)
class Local:
    name: str
    value: Expression

@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression

@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    parameters: tuple[str, ...]
    body: tuple['Statement', ...]

@dataclass(frozen=True)
class If:
    condition: Expression
    body: tuple['Statement', ...]
    elseifs: tuple[tuple[Expression, tuple['Statement', ...]], ...] = ()
    orelse: tuple['Statement', ...] | None = None

@dataclass(frozen=True)
class NumericFor:
    variable: str
    start: Expression
    limit: Expression
    step: Expression | None
    body: tuple['Statement', ...]


Statement = Assignment | Return | Local | ExpressionStatement | FunctionDeclaration | If | NumericFor
Program = list[Statement]
