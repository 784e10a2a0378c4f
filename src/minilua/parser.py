## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import functools

import lark
from . import syntax as S
from .errors import LuaParseError, LuaIncompleteParse


GRAMMAR = r"""start: block

block: statement* return_stmt?

?statement: local_stmt
          | function_stmt
          | if_stmt
          | for_stmt
          | assign_stmt
          | expr_stmt
          | ";" -> empty

return_stmt: "return" [expr] ";"?
local_stmt: "local" NAME ["=" expr]
function_stmt: "function" NAME "(" [params] ")" block "end"
if_stmt: "if" expr "then" block elseif_clause* [else_clause] "end"
elseif_clause: "elseif" expr "then" block
else_clause: "else" block
for_stmt: "for" NAME "=" expr "," expr ["," expr] "do" block "end"
assign_stmt: expr "=" expr
expr_stmt: expr
params: NAME ("," NAME)*

?expr: sum
     | expr compare_op sum -> binary
?sum: product
    | sum add_op product -> binary
?product: unary
        | product mul_op unary -> binary
?unary: postfix
      | "-" unary -> negate
?postfix: atom
        | postfix "." NAME -> dot
        | postfix "[" expr "]" -> index
        | postfix "(" [arguments] ")" -> call
arguments: expr ("," expr)*

?atom: NUMBER -> number
     | STRING -> string
     | "true" -> boolean_true
     | "false" -> boolean_false
     | "nil" -> nil
     | NAME -> variable
     | table
     | "function" "(" [params] ")" block "end" -> function_literal
     | "(" expr ")"

table: "{" (field (("," | ";") field)* ("," | ";")?)? "}"
field: NAME "=" expr -> named_field
     | "[" expr "]" "=" expr -> keyed_field
     | expr -> positional_field

!compare_op: "==" | "<=" | ">=" | "<" | ">"
!add_op: "+" | "-"
!mul_op: "*" | "/"

// COMMENTS
LONG_COMMENT.3: /--\[\[.*?\]\]/s
COMMENT.2: /--[^\r\n]*/

// TOKENS
NUMBER: /0[xX][0-9a-fA-F]+|(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?/
STRING: /"(?:[^"\\\r\n]|\\.)*"|'(?:[^'\\\r\n]|\\.)*'/
NAME: /[A-Za-z_][A-Za-z0-9_]*/

// WHITESPACE
%import common.WS
%ignore WS
%ignore LONG_COMMENT
%ignore COMMENT
"""


_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', 'a': '\a', 'b': '\b', 'f': '\f', 'v': '\v',
            '\\': '\\', '"': '"', "'": "'", '\n': '\n'}
_ESCAPE_RE = re.compile(r'\\(\d{1,3}|.)', re.S)


def unescape_string(literal: str) -> str:
    """Strip the quotes of a string literal and decode its backslash escapes."""
    def _replace(match):
        code = match.group(1)
        if code.isdigit(): return chr(int(code))
        return _ESCAPES.get(code, '\\' + code)
    return _ESCAPE_RE.sub(_replace, literal[1:-1])


def parse_number(text: str) -> float:
    if text[:2].lower() == '0x': return float(int(text, 16))
    return float(text)


class LuaTransformer(lark.Transformer):
    """Converts the lark parse tree into `syntax` dataclasses."""

    def start(self, children): return list(children[0])
    def block(self, children): return tuple(s for s in children if s is not None)
    def empty(self, _): return None

    ## Statements
    def return_stmt(self, children):
        [value] = children
        return S.Return(S.Nil() if value is None else value)

    def local_stmt(self, children):
        name, value = children
        return S.Local(str(name), S.Nil() if value is None else value)

    def function_stmt(self, children):
        name, params, body = children
        return S.FunctionDeclaration(str(name), params or (), body)

    def if_stmt(self, children):
        condition, body, *rest = children
        *elseifs, orelse = rest
        return S.If(condition, body, tuple(elseifs), orelse)

    def elseif_clause(self, children): return (children[0], children[1])
    def else_clause(self, children): return children[0]

    def for_stmt(self, children):
        name, start, limit, step, body = children
        return S.NumericFor(str(name), start, limit, step, body)

    @lark.v_args(meta=True)
    def assign_stmt(self, meta, children):
        target, value = children
        if not isinstance(target, (S.Variable, S.Dot, S.Index)):
            line, column = getattr(meta, 'line', None), getattr(meta, 'column', None)
            raise LuaParseError(f"Cannot assign to `{type(target).__name__}` expression.", line=line, column=column, token='=')
        return S.Assignment(target, value)

    def expr_stmt(self, children): return S.ExpressionStatement(children[0])
    def params(self, children): return tuple(str(t) for t in children)

    ## Expressions
    def binary(self, children):
        lhs, op, rhs = children
        return S.Binary(lhs, op, rhs)

    def compare_op(self, children): return S.Operation(children[0].value)
    def add_op(self, children): return S.Operation(children[0].value)
    def mul_op(self, children): return S.Operation(children[0].value)

    def negate(self, children):
        [operand] = children
        if isinstance(operand, S.Number): return S.Number(-operand.value)
        return S.Binary(S.Number(-1.0), S.Operation.MULTIPLY, operand)

    def dot(self, children): return S.Dot(children[0], str(children[1]))
    def index(self, children): return S.Index(children[0], children[1])

    def call(self, children):
        callee, arguments = children
        return S.Call(callee, arguments or ())

    def arguments(self, children): return tuple(children)

    def function_literal(self, children):
        params, body = children
        return S.FunctionLiteral(params or (), body)

    ## Terms
    def number(self, children): return S.Number(parse_number(children[0].value))
    def string(self, children): return S.String(unescape_string(children[0].value))
    def boolean_true(self, _): return S.Boolean(True)
    def boolean_false(self, _): return S.Boolean(False)
    def nil(self, _): return S.Nil()
    def variable(self, children): return S.Variable(str(children[0]))

    def table(self, children): return S.TableConstructor(tuple(f for f in children if f is not None))
    def named_field(self, children): return S.TableField(str(children[0]), children[1])
    def keyed_field(self, children): return S.TableField(children[0], children[1])
    def positional_field(self, children): return S.TableField(None, children[0])


@functools.cache
def _lark_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="basic", propagate_positions=True)


def parse(source: str, filename=None) -> S.Program:
    try:
        tree = _lark_parser().parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        if isinstance(exc, lark.exceptions.UnexpectedCharacters):
            token_val = attr('char') or ''
            error_class = LuaParseError
        else:
            token_val = getattr(token, 'value', '') if (token := attr('token')) is not None else ''
            error_class = LuaIncompleteParse if token_val == '' else LuaParseError
        raise error_class(str(exc), filename=filename, line=attr('line'), column=attr('column'), token=token_val) from None

    try:
        return LuaTransformer().transform(tree)
    except lark.exceptions.VisitError as exc:
        if isinstance(exc.orig_exc, LuaParseError):
            exc.orig_exc.filename = filename
            raise exc.orig_exc from None
        raise


def format_parse_error_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source else open(filename, 'r').readlines()
    if not lines: return ''
    line = min(max(line or len(lines), 1), len(lines))
    column = column or 0
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                width = max(len(token_value or ''), 1)
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
