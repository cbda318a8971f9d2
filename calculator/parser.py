"""Precedence climbing parser (Richards & Whitby-Strevens)

See https://en.wikipedia.org/wiki/Operator-precedence_parser#Precedence_climbing_method

Every operator is left-associative, including ``^``. Note that ``+`` and ``-``
(and likewise ``*`` and ``/``) have distinct precedences; values are the same
as with the conventional table, only the tree shapes differ.
"""

import enum
import logging
from dataclasses import dataclass

from calculator.tokenizer import Token, TokenType, untokenize
from calculator.utils import PrintableEnum, render_error_pointer

logger = logging.getLogger(__name__)


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed = untokenize(self.tokens[: self.error_token_idx])
        pointer_idx = len(parsed) + 1 if parsed else 0
        return render_error_pointer(f"Parser error: {self.errmsg}", untokenize(self.tokens), pointer_idx)


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()

    @property
    def symbol(self) -> str:
        return {
            BinaryOperator.ADD: "+",
            BinaryOperator.SUB: "-",
            BinaryOperator.MUL: "*",
            BinaryOperator.DIV: "/",
            BinaryOperator.POW: "^",
        }[self]


@dataclass(frozen=True)
class Literal:
    value: float

    def __str__(self) -> str:
        return f"{self.value:g}"


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"

    def __str__(self) -> str:
        return render_expression(self)


Expression = Literal | BinaryOperation


def render_expression(expression: Expression) -> str:
    """Fully parenthesised form, built without recursion so long chains render too"""
    parts: list[str] = []
    stack: list[Expression | str] = [expression]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Literal):
            parts.append(str(node))
        else:
            stack.extend([")", node.right, f" {node.operator.symbol} ", node.left, "("])
    return "".join(parts)


TOKEN_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.CARET: BinaryOperator.POW,
}


def get_op_precedence(op: BinaryOperator) -> int:
    return [
        BinaryOperator.ADD,
        BinaryOperator.SUB,
        BinaryOperator.MUL,
        BinaryOperator.DIV,
        BinaryOperator.POW,
    ].index(op)


def get_token_precedence(token: Token) -> int:
    """Operator precedence, -1 for anything that can't continue an expression"""
    operator = TOKEN_OPERATORS.get(token.type)
    if operator is None:
        return -1
    return get_op_precedence(operator)


def parse(tokens: list[Token]) -> Expression:
    if not tokens or tokens[-1].type is not TokenType.EXPR_END:
        tokens = tokens + [Token(type=TokenType.EXPR_END, lexeme="")]
    try:
        lhs, i = _consume_value(tokens, 0)
        expression, i = _consume_expression(tokens, i, lhs, min_precedence=0)
    except RecursionError:
        # brackets nest one level of recursion each
        raise ParserError("Expression nested too deeply", tokens=tokens, error_token_idx=0)
    if tokens[i].type is not TokenType.EXPR_END:
        raise ParserError(f"Unexpected token {tokens[i].type}", tokens=tokens, error_token_idx=i)
    logger.debug("Parsed %s", expression)
    return expression


def _consume_expression(tokens: list[Token], i: int, lhs: Expression, min_precedence: int) -> tuple[Expression, int]:
    while get_token_precedence(tokens[i]) >= min_precedence:
        operator = TOKEN_OPERATORS[tokens[i].type]
        op_precedence = get_op_precedence(operator)
        rhs, i = _consume_value(tokens, i + 1)
        while get_token_precedence(tokens[i]) > op_precedence:
            rhs, i = _consume_expression(tokens, i, rhs, min_precedence=op_precedence + 1)
        lhs = BinaryOperation(operator=operator, left=lhs, right=rhs)
    return lhs, i


def _consume_value(tokens: list[Token], i: int) -> tuple[Expression, int]:
    first = tokens[i]
    if first.type is TokenType.NUMBER:
        return Literal(first.value), i + 1
    elif first.type is TokenType.MINUS:
        # unary minus only applies directly to a number
        if tokens[i + 1].type is TokenType.NUMBER:
            return Literal(-tokens[i + 1].value), i + 2
        raise ParserError(
            f"Number expected after unary minus, found {tokens[i + 1].type}", tokens=tokens, error_token_idx=i + 1
        )
    elif first.type is TokenType.BRACKET_OPEN:
        lhs, j = _consume_value(tokens, i + 1)
        inner, j = _consume_expression(tokens, j, lhs, min_precedence=0)
        if tokens[j].type is not TokenType.BRACKET_CLOSE:
            raise ParserError(f"Unclosed bracket, found {tokens[j].type}", tokens=tokens, error_token_idx=j)
        return inner, j + 1
    elif first.type is TokenType.EXPR_END:
        raise ParserError("Unterminated expression, operand expected", tokens=tokens, error_token_idx=i)
    else:
        raise ParserError(f"Operand expected, found {first.type}", tokens=tokens, error_token_idx=i)
