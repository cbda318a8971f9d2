import logging
import math
from dataclasses import dataclass
from typing import Callable

from calculator.parser import BinaryOperation, BinaryOperator, Expression, Literal, parse
from calculator.tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str


def calculate(code: str) -> float:
    tokens = tokenize(code)
    expression = parse(tokens)
    result = evaluate_expression(expression)
    logger.debug("%r = %r", code, result)
    return result


def evaluate_expression(expression: Expression) -> float:
    """Post-order walk with an explicit stack, left operand before right

    Long chains like ``1 + 1 + ... + 1`` make trees deeper than the recursion limit.
    """
    results: list[float] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]
    while stack:
        node, operands_ready = stack.pop()
        if isinstance(node, Literal):
            results.append(node.value)
        elif isinstance(node, BinaryOperation):
            if not operands_ready:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            impl = binary_operation_impls.get(node.operator)
            if impl is None:
                raise CalcRuntimeError(f"Unexpected binary operator: {node.operator}")
            right_res = results.pop()
            left_res = results.pop()
            results.append(impl(left_res, right_res))
        else:
            raise CalcRuntimeError(f"Unexpected expression type: {node}")
    return results.pop()


# Python floats raise where IEEE-754 produces inf or nan, these restore the IEEE results


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1


def _div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except ValueError:
        if a == 0:
            # zero base with a negative exponent
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf


binary_operation_impls: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: _div,
    BinaryOperator.POW: _pow,
}
