import logging
import math
import operator
from typing import Callable

from arithmetic.errors import DivideByZero, InvalidOperation
from arithmetic.tokenizer import TokenType
from arithmetic.utils import PrintableEnum

logger = logging.getLogger(__name__)


class BinaryOperator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def symbol(self) -> str:
        return self.value


TOKEN_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}

BinaryOperationImpl = Callable[[float, float], float]

binary_operation_impls: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: operator.truediv,
}


def apply_operator(op: BinaryOperator, left: float, right: float) -> float:
    """One checked arithmetic step.

    Division by exactly zero (either sign) is refused before dividing. Any step whose result is
    NaN or infinite fails with InvalidOperation, which also catches overflow of finite operands.
    """
    if op is BinaryOperator.DIV and right == 0.0:
        raise DivideByZero(left, right)
    result = binary_operation_impls[op](left, right)
    if math.isnan(result) or math.isinf(result):
        raise InvalidOperation(left, right, op.symbol)
    logger.debug("%r %s %r = %r", left, op.symbol, right, result)
    return result
