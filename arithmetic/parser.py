import logging
import sys
from typing import Sequence

from arithmetic.errors import ExpressionSyntaxError, MissingClosingParenthesis
from arithmetic.runtime import TOKEN_OPERATORS, apply_operator
from arithmetic.tokenizer import Token, TokenType, untokenize

logger = logging.getLogger(__name__)

ADD_SUB_TOKENS = frozenset({TokenType.PLUS, TokenType.MINUS})
MUL_DIV_TOKENS = frozenset({TokenType.STAR, TokenType.SLASH})

# _consume_add_sub -> _consume_mul_div -> _consume_primary for every bracket level
FRAMES_PER_BRACKET = 3
# room left for whoever is calling parse
RESERVED_FRAMES = 1000


def parse(tokens: Sequence[Token]) -> float:
    """Recursive descent over the token stream, evaluating while it goes.

    Every _consume_* function takes the cursor position and returns the value it has computed
    together with the position right after the last token it used; the cursor never moves back.
    Recursion goes one bracket level at a time, so the interpreter's recursion limit is raised
    (never lowered) to fit the deepest nesting in the stream.
    """
    _make_room_for_nesting(_bracket_depth(tokens))
    try:
        result, i = _consume_add_sub(tokens, 0)
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply") from None
    if i < len(tokens):
        raise ExpressionSyntaxError("Unexpected tokens at the end of expression", position=tokens[i].position)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Evaluated %r to %r", untokenize(tokens), result)
    return result


def _bracket_depth(tokens: Sequence[Token]) -> int:
    depth = max_depth = 0
    for token in tokens:
        if token.type is TokenType.BRACKET_OPEN:
            depth += 1
            max_depth = max(max_depth, depth)
        elif token.type is TokenType.BRACKET_CLOSE:
            depth -= 1
    return max_depth


def _make_room_for_nesting(depth: int) -> None:
    required_limit = depth * FRAMES_PER_BRACKET + RESERVED_FRAMES
    if sys.getrecursionlimit() < required_limit:
        logger.debug("Raising recursion limit to %d for %d nested brackets", required_limit, depth)
        sys.setrecursionlimit(required_limit)


def _consume_add_sub(tokens: Sequence[Token], i: int) -> tuple[float, int]:
    left, i = _consume_mul_div(tokens, i)
    while i < len(tokens) and tokens[i].type in ADD_SUB_TOKENS:
        operator = TOKEN_OPERATORS[tokens[i].type]
        right, i = _consume_mul_div(tokens, i + 1)
        left = apply_operator(operator, left, right)
    return left, i


def _consume_mul_div(tokens: Sequence[Token], i: int) -> tuple[float, int]:
    left, i = _consume_primary(tokens, i)
    while i < len(tokens) and tokens[i].type in MUL_DIV_TOKENS:
        operator = TOKEN_OPERATORS[tokens[i].type]
        right, i = _consume_primary(tokens, i + 1)
        left = apply_operator(operator, left, right)
    return left, i


def _consume_primary(tokens: Sequence[Token], i: int) -> tuple[float, int]:
    if i >= len(tokens):
        raise ExpressionSyntaxError("Unexpected end of input", position=_end_position(tokens))
    first = tokens[i]
    if first.type is TokenType.NUMBER:
        if first.value is None:
            raise ExpressionSyntaxError(f"Number token without a value: {first.lexeme!r}", position=first.position)
        return first.value, i + 1
    elif first.type is TokenType.BRACKET_OPEN:
        value, i = _consume_add_sub(tokens, i + 1)
        if i >= len(tokens) or tokens[i].type is not TokenType.BRACKET_CLOSE:
            raise MissingClosingParenthesis(position=first.position)
        return value, i + 1
    else:
        raise ExpressionSyntaxError(
            f"Expected a number or opening parenthesis, found {first.type}", position=first.position
        )


def _end_position(tokens: Sequence[Token]) -> int:
    if not tokens:
        return 0
    return tokens[-1].position + len(tokens[-1].lexeme)
