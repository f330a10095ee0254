import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from arithmetic.errors import (
    EmptyInputPassed,
    ExpressionSyntaxError,
    InvalidCharacter,
    MissingClosingParenthesis,
    ParseNumberError,
    UnopenedParenthesis,
)
from arithmetic.utils import PrintableEnum, compact

logger = logging.getLogger(__name__)


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH})


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    value: Optional[float] = None
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


TokenStream = tuple[Token, ...]


def _is_valid_in_number(s: str) -> bool:
    return s in "0123456789."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

# a minus right after one of these (or at the very start) belongs to the number that follows
UNARY_MINUS_PRECEDERS = "(+-*/"


def tokenize(code: str) -> TokenStream:
    code = compact(code)
    if not code:
        raise EmptyInputPassed()

    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _is_valid_in_number(code[i]):
            value, number_end_idx = _read_number(code, i)
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx], value=value, position=i))
            i = number_end_idx
        elif code[i] == "-" and (i == 0 or code[i - 1] in UNARY_MINUS_PRECEDERS):
            if i + 1 >= len(code) or not _is_valid_in_number(code[i + 1]):
                raise ExpressionSyntaxError("Invalid use of minus sign", position=i)
            value, number_end_idx = _read_number(code, i + 1)
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx], value=-value, position=i))
            i = number_end_idx
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i], position=i))
            i += 1
        else:
            raise InvalidCharacter(code[i], position=i)

    _validate(tokens)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Tokenized %r into %s", code, " ".join(str(t) for t in tokens))
    return tuple(tokens)


def _read_number(code: str, start_idx: int) -> tuple[float, int]:
    has_decimal_point = False
    end_idx = start_idx
    while end_idx < len(code) and _is_valid_in_number(code[end_idx]):
        if code[end_idx] == ".":
            if has_decimal_point:
                raise ExpressionSyntaxError("Multiple decimal points in a number", position=end_idx)
            has_decimal_point = True
        end_idx += 1

    number = code[start_idx:end_idx]
    try:
        value = float(number)
    except ValueError:
        raise ParseNumberError(number, position=start_idx) from None
    if math.isinf(value):
        # too many digits to fit into a double
        raise ParseNumberError(number, position=start_idx)
    return value, end_idx


def _validate(tokens: Sequence[Token]) -> None:
    open_bracket_positions: list[int] = []
    for token in tokens:
        if token.type is TokenType.BRACKET_OPEN:
            open_bracket_positions.append(token.position)
        elif token.type is TokenType.BRACKET_CLOSE:
            if not open_bracket_positions:
                raise UnopenedParenthesis(position=token.position)
            open_bracket_positions.pop()
    if open_bracket_positions:
        # the outermost bracket that never got closed
        raise MissingClosingParenthesis(position=open_bracket_positions[0])

    for i, token in enumerate(tokens):
        prev_type = tokens[i - 1].type if i > 0 else None
        next_type = tokens[i + 1].type if i + 1 < len(tokens) else None

        if token.type in OPERATORS:
            if prev_type is None:
                raise ExpressionSyntaxError("Expression starts with an operator", position=token.position)
            if next_type is None:
                raise ExpressionSyntaxError("Expression ends with an operator", position=token.position)
            if next_type in OPERATORS:
                raise ExpressionSyntaxError("Two operators in a row", position=tokens[i + 1].position)
            if next_type is TokenType.BRACKET_CLOSE:
                raise ExpressionSyntaxError(
                    "Operator followed by closing parenthesis", position=tokens[i + 1].position
                )
        elif token.type is TokenType.BRACKET_OPEN:
            if next_type in OPERATORS:
                raise ExpressionSyntaxError(
                    "Open parenthesis followed by an operator", position=tokens[i + 1].position
                )
            if next_type is TokenType.BRACKET_CLOSE:
                raise ExpressionSyntaxError("Empty parentheses", position=token.position)
        elif token.type is TokenType.BRACKET_CLOSE:
            if prev_type in OPERATORS:
                raise ExpressionSyntaxError("Closing parenthesis preceded by an operator", position=token.position)
            if prev_type is TokenType.BRACKET_OPEN:
                raise ExpressionSyntaxError("Empty parentheses", position=tokens[i - 1].position)
            if next_type is TokenType.NUMBER:
                raise ExpressionSyntaxError(
                    "Closing parenthesis followed by a number (implicit multiplication)",
                    position=tokens[i + 1].position,
                )
        elif token.type is TokenType.NUMBER:
            if next_type is TokenType.BRACKET_OPEN:
                raise ExpressionSyntaxError(
                    "Number followed by opening parenthesis (implicit multiplication)",
                    position=tokens[i + 1].position,
                )


def untokenize(tokens: Sequence[Token]) -> str:
    return "".join(t.lexeme for t in tokens)
