import enum
from dataclasses import dataclass
from typing import ClassVar, Optional

from arithmetic.utils import PrintableEnum, compact, format_number


class ErrorKind(PrintableEnum):
    EMPTY_INPUT_PASSED = enum.auto()
    INVALID_CHARACTER = enum.auto()
    SYNTAX_ERROR = enum.auto()
    UNOPENED_PARENTHESIS = enum.auto()
    MISSING_CLOSING_PARENTHESIS = enum.auto()
    DIVIDE_BY_ZERO = enum.auto()
    INVALID_OPERATION = enum.auto()
    PARSE_NUMBER_ERROR = enum.auto()


class ParseError(Exception):
    """Base for every error an evaluation can end with. Each subclass is exactly one ErrorKind"""

    kind: ClassVar[ErrorKind]
    position: Optional[int] = None  # index into the whitespace-free input

    def render(self, code: str) -> str:
        if self.position is None:
            return str(self)
        code = compact(code)
        print_start_idx = max(0, self.position - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(code), self.position + 10)
        print_ellipsis_post = print_end_idx < len(code)
        return "\n".join(
            [
                str(self),
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.position - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class EvaluationError(ParseError):
    """Errors coming from numbers themselves rather than from the shape of the expression"""


@dataclass
class EmptyInputPassed(ParseError):
    kind = ErrorKind.EMPTY_INPUT_PASSED

    def __str__(self) -> str:
        return "Empty input passed"


@dataclass
class InvalidCharacter(ParseError):
    kind = ErrorKind.INVALID_CHARACTER

    char: str
    position: Optional[int] = None

    def __str__(self) -> str:
        return f"Invalid character: {self.char!r}"


@dataclass
class ExpressionSyntaxError(ParseError):
    kind = ErrorKind.SYNTAX_ERROR

    reason: str
    position: Optional[int] = None

    def __str__(self) -> str:
        return f"Syntax error: {self.reason}"


@dataclass
class UnopenedParenthesis(ParseError):
    kind = ErrorKind.UNOPENED_PARENTHESIS

    position: Optional[int] = None

    def __str__(self) -> str:
        return "A parenthesis hasn't been opened while a closing one exists"


@dataclass
class MissingClosingParenthesis(ParseError):
    kind = ErrorKind.MISSING_CLOSING_PARENTHESIS

    position: Optional[int] = None

    def __str__(self) -> str:
        return "Missing parenthesis closure"


@dataclass
class DivideByZero(EvaluationError):
    kind = ErrorKind.DIVIDE_BY_ZERO

    left: float
    right: float

    def __str__(self) -> str:
        return f"Division by zero: {format_number(self.left)} / {format_number(self.right)}"


@dataclass
class InvalidOperation(EvaluationError):
    kind = ErrorKind.INVALID_OPERATION

    left: float
    right: float
    op: str

    def __str__(self) -> str:
        return (
            f"Invalid operation: {format_number(self.left)} {self.op} {format_number(self.right)}"
            " resulted in NaN or infinity"
        )


@dataclass
class ParseNumberError(EvaluationError):
    kind = ErrorKind.PARSE_NUMBER_ERROR

    value: str
    position: Optional[int] = None

    def __str__(self) -> str:
        return f"Failed to parse number: {self.value!r}"
