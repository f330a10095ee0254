import enum
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def compact(code: str) -> str:
    """Whitespace is never significant, so everything works on the compacted string"""
    return "".join(code.split())


def format_number(value: float) -> str:
    """Positional notation with the shortest round-tripping digits: 5.0 => 5, 1e-07 => 0.0000001"""
    formatted = format(Decimal(repr(value)), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted
