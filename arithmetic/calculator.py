import logging

from arithmetic.parser import parse
from arithmetic.tokenizer import tokenize

logger = logging.getLogger(__name__)


def calculate(code: str) -> float:
    """Evaluates a single arithmetic expression. Raises a ParseError subclass on any failure"""
    tokens = tokenize(code)
    result = parse(tokens)
    logger.debug("%r => %r", code, result)
    return result
