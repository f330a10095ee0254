"""Line-oriented front end: reads expressions, prints `Result: <value>` or `Error: <message>`.

    python repl.py                  # interactive, `exit` or Ctrl-D / Ctrl-C to quit
    python repl.py -e "2*(3+4)"     # one-shot, exit code 1 on error
    ARITHMETIC_LOG_LEVEL=DEBUG python repl.py
"""
import argparse
import logging
import os
import sys
from typing import Iterable, Iterator, Optional, TextIO

from arithmetic.calculator import calculate
from arithmetic.errors import ParseError
from arithmetic.utils import format_number

logger = logging.getLogger("arithmetic.repl")

EXIT_COMMAND = "exit"
BANNER = "Arithmetic calculator\nEnter expressions (e.g., '2 + 3 * (4 - 1)') or 'exit' to quit"


def evaluate_line(code: str, out: TextIO, err: TextIO) -> bool:
    try:
        result = calculate(code)
    except ParseError as e:
        logger.debug("Evaluation of %r failed with %s", code, e.kind)
        print(f"Error: {e.render(code)}", file=err)
        return False
    print(f"Result: {format_number(result)}", file=out)
    return True


def run(lines: Iterable[str], out: TextIO, err: TextIO) -> int:
    """Evaluates lines until they run out or `exit` comes; returns the number of failed lines"""
    failed = 0
    for line in lines:
        code = line.strip()
        if not code:
            continue
        if code.lower() == EXIT_COMMAND:
            break
        if not evaluate_line(code, out, err):
            failed += 1
    return failed


def _read_lines(prompt: str) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate arithmetic expressions")
    parser.add_argument("-e", "--expression", help="evaluate a single expression and exit")
    parser.add_argument("--prompt", default="> ", help="interactive prompt (default: %(default)r)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("ARITHMETIC_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="logging level, also read from ARITHMETIC_LOG_LEVEL (default: %(default)s)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.expression is not None:
        return 0 if evaluate_line(args.expression, sys.stdout, sys.stderr) else 1

    prompt = ""
    if sys.stdin.isatty():
        print(BANNER, file=sys.stdout)
        prompt = args.prompt
    try:
        run(_read_lines(prompt), sys.stdout, sys.stderr)
    except KeyboardInterrupt:
        print(file=sys.stdout)
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
