from arithmetic.errors import ParseError
from arithmetic.parser import parse
from arithmetic.tokenizer import tokenize, untokenize
from arithmetic.utils import format_number

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/+2",
    "7/6/2000",
    "5^2",
    "2*(3+4)/(2-0.5)",
    "10 / 5/ 2",
    "2(3)",
    "1/0",
    "(1 + 2",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except ParseError as e:
        print(e.render(code))
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")
    print(f"untokenized: {untokenize(tokens)}")

    try:
        result = parse(tokens)
    except ParseError as e:
        print(e.render(code))
        continue
    print(f"result: {format_number(result)}")
