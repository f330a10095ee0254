import pytest

from arithmetic.utils import compact, format_number


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(5.0, "5"),
        pytest.param(14.0, "14"),
        pytest.param(-3.0, "-3"),
        pytest.param(-0.0, "-0"),
        pytest.param(0.5, "0.5"),
        pytest.param(9.333333333333334, "9.333333333333334"),
        pytest.param(0.30000000000000004, "0.30000000000000004"),
        pytest.param(1e-07, "0.0000001"),
        pytest.param(1e20, "100000000000000000000"),
        pytest.param(123456.789, "123456.789"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_compact() -> None:
    assert compact(" 1 +\t2\n* 3 ") == "1+2*3"
