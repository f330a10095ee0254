import io
import logging

import pytest

import repl


def run_lines(*lines: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    failed = repl.run(lines, out, err)
    return failed, out.getvalue(), err.getvalue()


def test_results_and_errors_go_to_their_streams() -> None:
    failed, out, err = run_lines("2+3*4", "5/0", "2*(3+4)/(2-0.5)")
    assert failed == 1
    assert out.splitlines() == ["Result: 14", "Result: 9.333333333333334"]
    assert err.splitlines() == ["Error: Division by zero: 5 / 0"]


def test_bad_line_does_not_stop_the_loop() -> None:
    failed, out, err = run_lines("1+a", "(2+3", "2.5*2")
    assert failed == 2
    assert out == "Result: 5\n"
    assert err.splitlines()[0] == "Error: Invalid character: 'a'"
    assert "Error: Missing parenthesis closure" in err.splitlines()


def test_blank_lines_are_skipped() -> None:
    failed, out, err = run_lines("", "   ", "1")
    assert (failed, out, err) == (0, "Result: 1\n", "")


@pytest.mark.parametrize("command", ["exit", "EXIT", "  Exit  "])
def test_exit_stops_reading(command: str) -> None:
    failed, out, _ = run_lines("1", command, "2")
    assert failed == 0
    assert out == "Result: 1\n"


def test_one_shot_expression(capsys: pytest.CaptureFixture[str]) -> None:
    assert repl.main(["-e", "2*(3+(4-1))"]) == 0
    assert capsys.readouterr().out == "Result: 12\n"


def test_one_shot_expression_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert repl.main(["--expression", "2(3)"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: Syntax error: Number followed by opening parenthesis")


def test_end_of_input_is_clean_shutdown(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1+1\n7/2\n"))
    assert repl.main([]) == 0
    assert capsys.readouterr().out == "Result: 2\nResult: 3.5\n"


def test_interrupt_is_clean_shutdown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    def interrupted(prompt: str) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupted)
    assert repl.main([]) == 0


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARITHMETIC_LOG_LEVEL", "debug")
    args = repl._build_arg_parser().parse_args([])
    assert args.log_level == "DEBUG"


def test_debug_logging_traces_evaluation(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="arithmetic"):
        run_lines("1+2*3")
    messages = [record.getMessage() for record in caplog.records]
    assert "2.0 * 3.0 = 6.0" in messages
    assert "1.0 + 6.0 = 7.0" in messages


class TerminalInput(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_banner_and_prompt_on_terminal(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", TerminalInput("1+1\nexit\n"))
    assert repl.main(["--prompt", ">> "]) == 0
    out = capsys.readouterr().out
    assert out.startswith(repl.BANNER + "\n")
    assert ">> Result: 2\n" in out


def test_no_banner_when_piped(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1+1\n"))
    repl.main([])
    assert "Arithmetic calculator" not in capsys.readouterr().out
