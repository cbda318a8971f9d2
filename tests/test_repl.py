import pytest
from typer.testing import CliRunner

from repl import app


@pytest.fixture
def cli_runner():
    return CliRunner()


def test_evaluates_lines_until_quit(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--no-self-test"], input="1 + 2\n10 / 3\nq\n4 ^ 2\n")
    assert result.exit_code == 0
    assert "Please input an expression or type 'q' to quit" in result.output
    assert "And the Answer is: 3\n" in result.output
    assert "And the Answer is: 3.33333\n" in result.output
    assert "16" not in result.output


def test_quit_command_is_trimmed(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--no-self-test"], input="  Q \n1 + 1\n")
    assert result.exit_code == 0
    assert "And the Answer is" not in result.output


def test_end_of_input_exits(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--no-self-test"], input="8 / 2\n")
    assert result.exit_code == 0
    assert "And the Answer is: 4\n" in result.output


def test_errors_do_not_stop_the_loop(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--no-self-test"], input="0x\n2 +\n-(1)\n4 ^ 2\nq\n")
    assert result.exit_code == 0
    assert "[Tokenizer error] Hexadecimal literal must have a digit after '0x'" in result.output
    assert "Parser error: Unterminated expression" in result.output
    assert "Parser error: Number expected after unary minus" in result.output
    assert "And the Answer is: 16\n" in result.output


def test_self_test_runs_first(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, [], input="q\n")
    assert result.exit_code == 0
    assert result.output.startswith("Running unit tests.\n")
    assert 'Running "2 + 5 = 7" Calculated answer: 7, Passed' in result.output
    assert 'Running "10 / 3 = 3.333" Calculated answer: 3.33333, Failed' in result.output
    assert "Unit tests complete." in result.output


def test_long_expression_does_not_stop_the_loop(cli_runner: CliRunner) -> None:
    long_sum = "+".join(["1"] * 1500)
    nested = "(" * 5000 + "1" + ")" * 5000
    result = cli_runner.invoke(app, ["--no-self-test"], input=f"{long_sum}\n{nested}\n2 * 3\nq\n")
    assert result.exit_code == 0
    assert "And the Answer is: 1500\n" in result.output
    assert "Parser error: Expression nested too deeply" in result.output
    assert "And the Answer is: 6\n" in result.output


def test_prompt_stays_on_the_same_line(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--no-self-test"], input="2 + 5\nq\n")
    assert "Please input an expression or type 'q' to quit: And the Answer is: 7\n" in result.output
