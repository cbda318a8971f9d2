import logging

import typer

from calculator.parser import ParserError
from calculator.runtime import calculate
from calculator.selftest import format_number, format_result, run_self_test
from calculator.tokenizer import TokenizerError

app = typer.Typer(add_completion=False, help="Evaluate arithmetic expressions interactively.")

QUIT_COMMANDS = ("q", "Q")


@app.command()
def main(
    self_test: bool = typer.Option(
        True,
        "--self-test/--no-self-test",
        help="Run the built-in unit tests before reading expressions",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log tokens, trees and results"),
) -> None:
    """Read expressions line by line and print their values. Type 'q' to quit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if self_test:
        typer.echo("Running unit tests.")
        for result in run_self_test():
            typer.echo(format_result(result))
        typer.echo("Unit tests complete.\n")

    typer.echo("Please input an expression or type 'q' to quit: ", nl=False)
    while True:
        try:
            code = input()
        except EOFError:
            break

        if code.strip() in QUIT_COMMANDS:
            break

        try:
            result = calculate(code)
        except (TokenizerError, ParserError) as e:
            typer.echo(str(e))
            continue

        typer.echo(f"And the Answer is: {format_number(result)}")


if __name__ == "__main__":
    app()
