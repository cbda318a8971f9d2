"""Fixed expression/answer pairs checked at REPL startup

Comparison is exact float equality. ``10 / 3`` is checked against a truncated
``3.333`` and is known to fail.
"""

from dataclasses import dataclass
from typing import Optional

from calculator.parser import ParserError
from calculator.runtime import calculate
from calculator.tokenizer import TokenizerError

CANONICAL_CASES: list[tuple[str, float]] = [
    ("2 + 5", 7),
    ("8 - 3", 5),
    ("5 * 4", 20),
    ("8 / 2", 4),
    ("4 ^ 2", 16),
    ("1 + 2 * 3", 7),
    ("(1 + 2) * 3", 9),
    ("6 + 3 - 2 + 12", 19),
    ("2 * 15 + 23", 53),
    ("10 - 3 ^ 2", 1),
    ("3.5 * 3", 10.5),
    ("-53 + -24", -77),
    ("10 / 3", 3.333),
    ("(-20 * 1.8) / 2", -18),
    ("-12.315 - 42", -54.315),
    ("0xFF", 255),
]


@dataclass
class SelfTestResult:
    expression: str
    expected: float
    answer: Optional[float] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.answer == self.expected


def format_number(value: float) -> str:
    return f"{value:g}"


def format_result(result: SelfTestResult) -> str:
    answer = format_number(result.answer) if result.answer is not None else result.error
    status = "Passed" if result.passed else "Failed"
    return (
        f'Running "{result.expression} = {format_number(result.expected)}" '
        f"Calculated answer: {answer}, {status}"
    )


def run_self_test(cases: list[tuple[str, float]] = CANONICAL_CASES) -> list[SelfTestResult]:
    results: list[SelfTestResult] = []
    for expression, expected in cases:
        try:
            answer = calculate(expression)
        except (TokenizerError, ParserError) as e:
            results.append(SelfTestResult(expression, expected, error=e.errmsg))
            continue
        results.append(SelfTestResult(expression, expected, answer=answer))
    return results
