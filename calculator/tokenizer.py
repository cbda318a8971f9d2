import enum
import logging
import math
import re
from dataclasses import dataclass

from calculator.utils import PrintableEnum, render_error_pointer

logger = logging.getLogger(__name__)


@dataclass
class TokenizerError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return render_error_pointer(f"[Tokenizer error] {self.errmsg}", self.code, self.error_char_idx)


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    value: float = 0.0

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_decimal_digit(s: str) -> bool:
    return "0" <= s <= "9"


def _is_hex_digit(s: str) -> bool:
    return _is_decimal_digit(s) or "a" <= s <= "f" or "A" <= s <= "F"


def _is_valid_in_number(s: str) -> bool:
    return _is_decimal_digit(s) or s == "."


def _is_valid_in_hex_number(s: str) -> bool:
    return _is_hex_digit(s) or s == "."


WHITESPACE = " \t\n\r\v\f"

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

# same prefix atof() accepts from a run of digits and dots: "1.2.3" is 1.2
_DECIMAL_PREFIX = re.compile(r"\d+(?:\.\d*)?")


def _scan_run(code: str, start: int, predicate) -> int:
    end = start
    while end < len(code) and predicate(code[end]):
        end += 1
    return end


def _decode_decimal(lexeme: str) -> float:
    match = _DECIMAL_PREFIX.match(lexeme)
    return float(match.group())  # type: ignore


def _decode_hex(digits: str) -> float:
    # base 16 parsing stops at the first dot, the fraction is dropped
    integer_part = digits.split(".", 1)[0]
    try:
        return float(int(integer_part, 16))
    except OverflowError:
        # saturates like an oversized decimal literal
        return math.inf


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        char = code[i]
        if char in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char))
            i += 1
        elif char in WHITESPACE:
            i += 1
        elif char == "0" and i + 1 < len(code) and code[i + 1] == "x":
            digits_start_idx = i + 2
            if digits_start_idx >= len(code) or not _is_hex_digit(code[digits_start_idx]):
                raise TokenizerError(
                    "Hexadecimal literal must have a digit after '0x'", code=code, error_char_idx=digits_start_idx
                )
            number_end_idx = _scan_run(code, digits_start_idx, _is_valid_in_hex_number)
            value = _decode_hex(code[digits_start_idx:number_end_idx])
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx], value=value))
            i = number_end_idx
        elif _is_decimal_digit(char):
            number_end_idx = _scan_run(code, i, _is_valid_in_number)
            lexeme = code[i:number_end_idx]
            tokens.append(Token(type=TokenType.NUMBER, lexeme=lexeme, value=_decode_decimal(lexeme)))
            i = number_end_idx
        else:
            raise TokenizerError(f"Unexpected character: {char!r}", code=code, error_char_idx=i)

    tokens.append(Token(type=TokenType.EXPR_END, lexeme=""))
    logger.debug("Tokenized %r into %s", code, " ".join(str(t) for t in tokens))
    return tokens


def untokenize(tokens: list[Token]) -> str:
    return " ".join(t.lexeme for t in tokens if t.lexeme)
