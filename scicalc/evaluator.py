"""Expression evaluator for the calculator.

Turns a typed expression such as ``2×sin(π/2)+√(9)`` into a display string.
The pipeline is:

1. normalize: keypad glyphs to canonical spellings
2. tokenize: closed alphabet, anything else is rejected
3. parse: recursive descent, values computed while parsing
4. classify: non-finite values become errors
5. format: at most 10 fractional digits, trailing zeros dropped

Nothing here executes input as code and nothing is kept between calls.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from scicalc.models import EvaluationResult

logger = logging.getLogger(__name__)

# Deepest allowed parenthesis / function nesting.
MAX_DEPTH = 100

# Fractional digits kept when formatting a result.
DISPLAY_PRECISION = 10


class EvaluationError(ValueError):
    """Raised for any input that cannot be turned into a finite number."""


# Glyph → canonical spelling.  Order matters: "**" must become "^" before
# anything else touches "*".
_GLYPHS: tuple[tuple[str, str], ...] = (
    ("**", "^"),
    ("×", "*"),
    ("÷", "/"),
    ("−", "-"),
    ("π", "pi"),
    ("√", "sqrt"),
)


def _nan_on_domain_error(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a math function so domain errors give nan and overflow gives inf."""

    def wrapped(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    wrapped.__name__ = fn.__name__
    return wrapped


FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": _nan_on_domain_error(math.sin),
    "cos": _nan_on_domain_error(math.cos),
    "tan": _nan_on_domain_error(math.tan),
    "sqrt": _nan_on_domain_error(math.sqrt),
    "log": _nan_on_domain_error(math.log10),
    "ln": _nan_on_domain_error(math.log),
    "abs": abs,
}

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}


@dataclass(frozen=True)
class Token:
    """A lexical token: kind is one of NUMBER, NAME, OP, LPAREN, RPAREN."""

    kind: str
    text: str
    pos: int


_TOKEN_RE = re.compile(
    r"""
    (?P<NUMBER>[0-9]+\.?[0-9]*|\.[0-9]+)
  | (?P<NAME>[A-Za-z]+)
  | (?P<OP>[-+*/^])
  | (?P<LPAREN>\()
  | (?P<RPAREN>\))
  | (?P<SKIP>\s+)
  | (?P<MISMATCH>.)
    """,
    re.VERBOSE,
)


def normalize(expression: str) -> str:
    """Map presentation glyphs (×, ÷, π, √ ...) to canonical spellings."""
    for glyph, canonical in _GLYPHS:
        expression = expression.replace(glyph, canonical)
    return expression


def tokenize(text: str) -> list[Token]:
    """Split a normalized expression into tokens.

    Raises:
        EvaluationError: on characters outside the alphabet or unknown names.
    """
    tokens: list[Token] = []
    for m in _TOKEN_RE.finditer(text):
        kind = m.lastgroup
        value = m.group()
        if kind == "SKIP":
            continue
        if kind == "MISMATCH":
            raise EvaluationError(f"invalid characters: {value!r} at position {m.start()}")
        if kind == "NAME" and value not in FUNCTIONS and value not in CONSTANTS:
            raise EvaluationError(f"invalid characters: {value!r} at position {m.start()}")
        tokens.append(Token(kind, value, m.start()))
    return tokens


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        # Negative base with fractional exponent, or zero to a negative power.
        if base == 0:
            return math.inf
        return math.nan


class _Parser:
    """Recursive-descent parser that computes values as it goes.

    Recursion only happens through parentheses and function calls, and that
    is capped at MAX_DEPTH.
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def next(self) -> Token:
        token = self.peek()
        if token is None:
            raise EvaluationError("unexpected end of expression")
        self.index += 1
        return token

    def expect(self, kind: str) -> Token:
        token = self.peek()
        if token is None:
            raise EvaluationError(f"expected {kind}, got end of expression")
        if token.kind != kind:
            raise EvaluationError(f"expected {kind}, got {token.text!r} at position {token.pos}")
        return self.next()

    def parse(self) -> float:
        if not self.tokens:
            raise EvaluationError("empty expression")
        value = self.expression()
        token = self.peek()
        if token is not None:
            raise EvaluationError(f"unexpected {token.text!r} at position {token.pos}")
        return value

    def expression(self) -> float:
        value = self.term()
        while True:
            token = self.peek()
            if token is None or token.kind != "OP" or token.text not in "+-":
                return value
            self.next()
            rhs = self.term()
            value = value + rhs if token.text == "+" else value - rhs

    def _starts_implicit_operand(self) -> bool:
        token = self.peek()
        return token is not None and token.kind in ("NAME", "LPAREN")

    def term(self) -> float:
        value = self.power()
        while True:
            token = self.peek()
            if token is not None and token.kind == "OP" and token.text in "*/":
                self.next()
                rhs = self.power()
                value = value * rhs if token.text == "*" else _divide(value, rhs)
            elif self._starts_implicit_operand():
                value = value * self.power()
            else:
                return value

    def power(self) -> float:
        operands = [self.unary()]
        while True:
            token = self.peek()
            if token is None or token.kind != "OP" or token.text != "^":
                break
            self.next()
            operands.append(self.unary())
        # Right-associative: 2^3^2 == 2^(3^2)
        value = operands.pop()
        while operands:
            value = _power(operands.pop(), value)
        return value

    def unary(self) -> float:
        sign = 1.0
        while True:
            token = self.peek()
            if token is None or token.kind != "OP" or token.text not in "+-":
                break
            self.next()
            if token.text == "-":
                sign = -sign
        return sign * self.primary()

    def _nested(self) -> float:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise EvaluationError(f"nesting deeper than {MAX_DEPTH} levels")
        value = self.expression()
        self.expect("RPAREN")
        self.depth -= 1
        return value

    def primary(self) -> float:
        token = self.next()
        if token.kind == "NUMBER":
            return float(token.text)
        if token.kind == "LPAREN":
            return self._nested()
        if token.kind == "NAME":
            if token.text in CONSTANTS:
                return CONSTANTS[token.text]
            self.expect("LPAREN")
            return FUNCTIONS[token.text](self._nested())
        raise EvaluationError(f"unexpected {token.text!r} at position {token.pos}")


def compute(expression: str) -> float:
    """Evaluate an expression to a finite float.

    Unlike evaluate(), this raises, so callers that want the reason for a
    failure can have it.

    Raises:
        EvaluationError: malformed input, disallowed characters, or a
            non-finite result (division by zero, domain errors, overflow).
    """
    tokens = tokenize(normalize(expression))
    value = _Parser(tokens).parse()
    if not math.isfinite(value):
        raise EvaluationError("non-finite result")
    return value


def format_number(value: float) -> str:
    """Format a finite float for display.

    Rounds to DISPLAY_PRECISION fractional digits, then writes the shortest
    decimal that round-trips, without exponent notation and without trailing
    zeros: 0.1+0.2 → "0.3", 8.0 → "8", 1e-05 → "0.00001".
    """
    rounded = round(value, DISPLAY_PRECISION)
    if rounded == 0:
        return "0"
    text = format(Decimal(repr(rounded)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def evaluate(expression: str) -> EvaluationResult:
    """Evaluate an expression, never raising.

    Returns a NUMBER result carrying its display text on success and
    EvaluationResult.error(reason) for any failure.
    """
    if not expression or not expression.strip():
        return EvaluationResult.error("empty expression")
    try:
        value = compute(expression)
    except EvaluationError as e:
        logger.debug("evaluation of %r failed: %s", expression, e)
        return EvaluationResult.error(str(e))
    return EvaluationResult.number(value, format_number(value))
