from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List
import logging

from rational import MAX_MAGNITUDE, Rational
from errors import (
    ExpectedExpr,
    ExpectedNumber,
    IntegerOverflow,
    InvalidOp,
    ParseError,
    UnbalancedExpr,
    UnbalancedRParen,
)

logger = logging.getLogger(__name__)

# =====================
# Fraction expression evaluator
# =====================
#  - supports + - * / ( ) with the usual order of operations
#  - numbers: decimal digits and 'inf' only, each with an optional sign
#  - every binary operator is left associative
# Operands and pending operators live on two stacks; no syntax tree is built.

_DIGITS = frozenset("0123456789")

# Lower level binds tighter
SIGN_PREC = 0
MUL_PREC = 1
ADD_PREC = 2
PAREN_PREC = 3


class CharStream:
    def __init__(self, text: str):
        self.text, self.pos = text, 0

    def get(self) -> str:
        """Next character, or "" once the input is exhausted."""
        if self.pos >= len(self.text):
            return ""
        c = self.text[self.pos]
        self.pos += 1
        return c

    def unget(self) -> None:
        self.pos -= 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def peek_token(self) -> str:
        """Next non-whitespace character without consuming anything."""
        i = self.pos
        while i < len(self.text) and self.text[i].isspace():
            i += 1
        return self.text[i] if i < len(self.text) else ""


@dataclass(frozen=True)
class OpRecord:
    symbol: str
    precedence: int
    is_open_paren: bool = False


OPEN_PAREN = OpRecord("(", PAREN_PREC, is_open_paren=True)

_arith: Dict[str, Callable[[Rational, Rational], Rational]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b,
}


@dataclass(frozen=True)
class Ok:
    value: Rational


@dataclass(frozen=True)
class Err:
    error: ParseError


EvalResult = Ok | Err


def skip_space(stream: CharStream, c: str, error: type) -> str:
    """Advance past whitespace starting at `c`; raise `error` at end of input."""
    while c.isspace():
        c = stream.get()
    if not c:
        raise error(stream.pos)
    return c


def scan_number_literal(stream: CharStream) -> Rational:
    c = skip_space(stream, stream.get(), ExpectedNumber)
    start = stream.pos - 1
    sign = 1
    if c == "+" or c == "-":
        sign = -1 if c == "-" else 1
        c = stream.get()
    if c == "i":
        if stream.get() != "n" or stream.get() != "f":
            raise ExpectedNumber(start)
        return Rational(sign, 0)
    if c not in _DIGITS:
        raise ExpectedNumber(stream.pos - 1 if c else stream.pos)
    n = 0
    while c in _DIGITS:
        n = n * 10 + (ord(c) - ord("0"))
        if n > MAX_MAGNITUDE:
            raise IntegerOverflow(start)
        c = stream.get()
    if c:
        stream.unget()
    return Rational(sign * n, 1)


def resolve_one_operator(operands: List[Rational], operators: List[OpRecord]) -> None:
    if not operators:
        raise ExpectedExpr()
    op = operators[-1]
    fn = _arith.get(op.symbol)
    if op.is_open_paren or fn is None:
        raise InvalidOp()
    if len(operands) < 2:
        raise ExpectedExpr()
    operators.pop()
    rhs = operands.pop()
    lhs = operands.pop()
    result = fn(lhs, rhs)
    logger.debug(f"resolved {lhs!r} {op.symbol} {rhs!r} -> {result!r}")
    operands.append(result)


def push_operator(
    operands: List[Rational], operators: List[OpRecord], symbol: str, precedence: int
) -> None:
    while (
        operators
        and not operators[-1].is_open_paren
        and operators[-1].precedence <= precedence
    ):
        resolve_one_operator(operands, operators)
    operators.append(OpRecord(symbol, precedence))


def _close_scope(
    operands: List[Rational], operators: List[OpRecord], height: int, pos: int
) -> None:
    while operators and not operators[-1].is_open_paren:
        resolve_one_operator(operands, operators)
    if not operators:
        raise UnbalancedRParen(pos)
    operators.pop()
    # a scope must reduce to exactly one value of its own
    if len(operands) != height + 1:
        raise UnbalancedExpr(pos)


def evaluate(text) -> Rational:
    """Evaluate an arithmetic expression over integers and 'inf' into a Rational.

    `text` is a string or any object with a read() method. The whole input is
    treated as if wrapped in one implicit pair of parentheses, closed by the end
    of input. Raises a ParseError subclass on malformed input.
    """
    if not isinstance(text, str):
        text = text.read()
    stream = CharStream(text)
    operands: List[Rational] = []
    operators: List[OpRecord] = [OPEN_PAREN]
    # operand-stack height at each open scope; index 0 is the implicit one
    scopes: List[int] = [0]
    expect_operand = True

    while True:
        c = stream.get()
        while c.isspace():
            c = stream.get()
        pos = stream.pos - 1

        if not c:
            if len(scopes) > 1:
                raise UnbalancedExpr(stream.pos)
            _close_scope(operands, operators, scopes.pop(), stream.pos)
            return operands[0]

        if c == "(":
            operators.append(OPEN_PAREN)
            scopes.append(len(operands))
            expect_operand = True
        elif c == ")":
            if len(scopes) == 1:
                raise UnbalancedRParen(pos)
            _close_scope(operands, operators, scopes.pop(), pos)
            expect_operand = False
        elif (c == "+" or c == "-") and expect_operand:
            if stream.peek_token() == "(":
                # signed group: fold the sign in ahead of any binary operator
                if c == "-":
                    operands.append(Rational(-1, 1))
                    operators.append(OpRecord("*", SIGN_PREC))
            else:
                stream.unget()
                operands.append(scan_number_literal(stream))
                expect_operand = False
        elif c == "+" or c == "-":
            push_operator(operands, operators, c, ADD_PREC)
            expect_operand = True
        elif c == "*" or c == "/":
            if expect_operand:
                raise ExpectedExpr(pos)
            push_operator(operands, operators, c, MUL_PREC)
            expect_operand = True
        else:
            stream.unget()
            operands.append(scan_number_literal(stream))
            expect_operand = False


def try_evaluate(text) -> EvalResult:
    """Like evaluate(), but returns Ok(value) or Err(error) instead of raising."""
    try:
        return Ok(evaluate(text))
    except ParseError as e:
        logger.debug(f"evaluation of {text!r} failed: {e}")
        return Err(e)
