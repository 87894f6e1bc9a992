from __future__ import annotations
from math import gcd
import logging
import operator

import numpy as np

from config import DISPLAY_CONFIG, INTEGER_CONFIG, DisplayMode
from errors import IntegerOverflow, ParseError

logger = logging.getLogger(__name__)

# Symmetric range so that negation can never overflow
MAX_MAGNITUDE = int(np.iinfo(np.dtype(INTEGER_CONFIG["dtype"])).max)

def _checked(v: int) -> int:
	if v > MAX_MAGNITUDE or v < -MAX_MAGNITUDE:
		raise IntegerOverflow()
	return v

def _sign(v: int) -> int:
	return (v > 0) - (v < 0)

class Rational:
	"""Exact fraction in lowest terms, or a signed infinity when the denominator is 0.

	The sign always lives in the numerator. Infinities are stored as +1/0 or -1/0,
	with 0/0 read as positive infinity.
	"""
	__slots__ = ("_n", "_d")
	def __init__(self, num: int, den: int = 1) -> None:
		num, den = operator.index(num), operator.index(den)
		if den < 0:
			num, den = -num, -den
		if den == 0:
			num = -1 if num < 0 else 1
		elif den > 1:
			cf = gcd(num, den)
			if cf > 1:
				num //= cf
				den //= cf
		self._n = _checked(num)
		self._d = _checked(den)

	@property
	def numerator(self) -> int:
		return self._n
	@property
	def denominator(self) -> int:
		return self._d

	@staticmethod
	def parse(text: str) -> Rational:
		"""Evaluate `text` as an expression; raises a ParseError subclass on bad input."""
		# Local import to avoid circular dependency at module load time
		from evaluator import evaluate
		return evaluate(text)
	@staticmethod
	def parse_or(text: str, default: Rational | None = None) -> Rational:
		"""Best-effort parse: logs the failure and returns `default` (+inf if omitted)."""
		try:
			return Rational.parse(text)
		except ParseError as e:
			logger.warning(f"PARSE ERROR: {e} in {text!r}")
			return POS_INF if default is None else default

	# -----------------
	# Arithmetic
	# -----------------
	def __add__(self, other: Rational | int) -> Rational:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		if self._d == 0 or other._d == 0:
			if self._d != 0:
				return other
			if other._d != 0 or other._n == self._n:
				return self
			# inf - inf
			return POS_INF
		lhs = _checked(self._n * other._d)
		rhs = _checked(other._n * self._d)
		return Rational(_checked(lhs + rhs), _checked(self._d * other._d))
	def __radd__(self, other: int) -> Rational:
		return self + other
	def __sub__(self, other: Rational | int) -> Rational:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self + (-other)
	def __rsub__(self, other: int) -> Rational:
		return (-self) + other
	def __mul__(self, other: Rational | int) -> Rational:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		if self._d == 0 or other._d == 0:
			if self.is_zero() or other.is_zero():
				# 0 * inf
				return POS_INF
			return Rational(_sign(self._n) * _sign(other._n), 0)
		return Rational(_checked(self._n * other._n), _checked(self._d * other._d))
	def __rmul__(self, other: int) -> Rational:
		return self * other
	def __truediv__(self, other: Rational | int) -> Rational:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self * other.reciprocal()
	def __rtruediv__(self, other: int) -> Rational:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return other * self.reciprocal()
	def __neg__(self) -> Rational:
		return Rational(-self._n, self._d)
	def __abs__(self) -> Rational:
		return Rational(abs(self._n), self._d)
	def reciprocal(self) -> Rational:
		return Rational(self._d, self._n)
	def increment(self) -> Rational:
		return self + ONE
	def decrement(self) -> Rational:
		return self - ONE

	# -----------------
	# Comparison
	# -----------------
	def _cmp(self, other: Rational) -> int:
		# infinities rank by sign, finite values rank 0
		a = self._n if self._d == 0 else 0
		b = other._n if other._d == 0 else 0
		if a or b:
			return _sign(a - b)
		return _sign(self._n * other._d - other._n * self._d)
	def __eq__(self, other: object) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) == 0
	def __ne__(self, other: object) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) != 0
	def __lt__(self, other: Rational | int) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) < 0
	def __le__(self, other: Rational | int) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) <= 0
	def __gt__(self, other: Rational | int) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) > 0
	def __ge__(self, other: Rational | int) -> bool:
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self._cmp(other) >= 0
	def __hash__(self) -> int:
		if self._d == 1:
			return hash(self._n)
		return hash((self._n, self._d))

	def __bool__(self) -> bool:
		return not self.is_zero()
	def is_zero(self) -> bool:
		return self._n == 0 and self._d != 0
	def is_int(self) -> bool:
		return self._d == 1
	def is_infinite(self) -> bool:
		return self._d == 0
	def to_int(self) -> int:
		if self._d == 0:
			raise OverflowError("cannot convert infinity to integer")
		return self._n // self._d

	# -----------------
	# Stringification
	# -----------------
	def to_string(self, mode: DisplayMode | str | None = None) -> str:
		if self._d == 0:
			return DISPLAY_CONFIG["pos_inf"] if self._n >= 0 else DISPLAY_CONFIG["neg_inf"]
		mode = DisplayMode(DISPLAY_CONFIG["mode"] if mode is None else mode)
		if self._d == 1 or self._n == 0:
			return str(self._n)
		if mode is DisplayMode.IMPROPER:
			return f"{self._n}/{self._d}"
		q, r = divmod(abs(self._n), self._d)
		sign = "-" if self._n < 0 else ""
		if q == 0:
			return f"{sign}{r}/{self._d}"
		# -3/2 renders as -1-1/2 so it re-parses as (-1)-(1/2)
		return f"{sign}{q}{sign or '+'}{r}/{self._d}"
	def __str__(self) -> str:
		return self.to_string()
	def __repr__(self) -> str:
		return f"Rational({self._n}, {self._d})"

def _coerce(v: object) -> Rational:
	if isinstance(v, Rational):
		return v
	if isinstance(v, (int, np.integer)):
		return Rational(int(v))
	return NotImplemented

ZERO = Rational(0)
ONE = Rational(1)
POS_INF = Rational(1, 0)
NEG_INF = Rational(-1, 0)
