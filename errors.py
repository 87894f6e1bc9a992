from __future__ import annotations


class ParseError(ValueError):
	"""Base class for every failure raised while evaluating expression text."""
	message = "parse error"
	def __init__(self, position: int | None = None) -> None:
		self.position = position
		if position is None:
			super().__init__(self.message)
		else:
			super().__init__(f"{self.message} at position {position}")

class ExpectedNumber(ParseError):
	message = "expected number"

class ExpectedExpr(ParseError):
	message = "expected expression"

class UnbalancedRParen(ParseError):
	message = "unbalanced ')'"

class UnbalancedExpr(ParseError):
	message = "unbalanced expr"

class InvalidOp(ParseError):
	message = "invalid op"

class IntegerOverflow(ParseError, OverflowError):
	message = "integer overflow"
