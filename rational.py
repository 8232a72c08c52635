from __future__ import annotations
import logging
from typing import Any, Tuple, Union
import numpy as np
from fixed_int import CLAMP_OFFSET, IntType

logger = logging.getLogger(__name__)

IntegerLike = Union[int, np.integer]
Pair = Tuple[np.signedinteger, np.signedinteger]


class InvalidDenominator(ValueError):
	"""Raised when a Rational would be built with a zero denominator."""


class DivisionByZero(ZeroDivisionError):
	"""Raised when dividing by a Rational whose numerator is zero."""


def normalize_sign(numerator: IntegerLike, denominator: IntegerLike, int_type: Any = None) -> Pair:
	"""Move the sign of a negative denominator onto the numerator.

	Negating T_MIN overflows, so a T_MIN field is clamped to T_MAX - 1 instead
	of being negated. The clamped pair is no longer exactly the input value.
	"""
	it = IntType.resolve(int_type)
	num, den = it.scalar(numerator), it.scalar(denominator)
	if den >= 0:
		return num, den
	clamp = it.dtype.type(it.max - CLAMP_OFFSET)
	if num == it.min and den == it.min:
		logger.debug("clamping %s/%s to %s/%s", num, den, clamp, clamp)
		return clamp, clamp
	if num == it.min:
		logger.debug("clamping numerator %s to %s", num, clamp)
		return clamp, -den
	if den == it.min:
		logger.debug("clamping denominator %s to %s", den, clamp)
		return -num, clamp
	return -num, -den


def reduce(numerator: IntegerLike, denominator: IntegerLike, int_type: Any = None) -> Pair:
	"""Divide out the gcd and normalize the sign of a numerator/denominator pair."""
	it = IntType.resolve(int_type)
	num, den = it.scalar(numerator), it.scalar(denominator)
	if den == 0:
		raise InvalidDenominator("Denominator cannot be zero.")
	g = it.gcd(num, den)
	with np.errstate(over="ignore"):
		return normalize_sign(num // g, den // g, it)


class Rational:
	"""Exact fraction over a fixed-width signed integer type.

	Arithmetic is done in the width of the type and wraps on overflow, the
	same as the underlying numpy integers. Compound operators (``+=`` etc.)
	replace the numerator/denominator pair of the receiver in one step.
	"""

	__slots__ = ("_pair", "_type")
	# numpy scalars on the left defer to our reflected operators
	__array_ufunc__ = None

	def __init__(self, numerator: IntegerLike = 0, denominator: IntegerLike = 1, dtype: Any = None) -> None:
		if dtype is None and isinstance(numerator, np.integer):
			dtype = numerator.dtype
		it = IntType.resolve(dtype)
		self._type = it
		self._pair = reduce(numerator, denominator, it)

	@classmethod
	def _from_fixed(cls, num: np.signedinteger, den: np.signedinteger, it: IntType) -> Rational:
		# a denominator that wrapped to zero fails here like a constructor call
		r = cls.__new__(cls)
		r._type = it
		r._pair = reduce(num, den, it)
		return r

	def _coerce(self, other: Any) -> Rational | None:
		if isinstance(other, Rational):
			if other._type != self._type:
				raise TypeError(f"Cannot mix {self._type.name} and {other._type.name} rationals")
			return other
		if isinstance(other, (int, np.integer)) and not isinstance(other, bool):
			return Rational(other, 1, dtype=self._type)
		return None

	def _require(self, other: Any) -> Rational:
		o = self._coerce(other)
		if o is None:
			raise TypeError(f"Unsupported operand type {type(other).__name__}")
		return o

	def _assign(self, result: Any) -> Any:
		if result is NotImplemented:
			return result
		self._pair = result._pair
		return self

	# getters
	def numerator(self) -> np.signedinteger:
		return self._pair[0]

	def denominator(self) -> np.signedinteger:
		return self._pair[1]

	def dtype(self) -> np.dtype:
		return self._type.dtype

	def copy(self) -> Rational:
		r = Rational.__new__(Rational)
		r._type = self._type
		r._pair = self._pair
		return r

	__copy__ = copy

	def is_zero(self) -> bool:
		return bool(self._pair[0] == 0)

	def is_int(self) -> bool:
		return bool(self._pair[1] == 1)

	def to_double(self) -> float:
		"""Floating point approximation of the value."""
		return float(self._pair[0]) / float(self._pair[1])

	def to_string(self) -> str:
		return f"{int(self._pair[0])}/{int(self._pair[1])}"

	def __float__(self) -> float:
		return self.to_double()

	def __str__(self) -> str:
		return self.to_string()

	def __repr__(self) -> str:
		return f"Rational({int(self._pair[0])}, {int(self._pair[1])}, dtype={self._type.name})"

	# fraction x fraction arithmetic
	def _add(self, other: Rational) -> Rational:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return Rational._from_fixed(a * d + b * c, b * d, self._type)

	def _sub(self, other: Rational) -> Rational:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return Rational._from_fixed(a * d - b * c, b * d, self._type)

	def _mul(self, other: Rational) -> Rational:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return Rational._from_fixed(a * c, b * d, self._type)

	def _div(self, other: Rational) -> Rational:
		a, b = self._pair
		c, d = other._pair
		if c == 0:
			raise DivisionByZero("Cannot divide by a fraction with a numerator of zero.")
		with np.errstate(over="ignore"):
			return Rational._from_fixed(a * d, b * c, self._type)

	def add(self, other: Rational | IntegerLike) -> Rational:
		return self._add(self._require(other))

	def subtract(self, other: Rational | IntegerLike) -> Rational:
		return self._sub(self._require(other))

	def multiply(self, other: Rational | IntegerLike) -> Rational:
		return self._mul(self._require(other))

	def divide(self, other: Rational | IntegerLike) -> Rational:
		return self._div(self._require(other))

	def __add__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else self._add(o)

	def __sub__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else self._sub(o)

	def __mul__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else self._mul(o)

	def __truediv__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else self._div(o)

	# scalar x fraction: the scalar is promoted first
	def __radd__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else o._add(self)

	def __rsub__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else o._sub(self)

	def __rmul__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else o._mul(self)

	def __rtruediv__(self, other: Any) -> Rational:
		o = self._coerce(other)
		return NotImplemented if o is None else o._div(self)

	def __neg__(self) -> Rational:
		return Rational(0, 1, dtype=self._type)._sub(self)

	# compound assignment; the result is computed before the pair is replaced
	def __iadd__(self, other: Any) -> Rational:
		return self._assign(self.__add__(other))

	def __isub__(self, other: Any) -> Rational:
		return self._assign(self.__sub__(other))

	def __imul__(self, other: Any) -> Rational:
		return self._assign(self.__mul__(other))

	def __itruediv__(self, other: Any) -> Rational:
		return self._assign(self.__truediv__(other))

	def increment(self) -> Rational:
		"""Prefix ++: add one in place and return self."""
		self += 1
		return self

	def decrement(self) -> Rational:
		"""Prefix --: subtract one in place and return self."""
		self -= 1
		return self

	def post_increment(self) -> Rational:
		"""Postfix ++: add one in place and return the prior value."""
		prior = self.copy()
		self.increment()
		return prior

	def post_decrement(self) -> Rational:
		"""Postfix --: subtract one in place and return the prior value."""
		prior = self.copy()
		self.decrement()
		return prior

	# comparison by cross multiplication, relies on both denominators being positive
	def _eq(self, other: Rational) -> bool:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return bool(a * d == b * c)

	def _gt(self, other: Rational) -> bool:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return bool(a * d > b * c)

	def _lt(self, other: Rational) -> bool:
		a, b = self._pair
		c, d = other._pair
		with np.errstate(over="ignore"):
			return bool(a * d < b * c)

	def __eq__(self, other: object) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else self._eq(o)

	def __ne__(self, other: object) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else not self._eq(o)

	def __gt__(self, other: Any) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else self._gt(o)

	def __lt__(self, other: Any) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else self._lt(o)

	def __ge__(self, other: Any) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else not self._lt(o)

	def __le__(self, other: Any) -> bool:
		o = self._coerce(other)
		return NotImplemented if o is None else not self._gt(o)

	# mutable through the compound operators
	__hash__ = None  # type: ignore[assignment]
