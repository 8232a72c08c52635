from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Any
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_DTYPE = np.dtype(np.int64)
MIN_BITS = 8
# overflow-clamped fields are set to T_MAX - CLAMP_OFFSET
CLAMP_OFFSET = 1


@dataclass(frozen=True)
class IntType:
    """A fixed-width signed integer type backed by a numpy dtype.

    Values of the type are numpy scalars; arithmetic on them wraps around
    in two's complement when evaluated under ``np.errstate(over="ignore")``.
    """

    dtype: np.dtype

    @staticmethod
    def resolve(dtype: Any = None) -> "IntType":
        """Resolve ``dtype`` (anything ``np.dtype`` accepts) to an IntType.

        Only signed integer dtypes of at least MIN_BITS are accepted; bool,
        unsigned and non-integer types raise TypeError.
        """
        if isinstance(dtype, IntType):
            return dtype
        if dtype is None:
            dtype = DEFAULT_DTYPE
        try:
            dt = np.dtype(dtype)
        except TypeError as e:
            raise TypeError(f"Unsupported integer type {dtype!r}") from e
        return _resolve(dt)

    @property
    def bits(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def min(self) -> int:
        return int(np.iinfo(self.dtype).min)

    @property
    def max(self) -> int:
        return int(np.iinfo(self.dtype).max)

    @property
    def name(self) -> str:
        return self.dtype.name

    def scalar(self, value: Any) -> np.signedinteger:
        """Convert an integer to this type, rejecting values outside its range."""
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("Bool values are not allowed")
        if not isinstance(value, (int, np.integer)):
            raise TypeError(f"Expected an integer, got {type(value).__name__}")
        v = int(value)
        if v < self.min or v > self.max:
            raise OverflowError(f"{v} out of range for {self.name}")
        return self.dtype.type(v)

    def wrap(self, value: int) -> np.signedinteger:
        """Reduce an exact integer modulo 2**bits into the signed range."""
        span = 1 << self.bits
        return self.dtype.type((int(value) - self.min) % span + self.min)

    def gcd(self, a: Any, b: Any) -> np.signedinteger:
        # gcd(T_MIN, T_MIN) == 2**(bits-1) does not fit and wraps to T_MIN
        return self.wrap(math.gcd(int(a), int(b)))


@lru_cache(maxsize=None)
def _resolve(dt: np.dtype) -> IntType:
    if dt == np.bool_:
        raise TypeError("Bool type is not allowed")
    if np.issubdtype(dt, np.unsignedinteger):
        raise TypeError(f"Unsigned integer types are not allowed: {dt.name}")
    if not np.issubdtype(dt, np.signedinteger):
        raise TypeError(f"Type must be a signed integer type, got {dt.name}")
    if dt.itemsize * 8 < MIN_BITS:
        raise TypeError(f"Type must be at least {MIN_BITS} bits wide")
    logger.debug("resolved integer type %s (%d bits)", dt.name, dt.itemsize * 8)
    return IntType(dt)
