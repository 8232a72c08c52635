from __future__ import annotations

import numpy as np
import pytest

from fixed_int import DEFAULT_DTYPE, IntType


@pytest.mark.parametrize("dtype, bits", [(np.int8, 8), (np.int16, 16), (np.int32, 32), (np.int64, 64), ("int16", 16)])
def test_resolve_signed(dtype, bits) -> None:
    it = IntType.resolve(dtype)
    assert it.bits == bits
    assert it.min == -(2 ** (bits - 1))
    assert it.max == 2 ** (bits - 1) - 1


def test_resolve_default() -> None:
    assert IntType.resolve().dtype == DEFAULT_DTYPE
    assert IntType.resolve(None).name == "int64"


def test_resolve_passthrough() -> None:
    it = IntType.resolve(np.int32)
    assert IntType.resolve(it) is it
    assert IntType.resolve("int32") == it


@pytest.mark.parametrize("dtype", [bool, np.bool_, np.uint8, np.uint64, np.float64, "U3", object, "not a type"])
def test_resolve_rejects(dtype) -> None:
    with pytest.raises(TypeError):
        IntType.resolve(dtype)


def test_scalar() -> None:
    it = IntType.resolve(np.int8)
    v = it.scalar(-128)
    assert v == -128
    assert isinstance(v, np.int8)
    assert it.scalar(np.int64(127)) == 127
    assert isinstance(it.scalar(np.uint8(5)), np.int8)


@pytest.mark.parametrize("value", [128, -129, 2**70])
def test_scalar_out_of_range(value) -> None:
    with pytest.raises(OverflowError):
        IntType.resolve(np.int8).scalar(value)


@pytest.mark.parametrize("value", [True, np.bool_(False), 1.0, "1", None])
def test_scalar_wrong_type(value) -> None:
    with pytest.raises(TypeError):
        IntType.resolve(np.int8).scalar(value)


def test_wrap() -> None:
    it = IntType.resolve(np.int8)
    assert it.wrap(200) == -56
    assert it.wrap(128) == -128
    assert it.wrap(-129) == 127
    assert it.wrap(5) == 5
    assert isinstance(it.wrap(0), np.int8)
    assert IntType.resolve(np.int64).wrap(2**63) == -(2**63)


def test_gcd() -> None:
    it = IntType.resolve(np.int8)
    assert it.gcd(12, -18) == 6
    assert it.gcd(0, 5) == 5
    assert it.gcd(-7, 0) == 7
    # 128 does not fit in int8
    assert it.gcd(-128, -128) == -128
    assert it.gcd(0, -128) == -128
    assert it.gcd(-128, 64) == 64
