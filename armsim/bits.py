"""Reinterpret floating point values as raw register bits and back."""

from __future__ import annotations

import math
import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")
_F64 = struct.Struct("<d")
_U64 = struct.Struct("<Q")


def _pack_single(value: float) -> bytes:
    """Pack ``value`` as an IEEE 754 single, rounding overflow to infinity."""
    try:
        return _F32.pack(value)
    except OverflowError:
        return _F32.pack(math.copysign(math.inf, value))


def float_as_uint64_low(value: float) -> int:
    """Return the bits of ``value`` as a single precision float, zero-extended to 64 bits."""
    return _U32.unpack(_pack_single(value))[0]


def uint64_low_as_float(value: int) -> float:
    """Interpret the lower 32 bits of ``value`` as a single precision float."""
    return _F32.unpack(_U32.pack(value & _MASK32))[0]


def double_as_uint64(value: float) -> int:
    """Return the 64 bits of ``value`` as a double precision float."""
    return _U64.unpack(_F64.pack(value))[0]


def uint64_as_double(value: int) -> float:
    """Interpret the 64 bits of ``value`` as a double precision float."""
    return _F64.unpack(_U64.pack(value & _MASK64))[0]