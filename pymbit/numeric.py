"""
Numeric field codec
===================

Vector readings (magnetic force, acceleration, rotation) arrive as
consecutive 4-digit hex fields, each a big-endian two's complement
16-bit integer:

    03E8FFFF07D0  ->  [1000, -1, 2000]
"""

import string
from typing import List

import numpy as np

from .errors import InvalidPayload, MalformedField

HEX_FIELD_WIDTH = 4
TRIPLE_WIDTH = 3 * HEX_FIELD_WIDTH

INT16_MIN = -32768
INT16_MAX = 32767

_HEX_DIGITS = frozenset(string.hexdigits)


def _check_field(s: str) -> None:
    if not isinstance(s, str) or len(s) != HEX_FIELD_WIDTH:
        raise MalformedField(f"hex field must be {HEX_FIELD_WIDTH} characters: {s!r}")
    if not _HEX_DIGITS.issuperset(s):
        raise MalformedField(f"non-hex character in field: {s!r}")


def _to_int16(fields: List[str]) -> List[int]:
    # bytes.fromhex on validated fields -> big-endian int16 view
    raw = bytes.fromhex("".join(fields))
    return np.frombuffer(raw, dtype=">i2").tolist()


def decode_signed_hex16(s: str) -> int:
    """
    Decode one 4-digit hex field as a signed 16-bit integer.

    Args:
        s: Exactly four hex characters (either case)

    Returns:
        Integer in [-32768, 32767]

    Raises:
        MalformedField: If s is not exactly four hex characters
    """
    _check_field(s)
    return _to_int16([s])[0]


def decode_hex_triple(s: str) -> List[int]:
    """
    Decode up to three consecutive 4-digit hex fields.

    Only complete fields are decoded, so a payload shorter than 12
    characters yields fewer than three values. Characters beyond the
    twelfth are ignored.

    Args:
        s: Hex payload (tag already removed)

    Returns:
        List of 0 to 3 signed integers

    Raises:
        MalformedField: If a complete field contains non-hex characters
    """
    end = min(len(s), TRIPLE_WIDTH)
    fields = [s[i:i + HEX_FIELD_WIDTH] for i in range(0, end - HEX_FIELD_WIDTH + 1, HEX_FIELD_WIDTH)]
    for field in fields:
        _check_field(field)
    if not fields:
        return []
    return _to_int16(fields)


def encode_signed_hex16(value: int) -> str:
    """
    Encode a signed 16-bit integer as 4 uppercase hex digits.

    Raises:
        InvalidPayload: If value does not fit in 16 bits
    """
    if not INT16_MIN <= value <= INT16_MAX:
        raise InvalidPayload(f"value {value} outside int16 range")
    return format(value & 0xFFFF, "04X")
