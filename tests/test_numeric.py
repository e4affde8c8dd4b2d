"""
Tests for the signed 16-bit hex field codec.

Run with:
    pytest tests/test_numeric.py -v
"""

import pytest

from pymbit import (
    decode_signed_hex16, decode_hex_triple, encode_signed_hex16,
    MalformedField, InvalidPayload,
)


# =============================================================================
# SINGLE FIELD
# =============================================================================

class TestDecodeSignedHex16:
    """Test decoding of one 4-digit hex field."""

    @pytest.mark.parametrize("text,expected", [
        ("0000", 0),
        ("0001", 1),
        ("7FFF", 32767),
        ("8000", -32768),
        ("FFFF", -1),
        ("03E8", 1000),
        ("FC18", -1000),
    ])
    def test_known_values(self, text, expected):
        assert decode_signed_hex16(text) == expected

    def test_lowercase(self):
        assert decode_signed_hex16("ffff") == -1
        assert decode_signed_hex16("03e8") == 1000

    def test_result_always_in_int16_range(self):
        for text in ("0000", "7FFF", "8000", "FFFF", "ABCD", "1234"):
            assert -32768 <= decode_signed_hex16(text) <= 32767

    def test_round_trip_full_range(self):
        """Encoding then decoding gives back every int16 value."""
        for value in range(-32768, 32768, 97):
            assert decode_signed_hex16(encode_signed_hex16(value)) == value
        for value in (-32768, -1, 0, 1, 32767):
            assert decode_signed_hex16(encode_signed_hex16(value)) == value

    @pytest.mark.parametrize("text", ["", "123", "12345", "12G4", "-001", " 123"])
    def test_malformed(self, text):
        with pytest.raises(MalformedField):
            decode_signed_hex16(text)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            decode_signed_hex16("zzzz")


# =============================================================================
# TRIPLE
# =============================================================================

class TestDecodeHexTriple:
    """Test decoding of up to three consecutive fields."""

    def test_full_triple(self):
        assert decode_hex_triple("03E8FFFF07D0") == [1000, -1, 2000]

    def test_extra_characters_ignored(self):
        assert decode_hex_triple("03E8FFFF07D01234") == [1000, -1, 2000]

    def test_two_fields(self):
        assert decode_hex_triple("0064FF9C") == [100, -100]

    def test_partial_field_ignored(self):
        assert decode_hex_triple("03E8FF") == [1000]

    def test_empty(self):
        assert decode_hex_triple("") == []
        assert decode_hex_triple("12") == []

    def test_non_hex_in_complete_field(self):
        with pytest.raises(MalformedField):
            decode_hex_triple("03E8XXXX07D0")


# =============================================================================
# ENCODE
# =============================================================================

class TestEncodeSignedHex16:

    def test_encode(self):
        assert encode_signed_hex16(-1) == "FFFF"
        assert encode_signed_hex16(1000) == "03E8"
        assert encode_signed_hex16(-32768) == "8000"

    @pytest.mark.parametrize("value", [-32769, 32768, 100000])
    def test_out_of_range(self, value):
        with pytest.raises(InvalidPayload):
            encode_signed_hex16(value)
