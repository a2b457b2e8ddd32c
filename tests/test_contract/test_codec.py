"""
Tests for contract argument encoding.

Tests cover:
- Link type round trip within the 32-byte width
- Oversized link types
- Decoding from raw bytes and hex strings
- Id coercion from ints and strings
- Module data coercion
"""

import pytest

from crossbell.constants import LINK_TYPE_WIDTH, MAX_UINT256
from crossbell.contract.codec import decode_link_type, encode_link_type, to_bytes, to_int
from crossbell.errors import ValidationError, ValueTooLongError


# =============================================================================
# Link Type Tests
# =============================================================================


class TestEncodeLinkType:
    """Tests for encode_link_type."""

    def test_pads_to_width(self) -> None:
        """Test short link types are right-padded with zero bytes."""
        encoded = encode_link_type("follow")

        assert len(encoded) == LINK_TYPE_WIDTH
        assert encoded == b"follow" + b"\x00" * 26

    def test_exact_width_is_accepted(self) -> None:
        """Test a link type of exactly 32 bytes is not padded."""
        encoded = encode_link_type("a" * 32)
        assert encoded == b"a" * 32

    def test_too_long_raises(self) -> None:
        """Test a 33-byte link type is rejected."""
        with pytest.raises(ValueTooLongError) as exc_info:
            encode_link_type("a" * 33)

        assert exc_info.value.max_bytes == LINK_TYPE_WIDTH
        assert exc_info.value.code == "VALUE_TOO_LONG"
        assert exc_info.value.details["size_bytes"] == 33

    def test_length_is_measured_in_bytes(self) -> None:
        """Test multi-byte characters count by their UTF-8 size."""
        # 11 characters, 33 bytes
        with pytest.raises(ValueTooLongError):
            encode_link_type("你" * 11)

    def test_too_long_is_a_validation_error(self) -> None:
        """Test ValueTooLongError can be caught as ValidationError."""
        with pytest.raises(ValidationError):
            encode_link_type("x" * 64)


class TestDecodeLinkType:
    """Tests for decode_link_type."""

    @pytest.mark.parametrize(
        "link_type",
        ["follow", "like", "", "a" * 32, "collect", "你好", "emoji 🔗"],
    )
    def test_round_trip(self, link_type: str) -> None:
        """Test decode(encode(s)) == s for link types that fit."""
        assert decode_link_type(encode_link_type(link_type)) == link_type

    def test_decode_hex_string(self) -> None:
        """Test decoding the hex form returned by RPC nodes."""
        hex_value = "0x" + encode_link_type("follow").hex()
        assert decode_link_type(hex_value) == "follow"

    def test_decode_unprefixed_hex(self) -> None:
        """Test decoding hex without the 0x prefix."""
        assert decode_link_type(encode_link_type("like").hex()) == "like"

    def test_decode_invalid_hex_raises(self) -> None:
        """Test malformed hex is rejected."""
        with pytest.raises(ValidationError):
            decode_link_type("0xzz")

    def test_decode_too_long_raises(self) -> None:
        """Test values wider than 32 bytes are rejected."""
        with pytest.raises(ValidationError):
            decode_link_type(b"a" * 33)

    def test_decode_invalid_utf8_raises(self) -> None:
        """Test bytes that are not UTF-8 are rejected."""
        with pytest.raises(ValidationError):
            decode_link_type(b"\xff\xfe" + b"\x00" * 30)


# =============================================================================
# Id And Data Coercion Tests
# =============================================================================


class TestToInt:
    """Tests for to_int."""

    def test_int_passthrough(self) -> None:
        assert to_int(42) == 42

    def test_decimal_string(self) -> None:
        assert to_int("42") == 42

    def test_hex_string(self) -> None:
        assert to_int("0x2a") == 42

    def test_max_uint256(self) -> None:
        assert to_int(MAX_UINT256) == MAX_UINT256

    @pytest.mark.parametrize("value", [-1, MAX_UINT256 + 1])
    def test_out_of_range(self, value: int) -> None:
        """Test values outside uint256 are rejected."""
        with pytest.raises(ValidationError):
            to_int(value, "character_id")

    @pytest.mark.parametrize("value", ["abc", "", "1.5", True, 1.5, None])
    def test_not_an_integer(self, value) -> None:
        """Test non-integer inputs are rejected with the field name."""
        with pytest.raises(ValidationError) as exc_info:
            to_int(value, "note_id")

        assert exc_info.value.field == "note_id"


class TestToBytes:
    """Tests for to_bytes."""

    def test_none_is_empty(self) -> None:
        assert to_bytes(None) == b""

    def test_bytes_passthrough(self) -> None:
        assert to_bytes(b"\x01\x02") == b"\x01\x02"

    def test_hex_string(self) -> None:
        assert to_bytes("0x0102") == b"\x01\x02"

    def test_invalid_hex(self) -> None:
        with pytest.raises(ValidationError):
            to_bytes("0xnothex")

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValidationError):
            to_bytes(12)  # type: ignore[arg-type]
