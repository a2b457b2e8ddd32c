"""Encoding helpers for contract arguments.

Link types travel on chain as ``bytes32``: the UTF-8 string, right-padded
with zero bytes. Numeric ids accept ints as well as decimal or ``0x`` hex
strings, the way ids come back from JSON APIs.
"""

from typing import Union

from crossbell.constants import LINK_TYPE_WIDTH, MAX_UINT256
from crossbell.errors import ValidationError, ValueTooLongError

Numberish = Union[int, str]


def encode_link_type(link_type: str) -> bytes:
    """Encode a link type into its fixed-width on-chain form.

    Args:
        link_type: Human-readable link type, e.g. ``"follow"``

    Returns:
        Exactly ``LINK_TYPE_WIDTH`` bytes

    Raises:
        ValueTooLongError: If the UTF-8 encoding is longer than the width
    """
    raw = link_type.encode("utf-8")
    if len(raw) > LINK_TYPE_WIDTH:
        raise ValueTooLongError(link_type, max_bytes=LINK_TYPE_WIDTH, field="link_type")
    return raw.ljust(LINK_TYPE_WIDTH, b"\x00")


def decode_link_type(value: Union[bytes, str]) -> str:
    """Decode a fixed-width link type back into a string.

    Accepts raw bytes or a ``0x``-prefixed hex string as returned by RPC
    nodes. Trailing zero bytes are stripped.
    """
    if isinstance(value, str):
        hex_str = value[2:] if value.startswith("0x") else value
        try:
            value = bytes.fromhex(hex_str)
        except ValueError:
            raise ValidationError(
                "link type must be bytes or a hex string", field="link_type"
            ) from None
    if len(value) > LINK_TYPE_WIDTH:
        raise ValidationError(
            f"link type must be at most {LINK_TYPE_WIDTH} bytes", field="link_type"
        )
    try:
        return bytes(value).rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError("link type is not valid UTF-8", field="link_type") from None


def to_int(value: Numberish, field: str = "value") -> int:
    """Coerce an id-like value into a uint256-range int."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer", field=field)

    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            result = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError:
            raise ValidationError(f"{field} must be an integer, got {value!r}", field=field) from None
    else:
        raise ValidationError(f"{field} must be an integer, got {type(value).__name__}", field=field)

    if result < 0 or result > MAX_UINT256:
        raise ValidationError(f"{field} is outside the uint256 range", field=field)
    return result


def to_bytes(value: Union[bytes, str, None], field: str = "data") -> bytes:
    """Coerce module data (raw bytes or ``0x`` hex) into bytes; ``None`` is empty."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        hex_str = value[2:] if value.startswith("0x") else value
        try:
            return bytes.fromhex(hex_str)
        except ValueError:
            raise ValidationError(f"{field} must be a hex string", field=field) from None
    raise ValidationError(f"{field} must be bytes or a hex string", field=field)
