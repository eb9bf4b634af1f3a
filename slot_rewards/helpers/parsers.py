"""Parsing utilities for common data transformations."""

import binascii
from decimal import Decimal, localcontext

from slot_rewards.errors import InvalidRequest
from slot_rewards.helpers.constants import DECIMAL_PRECISION, HEAD_SLOT_ID


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Raises:
        ValueError: If hex_value is not valid hex

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def parse_hex_bytes(hex_value: str | None) -> bytes:
    """Decode a hex string (with or without '0x' prefix) to raw bytes.

    Args:
        hex_value: Hex-encoded string or None

    Returns:
        bytes: Decoded bytes, empty for None or "0x"

    Raises:
        ValueError: If hex_value is not valid hex

    Example:
        >>> parse_hex_bytes("0x6275696c64")
        b'build'
    """
    if not hex_value:
        return b""
    try:
        return binascii.unhexlify(hex_value.removeprefix("0x"))
    except binascii.Error as e:
        msg = f"Invalid hex string: {hex_value!r}"
        raise ValueError(msg) from e


def parse_slot_id(raw: str) -> int | str:
    """Parse a slot path segment into a slot number or the head sentinel.

    Args:
        raw: Slot as received in the request path

    Returns:
        int | str: Non-negative slot number, or "head"

    Raises:
        InvalidRequest: If raw is neither a non-negative integer nor "head"

    Example:
        >>> parse_slot_id("100")
        100
        >>> parse_slot_id("head")
        'head'
    """
    value = raw.strip()
    if value == HEAD_SLOT_ID:
        return HEAD_SLOT_ID
    if not value.isascii() or not value.isdigit():
        msg = f"invalid slot: {raw!r}"
        raise InvalidRequest(msg)
    return int(value)


def format_amount(amount: Decimal) -> str:
    """Render a decimal amount in fixed-point notation without trailing zeros.

    Args:
        amount: Decimal amount

    Returns:
        str: Fixed-point string, never in exponent notation

    Example:
        >>> format_amount(Decimal("0.032000"))
        '0.032'
        >>> format_amount(Decimal("32000000000000000"))
        '32000000000000000'
    """
    if amount == 0:
        return "0"
    with localcontext(prec=DECIMAL_PRECISION):
        return format(amount.normalize(), "f")


__all__ = [
    "format_amount",
    "parse_hex_bytes",
    "parse_hex_int",
    "parse_slot_id",
]
