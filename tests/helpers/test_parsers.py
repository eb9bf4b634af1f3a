"""Tests for parsing utilities."""

from decimal import Decimal

import pytest

from slot_rewards.errors import InvalidRequest
from slot_rewards.helpers.parsers import (
    format_amount,
    parse_hex_bytes,
    parse_hex_int,
    parse_slot_id,
)


class TestParseHexInt:
    """Tests for parse_hex_int function."""

    def test_parses_prefixed_hex(self) -> None:
        """Test parsing a 0x-prefixed quantity."""
        assert parse_hex_int("0xff") == 255

    def test_none_returns_default(self) -> None:
        """Test None falls back to the default."""
        assert parse_hex_int(None) == 0
        assert parse_hex_int(None, 7) == 7

    def test_invalid_hex_raises(self) -> None:
        """Test non-hex input raises ValueError."""
        with pytest.raises(ValueError):
            parse_hex_int("0xzz")


class TestParseHexBytes:
    """Tests for parse_hex_bytes function."""

    def test_decodes_extra_data(self) -> None:
        """Test decoding builder extra data."""
        assert parse_hex_bytes("0x" + b"beaverbuild.org".hex()) == b"beaverbuild.org"

    def test_without_prefix(self) -> None:
        """Test decoding hex without 0x prefix."""
        assert parse_hex_bytes("6275696c64") == b"build"

    def test_empty_values(self) -> None:
        """Test empty inputs decode to empty bytes."""
        assert parse_hex_bytes("0x") == b""
        assert parse_hex_bytes("") == b""
        assert parse_hex_bytes(None) == b""

    def test_odd_length_raises(self) -> None:
        """Test odd-length hex raises ValueError."""
        with pytest.raises(ValueError, match="Invalid hex string"):
            parse_hex_bytes("0xabc")


class TestParseSlotId:
    """Tests for parse_slot_id function."""

    def test_numeric_slot(self) -> None:
        """Test a decimal slot parses to int."""
        assert parse_slot_id("100") == 100
        assert parse_slot_id("0") == 0

    def test_head_sentinel(self) -> None:
        """Test 'head' is passed through."""
        assert parse_slot_id("head") == "head"

    @pytest.mark.parametrize("raw", ["", "-1", "abc", "1.5", "0x10", "١٢"])
    def test_invalid_slot_raises(self, raw: str) -> None:
        """Test non-decimal and negative slots are rejected."""
        with pytest.raises(InvalidRequest, match="invalid slot"):
            parse_slot_id(raw)

    def test_invalid_slot_status_code(self) -> None:
        """Test the raised error maps to HTTP 400."""
        with pytest.raises(InvalidRequest) as exc_info:
            parse_slot_id("nope")
        assert exc_info.value.status_code == 400


class TestFormatAmount:
    """Tests for format_amount function."""

    def test_strips_trailing_zeros(self) -> None:
        """Test trailing zeros are not forced."""
        assert format_amount(Decimal("0.032000")) == "0.032"

    def test_large_integer_has_no_exponent(self) -> None:
        """Test large integral amounts stay in fixed-point notation."""
        assert format_amount(Decimal("32000000000000000")) == "32000000000000000"
        assert format_amount(Decimal("3.2E+16")) == "32000000000000000"

    def test_uint256_wei_is_not_rounded(self) -> None:
        """Test amounts beyond the default decimal precision keep every digit."""
        assert format_amount(Decimal(2**256 - 1)) == str(2**256 - 1)

    def test_small_fraction_has_no_exponent(self) -> None:
        """Test tiny amounts stay in fixed-point notation."""
        assert format_amount(Decimal("8.55E-13")) == "0.000000000000855"

    def test_zero(self) -> None:
        """Test zero renders as '0'."""
        assert format_amount(Decimal("0E-9")) == "0"
        assert format_amount(Decimal(0)) == "0"

    def test_negative(self) -> None:
        """Test negative amounts keep their sign."""
        assert format_amount(Decimal("-0.5")) == "-0.5"
