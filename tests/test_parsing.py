"""
Tests for line and token parsers.
"""

from subghz.parsing import (
    ascii_lower,
    split_ascii_whitespace,
    parse_key_value_line,
    parse_uint32,
    parse_uint16,
    parse_int,
    parse_hex_u64,
    parse_hex_byte_stream,
    join_raw_timings,
)


class TestKeyValueLine:
    """Test "Key: Value" splitting."""

    def test_basic_split(self):
        """Test basic key/value split."""
        assert parse_key_value_line("Frequency: 433920000") == ("Frequency", "433920000")

    def test_trims_spaces_tabs_and_cr(self):
        """Test trimming of spaces, tabs and CR."""
        assert parse_key_value_line(" \tPreset :\t FuriHalSubGhzPresetOok650Async \r") == (
            "Preset",
            "FuriHalSubGhzPresetOok650Async",
        )

    def test_splits_at_first_colon(self):
        """Test that only the first colon separates."""
        assert parse_key_value_line("Filetype: Flipper: SubGhz") == ("Filetype", "Flipper: SubGhz")

    def test_no_colon(self):
        """Test lines without a colon."""
        assert parse_key_value_line("just some text") is None
        assert parse_key_value_line("") is None

    def test_empty_value(self):
        """Test a key with an empty value."""
        assert parse_key_value_line("Key:") == ("Key", "")


class TestDecimal:
    """Test strict decimal parsing."""

    def test_uint32(self):
        """Test valid 32-bit unsigned values."""
        assert parse_uint32("0") == 0
        assert parse_uint32("433920000") == 433920000
        assert parse_uint32("4294967295") == 0xFFFFFFFF

    def test_uint32_rejects(self):
        """Test rejected 32-bit unsigned tokens."""
        assert parse_uint32("") is None
        assert parse_uint32("4294967296") is None
        assert parse_uint32("433.92") is None
        assert parse_uint32("433920000Hz") is None
        assert parse_uint32("-1") is None
        assert parse_uint32("1_000") is None

    def test_uint16(self):
        """Test 16-bit unsigned limit."""
        assert parse_uint16("400") == 400
        assert parse_uint16("65535") == 0xFFFF
        assert parse_uint16("65536") is None

    def test_int(self):
        """Test signed values."""
        assert parse_int("24") == 24
        assert parse_int("-5") == -5
        assert parse_int("+7") == 7
        assert parse_int("-2147483648") == -2147483648

    def test_int_rejects(self):
        """Test rejected signed tokens."""
        assert parse_int("24x") is None
        assert parse_int("-") is None
        assert parse_int("2147483648") is None
        assert parse_int(" 3") is None


class TestHex:
    """Test hex parsing."""

    def test_plain_and_prefixed(self):
        """Test plain and 0x-prefixed hex."""
        assert parse_hex_u64("A1B2C3") == 0xA1B2C3
        assert parse_hex_u64("0xa1b2c3") == 0xA1B2C3
        assert parse_hex_u64("0XA1B2C3") == 0xA1B2C3

    def test_internal_whitespace(self):
        """Test hex with embedded whitespace."""
        assert parse_hex_u64("00 00 00 00 00 A1 B2 C3") == 0xA1B2C3
        assert parse_hex_u64("A1\tB2") == 0xA1B2

    def test_rejects(self):
        """Test rejected hex tokens."""
        assert parse_hex_u64("") is None
        assert parse_hex_u64("0x") is None
        assert parse_hex_u64("G1") is None
        assert parse_hex_u64("A_B") is None

    def test_64bit_limit(self):
        """Test 64-bit overflow."""
        assert parse_hex_u64("FFFFFFFFFFFFFFFF") == 0xFFFFFFFFFFFFFFFF
        assert parse_hex_u64("1" + "0" * 16) is None


class TestHexByteStream:
    """Test BinRAW byte lines."""

    def test_valid_line(self):
        """Test a valid byte line."""
        assert parse_hex_byte_stream("A1 b2 0C") == bytes([0xA1, 0xB2, 0x0C])

    def test_single_digit_bytes(self):
        """Test one-digit bytes."""
        assert parse_hex_byte_stream("1 F") == bytes([0x01, 0x0F])

    def test_invalid_token_discards_line(self):
        """Test that a bad token discards the line."""
        assert parse_hex_byte_stream("A1 B2 ZZ") is None

    def test_value_above_byte_discards_line(self):
        """Test that a value above 0xFF discards the line."""
        assert parse_hex_byte_stream("A1 1FF") is None

    def test_blank_line(self):
        """Test a blank byte line."""
        assert parse_hex_byte_stream("") == b""


class TestJoinRawTimings:
    """Test RAW_Data timing merge."""

    def test_drops_zeros(self):
        """Test that zero timings are dropped."""
        assert join_raw_timings(["100 -200 300 0"]) == [100, -200, 300]

    def test_preserves_order_across_lines(self):
        """Test ordering across lines and tabs."""
        lines = ["100 -200", "300\t-400", "  500  "]
        assert join_raw_timings(lines) == [100, -200, 300, -400, 500]

    def test_skips_bad_tokens(self):
        """Test that bad tokens are skipped."""
        assert join_raw_timings(["100 abc -200 3.5 300"]) == [100, -200, 300]

    def test_empty(self):
        """Test empty input."""
        assert join_raw_timings([]) == []
        assert join_raw_timings(["", "0 0"]) == []


class TestAsciiHelpers:
    """Test ASCII-only case folding and splitting."""

    def test_ascii_lower(self):
        """Test that ASCII text is lower-cased."""
        assert ascii_lower("Bit_RAW") == "bit_raw"

    def test_ascii_lower_leaves_non_ascii(self):
        """Test that a Kelvin sign is not folded to k."""
        assert ascii_lower("\u212aey") == "\u212aey"

    def test_split_ascii_whitespace(self):
        """Test splitting on spaces, tabs and other ASCII whitespace."""
        assert split_ascii_whitespace(" 1\t-2\r\n3\x0b4\x0c5 ") == ["1", "-2", "3", "4", "5"]
        assert split_ascii_whitespace("") == []

    def test_nbsp_is_not_a_separator(self):
        """Test that a non-breaking space stays inside its token."""
        assert split_ascii_whitespace("A1\u00a0B2 C3") == ["A1\u00a0B2", "C3"]
        assert join_raw_timings(["100\u00a0-200 300"]) == [300]
        assert parse_hex_byte_stream("A1\u00a0B2") is None
