"""
Line and token parsers for Sub-GHz capture files.

All parsers are strict about what they accept and never raise on bad
input: they return None (or an empty result) and leave it to the caller to
skip the field.
"""

import re
import string
from typing import Iterable, List, Optional, Tuple

from . import UINT16_MAX, UINT32_MAX, UINT64_MAX, INT32_MIN, INT32_MAX

# Characters trimmed from keys and values
_TRIM_CHARS = " \t\r"

_UNSIGNED_RE = re.compile(r"[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_ASCII_WS_RE = re.compile(r"[ \t\r\n\f\v]+")
_HEX_DIGITS = frozenset(string.hexdigits)


def ascii_lower(text: str) -> str:
    """
    Lower-case ASCII letters only.

    Text containing non-ASCII characters is returned unchanged, so it can
    never fold onto an ASCII key name (e.g. the Kelvin sign onto "k").
    """
    return text.lower() if text.isascii() else text


def split_ascii_whitespace(text: str) -> List[str]:
    """Split on ASCII whitespace only; NBSP and friends stay inside tokens."""
    return [token for token in _ASCII_WS_RE.split(text) if token]


def parse_key_value_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a "Key: Value" line at its first colon.

    Args:
        line: One line of the capture file (without the newline)

    Returns:
        (key, value) trimmed of spaces, tabs and carriage returns,
        or None if the line has no colon
    """
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key.strip(_TRIM_CHARS), value.strip(_TRIM_CHARS)


def parse_uint32(token: str) -> Optional[int]:
    """Parse a decimal token as a 32-bit unsigned integer."""
    if not _UNSIGNED_RE.fullmatch(token):
        return None
    value = int(token)
    return value if value <= UINT32_MAX else None


def parse_uint16(token: str) -> Optional[int]:
    """Parse a decimal token as a 16-bit unsigned integer."""
    value = parse_uint32(token)
    if value is None or value > UINT16_MAX:
        return None
    return value


def parse_int(token: str) -> Optional[int]:
    """Parse a decimal token (optional sign) as a 32-bit signed integer."""
    if not _SIGNED_RE.fullmatch(token):
        return None
    value = int(token)
    return value if INT32_MIN <= value <= INT32_MAX else None


def parse_hex_u64(text: str) -> Optional[int]:
    """
    Parse a hex value into a 64-bit unsigned integer.

    Accepts "A1B2C3", "0xA1B2C3" and space/tab separated forms such as
    "00 00 00 00 00 A1 B2 C3".

    Returns:
        Parsed value, or None if empty, non-hex or wider than 64 bits
    """
    digits = text.replace(" ", "").replace("\t", "")
    if digits[:2] in ("0x", "0X"):
        digits = digits[2:]
    if not digits or not _HEX_DIGITS.issuperset(digits):
        return None
    value = int(digits, 16)
    return value if value <= UINT64_MAX else None


def parse_hex_byte_stream(text: str) -> Optional[bytes]:
    """
    Parse a whitespace separated hex byte line, e.g. "A1 b2 0C".

    All-or-nothing: a single token that is not a hex value in 0..255
    rejects the whole line.

    Returns:
        Parsed bytes (possibly empty for a blank line), or None if any
        token is invalid
    """
    out = bytearray()
    for token in split_ascii_whitespace(text):
        value = parse_hex_u64(token)
        if value is None or value > 0xFF:
            return None
        out.append(value)
    return bytes(out)


def join_raw_timings(lines: Iterable[str]) -> List[int]:
    """
    Merge RAW_Data lines into one flat list of signed timings.

    Tokens that do not parse are skipped and zeros are dropped (a trailing
    0 is used as a terminator in some captures). Order is preserved across
    and within lines.
    """
    timings = []
    for line in lines:
        for token in split_ascii_whitespace(line):
            value = parse_int(token)
            if value:
                timings.append(value)
    return timings
