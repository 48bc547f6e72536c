"""
Sub-GHz capture file transformer.

Decodes the line-oriented "Key: Value" capture format into Command objects
in a single forward pass. Malformed input never raises: values that do not
parse are skipped (and logged at DEBUG level) and decoding carries on.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from . import (
    FLIPPER_HEADER,
    UTF8_BOM,
    KEY_PROTOCOL,
    KEY_PRESET,
    KEY_FREQUENCY,
    KEY_TE,
    KEY_BIT,
    KEY_BIT_RAW,
    KEY_KEY,
    KEY_BINRAW,
    RAW_DATA_KEYS,
    REQUIRED_KEYS,
    UINT16_MAX,
    MAX_FILE_SIZE,
)
from .command import Command
from .parsing import (
    ascii_lower,
    parse_key_value_line,
    parse_uint32,
    parse_uint16,
    parse_int,
    parse_hex_u64,
    parse_hex_byte_stream,
    join_raw_timings,
)
from .protocol import Protocol, resolve_protocol
from .summary import extract_summaries

# Module-level logger
_logger = logging.getLogger(__name__)

_RAW_DATA_KEYS = tuple(k.lower() for k in RAW_DATA_KEYS)


@dataclass
class _Accumulator:
    """Field state collected while scanning one file."""

    protocol: str = ""
    preset: str = ""
    frequency_hz: int = 0
    te_us: int = 0
    bit_list: List[int] = field(default_factory=list)
    bit_raw_list: List[int] = field(default_factory=list)
    key_list: List[int] = field(default_factory=list)
    raw_data_lines: List[str] = field(default_factory=list)

    def common(self, source_path: str) -> dict:
        """Fields shared by every command built from the current state."""
        return {
            "preset": self.preset,
            "frequency_hz": self.frequency_hz,
            "te_us": self.te_us,
            "source_file": source_path,
        }


def _iter_fields(content: str):
    """Yield (line_number, key, value) for every line containing a colon."""
    if content.startswith(UTF8_BOM):
        content = content[len(UTF8_BOM):]

    for lineno, line in enumerate(content.split("\n"), start=1):
        parsed = parse_key_value_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key:
            yield lineno, key, value


def _clamp_bits(value: int) -> int:
    return max(0, min(value, UINT16_MAX))


class SubGhzTransformer:
    """
    Converts capture file text into replay commands.

    The transformer holds no state between calls; one instance can be shared
    freely, including across threads.
    """

    def is_valid(self, content: str) -> bool:
        """
        Check that Protocol, Preset and Frequency keys all appear somewhere.

        Purely structural: values are not checked and a valid file can still
        produce no commands.
        """
        if not content:
            return False

        missing = {k.lower() for k in REQUIRED_KEYS}
        for _, key, _ in _iter_fields(content):
            missing.discard(ascii_lower(key))
            if not missing:
                return True
        return False

    def transform(self, content: str, source_path: str = "") -> List[Command]:
        """
        Decode capture text into commands.

        BinRAW lines produce a command immediately, using the preset,
        frequency and TE seen so far. Everything else is accumulated and
        assembled once the whole text has been read.

        Args:
            content: Full capture file text
            source_path: Provenance stamped onto every command

        Returns:
            Commands in emission order (inline BinRAW first, then assembled)
        """
        out: List[Command] = []
        if not content:
            return out

        acc = _Accumulator()

        for lineno, key, value in _iter_fields(content):
            folded = ascii_lower(key)

            if folded == KEY_PROTOCOL.lower():
                acc.protocol = value
            elif folded == KEY_PRESET.lower():
                acc.preset = value
            elif folded == KEY_FREQUENCY.lower():
                hz = parse_uint32(value)
                if hz is None:
                    _logger.debug(f"Line {lineno}: ignoring invalid frequency {value!r}")
                else:
                    acc.frequency_hz = hz
            elif folded == KEY_TE.lower():
                te = parse_uint16(value)
                if te is None:
                    _logger.debug(f"Line {lineno}: ignoring invalid TE {value!r}")
                else:
                    acc.te_us = te
            elif folded == KEY_BIT.lower():
                self._append_int(acc.bit_list, value, lineno, key)
            elif folded == KEY_BIT_RAW.lower():
                self._append_int(acc.bit_raw_list, value, lineno, key)
            elif folded == KEY_KEY.lower():
                k = parse_hex_u64(value)
                if k is None:
                    _logger.debug(f"Line {lineno}: ignoring invalid key {value!r}")
                else:
                    acc.key_list.append(k)
            elif folded == KEY_BINRAW.lower():
                data = parse_hex_byte_stream(value)
                if data is None:
                    _logger.debug(f"Line {lineno}: discarding BinRAW line with invalid hex byte")
                elif data:
                    out.append(Command.binraw(data, **acc.common(source_path)))
            elif folded in _RAW_DATA_KEYS:
                acc.raw_data_lines.append(value)

        self._flush(acc, out, source_path)
        _logger.debug(f"Decoded {len(out)} command(s) from {source_path or '<text>'}")
        return out

    def extract_summaries(self, commands: List[Command]) -> List[str]:
        """Human-readable one-liners for a command sequence."""
        return extract_summaries(commands)

    @staticmethod
    def _append_int(target: List[int], value: str, lineno: int, key: str):
        parsed = parse_int(value)
        if parsed is None:
            _logger.debug(f"Line {lineno}: ignoring invalid {key} value {value!r}")
        else:
            target.append(parsed)

    def _flush(self, acc: _Accumulator, out: List[Command], source_path: str):
        """Assemble accumulated fields into commands, appending to out."""
        protocol = resolve_protocol(acc.protocol)
        common = acc.common(source_path)

        if protocol is Protocol.RAW:
            timings = join_raw_timings(acc.raw_data_lines)
            if timings:
                out.append(Command.raw(timings, **common))
            # RAW wins: Bit/Key lines in a RAW file are not replayed
            if acc.bit_list or acc.bit_raw_list or acc.key_list:
                _logger.debug("RAW protocol: dropping Bit/Key fields")
            return

        # Timings captured under another protocol name still get replayed as RAW
        if acc.raw_data_lines:
            timings = join_raw_timings(acc.raw_data_lines)
            if timings:
                out.append(Command.raw(timings, **common))

        keyed = Protocol.RCSWITCH if protocol is Protocol.UNKNOWN else protocol

        for bits in acc.bit_list + acc.bit_raw_list:
            out.append(Command.keyed(keyed, bits=_clamp_bits(bits), **common))

        for k in acc.key_list:
            out.append(Command.keyed(keyed, key=k, **common))


def is_flipper_file(content: str) -> bool:
    """
    Check for the "Filetype: Flipper SubGhz" header on the first line.

    A leading UTF-8 byte order mark is skipped.
    """
    if content.startswith(UTF8_BOM):
        content = content[len(UTF8_BOM):]
    first_line = content.split("\n", 1)[0].split("\r", 1)[0]
    return FLIPPER_HEADER in first_line


def read_capture(
    file_path: Union[str, Path],
    max_size: Optional[int] = MAX_FILE_SIZE,
) -> str:
    """
    Read capture file text from disk.

    Invalid UTF-8 sequences are replaced rather than rejected.

    Args:
        file_path: Path to the .sub file
        max_size: Largest accepted file size in bytes (None for no limit)

    Raises:
        ValueError: If the file is empty or larger than max_size
    """
    path = Path(file_path)
    size = path.stat().st_size
    if size == 0:
        raise ValueError(f"{path} is empty")
    if max_size is not None and size > max_size:
        raise ValueError(f"{path} is {size} bytes, limit is {max_size}")

    _logger.info(f"Reading {path} ({size} bytes)")
    return path.read_bytes().decode("utf-8", errors="replace")


def decode_file(
    file_path: Union[str, Path],
    max_size: Optional[int] = MAX_FILE_SIZE,
) -> List[Command]:
    """
    Read a capture file from disk and decode it.

    Args:
        file_path: Path to the .sub file (also used as provenance)
        max_size: Largest accepted file size in bytes (None for no limit)

    Returns:
        Decoded commands

    Raises:
        ValueError: If the file is empty or larger than max_size
    """
    text = read_capture(file_path, max_size)
    return SubGhzTransformer().transform(text, str(file_path))
