"""
SubGHz - Sub-GHz capture file decoder.
Turns Flipper-style .sub text captures into typed replay commands.
"""

__version__ = "0.1.0"

# File format
FLIPPER_HEADER = "Filetype: Flipper SubGhz"
UTF8_BOM = "\ufeff"

# Recognized keys (matched case-insensitively)
KEY_PROTOCOL = "Protocol"
KEY_PRESET = "Preset"
KEY_FREQUENCY = "Frequency"
KEY_TE = "TE"
KEY_BIT = "Bit"
KEY_BIT_RAW = "Bit_RAW"
KEY_KEY = "Key"
KEY_BINRAW = "BinRAW"
RAW_DATA_KEYS = ("RAW_Data", "Data_RAW")

# Keys that must all be present for a file to count as valid
REQUIRED_KEYS = (KEY_PROTOCOL, KEY_PRESET, KEY_FREQUENCY)

# Integer widths
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF
INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF

# Storage ceiling for decode_file
MAX_FILE_SIZE = 32 * 1024  # 32 KB

# Summary marker for commands without a preset
NO_PRESET = "<no preset>"

from .protocol import Protocol, resolve_protocol, protocol_names
from .command import Command, RawPayload, BinRawPayload, KeyedPayload
from .transformer import SubGhzTransformer, decode_file, read_capture, is_flipper_file
from .summary import format_command, extract_summaries

__all__ = [
    "Protocol",
    "resolve_protocol",
    "protocol_names",
    "Command",
    "RawPayload",
    "BinRawPayload",
    "KeyedPayload",
    "SubGhzTransformer",
    "decode_file",
    "read_capture",
    "is_flipper_file",
    "format_command",
    "extract_summaries",
]
