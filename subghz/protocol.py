"""
Sub-GHz protocol enumeration and name resolution.
"""

from enum import Enum
from typing import Iterable, List

from .parsing import ascii_lower


class Protocol(Enum):
    """Protocol families a decoded command can carry."""

    UNKNOWN = "Unknown"
    RAW = "RAW"
    BINRAW = "BinRAW"
    RCSWITCH = "RcSwitch"
    PRINCETON = "Princeton"

    @classmethod
    def from_name(cls, name: str) -> "Protocol":
        """
        Look up a protocol by a user-supplied name.

        Case-insensitive and tolerant of the common spellings
        (e.g. "bin_raw", "RC-SWITCH", "PT2262"). Unrecognized names map to
        UNKNOWN.
        """
        name = name.strip()
        if not name.isascii():
            return cls.UNKNOWN
        return _ALIASES.get(name.upper(), cls.UNKNOWN)

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "UNKNOWN": Protocol.UNKNOWN,
    "RAW": Protocol.RAW,
    "BINRAW": Protocol.BINRAW,
    "BIN_RAW": Protocol.BINRAW,
    "BIN-RAW": Protocol.BINRAW,
    "RCSWITCH": Protocol.RCSWITCH,
    "RC_SWITCH": Protocol.RCSWITCH,
    "RC-SWITCH": Protocol.RCSWITCH,
    "PRINCETON": Protocol.PRINCETON,
    "PT2262": Protocol.PRINCETON,
}


def resolve_protocol(protocol_str: str) -> Protocol:
    """
    Classify the Protocol field of a capture file.

    Checked in order:
    - "RAW" (any case) -> RAW
    - "BinRAW" (any case) -> BINRAW
    - "RcSwitch" (any case) -> RCSWITCH
    - starts with "Princeton" (case-sensitive, e.g. "Princeton_1527") -> PRINCETON
    - anything else -> UNKNOWN

    Args:
        protocol_str: Trimmed value of the last Protocol line

    Returns:
        Resolved protocol
    """
    folded = ascii_lower(protocol_str)
    if folded == "raw":
        return Protocol.RAW
    if folded == "binraw":
        return Protocol.BINRAW
    if folded == "rcswitch":
        return Protocol.RCSWITCH
    if protocol_str.startswith("Princeton"):
        return Protocol.PRINCETON
    return Protocol.UNKNOWN


def protocol_names(protocols: Iterable[Protocol]) -> List[str]:
    """Display names for a sequence of protocols."""
    return [p.value for p in protocols]
