"""
Decoded Sub-GHz replay command.

A command's payload depends on its protocol: RAW carries signal timings,
BinRAW carries a byte stream and the keyed protocols (RcSwitch, Princeton)
carry a bit count and/or key. The payload is stored as one of three variant
types; the flat attributes (bits, key, raw_timings, bitstream_bytes) read
through to it and return zero/empty when the variant does not carry them.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from . import UINT16_MAX, UINT32_MAX, UINT64_MAX, INT32_MIN, INT32_MAX
from .protocol import Protocol


def _check_range(name: str, value: int, low: int, high: int):
    if not low <= value <= high:
        raise ValueError(f"{name} must be in range {low}..{high}, got {value}")


@dataclass(frozen=True)
class RawPayload:
    """Signed durations in microseconds (positive = high, negative = low)."""

    timings: Tuple[int, ...] = ()

    def __post_init__(self):
        timings = tuple(self.timings)
        for t in timings:
            _check_range("timing", t, INT32_MIN, INT32_MAX)
        object.__setattr__(self, "timings", timings)


@dataclass(frozen=True)
class BinRawPayload:
    """Literal byte stream."""

    data: bytes = b""

    def __post_init__(self):
        # bytes(n) would build n zero bytes
        if isinstance(self.data, int):
            raise ValueError(f"data must be a byte sequence, got int {self.data}")
        # bytes() rejects values outside 0..255
        object.__setattr__(self, "data", bytes(self.data))


@dataclass(frozen=True)
class KeyedPayload:
    """Bit count and/or key for RcSwitch/Princeton style remotes."""

    bits: int = 0
    key: int = 0

    def __post_init__(self):
        _check_range("bits", self.bits, 0, UINT16_MAX)
        _check_range("key", self.key, 0, UINT64_MAX)


Payload = Union[RawPayload, BinRawPayload, KeyedPayload]


@dataclass(frozen=True)
class Command:
    """
    One replayable command decoded from a capture file.

    Attributes:
        protocol: Protocol family
        preset: Modulation/configuration label, passed through as written
        frequency_hz: Carrier frequency in Hz (32-bit unsigned)
        te_us: Base timing unit in microseconds (16-bit unsigned)
        payload: Protocol-specific payload variant
        source_file: Provenance path supplied by the caller
    """

    protocol: Protocol
    preset: str = ""
    frequency_hz: int = 0
    te_us: int = 0
    payload: Optional[Payload] = None
    source_file: str = ""

    def __post_init__(self):
        _check_range("frequency_hz", self.frequency_hz, 0, UINT32_MAX)
        _check_range("te_us", self.te_us, 0, UINT16_MAX)

        # A BinRAW file may also declare Bit lines, which become bit-only commands
        allowed = {
            Protocol.RAW: (RawPayload,),
            Protocol.BINRAW: (BinRawPayload, KeyedPayload),
        }.get(self.protocol, (KeyedPayload,))
        if self.payload is None:
            object.__setattr__(self, "payload", allowed[0]())
        elif not isinstance(self.payload, allowed):
            raise ValueError(
                f"{self.protocol.value} command cannot carry {type(self.payload).__name__}"
            )

    @classmethod
    def raw(cls, timings: Iterable[int], **common) -> "Command":
        """Build a RAW command from signed timings."""
        return cls(Protocol.RAW, payload=RawPayload(tuple(timings)), **common)

    @classmethod
    def binraw(cls, data: Iterable[int], **common) -> "Command":
        """Build a BinRAW command from byte values."""
        return cls(Protocol.BINRAW, payload=BinRawPayload(bytes(data)), **common)

    @classmethod
    def keyed(cls, protocol: Protocol, bits: int = 0, key: int = 0, **common) -> "Command":
        """Build a bit/key carrying command for a keyed (or unresolved) protocol."""
        return cls(protocol, payload=KeyedPayload(bits, key), **common)

    @property
    def bits(self) -> int:
        return self.payload.bits if isinstance(self.payload, KeyedPayload) else 0

    @property
    def key(self) -> int:
        return self.payload.key if isinstance(self.payload, KeyedPayload) else 0

    @property
    def raw_timings(self) -> Tuple[int, ...]:
        return self.payload.timings if isinstance(self.payload, RawPayload) else ()

    @property
    def bitstream_bytes(self) -> bytes:
        return self.payload.data if isinstance(self.payload, BinRawPayload) else b""

    def __repr__(self) -> str:
        return (
            f"Command({self.protocol.value}, preset={self.preset!r}, "
            f"freq={self.frequency_hz}Hz, te={self.te_us}us, payload={self.payload!r})"
        )
