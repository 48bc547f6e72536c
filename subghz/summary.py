"""
Human-readable summaries of decoded commands.
"""

from typing import Iterable, List

from . import NO_PRESET
from .command import Command
from .protocol import Protocol


def format_command(cmd: Command) -> str:
    """
    Format one command as a single line.

    Examples:
        [RAW] FuriHalSubGhzPresetOok650Async @ 433920000Hz timings=512
        [RcSwitch] <no preset> @ 315000000Hz bits=24 key=0xa1b2c3 te=350us
    """
    parts = [f"[{cmd.protocol.value}] {cmd.preset or NO_PRESET} @ {cmd.frequency_hz}Hz"]

    if cmd.protocol is Protocol.RAW:
        parts.append(f"timings={len(cmd.raw_timings)}")
    elif cmd.protocol is Protocol.BINRAW:
        parts.append(f"bytes={len(cmd.bitstream_bytes)}")
    else:
        if cmd.bits:
            parts.append(f"bits={cmd.bits}")
        if cmd.key:
            parts.append(f"key=0x{cmd.key:x}")
        if cmd.te_us:
            parts.append(f"te={cmd.te_us}us")

    return " ".join(parts)


def extract_summaries(commands: Iterable[Command]) -> List[str]:
    """Summaries for a command sequence, in order."""
    return [format_command(c) for c in commands]
