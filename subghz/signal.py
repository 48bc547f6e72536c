"""
Array views of decoded payloads for a replay subsystem.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .command import Command
from .protocol import Protocol


@dataclass(frozen=True)
class PulseStats:
    """Timing statistics of a RAW command (microseconds)."""

    count: int
    high_us: int
    low_us: int
    total_us: int
    shortest_us: int


def timings_array(cmd: Command) -> np.ndarray:
    """RAW timings as an int32 array (empty for other protocols)."""
    return np.asarray(cmd.raw_timings, dtype=np.int32)


def bitstream_bits(cmd: Command) -> np.ndarray:
    """
    BinRAW bytes expanded to individual bits, MSB first.

    Returns:
        uint8 array of 0/1 values (empty for other protocols)
    """
    data = np.frombuffer(cmd.bitstream_bytes, dtype=np.uint8)
    return np.unpackbits(data)


def pulse_stats(cmd: Command) -> Optional[PulseStats]:
    """
    Summarize the durations of a RAW command.

    Positive timings are counted as high time, negative as low time.

    Returns:
        PulseStats, or None if cmd is not a RAW command with timings
    """
    if cmd.protocol is not Protocol.RAW or not cmd.raw_timings:
        return None

    timings = timings_array(cmd).astype(np.int64)
    magnitudes = np.abs(timings)
    high = int(timings[timings > 0].sum())
    low = int(-timings[timings < 0].sum())

    return PulseStats(
        count=len(timings),
        high_us=high,
        low_us=low,
        total_us=high + low,
        shortest_us=int(magnitudes.min()),
    )
