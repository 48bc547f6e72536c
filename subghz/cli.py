#!/usr/bin/env python3
"""
SubGHz Decoder CLI - Decode .sub capture files and list their commands.
"""

import logging
import sys

import click

from . import MAX_FILE_SIZE
from .protocol import Protocol
from .signal import pulse_stats
from .summary import format_command
from .transformer import SubGhzTransformer, is_flipper_file, read_capture


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "-p", "--protocol",
    type=str,
    default=None,
    help="Only show commands of this protocol (e.g. RAW, BinRAW, RcSwitch, PT2262)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Skip files missing a Protocol, Preset or Frequency line",
)
@click.option(
    "--stats",
    is_flag=True,
    help="Show pulse statistics for RAW commands",
)
@click.option(
    "--max-size",
    type=int,
    default=MAX_FILE_SIZE,
    help=f"Largest accepted file size in bytes (default: {MAX_FILE_SIZE})",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with detailed logging",
)
def main(files: tuple, protocol: str | None, strict: bool, stats: bool, max_size: int, verbose: bool):
    """
    Decode Sub-GHz capture files into replay commands.

    Examples:

        subghz-decode garage.sub

        subghz-decode captures/*.sub --strict

        subghz-decode remote.sub -p princeton --stats
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    wanted = None
    if protocol:
        wanted = Protocol.from_name(protocol)
        if wanted is Protocol.UNKNOWN and protocol.strip().upper() != "UNKNOWN":
            click.echo(f"Error: unrecognized protocol filter {protocol!r}", err=True)
            sys.exit(1)
    transformer = SubGhzTransformer()
    total = 0

    for path in files:
        click.echo(f"{path}")
        click.echo("-" * 40)

        try:
            text = read_capture(path, max_size)
        except (OSError, ValueError) as e:
            click.echo(f"Error reading file: {e}", err=True)
            continue

        if not is_flipper_file(text):
            click.echo("  (no 'Filetype: Flipper SubGhz' header)")

        if strict and not transformer.is_valid(text):
            click.echo("Skipped: missing Protocol, Preset or Frequency", err=True)
            continue

        commands = transformer.transform(text, path)
        if wanted is not None:
            commands = [c for c in commands if c.protocol is wanted]

        if not commands:
            click.echo("  No commands decoded.")
            continue

        for i, cmd in enumerate(commands, start=1):
            click.echo(f"  {i:3d}. {format_command(cmd)}")
            if stats:
                ps = pulse_stats(cmd)
                if ps is not None:
                    click.echo(
                        f"       pulses={ps.count} high={ps.high_us}us "
                        f"low={ps.low_us}us total={ps.total_us}us shortest={ps.shortest_us}us"
                    )

        total += len(commands)

    click.echo(f"\n{total} command(s) from {len(files)} file(s)")
    if total == 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
