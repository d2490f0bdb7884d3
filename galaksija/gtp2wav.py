"""Convert Galaksija tape (GTP) files into WAV audio."""

from __future__ import annotations

import argparse
import io
import os
import re
import sys
from typing import Optional, Sequence, TextIO, Union

from .gtp import GtpError, read_blocks
from .gtp_run import run_block
from .modulation import ModulationError, Modulator

DEFAULT_SAMPLERATE = 11025
DEFAULT_BITS = 8

_SYNTAX = """\
GTP2WAV, Convert Galaksija Tape files to WAV audio

SYNTAX: gtp2wav [ options ] -o out-file.wav in-file.gtp

Available options:	-r rate		Desired sample rate [11025 Hz]
			-s size		Sample size [8 bits]
			-f		Try to continue even if errors were
					found in the GTP file [off]
"""

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def convert(
    infile: Union[str, os.PathLike],
    outfile: Union[str, os.PathLike],
    samplerate: int = DEFAULT_SAMPLERATE,
    bits: int = DEFAULT_BITS,
    force: bool = False,
    out: Optional[TextIO] = None,
) -> int:
    """Play every block of ``infile`` and write the audio to ``outfile``.

    Returns the number of blocks played. A read error stops the tape;
    the audio gathered so far is written, and the error is raised again
    unless ``force`` is set.
    """
    out = sys.stdout if out is None else out
    modulator = Modulator(samplerate, bits)
    count = 0
    failure: Optional[OSError] = None
    with open(infile, "rb") as stream:
        blocks = read_blocks(stream)
        while True:
            try:
                block = next(blocks, None)
            except OSError as exc:
                failure = exc
                break
            if block is None:
                break
            count += 1
            try:
                run_block(block, count, modulator, out)
            except GtpError as exc:
                print(exc, file=out)
    modulator.write(outfile)
    if failure is not None:
        if not force:
            raise failure
        print(f"gtp2wav: {failure}", file=sys.stderr)
    return count


def _parse_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(prog="gtp2wav", add_help=False)
    parser.add_argument("-h", action="store_true", dest="help")
    parser.add_argument("-o", dest="output")
    parser.add_argument("-f", action="store_true", dest="force")
    parser.add_argument("-r", dest="rate")
    parser.add_argument("-s", dest="size")
    parser.add_argument("inputs", nargs="*")
    args = parser.parse_args(argv)

    if args.help:
        print(_SYNTAX)
        return 0

    samplerate = DEFAULT_SAMPLERATE
    if args.rate is not None:
        samplerate = _parse_int(args.rate)
        if samplerate is None:
            print(f"Invalid sample rate '{args.rate}'", file=sys.stderr)
            return 1

    bits = DEFAULT_BITS
    if args.size is not None:
        bits = _parse_int(args.size)
        if bits is None:
            print(f"Invalid sample size '{args.size}'", file=sys.stderr)
            return 1

    if not args.inputs:
        print("Missing input file name. Try -h for help")
        return 1
    if args.output is None:
        print("Missing output file name. Try -h for help")
        return 1

    try:
        convert(args.inputs[0], args.output, samplerate, bits, args.force)
    except (OSError, ModulationError) as exc:
        print(f"gtp2wav: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())