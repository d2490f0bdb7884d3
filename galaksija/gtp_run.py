"""Playing GTP blocks into a modulator, with a report of what was played."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .gtp import Block, BlockId, GtpError
from .modulation import Modulator

_STANDARD_MAGIC = 0xA5
_PLUS_HEADER = 0xFF


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


def run_block(
    block: Block, number: int, modulator: Modulator, out: Optional[TextIO] = None
) -> None:
    """Report block ``number`` and play it if it carries audio data."""
    out = _stream(out)
    print(f"--- block {number} ({len(block.data)} bytes) ---", file=out)
    if block.id == BlockId.STANDARD:
        run_standard(block, modulator, out)
    elif block.id == BlockId.TURBO:
        run_unimplemented(block, out)
    elif block.id == BlockId.NAME:
        run_name(block, out)
    else:
        run_unknown(block, out)


def run_unimplemented(block: Block, out: Optional[TextIO] = None) -> None:
    """Report a known block type that cannot be played."""
    print(
        f"Handling of block ID {block.id:02x} is not implemented. Sorry.",
        file=_stream(out),
    )


def run_unknown(block: Block, out: Optional[TextIO] = None) -> None:
    """Report a block type that is not known at all."""
    print(
        f"Block ID {block.id:02x} is unknown (corrupted file or "
        "outdated version of gtp2wav).",
        file=_stream(out),
    )


def run_name(block: Block, out: Optional[TextIO] = None) -> None:
    """Report the name held in a name block."""
    print(f"          Name: {block.name()}", file=_stream(out))


def run_standard(
    block: Block, modulator: Modulator, out: Optional[TextIO] = None
) -> None:
    """Report and play a standard data block."""
    out = _stream(out)
    data = block.data
    if not data or data[0] != _STANDARD_MAGIC:
        raise GtpError("Corrupted standard block (wrong magic byte).")
    if len(data) < 6:
        raise GtpError("Corrupted standard block (too short).")

    if data[1] == _PLUS_HEADER:
        print("STANDARD DATA BLOCK : Galaksija Plus - header", file=out)
    else:
        print("STANDARD DATA BLOCK : Galaksija", file=out)
        info = block.standard_info()
        print(f"    Start addr: 0x{info.start:04x}", file=out)
        print(f"      End addr: 0x{info.end:04x}", file=out)
        if info.junk:
            print(f"{info.junk} bytes of junk after checksum", file=out)
        elif info.missing:
            print(f"missing {info.missing} bytes in data block", file=out)
        if not info.checksum_ok:
            print("checksum error", file=out)

    modulator.interblock_pause()
    modulator.sync()
    modulator.interbyte_pause()
    print("wait please..", file=out)
    modulator.block(data)