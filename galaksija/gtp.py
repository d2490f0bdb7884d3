"""Galaksija Tape (GTP) container: blocks, reading, writing and inspection."""

from __future__ import annotations

import enum
import struct
import warnings
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Union

_HEADER = struct.Struct("<BI")
_STANDARD_MAGIC = 0xA5
_STANDARD_OVERHEAD = 6


class BlockId(enum.IntEnum):
    """Known GTP block identifiers."""

    STANDARD = 0x00
    TURBO = 0x01
    NAME = 0x10


class GtpError(Exception):
    """Raised for malformed GTP blocks."""


@dataclass(frozen=True)
class StandardInfo:
    """What a standard data block says about itself."""

    start: int
    end: int
    junk: int
    missing: int
    checksum_ok: bool


def _checksum(data: bytes) -> int:
    return (0xFF - sum(data)) & 0xFF


@dataclass
class Block:
    """A single GTP block: an identifier and its payload."""

    id: int
    data: bytes

    def to_bytes(self) -> bytes:
        """Serialize the block with its five-byte header."""
        return _HEADER.pack(self.id & 0xFF, len(self.data) & 0xFFFFFFFF) + bytes(self.data)

    def write(self, stream: BinaryIO) -> None:
        """Write the serialized block to a binary stream."""
        stream.write(self.to_bytes())

    def name(self) -> str:
        """Return the name stored in a name block."""
        if not self.data or self.data[-1] != 0:
            raise GtpError("Corrupted name block. Not NULL terminated.")
        raw = self.data.split(b"\0", 1)[0]
        return raw.decode("utf-8", errors="surrogateescape")

    def standard_info(self) -> StandardInfo:
        """Decode addresses and verify the checksum of a standard block."""
        data = self.data
        if len(data) < _STANDARD_OVERHEAD:
            raise GtpError("Corrupted standard block (too short).")
        start, end = struct.unpack_from("<HH", data, 1)
        blocklen = (end - start) & 0xFFFFFFFF
        datalen = len(data) - _STANDARD_OVERHEAD
        junk = max(datalen - blocklen, 0)
        missing = max(blocklen - datalen, 0)
        datalen = min(datalen, blocklen)
        stored = data[datalen + 5]
        return StandardInfo(
            start=start,
            end=end,
            junk=junk,
            missing=missing,
            checksum_ok=_checksum(data[: datalen + 5]) == stored,
        )


def read_block(stream: BinaryIO) -> Optional[Block]:
    """Read the next block, or return None at the end of the tape.

    A truncated header or payload at the end of the stream is ignored
    with a warning.
    """
    header = stream.read(_HEADER.size)
    if not header:
        return None
    if len(header) != _HEADER.size:
        warnings.warn(
            "Incomplete block header at the end of file. Ignoring.", stacklevel=2
        )
        return None
    block_id, length = _HEADER.unpack(header)
    data = stream.read(length)
    if len(data) != length:
        warnings.warn("Incomplete block at the end of file. Ignoring.", stacklevel=2)
        return None
    return Block(block_id, data)


def read_blocks(stream: BinaryIO) -> Iterator[Block]:
    """Yield every block of a tape in order."""
    while (block := read_block(stream)) is not None:
        yield block


def name_block(name: Union[str, bytes]) -> Block:
    """Create a name block holding a NUL-terminated name."""
    raw = name if isinstance(name, bytes) else name.encode("utf-8", errors="surrogateescape")
    return Block(BlockId.NAME, raw + b"\0")


def standard_block(start: int, data: bytes) -> Block:
    """Create a standard data block loading ``data`` at address ``start``."""
    end = start + len(data)
    body = bytes([_STANDARD_MAGIC]) + struct.pack("<HH", start & 0xFFFF, end & 0xFFFF) + bytes(data)
    return Block(BlockId.STANDARD, body + bytes([_checksum(body)]))