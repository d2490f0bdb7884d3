"""Encoding of Galaksija BASIC program text into its in-memory form."""

from __future__ import annotations

import os
import re
import struct
from typing import Iterable, Iterator, Optional, Union

# Enough for Galaksija's 128-byte input buffer; longer lines are read in pieces.
MAX_LINE_LEN = 256

_BLANK = " \t"
_NUMBER = re.compile(r"[+-]?\d+")


class BasicError(ValueError):
    """Raised for BASIC text that cannot be encoded."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(message if line is None else f"{message} (at line {line})")


def _tokenize(line: str) -> tuple[int, str]:
    line = line.split("\n", 1)[0]
    rest = line.lstrip(_BLANK)
    if not rest:
        raise BasicError("No BASIC line number found")
    cut = len(rest)
    for pos, ch in enumerate(rest):
        if ch in _BLANK:
            cut = pos
            break
    number_text, content = rest[:cut], rest[cut + 1 :].lstrip(_BLANK)
    if not content:
        raise BasicError("Empty BASIC line")
    match = _NUMBER.match(number_text)
    if match is None:
        raise BasicError("BASIC line number not an integer")
    return int(match.group()), content


def parse_line(line: str) -> bytes:
    """Encode one ``NUMBER CONTENT`` line of BASIC text."""
    number, content = _tokenize(line)
    if not 0 <= number <= 0xFFFF:
        raise BasicError("BASIC line number out of range")
    encoded = "".join(ch.upper() if "a" <= ch <= "z" else ch for ch in content)
    if any(not " " <= ch <= "_" for ch in encoded):
        raise BasicError("BASIC line contains invalid characters")
    return struct.pack("<H", number) + encoded.encode("ascii") + b"\r"


def _pieces(lines: Iterable[str]) -> Iterator[str]:
    limit = MAX_LINE_LEN - 1
    for line in lines:
        while len(line) > limit:
            yield line[:limit]
            line = line[limit:]
        if line:
            yield line


def encode_program(lines: Iterable[str]) -> bytes:
    """Encode a sequence of BASIC lines into one program image."""
    parts = []
    for number, piece in enumerate(_pieces(lines), start=1):
        try:
            parts.append(parse_line(piece))
        except BasicError as exc:
            raise BasicError(exc.message, number) from None
    if not parts:
        raise BasicError("Empty BASIC file")
    return b"".join(parts)


def read_basic(filename: Union[str, os.PathLike]) -> bytes:
    """Read and encode a BASIC program from a text file."""
    with open(filename, "rb") as f:
        return encode_program(raw.decode("latin-1") for raw in f)