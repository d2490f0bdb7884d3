"""Dump characters from a Galaksija character generator ROM."""

from __future__ import annotations

import getopt
import re
import sys
from pathlib import Path
from typing import Optional, Sequence

CHARNUM = 128
ROMSIZE = 16 * CHARNUM
ROWS = 8
CHAR_LINES = 16

_SYNTAX = """\
Galaksija character generator ROM dump

SYNTAX: chardump [options] chrgen.bin

Options:  -i       Simulate new board (shift register wired
                   in reverse bit order)
          -a NUM   Dump character with ASCII code NUM to stdout.
          -n NUM   Dump character number NUM to stdout.
          -p       Dump all characters in PBM format to stdout."""

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def reverse_bits(value: int) -> int:
    """Reverse the order of the eight low bits of ``value``."""
    result = 0
    for _ in range(8):
        result = (result << 1) | (value & 0x01)
        value >>= 1
    return result


def ascii_to_num(code: int) -> int:
    """Map a video RAM character code to its index in the character ROM."""
    return (code & 0x3F) | ((code & 0x80) >> 1)


def _rom_byte(rom: bytes, line: int, charcode: int) -> int:
    offset = (line << 7) + charcode
    if offset >= len(rom):
        raise ValueError("character ROM too short")
    return rom[offset]


def _ascii_line(value: int, invert: bool) -> str:
    if invert:
        value = reverse_bits(value)
    return "".join("." if (value >> bit) & 0x01 else "#" for bit in range(8))


def ascii_dump(rom: bytes, charcode: int, invert: bool = False) -> str:
    """Render character number ``charcode`` as text, one line per ROM row."""
    return "".join(
        f"0x{line:02X} | {_ascii_line(_rom_byte(rom, line, charcode), invert)}\n"
        for line in range(CHAR_LINES)
    )


def pbm_dump(rom: bytes, invert: bool = False) -> bytes:
    """Render every character as one raw PBM (P4) image."""
    columns = CHARNUM // ROWS + (1 if CHARNUM % ROWS else 0)
    width = (8 + 8) * ROWS - 8
    height = (CHAR_LINES + 8) * columns - 8
    out = bytearray(f"P4 {width} {height}\n".encode("ascii"))
    for y in range(height):
        line = y % (CHAR_LINES + 8)
        for x in range(width // 8):
            if line < CHAR_LINES and x % 2 == 0:
                charcode = x // 2 + y // 24 * ROWS
                value = _rom_byte(rom, line, charcode)
                out.append(value if invert else reverse_bits(value))
            else:
                out.append(0xFF)
    return bytes(out)


def _parse_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        options, args = getopt.gnu_getopt(argv, "hia:n:p")
    except getopt.GetoptError:
        print(_SYNTAX)
        return 0

    invert = False
    mode: Optional[str] = None
    charcode = 0
    for option, value in options:
        if option == "-h":
            print(_SYNTAX)
            return 0
        if option == "-i":
            invert = True
        elif option == "-a":
            parsed = _parse_int(value)
            if parsed is None or not 0 <= parsed <= 255:
                print(f"Invalid ASCII code '{value}'")
                return 1
            charcode, mode = parsed, "ascii"
        elif option == "-n":
            parsed = _parse_int(value)
            if parsed is None or not 0 <= parsed <= 127:
                print(f"Invalid character code '{value}'")
                return 1
            charcode, mode = parsed, "num"
        elif option == "-p":
            mode = "pbm"

    if not args:
        print(_SYNTAX)
        return 0

    try:
        rom = Path(args[0]).read_bytes()
    except OSError as exc:
        print("open failed!", file=sys.stderr)
        print(f"chardump: {exc}", file=sys.stderr)
        return 1

    try:
        if mode == "ascii":
            print(ascii_dump(rom, ascii_to_num(charcode), invert), end="")
        elif mode == "num":
            print(ascii_dump(rom, charcode, invert), end="")
        elif mode == "pbm":
            image = pbm_dump(rom, invert)
            sys.stdout.flush()
            sys.stdout.buffer.write(image)
            sys.stdout.buffer.flush()
        else:
            print(_SYNTAX)
    except ValueError as exc:
        print(f"chardump: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())