"""Convert a portable graymap into Galaksija pseudo-graphic screen bytes."""

from __future__ import annotations

import getopt
import sys
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Sequence

_WHITESPACE = b" \t\n\r\v\f"

_SYNTAX = """\
PGM2SCR, Convert a portable graymap to Galaksija framebuffer

SYNTAX: pgm2scr [ options ] in-file.pgm

Available options:	-a	Output assembler directives
"""


class PgmError(ValueError):
    """Raised for images that cannot be read."""


@dataclass
class GrayImage:
    """A grayscale image as rows of pixel values."""

    width: int
    height: int
    maxval: int
    pixels: List[List[int]]


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def skip(self) -> None:
        data = self.data
        while self.pos < len(data):
            ch = data[self.pos : self.pos + 1]
            if ch == b"#":
                end = data.find(b"\n", self.pos)
                self.pos = len(data) if end < 0 else end + 1
            elif ch in _WHITESPACE:
                self.pos += 1
            else:
                break

    def token(self) -> bytes:
        self.skip()
        start = self.pos
        data = self.data
        while (
            self.pos < len(data)
            and data[self.pos : self.pos + 1] not in _WHITESPACE
            and data[self.pos : self.pos + 1] != b"#"
        ):
            self.pos += 1
        if start == self.pos:
            raise PgmError("Unexpected end of image")
        return data[start : self.pos]

    def integer(self) -> int:
        tok = self.token()
        if not tok.isdigit():
            raise PgmError(f"Expected a number, found {tok!r}")
        return int(tok)

    def bit(self) -> int:
        self.skip()
        ch = self.data[self.pos : self.pos + 1]
        if ch not in (b"0", b"1"):
            raise PgmError("Bad bitmap data")
        self.pos += 1
        return int(ch)

    def raster(self, size: int) -> bytes:
        # Exactly one whitespace byte separates the header from raw data.
        self.pos += 1
        chunk = self.data[self.pos : self.pos + size]
        if len(chunk) != size:
            raise PgmError("Unexpected end of image")
        self.pos += size
        return chunk


def read_pgm(stream: BinaryIO) -> GrayImage:
    """Read a PGM (P2, P5) or PBM (P1, P4) image from a binary stream."""
    reader = _Reader(stream.read())
    magic = reader.data[:2]
    if magic not in (b"P1", b"P2", b"P4", b"P5"):
        raise PgmError("Not a PGM or PBM image")
    reader.pos = 2
    width = reader.integer()
    height = reader.integer()
    if width <= 0 or height <= 0:
        raise PgmError("Invalid image size")

    if magic in (b"P1", b"P4"):
        maxval = 1
        if magic == b"P1":
            bits = [[reader.bit() for _ in range(width)] for _ in range(height)]
        else:
            stride = (width + 7) // 8
            raw = reader.raster(stride * height)
            bits = [
                [
                    (raw[row * stride + col // 8] >> (7 - col % 8)) & 1
                    for col in range(width)
                ]
                for row in range(height)
            ]
        # In a bitmap 1 is black, which is gray level 0.
        pixels = [[1 - b for b in row] for row in bits]
        return GrayImage(width, height, maxval, pixels)

    maxval = reader.integer()
    if not 0 < maxval <= 0xFFFF:
        raise PgmError("Invalid maximum gray value")

    if magic == b"P2":
        pixels = [[reader.integer() for _ in range(width)] for _ in range(height)]
    else:
        depth = 1 if maxval < 256 else 2
        raw = reader.raster(width * height * depth)
        values = (
            list(raw)
            if depth == 1
            else [int.from_bytes(raw[i : i + 2], "big") for i in range(0, len(raw), 2)]
        )
        pixels = [values[row * width : (row + 1) * width] for row in range(height)]

    if any(value > maxval for row in pixels for value in row):
        raise PgmError("Pixel value exceeds maximum gray value")
    return GrayImage(width, height, maxval, pixels)


def convert_char(image: GrayImage, x: int, y: int) -> int:
    """Encode the 2x3 pixel cell at (x, y) as a pseudo-graphic character."""
    result = 0
    mask = 1
    for m in range(3):
        for n in range(2):
            if image.pixels[y + m][x + n] != 0:
                result |= mask
            mask <<= 1
    return result | 0xC0


def _cells(image: GrayImage):
    for y in range(image.height // 3):
        yield y, [convert_char(image, x * 2, y * 3) for x in range(image.width // 2)]


def convert_bin(image: GrayImage) -> bytes:
    """Return the screen bytes for the image, row by row."""
    return b"".join(bytes(row) for _, row in _cells(image))


def convert_asm(image: GrayImage, name: str) -> str:
    """Return the screen bytes as assembler ``db`` directives."""
    lines = [
        "; Made with pgm2scr",
        f"; {name} ({image.width} x {image.height} pixels, "
        f"{image.width // 2} x {image.height // 3} chars)",
        ";",
    ]
    count = 0
    for y, row in _cells(image):
        lines.append(f"; line {y}")
        lines.extend(f"db 0x{value:x}" for value in row)
        count += len(row)
    lines.append(f"; {count} bytes")
    return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        options, args = getopt.gnu_getopt(argv, "aho:")
    except getopt.GetoptError as exc:
        print(f"pgm2scr: {exc}", file=sys.stderr)
        return 1

    as_asm = False
    for option, _ in options:
        if option == "-h":
            print(_SYNTAX)
            return 0
        if option == "-a":
            as_asm = True

    if not args:
        print("Missing input file name. Try -h for help")
        return 1

    name = args[0]
    try:
        with open(name, "rb") as stream:
            image = read_pgm(stream)
    except OSError as exc:
        print(f"pgm2scr: {exc}", file=sys.stderr)
        return 1
    except PgmError:
        print("Can't read image.")
        return 1

    if image.width % 2:
        print("Width not multiple of 2. Image will be cropped.", file=sys.stderr)
    if image.height % 3:
        print("Height not multiple of 3. Image will be cropped.", file=sys.stderr)

    count = (image.width // 2) * (image.height // 3)
    if as_asm:
        print(convert_asm(image, name), end="")
    else:
        sys.stdout.flush()
        sys.stdout.buffer.write(convert_bin(image))
        sys.stdout.buffer.flush()
    print(f"Written {count} bytes", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())