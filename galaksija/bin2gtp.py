"""Encapsulate Z80 machine code into a Galaksija tape (GTP) file."""

from __future__ import annotations

import getopt
import struct
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .basic import BasicError, read_basic
from .gtp import name_block, standard_block

LOAD_ADDRESS = 0x2C36
CODE_ADDRESS = 0x2C3A

# A one-line program that jumps to the machine code: 1 A=USR(&2C3A)
DEFAULT_BASIC = b"\x01\x00A=USR(&2C3A)\r"

_SYNTAX = """\
BIN2GTP, Encapsulate Z80 machine code into Galaksija Tape Format

SYNTAX: bin2gtp [ options ] -o out-file.gtp in-file.bin

Available options:	-n NAME		Name for the data block on the tape.
                                        Default is the name of the binary.
                        -b FILE         Append BASIC program stored in file
                                        FILE. Uses a built-in stub by default
                        -b none         Do not append any BASIC.
"""


def build_tape(
    name: Union[str, bytes], binary: bytes, basic: bytes = DEFAULT_BASIC
) -> bytes:
    """Return a tape holding a name block and one data block.

    The data block starts with the BASIC start and end addresses,
    followed by the machine code and the BASIC program.
    """
    basic_start = CODE_ADDRESS + len(binary)
    basic_end = basic_start + len(basic)
    header = struct.pack("<HH", basic_start & 0xFFFF, basic_end & 0xFFFF)
    payload = header + bytes(binary) + bytes(basic)
    return (
        name_block(name).to_bytes()
        + standard_block(LOAD_ADDRESS, payload).to_bytes()
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        options, args = getopt.gnu_getopt(argv, "ho:n:b:")
    except getopt.GetoptError as exc:
        print(f"bin2gtp: {exc}", file=sys.stderr)
        return 1

    output: Optional[str] = None
    name: Optional[str] = None
    basic_file: Optional[str] = None
    for option, value in options:
        if option == "-h":
            print(_SYNTAX)
            return 0
        if option == "-o":
            output = value
        elif option == "-n":
            name = value
        elif option == "-b":
            basic_file = value

    if not args:
        print("Missing input file name. Try -h for help")
        return 1
    if output is None:
        print("Missing output file name. Try -h for help")
        return 1

    infile = args[0]
    if name is None:
        name = infile

    try:
        binary = Path(infile).read_bytes()
    except OSError as exc:
        print(f"bin2gtp: {exc}", file=sys.stderr)
        return 1

    if basic_file is None:
        basic = DEFAULT_BASIC
    elif basic_file == "none":
        basic = b""
    else:
        try:
            basic = read_basic(basic_file)
        except BasicError as exc:
            print(exc, file=sys.stderr)
            return 1
        except OSError as exc:
            print(f"Can't open '{basic_file}': {exc.strerror}", file=sys.stderr)
            return 1

    try:
        with open(output, "wb") as stream:
            stream.write(build_tape(name, binary, basic))
    except OSError as exc:
        print(f"bin2gtp: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())