# galaksija

Command-line tools and a small library for working with software for the
Galaksija home computer and its tape format (GTP).

## Installation

    pip install .

No third-party libraries are needed.

## Commands

### bin2gtp

Wraps a Z80 machine-code binary in a GTP tape image: a name block followed
by one standard data block loaded at `0x2C36`. The data block begins with the
BASIC start and end addresses, then the binary, then a BASIC program. By
default that program is a one-line stub, `1 A=USR(&2C3A)`, which jumps to
the machine code.

    bin2gtp -o program.gtp program.bin
    bin2gtp -n HELLO -b loader.bas -o program.gtp program.bin
    bin2gtp -b none -o program.gtp program.bin

* `-o FILE` names the output tape image (required).
* `-n NAME` sets the name of the block on tape. It defaults to the input file name.
* `-b FILE` appends the BASIC program in `FILE`. Each line is a line number
  (0 to 65535) followed by a statement; letters are upper-cased and only
  characters from space to `_` are allowed.
* `-b none` appends no BASIC.
* `-h` prints a short help text.

### gtp2wav

Renders a GTP tape image as a mono PCM WAV file that a real machine can load.
A report of every block (name, start and end address, checksum problems) is
printed as it is played.

    gtp2wav -o program.wav program.gtp
    gtp2wav -r 44100 -s 16 -o program.wav program.gtp

* `-o FILE` names the output WAV file (required).
* `-r RATE` sets the sample rate. The default is 11025 Hz.
* `-s BITS` sets the sample size, 8 or 16. The default is 8.
* `-f` exits successfully even if reading the GTP file failed part way;
  the audio gathered up to that point is written either way.
* `-h` prints a short help text.

A truncated block at the end of the file is ignored with a warning.

### chargendump

Shows the glyphs stored in a character generator ROM dump.

    chargendump -a 65 chrgen.bin     # glyph for ASCII code 65
    chargendump -n 10 chrgen.bin     # glyph number 10 in ROM
    chargendump -p chrgen.bin > font.pbm

Glyphs are drawn as 16 rows of `#` and `.`. `-p` writes all 128 glyphs as
one raw PBM (P4) image. `-i` simulates the newer board, where the shift
register is wired in reverse bit order.

### pgm2scr

Converts a PGM (P2, P5) or PBM (P1, P4) image into Galaksija block-graphics
screen bytes. Each character cell covers 2 × 3 pixels; any non-zero pixel
sets its bit. An image whose size is not a multiple of 2 × 3 is cropped.

    pgm2scr picture.pgm > picture.scr
    pgm2scr -a picture.pgm > picture.asm

With `-a` the output is assembler `db` directives instead of raw bytes.
The number of bytes written is reported on standard error.

## Library use

    from galaksija.gtp import name_block, standard_block, read_blocks

    with open("program.gtp", "wb") as f:
        name_block("HELLO").write(f)
        standard_block(0x2C36, payload).write(f)

    with open("program.gtp", "rb") as f:
        for block in read_blocks(f):
            print(block.id, len(block.data))

* `galaksija.gtp` — `Block` (with `to_bytes`, `write`, `name` and
  `standard_info`), `BlockId`, `read_block`, `read_blocks`, `name_block`,
  `standard_block`; malformed blocks raise `GtpError`.
* `galaksija.basic` — `parse_line`, `encode_program` and `read_basic` turn
  BASIC text into the byte form the machine stores; bad input raises
  `BasicError`.
* `galaksija.modulation` — `Modulator` turns bytes into tape audio samples
  and writes them with `write`.
* `galaksija.gtp_run` — `run_block` reports a block and plays it into a
  `Modulator`.
* `galaksija.bin2gtp.build_tape`, `galaksija.gtp2wav.convert`,
  `galaksija.chargendump.ascii_dump` / `pbm_dump` and
  `galaksija.pgm2scr.read_pgm` / `convert_bin` / `convert_asm` expose what
  the commands do.

## Limitations

Turbo blocks (ID `0x01`) are recognised but not played: `gtp2wav` reports
them and skips them. There is no way to turn a recording back into a GTP
file.

## Running the tests

    pip install .[test]
    pytest