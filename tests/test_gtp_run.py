import io

import pytest

from galaksija.gtp import Block, BlockId, GtpError, name_block, standard_block
from galaksija.gtp_run import (
    run_block,
    run_name,
    run_standard,
    run_unimplemented,
    run_unknown,
)
from galaksija.modulation import Modulator


def _mod():
    return Modulator(1000, 8)


def test_run_name_prints_name():
    out = io.StringIO()
    run_name(name_block("HELLO"), out)
    assert out.getvalue() == "          Name: HELLO\n"


def test_run_name_corrupted():
    with pytest.raises(GtpError):
        run_name(Block(BlockId.NAME, b"ABC"), io.StringIO())


def test_run_unimplemented_message():
    out = io.StringIO()
    run_unimplemented(Block(BlockId.TURBO, b"xyz"), out)
    assert "Handling of block ID 01 is not implemented" in out.getvalue()


def test_run_unknown_message():
    out = io.StringIO()
    run_unknown(Block(0x42, b""), out)
    assert out.getvalue().startswith("Block ID 42 is unknown")


def test_run_standard_reports_and_plays():
    block = standard_block(0x2C36, b"\x01\x02")
    mod = _mod()
    out = io.StringIO()
    run_standard(block, mod, out)
    text = out.getvalue()
    assert "STANDARD DATA BLOCK : Galaksija\n" in text
    assert "    Start addr: 0x2c36\n" in text
    assert "checksum error" not in text
    assert "junk" not in text

    expected = _mod()
    expected.interblock_pause()
    expected.sync()
    expected.interbyte_pause()
    expected.block(block.data)
    assert mod.samples() == expected.samples()


def test_run_standard_plus_header():
    block = Block(BlockId.STANDARD, bytes([0xA5, 0xFF, 0, 0, 0, 0]))
    out = io.StringIO()
    run_standard(block, _mod(), out)
    text = out.getvalue()
    assert "Galaksija Plus - header" in text
    assert "Start addr" not in text


def test_run_standard_wrong_magic():
    mod = _mod()
    with pytest.raises(GtpError, match="magic"):
        run_standard(Block(BlockId.STANDARD, b"\x00" * 8), mod, io.StringIO())
    assert mod.samples() == []


def test_run_standard_too_short():
    with pytest.raises(GtpError, match="too short"):
        run_standard(Block(BlockId.STANDARD, b"\xa5\x00"), _mod(), io.StringIO())


def test_run_standard_reports_junk():
    block = standard_block(0x2C36, b"ab")
    padded = Block(BlockId.STANDARD, block.data + b"\x00\x00")
    out = io.StringIO()
    run_standard(padded, _mod(), out)
    assert "2 bytes of junk after checksum" in out.getvalue()


def test_run_standard_reports_missing():
    block = standard_block(0x2C36, b"abcd")
    short = Block(BlockId.STANDARD, block.data[:-2])
    out = io.StringIO()
    run_standard(short, _mod(), out)
    assert "missing 2 bytes in data block" in out.getvalue()


def test_run_standard_reports_bad_checksum():
    data = bytearray(standard_block(0x2C36, b"abc").data)
    data[-1] ^= 0xFF
    out = io.StringIO()
    run_standard(Block(BlockId.STANDARD, bytes(data)), _mod(), out)
    assert "checksum error" in out.getvalue()


def test_run_block_header_and_dispatch():
    block = Block(BlockId.TURBO, b"abcd")
    mod = _mod()
    out = io.StringIO()
    run_block(block, 3, mod, out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "--- block 3 (4 bytes) ---"
    assert "not implemented" in lines[1]
    assert mod.samples() == []


def test_run_block_name_error_propagates():
    with pytest.raises(GtpError):
        run_block(Block(BlockId.NAME, b"X"), 1, _mod(), io.StringIO())