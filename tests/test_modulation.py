import wave

import pytest

from galaksija.modulation import (
    SYNCBYTES,
    ModulationError,
    Modulator,
)


def _fresh(rate=1000):
    return Modulator(rate, 8)


@pytest.mark.parametrize("bits", [0, 4, 12, 24, 32])
def test_unsupported_bits_rejected(bits):
    with pytest.raises(ModulationError):
        Modulator(11025, bits)


def test_starts_empty_and_clear_empties():
    mod = _fresh()
    assert mod.samples() == []
    mod.one()
    assert len(mod.samples()) > 0
    mod.clear()
    assert mod.samples() == []


def test_pauses_are_silent():
    mod = _fresh()
    mod.interbyte_pause()
    mod.interblock_pause()
    samples = mod.samples()
    assert samples
    assert set(samples) == {0.0}


def test_interblock_pause_lasts_two_seconds():
    mod = Modulator(8000, 8)
    mod.interblock_pause()
    assert len(mod.samples()) == 2 * 8000


def test_bits_have_pulses_in_range():
    for method in ("one", "zero"):
        mod = _fresh()
        getattr(mod, method)()
        samples = mod.samples()
        assert min(samples) == -1.0
        assert max(samples) == 1.0


def test_one_has_twice_as_many_pulses_as_zero():
    one = Modulator(11025, 8)
    one.one()
    zero = Modulator(11025, 8)
    zero.zero()
    assert one.samples().count(1.0) == 2 * zero.samples().count(1.0)


def test_byte_zero_is_eight_zero_bits():
    mod = _fresh()
    mod.byte(0)
    expected = _fresh()
    for _ in range(8):
        expected.zero()
    assert mod.samples() == expected.samples()


def test_byte_is_least_significant_bit_first():
    mod = _fresh()
    mod.byte(0x01)
    expected = _fresh()
    expected.one()
    for _ in range(7):
        expected.zero()
    assert mod.samples() == expected.samples()


def test_block_separates_bytes_with_pauses():
    mod = _fresh()
    mod.block(b"\x01\x02")
    expected = _fresh()
    expected.byte(1)
    expected.interbyte_pause()
    expected.byte(2)
    assert mod.samples() == expected.samples()


def test_sync_is_block_of_zero_bytes():
    mod = _fresh()
    mod.sync()
    expected = _fresh()
    expected.block(bytes(SYNCBYTES))
    assert mod.samples() == expected.samples()


def test_write_8bit(tmp_path):
    mod = _fresh()
    mod.interbyte_pause()
    mod.byte(0xA5)
    path = tmp_path / "out.wav"
    mod.write(path)
    with wave.open(str(path), "rb") as wav:
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 1
        assert wav.getframerate() == 1000
        assert wav.getnframes() == len(mod.samples())
        frames = wav.readframes(wav.getnframes())
    assert frames[0] == 128
    assert set(frames) <= {1, 128, 255}


def test_write_16bit(tmp_path):
    mod = Modulator(2000, 16)
    mod.byte(0xFF)
    path = tmp_path / "out.wav"
    mod.write(path)
    with wave.open(str(path), "rb") as wav:
        assert wav.getsampwidth() == 2
        assert wav.getframerate() == 2000
        assert wav.getnframes() == len(mod.samples())


def test_write_to_missing_directory_fails(tmp_path):
    mod = _fresh()
    mod.one()
    with pytest.raises(ModulationError):
        mod.write(tmp_path / "no" / "such" / "dir.wav")