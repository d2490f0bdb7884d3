import pytest

from galaksija.basic import BasicError, encode_program, parse_line, read_basic


def test_parse_line_uppercases_and_terminates():
    assert parse_line("10 print x\n") == b"\x0a\x00PRINT X\r"


def test_parse_line_tab_and_leading_whitespace():
    assert parse_line("\t 20\t\tA=1") == b"\x14\x00A=1\r"


def test_parse_line_high_line_number():
    assert parse_line("65535 END")[:2] == b"\xff\xff"


def test_parse_line_number_with_trailing_junk():
    assert parse_line("10abc X") == parse_line("10 X")


def test_parse_line_signed_number():
    assert parse_line("+5 X") == parse_line("5 X")


@pytest.mark.parametrize(
    "line, message",
    [
        ("", "No BASIC line number found"),
        ("   \t", "No BASIC line number found"),
        ("\n", "No BASIC line number found"),
        ("10", "Empty BASIC line"),
        ("10   \n", "Empty BASIC line"),
        ("abc PRINT", "BASIC line number not an integer"),
        ("65536 PRINT", "BASIC line number out of range"),
        ("-1 PRINT", "BASIC line number out of range"),
        ("10 PRINT {", "BASIC line contains invalid characters"),
        ("10 PRINT\r\n", "BASIC line contains invalid characters"),
    ],
)
def test_parse_line_errors(line, message):
    with pytest.raises(BasicError) as info:
        parse_line(line)
    assert info.value.message == message
    assert info.value.line is None


def test_encode_program_concatenates():
    lines = ["10 A=1\n", "20 PRINT A\n"]
    assert encode_program(lines) == parse_line(lines[0]) + parse_line(lines[1])


def test_encode_program_empty_raises():
    with pytest.raises(BasicError) as info:
        encode_program([])
    assert info.value.message == "Empty BASIC file"


def test_encode_program_reports_line_number():
    with pytest.raises(BasicError) as info:
        encode_program(["10 A=1\n", "20 A={\n"])
    assert info.value.line == 2
    assert "at line 2" in str(info.value)


def test_encode_program_splits_long_lines():
    with pytest.raises(BasicError) as info:
        encode_program(["10 " + "A" * 300 + "\n"])
    assert info.value.line == 2
    assert info.value.message == "Empty BASIC line"


def test_read_basic(tmp_path):
    path = tmp_path / "prog.bas"
    path.write_text("10 a=usr(&2c3a)\n20 print a\n")
    assert read_basic(path) == encode_program(["10 A=USR(&2C3A)", "20 PRINT A"])


def test_read_basic_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_basic(tmp_path / "missing.bas")


def test_read_basic_non_ascii_rejected(tmp_path):
    path = tmp_path / "prog.bas"
    path.write_bytes(b"10 PRINT \xe9\n")
    with pytest.raises(BasicError) as info:
        read_basic(path)
    assert info.value.line == 1