"""Program text parsing and loading."""

import pytest

from intcode.errors import ProgramFormatError
from intcode.loader import load_program, parse_program


class TestParseProgram:
    def test_single_line(self):
        assert parse_program("1,0,0,0,99") == [1, 0, 0, 0, 99]

    def test_whitespace_and_newlines(self):
        assert parse_program(" 1, -2 ,\n3\n") == [1, -2, 3]

    def test_trailing_comma(self):
        assert parse_program("3,0,4,0,99,\n") == [3, 0, 4, 0, 99]

    def test_empty_text(self):
        assert parse_program("") == []
        assert parse_program("  \n") == []

    def test_empty_value(self):
        with pytest.raises(ProgramFormatError) as exc:
            parse_program("1,,2")
        assert exc.value.position == 2

    def test_not_an_integer(self):
        with pytest.raises(ProgramFormatError) as exc:
            parse_program("1,0,x,99")
        assert exc.value.position == 3
        assert "'x'" in str(exc.value)


class TestLoadProgram:
    def test_from_path_string(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("104,7,99\n", encoding="utf-8")
        assert load_program(str(path)) == [104, 7, 99]

    def test_from_path_object(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("99", encoding="utf-8")
        assert load_program(path) == [99]

    def test_from_text(self):
        assert load_program("3,0,4,0,99") == [3, 0, 4, 0, 99]

    def test_single_word_text(self):
        assert load_program("99") == [99]

    def test_missing_file_name(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_program(str(tmp_path / "missing.txt"))
        with pytest.raises(FileNotFoundError):
            load_program("missing.txt")

    def test_missing_path_object(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_program(tmp_path / "missing.txt")

    def test_negative_single_word_text(self):
        assert load_program("-5") == [-5]

    def test_long_text(self):
        text = ",".join(["1"] * 5000)
        assert len(load_program(text)) == 5000
