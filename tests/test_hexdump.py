"""Tests for hex dump parsing and generation."""

import pytest

from hexframe.core.hexdump import (
    clean_hex_string,
    generate_hex_dump,
    is_valid_hex_string,
    normalize_hex,
    parse_hex_dump,
    split_frames,
)


WIRESHARK_DUMP = """\
0000  ff ff ff ff ff ff 00 11  22 33 44 55 08 06 00 01
0010  08 00 06 04 00 01 00 11  22 33 44 55 c0 a8 01 0a
0020  00 00 00 00 00 00 c0 a8  01 01
"""


class TestParse:

    def test_offset_lines(self):
        hex_data = parse_hex_dump(WIRESHARK_DUMP)
        assert len(hex_data) == 42 * 2
        assert hex_data.startswith("FFFFFFFFFFFF0011223344550806")
        assert hex_data.endswith("C0A80101")

    def test_pure_hex_lines(self):
        assert parse_hex_dump("ff ff\n00 11 22\n") == "FFFF001122"
        assert parse_hex_dump("aabbccddeeff") == "AABBCCDDEEFF"

    def test_blank_and_junk_lines_skipped(self):
        text = "\n0000  aa bb\n\nnot a dump line\n0002  cc dd\n"
        assert parse_hex_dump(text) == "AABBCCDD"

    def test_wide_offset_lines(self):
        text = "FFF0  aa bb\n10000  cc dd\n00010010  ee ff"
        assert parse_hex_dump(text) == "AABBCCDDEEFF"

    def test_empty(self):
        assert parse_hex_dump("") == ""
        assert parse_hex_dump(None) == ""
        assert parse_hex_dump("   \n  ") == ""


class TestGenerate:

    def test_line_format(self):
        dump = generate_hex_dump("00" * 18)
        lines = dump.split("\n")
        assert lines[0] == "0000  00 00 00 00 00 00 00 00  00 00 00 00 00 00 00 00"
        assert lines[1] == "0010  00 00"

    def test_offsets_follow_bytes_per_line(self):
        lines = generate_hex_dump("AB" * 10, bytes_per_line=4).split("\n")
        assert [line[:4] for line in lines] == ["0000", "0004", "0008"]

    def test_odd_length_left_padded(self):
        assert generate_hex_dump("ABC") == "0000  0A BC"

    def test_empty(self):
        assert generate_hex_dump("") == ""
        assert generate_hex_dump(None) == ""

    def test_invalid_bytes_per_line(self):
        with pytest.raises(ValueError):
            generate_hex_dump("AABB", bytes_per_line=0)


@pytest.mark.parametrize("hex_data", [
    "00",
    "AABB",
    "FF" * 16,
    "0123456789ABCDEF" * 9,
    "DEADBEEF" * 33 + "01",
])
def test_round_trip(hex_data):
    assert parse_hex_dump(generate_hex_dump(hex_data)) == hex_data


def test_round_trip_past_64k():
    hex_data = "AB" * 70000
    dump = generate_hex_dump(hex_data)
    assert dump.split("\n")[4096].startswith("10000  AB")
    assert parse_hex_dump(dump) == hex_data


def test_clean_hex_string():
    assert clean_hex_string(" aa bb\ncc ") == "AABBCC"
    assert clean_hex_string(None) == ""


def test_is_valid_hex_string():
    assert is_valid_hex_string("aa bb cc")
    assert not is_valid_hex_string("aab")
    assert not is_valid_hex_string("zz")
    assert not is_valid_hex_string("")


def test_normalize_hex():
    assert normalize_hex("aa:bb-cc") == "AABBCC"
    assert normalize_hex("aabbc") == "AABB"
    assert normalize_hex(None) == ""


def test_split_frames():
    text = "FFFFFFFFFFFF001122334455\n\n0000  aa bb cc\nzz\n"
    assert split_frames(text) == ["FFFFFFFFFFFF001122334455", "AABBCC"]
    assert split_frames("") == []
