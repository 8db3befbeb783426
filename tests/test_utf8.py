from __future__ import annotations

import pytest

from uniproc.constants import GRAPHEME_BOUNDARY
from uniproc.errors import ErrorCode, UnicodeProcError
from uniproc.utf8 import charbound_encode_char, decode, encode, encode_char, iterate


def test_iterate_reads_one_codepoint() -> None:
    assert iterate(b"") == (0, -1)
    assert iterate(b"A") == (1, 0x41)
    assert iterate(b"\xc3\xa9") == (2, 0xE9)
    assert iterate(b"\xe2\x82\xac") == (3, 0x20AC)
    assert iterate(b"\xf0\x9f\x98\x80") == (4, 0x1F600)
    assert iterate(b"xy\xc3\xa9", 2) == (2, 0xE9)


def test_iterate_rejects_malformed_input() -> None:
    bad = [
        b"\x80",  # continuation byte as lead
        b"\xc0\xaf",  # overlong lead
        b"\xc1\xbf",
        b"\xe0\x80\xaf",  # overlong 3-byte
        b"\xf0\x80\x80\xaf",  # overlong 4-byte
        b"\xed\xa0\x80",  # surrogate
        b"\xf4\x90\x80\x80",  # above U+10FFFF
        b"\xf5\x80\x80\x80",
        b"\xe2\x82",  # truncated
        b"\xc3A",  # bad continuation
    ]
    for b in bad:
        assert iterate(b) == (ErrorCode.INVALIDUTF8, -1), b


def test_iterate_respects_end() -> None:
    assert iterate(b"\xc3\xa9", 0, 1) == (ErrorCode.INVALIDUTF8, -1)
    assert iterate(b"\xc3\xa9", 0, 2) == (2, 0xE9)
    assert iterate(b"ab", 1, 1) == (0, -1)


def test_decode() -> None:
    assert list(decode(b"a\x00b")) == [0x61, 0, 0x62]
    assert list(decode(b"a\x00b", null_terminated=True)) == [0x61]
    assert list(decode("h\u00e9\U0001F600".encode("utf-8"))) == [0x68, 0xE9, 0x1F600]


def test_decode_raises_at_first_bad_byte() -> None:
    with pytest.raises(UnicodeProcError) as ei:
        list(decode(b"ok\xff"))
    assert ei.value.code == ErrorCode.INVALIDUTF8
    assert "offset 2" in str(ei.value)


def test_encode_char_lengths() -> None:
    assert encode_char(0x7F) == b"\x7f"
    assert encode_char(0x80) == b"\xc2\x80"
    assert encode_char(0x7FF) == b"\xdf\xbf"
    assert encode_char(0x800) == b"\xe0\xa0\x80"
    assert encode_char(0xFFFF) == b"\xef\xbf\xbf"
    assert encode_char(0x10000) == b"\xf0\x90\x80\x80"
    assert encode_char(0x10FFFF) == b"\xf4\x8f\xbf\xbf"


def test_encode_char_invalid_is_empty() -> None:
    assert encode_char(-1) == b""
    assert encode_char(0x110000) == b""


def test_charbound_encoding() -> None:
    assert charbound_encode_char(GRAPHEME_BOUNDARY) == b"\xff"
    assert charbound_encode_char(0x41) == b"A"
    assert encode([GRAPHEME_BOUNDARY, 0x61, GRAPHEME_BOUNDARY, 0x62], charbound=True) == b"\xffa\xffb"
    assert encode([GRAPHEME_BOUNDARY, 0x61]) == b"a"
