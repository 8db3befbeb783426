from __future__ import annotations

import pytest

from uniproc.constants import (
    CASEFOLD,
    CHARBOUND,
    COMPAT,
    COMPOSE,
    DECOMPOSE,
    GRAPHEME_BOUNDARY,
    IGNORE,
    LUMP,
    NLF2LF,
    NULLTERM,
    REJECTNA,
    STRIPMARK,
    STRIPNA,
)
from uniproc.decompose import check_options, decompose, decompose_char, decompose_custom
from uniproc.errors import ErrorCode, UnicodeProcError


def test_no_options_is_identity() -> None:
    for cp in (0x41, 0xC5, 0xFB01, 0xAC00, 0x0378, 0x10FFFF):
        out, _ = decompose_char(cp, 0)
        assert out == [cp]


def test_canonical_and_compat_decomposition() -> None:
    assert decompose_char(0xC5, DECOMPOSE)[0] == [0x41, 0x030A]
    assert decompose_char(0x212B, DECOMPOSE)[0] == [0x41, 0x030A]
    # U+1E69: s + dot below + dot above, fully expanded.
    assert decompose_char(0x1E69, DECOMPOSE)[0] == [0x73, 0x0323, 0x0307]
    assert decompose_char(0xFB01, DECOMPOSE)[0] == [0xFB01]
    assert decompose_char(0xFB01, DECOMPOSE | COMPAT)[0] == [0x66, 0x69]


def test_hangul_syllables_split() -> None:
    assert decompose_char(0xAC00, DECOMPOSE)[0] == [0x1100, 0x1161]
    assert decompose_char(0xAC01, DECOMPOSE)[0] == [0x1100, 0x1161, 0x11A8]
    assert decompose_char(0xD7A3, COMPOSE)[0] == [0x1112, 0x1175, 0x11C2]
    assert decompose_char(0xAC00, 0)[0] == [0xAC00]


def test_invalid_codepoint_raises() -> None:
    for cp in (-1, 0x110000):
        with pytest.raises(UnicodeProcError) as ei:
            decompose_char(cp, 0)
        assert ei.value.code == ErrorCode.NOTASSIGNED


def test_unassigned_handling() -> None:
    with pytest.raises(UnicodeProcError) as ei:
        decompose_char(0x0378, REJECTNA)
    assert ei.value.code == ErrorCode.NOTASSIGNED
    assert decompose_char(0x0378, STRIPNA)[0] == []
    assert decompose_char(0x41, REJECTNA | STRIPNA)[0] == [0x41]


def test_ignore_strips_default_ignorables() -> None:
    assert decompose_char(0x00AD, IGNORE)[0] == []
    assert decompose_char(0x200B, IGNORE)[0] == []
    assert decompose_char(0x00AD, 0)[0] == [0x00AD]


def test_casefold() -> None:
    assert decompose_char(ord("A"), CASEFOLD)[0] == [ord("a")]
    assert decompose_char(0xDF, CASEFOLD)[0] == [ord("s"), ord("s")]
    assert decompose_char(0x0130, CASEFOLD)[0] == [ord("i"), 0x0307]


def test_lump() -> None:
    assert decompose_char(0x2018, LUMP)[0] == [0x27]
    assert decompose_char(0x2212, LUMP)[0] == [0x2D]
    assert decompose_char(0x00A0, LUMP)[0] == [0x20]
    assert decompose_char(0x2013, LUMP)[0] == [0x2D]
    assert decompose_char(0x2028, LUMP)[0] == [0x2028]
    assert decompose_char(0x2028, LUMP | NLF2LF)[0] == [0x0A]
    assert decompose_char(0x2029, LUMP | NLF2LF)[0] == [0x0A]


def test_stripmark() -> None:
    assert decompose_char(0xE9, DECOMPOSE | STRIPMARK)[0] == [ord("e")]
    assert decompose_char(0x0301, COMPOSE | STRIPMARK)[0] == []


def test_charbound_markers_and_state() -> None:
    out, state = decompose_char(ord("a"), CHARBOUND)
    assert out == [GRAPHEME_BOUNDARY, ord("a")]
    out, state = decompose_char(0x0301, CHARBOUND, state)
    assert out == [0x0301]
    out, state = decompose_char(ord("b"), CHARBOUND, state)
    assert out == [GRAPHEME_BOUNDARY, ord("b")]


def test_check_options() -> None:
    assert check_options(0) == 0
    assert check_options(COMPOSE) == 0
    assert check_options(DECOMPOSE | STRIPMARK) == 0
    assert check_options(COMPOSE | DECOMPOSE) == ErrorCode.INVALIDOPTS
    assert check_options(STRIPMARK) == ErrorCode.INVALIDOPTS


def test_decompose_buffer_contract() -> None:
    data = "\u00c5b".encode("utf-8")
    n = decompose(data, DECOMPOSE)
    assert n == 3

    small = [0] * 2
    assert decompose(data, DECOMPOSE, small) == 3
    assert small == [0, 0]

    buf = [0] * 5
    assert decompose(data, DECOMPOSE, buf) == 3
    assert buf == [0x41, 0x030A, 0x62, 0, 0]


def test_decompose_orders_marks() -> None:
    buf = [0] * 8
    n = decompose("a\u0301\u0323".encode("utf-8"), DECOMPOSE, buf)
    assert buf[:n] == [0x61, 0x0323, 0x0301]


def test_decompose_error_codes() -> None:
    assert decompose(b"a\xffb", 0) == ErrorCode.INVALIDUTF8
    assert decompose(b"a", COMPOSE | DECOMPOSE) == ErrorCode.INVALIDOPTS
    assert decompose("\u0378".encode("utf-8"), REJECTNA) == ErrorCode.NOTASSIGNED


def test_decompose_nullterm() -> None:
    buf = [0] * 4
    assert decompose(b"ab\x00cd", NULLTERM, buf) == 2
    assert buf[:2] == [0x61, 0x62]
    assert decompose(b"ab\x00cd", 0) == 5


def test_custom_func_runs_first() -> None:
    def swap(cp: int) -> int:
        return 0xC5 if cp == ord("x") else cp

    buf = [0] * 4
    n = decompose_custom(b"xy", DECOMPOSE, buf, swap)
    assert buf[:n] == [0x41, 0x030A, ord("y")]


def test_decompose_char_raises_the_code_decompose_returns() -> None:
    data = "a\u0378".encode("utf-8")
    code = decompose(data, REJECTNA)
    assert code == ErrorCode.NOTASSIGNED
    with pytest.raises(UnicodeProcError) as ei:
        decompose_char(0x0378, REJECTNA)
    assert ei.value.code == code
