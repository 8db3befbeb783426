from __future__ import annotations

from uniproc.constants import BoundClass
from uniproc.constants import IndicConjunctBreak as ICB
from uniproc.grapheme import (
    INITIAL_STATE,
    break_extended,
    grapheme_break,
    grapheme_break_stateful,
    graphemes,
    pack_state,
    unpack_state,
)


def _clusters(text: str) -> list[str]:
    return list(graphemes(text))


def test_basic_clusters() -> None:
    assert _clusters("") == []
    assert _clusters("abc") == ["a", "b", "c"]
    assert _clusters("e\u0301x") == ["e\u0301", "x"]
    assert _clusters("a\r\nb") == ["a", "\r\n", "b"]
    assert _clusters("\n\r") == ["\n", "\r"]


def test_controls_break_on_both_sides() -> None:
    assert _clusters("a\x07\u0301") == ["a", "\x07", "\u0301"]


def test_regional_indicator_pairs() -> None:
    us = "\U0001F1FA\U0001F1F8"
    fr = "\U0001F1EB\U0001F1F7"
    assert _clusters(us + fr) == [us, fr]
    assert _clusters(us + "\U0001F1EB") == [us, "\U0001F1EB"]


def test_emoji_zwj_sequence() -> None:
    family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
    assert _clusters(family + "a") == [family, "a"]
    # Skin tone modifier extends the base.
    assert _clusters("\U0001F44D\U0001F3FD") == ["\U0001F44D\U0001F3FD"]
    # ZWJ followed by a non-pictographic character breaks.
    assert _clusters("a\u200db") == ["a\u200d", "b"]


def test_hangul_jamo_sequences() -> None:
    assert _clusters("\u1112\u1161\u11ab") == ["\u1112\u1161\u11ab"]
    assert _clusters("\u1100\u1161\u11a8") == ["\u1100\u1161\u11a8"]
    assert _clusters("\uac01\u1161") == ["\uac01", "\u1161"]


def test_prepend_and_spacing_mark() -> None:
    assert _clusters("\u0600a") == ["\u0600a"]
    assert _clusters("\u0915\u093f") == ["\u0915\u093f"]


def test_indic_conjunct() -> None:
    # KA + VIRAMA + SSA + VOWEL SIGN I
    assert _clusters("\u0915\u094d\u0937\u093f") == ["\u0915\u094d\u0937\u093f"]
    # An extender after the virama does not end the conjunct.
    assert _clusters("\u0915\u094d\u093c\u0937") == ["\u0915\u094d\u093c\u0937"]
    # Without a linker the consonants are separate clusters.
    assert _clusters("\u0915\u0937") == ["\u0915", "\u0937"]


def test_unassigned_codepoint_takes_marks() -> None:
    assert _clusters("\u0378\u0301") == ["\u0378\u0301"]


def test_stateless_break() -> None:
    assert grapheme_break(0x61, 0x62)
    assert not grapheme_break(0x61, 0x0301)
    assert not grapheme_break(0x0D, 0x0A)
    assert grapheme_break(0x0A, 0x0D)
    assert not grapheme_break(0x1F1FA, 0x1F1F8)


def test_stateful_regional_indicators() -> None:
    ri = 0x1F1E6
    state = INITIAL_STATE
    permitted, state = grapheme_break_stateful(ri, ri, state)
    assert not permitted
    permitted, state = grapheme_break_stateful(ri, ri, state)
    assert permitted
    permitted, state = grapheme_break_stateful(ri, ri, state)
    assert not permitted


def test_state_packing() -> None:
    s = pack_state(BoundClass.EXTEND, ICB.LINKER)
    assert unpack_state(s) == (BoundClass.EXTEND, ICB.LINKER)
    assert unpack_state(INITIAL_STATE) == (0, 0)


def test_break_extended_without_state_is_pairwise() -> None:
    permitted, state = break_extended(BoundClass.OTHER, BoundClass.EXTEND, 0, 0, None)
    assert not permitted
    assert state is None
    permitted, _ = break_extended(BoundClass.START, BoundClass.EXTEND, 0, 0, None)
    assert permitted
