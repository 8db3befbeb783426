"""Extended grapheme cluster boundaries (UAX #29).

The stateful procedure carries one integer between calls: the low byte is
the bound class of everything seen since the last decision point, the second
byte the Indic_Conjunct_Break state. 0 is the initial state. Calls must be
made in order over every adjacent pair of a string; resetting the state to 0
is only safe right after a break.
"""

from __future__ import annotations

from typing import Iterator, Tuple

from .builder import get_table
from .constants import BoundClass as BC
from .constants import IndicConjunctBreak as ICB
from .tables import CharProperty

INITIAL_STATE = 0


def boundclass_of(prop: CharProperty) -> int:
    # The unassigned sentinel stores 0 (Start); unassigned codepoints are Other.
    return prop.boundclass or BC.OTHER


def pack_state(boundclass: int, indic_conjunct_break: int) -> int:
    return boundclass + (indic_conjunct_break << 8)


def unpack_state(state: int) -> Tuple[int, int]:
    return state & 0xFF, state >> 8


def _break_simple(lbc: int, tbc: int) -> bool:
    if lbc == BC.START:  # GB1
        return True
    if lbc == BC.CR and tbc == BC.LF:  # GB3
        return False
    if BC.CR <= lbc <= BC.CONTROL:  # GB4
        return True
    if BC.CR <= tbc <= BC.CONTROL:  # GB5
        return True
    if lbc == BC.L and tbc in (BC.L, BC.V, BC.LV, BC.LVT):  # GB6
        return False
    if lbc in (BC.LV, BC.V) and tbc in (BC.V, BC.T):  # GB7
        return False
    if lbc in (BC.LVT, BC.T) and tbc == BC.T:  # GB8
        return False
    if tbc in (BC.EXTEND, BC.ZWJ, BC.SPACINGMARK) or lbc == BC.PREPEND:  # GB9, GB9a, GB9b
        return False
    if lbc == BC.E_ZWG and tbc == BC.EXTENDED_PICTOGRAPHIC:  # GB11, with state folding
        return False
    if lbc == BC.REGIONAL_INDICATOR and tbc == BC.REGIONAL_INDICATOR:  # GB12/13, with state folding
        return False
    return True  # GB999


def break_extended(lbc: int, tbc: int, licb: int, ticb: int, state: int | None) -> Tuple[bool, int | None]:
    """Decide one boundary from bound classes; returns (break_permitted, new_state).

    With `state=None` the pair is judged on its own (legacy rules).
    """
    if state is None:
        return _break_simple(lbc, tbc), None

    if state == INITIAL_STATE:
        state_bc = lbc
        state_icb = licb if licb == ICB.CONSONANT else ICB.NONE
    else:
        state_bc, state_icb = unpack_state(state)

    # GB9c: consonant, then linkers and extenders containing a linker, then consonant.
    permitted = _break_simple(state_bc, tbc) and not (
        state_icb == ICB.LINKER and ticb == ICB.CONSONANT
    )

    if ticb == ICB.CONSONANT or state_icb in (ICB.CONSONANT, ICB.EXTEND):
        state_icb = ticb
    elif state_icb == ICB.LINKER:
        state_icb = ICB.LINKER if ticb == ICB.EXTEND else ticb

    if state_bc == tbc == BC.REGIONAL_INDICATOR:
        # A completed RI pair behaves like Other so a third RI breaks.
        state_bc = BC.OTHER
    elif state_bc == BC.EXTENDED_PICTOGRAPHIC:
        if tbc == BC.EXTEND:
            state_bc = BC.EXTENDED_PICTOGRAPHIC
        elif tbc == BC.ZWJ:
            state_bc = BC.E_ZWG
        else:
            state_bc = tbc
    else:
        state_bc = tbc

    return permitted, pack_state(state_bc, state_icb)


def grapheme_break_stateful(codepoint1: int, codepoint2: int, state: int = INITIAL_STATE) -> Tuple[bool, int]:
    """Whether a cluster boundary falls between two consecutive codepoints.

    Returns (break_permitted, new_state); pass new_state to the next call.
    """
    table = get_table()
    p1 = table.lookup(codepoint1)
    p2 = table.lookup(codepoint2)
    permitted, new_state = break_extended(
        boundclass_of(p1), boundclass_of(p2), p1.indic_conjunct_break, p2.indic_conjunct_break, state
    )
    return permitted, new_state


def grapheme_break(codepoint1: int, codepoint2: int) -> bool:
    """Stateless variant: GB9c, GB11 and GB12/13 see only the pair itself."""
    table = get_table()
    permitted, _ = break_extended(
        boundclass_of(table.lookup(codepoint1)), boundclass_of(table.lookup(codepoint2)), 0, 0, None
    )
    return permitted


def graphemes(text: str) -> Iterator[str]:
    """Yield the extended grapheme clusters of `text`."""
    if not text:
        return
    start = 0
    state = INITIAL_STATE
    prev = ord(text[0])
    for i in range(1, len(text)):
        cp = ord(text[i])
        permitted, state = grapheme_break_stateful(prev, cp, state)
        if permitted:
            yield text[start:i]
            start = i
        prev = cp
    yield text[start:]
