"""Newline handling, canonical ordering and canonical composition.

All functions work on codepoint lists (UTF-32 equivalent). The in-place
entry points keep the caller's list length and report the new logical
length, so a buffer can be reused across calls.
"""

from __future__ import annotations

from typing import List, MutableSequence

from .builder import get_table
from .constants import (
    CHARBOUND,
    COMPOSE,
    DECOMPOSE,
    HANGUL_LBASE,
    HANGUL_LCOUNT,
    HANGUL_SBASE,
    HANGUL_SCOUNT,
    HANGUL_TBASE,
    HANGUL_TCOUNT,
    HANGUL_VBASE,
    HANGUL_VCOUNT,
    MAX_BUFFER_LENGTH,
    NLF2LS,
    NLF2PS,
    STABLE,
    STRIPCC,
)
from .errors import ErrorCode
from .results import MapResult
from .tables import PropertyTable
from .utf8 import encode


def canonical_order(codepoints: MutableSequence[int], table: PropertyTable | None = None) -> None:
    """Stable-sort every maximal run of non-starters by combining class, in place."""
    if table is None:
        table = get_table()

    def ccc(cp: int) -> int:
        return table.lookup(cp).combining_class

    n = len(codepoints)
    i = 0
    while i < n:
        if not ccc(codepoints[i]):
            i += 1
            continue
        j = i + 1
        while j < n and ccc(codepoints[j]):
            j += 1
        if j - i > 1:
            codepoints[i:j] = sorted(codepoints[i:j], key=ccc)
        i = j


def _newline_target(options: int) -> int:
    if options & NLF2LS:
        return 0x000A if options & NLF2PS else 0x2028
    return 0x2029 if options & NLF2PS else 0x0020


def convert_newlines(codepoints: List[int], options: int) -> List[int]:
    """NLF2LS / NLF2PS / NLF2LF and STRIPCC handling.

    CRLF, CR, LF and NEL (plus VT and FF under STRIPCC) become one target
    codepoint; other C0/C1 controls are dropped under STRIPCC, except HT which
    becomes SPACE.
    """
    target = _newline_target(options)
    stripcc = options & STRIPCC
    out: List[int] = []
    n = len(codepoints)
    rpos = 0
    while rpos < n:
        uc = codepoints[rpos]
        if uc == 0x000D and rpos + 1 < n and codepoints[rpos + 1] == 0x000A:
            rpos += 1
        if uc in (0x000A, 0x000D, 0x0085) or (stripcc and uc in (0x000B, 0x000C)):
            out.append(target)
        elif stripcc and (0 <= uc < 0x0020 or 0x007F <= uc < 0x00A0):
            if uc == 0x0009:
                out.append(0x0020)
        else:
            out.append(uc)
        rpos += 1
    return out


def _compose_hangul(starter: int, uc: int) -> int | None:
    lindex = starter - HANGUL_LBASE
    if 0 <= lindex < HANGUL_LCOUNT:
        vindex = uc - HANGUL_VBASE
        if 0 <= vindex < HANGUL_VCOUNT:
            return HANGUL_SBASE + (lindex * HANGUL_VCOUNT + vindex) * HANGUL_TCOUNT
    sindex = starter - HANGUL_SBASE
    if 0 <= sindex < HANGUL_SCOUNT and sindex % HANGUL_TCOUNT == 0:
        tindex = uc - HANGUL_TBASE
        if 0 < tindex < HANGUL_TCOUNT:
            return starter + tindex
    return None


def compose(codepoints: List[int], options: int, table: PropertyTable | None = None) -> List[int]:
    """One left-to-right pass of canonical composition over ordered input.

    A codepoint is tried against the last starter only when no codepoint
    left uncombined in between has an equal or higher combining class.
    """
    if table is None:
        table = get_table()
    stable = options & STABLE

    out: List[int] = []
    starter_pos = -1
    max_ccc = -1
    for uc in codepoints:
        prop = table.lookup(uc)
        ccc = prop.combining_class
        if starter_pos >= 0 and ccc > max_ccc:
            starter = out[starter_pos]
            composite = _compose_hangul(starter, uc)
            if composite is None:
                composite = table.composition(table.lookup(starter), uc)
                if composite is not None and stable and table.lookup(composite).comp_exclusion:
                    composite = None
            if composite is not None:
                out[starter_pos] = composite
                continue
        out.append(uc)
        if ccc:
            max_ccc = max(max_ccc, ccc)
        else:
            starter_pos = len(out) - 1
            max_ccc = -1
    return out


def normalize_list(codepoints: List[int], options: int, table: PropertyTable | None = None) -> List[int]:
    options = int(options)
    if table is None:
        table = get_table()
    out = list(codepoints)
    if options & (NLF2LS | NLF2PS | STRIPCC):
        out = convert_newlines(out, options)
    if options & (COMPOSE | DECOMPOSE):
        canonical_order(out, table)
    if options & COMPOSE:
        out = compose(out, options, table)
    return out


def normalize_codepoints(buffer: MutableSequence[int], options: int, length: int | None = None) -> int:
    """Normalize `buffer[:length]` in place; returns the new length or a negative ErrorCode."""
    if length is None:
        length = len(buffer)
    if length < 0 or length > len(buffer):
        raise ValueError(f"length {length} outside buffer of size {len(buffer)}")
    if length >= MAX_BUFFER_LENGTH:
        return ErrorCode.OVERFLOW
    result = normalize_list(list(buffer[:length]), options)
    buffer[:len(result)] = result
    return len(result)


def reencode(buffer: MutableSequence[int], options: int, length: int | None = None) -> MapResult:
    """Normalize `buffer[:length]` in place, then encode it as UTF-8.

    Under CHARBOUND the boundary markers become 0xFF bytes.
    """
    n = normalize_codepoints(buffer, options, length)
    if n < 0:
        return MapResult.failure(n)
    return MapResult(True, encode(buffer[:n], charbound=bool(options & CHARBOUND)))
