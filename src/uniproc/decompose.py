"""Per-codepoint expansion under option flags.

For one codepoint, in order:
  1. precomposed Hangul splits into jamo (COMPOSE/DECOMPOSE)
  2. REJECTNA: unassigned -> NOTASSIGNED
  3. IGNORE: default-ignorable -> nothing
  4. STRIPNA: unassigned -> nothing
  5. LUMP: lump substitution (Zl/Zp -> LF under NLF2LF)
  6. STRIPMARK: Mn/Mc/Me -> nothing
  7. CASEFOLD: full case folding
  8. COMPOSE/DECOMPOSE: canonical, or with COMPAT any, decomposition
  9. emit, with a GRAPHEME_BOUNDARY first under CHARBOUND at a cluster start

Substituted codepoints re-enter the procedure, so output is fully expanded.
"""

from __future__ import annotations

from typing import Callable, List, MutableSequence, Optional, Tuple

from .builder import get_table
from .constants import (
    CASEFOLD,
    CHARBOUND,
    CODEPOINT_LIMIT,
    COMPAT,
    COMPOSE,
    DECOMPOSE,
    GRAPHEME_BOUNDARY,
    HANGUL_LBASE,
    HANGUL_NCOUNT,
    HANGUL_SBASE,
    HANGUL_SCOUNT,
    HANGUL_TBASE,
    HANGUL_TCOUNT,
    HANGUL_VBASE,
    IGNORE,
    LUMP,
    MARK_CATEGORIES,
    MAX_BUFFER_LENGTH,
    NLF2LF,
    NULLTERM,
    REJECTNA,
    STRIPMARK,
    STRIPNA,
    Category,
)
from .errors import DataError, ErrorCode, UnicodeProcError
from .grapheme import INITIAL_STATE, boundclass_of, break_extended
from .normalization import canonical_order
from .tables import PropertyTable
from .utf8 import decode

CustomFunc = Callable[[int], int]

# Unicode decomposition mappings are acyclic and a few levels deep at most.
MAX_EXPANSION_DEPTH = 16


def _expand(table: PropertyTable, uc: int, options: int, state: int, out: List[int], depth: int) -> int:
    if depth > MAX_EXPANSION_DEPTH:
        raise DataError(f"decomposition of U+{uc:04X} exceeds depth {MAX_EXPANSION_DEPTH}")
    if uc < 0 or uc >= CODEPOINT_LIMIT:
        raise UnicodeProcError(ErrorCode.NOTASSIGNED, f"invalid codepoint {uc}")

    prop = table.lookup(uc)
    category = prop.category
    decomposing = options & (COMPOSE | DECOMPOSE)

    if decomposing:
        sindex = uc - HANGUL_SBASE
        if 0 <= sindex < HANGUL_SCOUNT:
            jamo = [HANGUL_LBASE + sindex // HANGUL_NCOUNT, HANGUL_VBASE + (sindex % HANGUL_NCOUNT) // HANGUL_TCOUNT]
            tindex = sindex % HANGUL_TCOUNT
            if tindex:
                jamo.append(HANGUL_TBASE + tindex)
            for cp in jamo:
                state = _expand(table, cp, options, state, out, depth + 1)
            return state

    if options & REJECTNA and category == Category.CN:
        raise UnicodeProcError(ErrorCode.NOTASSIGNED, f"unassigned codepoint U+{uc:04X}")
    if options & IGNORE and prop.ignorable:
        return state
    if options & STRIPNA and category == Category.CN:
        return state

    if options & LUMP:
        target = table.lump(uc)
        if target is None and (options & NLF2LF) == NLF2LF and category in (Category.ZL, Category.ZP):
            target = 0x000A
        if target is not None:
            return _expand(table, target, options & ~int(LUMP), state, out, depth + 1)

    if options & STRIPMARK and category in MARK_CATEGORIES:
        return state

    if options & CASEFOLD and prop.casefold_seqindex:
        for cp in table.sequence(prop.casefold_seqindex):
            state = _expand(table, cp, options, state, out, depth + 1)
        return state

    if decomposing and prop.decomp_seqindex and (not prop.decomp_type or options & COMPAT):
        for cp in table.sequence(prop.decomp_seqindex):
            state = _expand(table, cp, options, state, out, depth + 1)
        return state

    permitted, state = break_extended(0, boundclass_of(prop), 0, prop.indic_conjunct_break, state)
    if options & CHARBOUND and permitted:
        out.append(GRAPHEME_BOUNDARY)
    out.append(uc)
    return state


def decompose_char(codepoint: int, options: int = 0, state: int = INITIAL_STATE) -> Tuple[List[int], int]:
    """Expand one codepoint; returns (codepoints, new_state).

    `state` is the grapheme state from the previous call (0 at the start of
    a string).

    Unlike `decompose` and `map`, which report failures as negative error
    codes, this single-codepoint helper raises UnicodeProcError(NOTASSIGNED)
    for an invalid codepoint, or an unassigned one under REJECTNA. The error
    carries the same code `decompose` would return.
    """
    out: List[int] = []
    state = _expand(get_table(), codepoint, int(options), state, out, 0)
    return out, state


def check_options(options: int) -> int:
    """0 for a coherent option set, else ErrorCode.INVALIDOPTS."""
    if options & COMPOSE and options & DECOMPOSE:
        return ErrorCode.INVALIDOPTS
    if options & STRIPMARK and not options & (COMPOSE | DECOMPOSE):
        return ErrorCode.INVALIDOPTS
    return 0


def decompose_codepoints(data: bytes, options: int, custom_func: Optional[CustomFunc] = None) -> List[int]:
    """Decode and expand a whole UTF-8 string; raises UnicodeProcError."""
    options = int(options)
    rc = check_options(options)
    if rc:
        raise UnicodeProcError(rc)

    table = get_table()
    out: List[int] = []
    state = INITIAL_STATE
    for uc in decode(data, null_terminated=bool(options & NULLTERM)):
        if custom_func is not None:
            uc = custom_func(uc)
        state = _expand(table, uc, options, state, out, 0)
        if len(out) >= MAX_BUFFER_LENGTH:
            raise UnicodeProcError(ErrorCode.OVERFLOW)

    if options & (COMPOSE | DECOMPOSE):
        canonical_order(out, table)
    return out


def decompose_custom(
    data: bytes,
    options: int = 0,
    buffer: Optional[MutableSequence[int]] = None,
    custom_func: Optional[CustomFunc] = None,
) -> int:
    """Decompose a UTF-8 string into `buffer`, applying `custom_func` first.

    Returns the number of codepoints the result needs, or a negative
    ErrorCode. `buffer` is written only when its length covers the result;
    pass None to size a buffer first.
    """
    try:
        result = decompose_codepoints(data, options, custom_func)
    except UnicodeProcError as e:
        return e.code
    n = len(result)
    if buffer is not None and len(buffer) >= n:
        buffer[:n] = result
    return n


def decompose(data: bytes, options: int = 0, buffer: Optional[MutableSequence[int]] = None) -> int:
    return decompose_custom(data, options, buffer)
