"""Assemble the process-wide PropertyTable.

Per-codepoint fields come from the `unicodedata2` database (category,
combining class, bidi class, mirroring, decomposition, East Asian width),
pinned to the Unicode version of the bundled supplement, and from `str` case
operations. The properties `unicodedata2` does not expose come from the
supplement. The table is built once, on first use, and shared read-only
afterwards.
"""

from __future__ import annotations

import logging
import threading
import time
import unicodedata2
from array import array
from typing import Any, Dict, List, Optional, Tuple

from .config import Settings, load_settings
from .constants import (
    CATEGORY_STRINGS,
    CODEPOINT_LIMIT,
    HANGUL_SBASE,
    HANGUL_SCOUNT,
    HANGUL_TCOUNT,
    BidiClass,
    BoundClass,
    Category,
    DecompType,
    IndicConjunctBreak,
)
from .errors import DataError
from .supplement import Supplement, load_supplement
from .tables import UNASSIGNED, CharProperty, PropertyTable, SequenceTableBuilder, pack_flags

logger = logging.getLogger(__name__)

_CATEGORY_CODES = {s: i for i, s in enumerate(CATEGORY_STRINGS)}
_BIDI_CODES = {c.name: int(c) for c in BidiClass}
_DECOMP_TAGS = {
    "<font>": DecompType.FONT,
    "<noBreak>": DecompType.NOBREAK,
    "<initial>": DecompType.INITIAL,
    "<medial>": DecompType.MEDIAL,
    "<final>": DecompType.FINAL,
    "<isolated>": DecompType.ISOLATED,
    "<circle>": DecompType.CIRCLE,
    "<super>": DecompType.SUPER,
    "<sub>": DecompType.SUB,
    "<vertical>": DecompType.VERTICAL,
    "<wide>": DecompType.WIDE,
    "<narrow>": DecompType.NARROW,
    "<small>": DecompType.SMALL,
    "<square>": DecompType.SQUARE,
    "<fraction>": DecompType.FRACTION,
    "<compat>": DecompType.COMPAT,
}

_ZERO_WIDTH = frozenset((Category.MN, Category.ME, Category.CC, Category.CF, Category.ZL, Category.ZP, Category.CS))
_CONTROL = frozenset((Category.ZL, Category.ZP, Category.CC, Category.CS, Category.CF))
_CONTROL_BOUNDARY = frozenset((Category.ZL, Category.ZP, Category.CC, Category.CF))


def parse_decomposition(field: str) -> Tuple[int, List[int]]:
    """Split a UnicodeData decomposition field into (decomp_type, codepoints).

    Canonical mappings have type 0; an empty field gives (0, []).
    """
    parts = field.split()
    if not parts:
        return 0, []
    decomp_type = 0
    if parts[0].startswith("<"):
        tag = parts.pop(0)
        if tag not in _DECOMP_TAGS:
            raise DataError(f"unknown decomposition tag: {tag}")
        decomp_type = int(_DECOMP_TAGS[tag])
    return decomp_type, [int(p, 16) for p in parts]


def composition_pairs(ucd: Any = unicodedata2) -> Dict[int, Dict[int, int]]:
    """first -> {second -> composite} for every primary composite."""
    pairs: Dict[int, Dict[int, int]] = {}
    for cp in range(CODEPOINT_LIMIT):
        ch = chr(cp)
        decomp_type, seq = parse_decomposition(ucd.decomposition(ch))
        if decomp_type or len(seq) != 2:
            continue
        first, second = seq
        if ucd.combining(chr(first)):
            continue
        # Full composition exclusions do not survive NFC.
        if ucd.normalize("NFC", ch) != ch:
            continue
        pairs.setdefault(first, {})[second] = cp
    return pairs


def _simple_upper(ch: str) -> Optional[int]:
    u = ch.upper()
    if len(u) != 1:
        # Greek letters with ypogegrammeni expand in full uppercasing;
        # their one-codepoint titlecase is the simple uppercase.
        u = ch.title()
        if len(u) != 1:
            return None
    return None if u == ch else ord(u)


def _simple_lower(ch: str, ucd: Any) -> Optional[int]:
    lo = ch.lower()
    if len(lo) != 1:
        # U+0130 lowercases to "i" + U+0307; the simple mapping keeps the base.
        if not all(ucd.combining(c) for c in lo[1:]):
            return None
        lo = lo[0]
    return None if lo == ch else ord(lo)


def _simple_title(ch: str) -> Optional[int]:
    t = ch.title()
    if len(t) != 1 or t == ch:
        return None
    return ord(t)


def _charwidth(cp: int, category: int, eaw: str) -> int:
    if cp == 0x00AD:
        return 1
    if category in _ZERO_WIDTH:
        return 0
    if 0x1160 <= cp <= 0x11FF:
        return 0
    if eaw in ("W", "F"):
        return 2
    if category == Category.CN:
        return 0
    return 1


def _boundclass(cp: int, category: int, ignorable: bool, sup: Supplement) -> int:
    if cp == 0x000D:
        return BoundClass.CR
    if cp == 0x000A:
        return BoundClass.LF
    if cp == 0x200D:
        return BoundClass.ZWJ
    if cp in sup.regional_indicator:
        return BoundClass.REGIONAL_INDICATOR
    if cp in sup.prepend:
        return BoundClass.PREPEND
    if cp in sup.hangul_l:
        return BoundClass.L
    if cp in sup.hangul_v:
        return BoundClass.V
    if cp in sup.hangul_t:
        return BoundClass.T
    if HANGUL_SBASE <= cp < HANGUL_SBASE + HANGUL_SCOUNT:
        return BoundClass.LV if (cp - HANGUL_SBASE) % HANGUL_TCOUNT == 0 else BoundClass.LVT
    if category in (Category.MN, Category.ME) or cp in sup.grapheme_extend:
        return BoundClass.EXTEND
    if category in _CONTROL or (category == Category.CN and ignorable):
        return BoundClass.CONTROL
    if (category == Category.MC and cp not in sup.spacing_mark_exclude) or cp in sup.spacing_mark_extra:
        return BoundClass.SPACINGMARK
    if cp in sup.extended_pictographic:
        return BoundClass.EXTENDED_PICTOGRAPHIC
    return BoundClass.OTHER


def _indic_conjunct_break(cp: int, boundclass: int, combining_class: int, sup: Supplement) -> int:
    if cp in sup.incb_linker:
        return IndicConjunctBreak.LINKER
    if cp in sup.incb_consonant:
        return IndicConjunctBreak.CONSONANT
    if cp == 0x200D or (boundclass == BoundClass.EXTEND and combining_class):
        return IndicConjunctBreak.EXTEND
    return IndicConjunctBreak.NONE


def derive_property(
    cp: int,
    sup: Supplement,
    seqs: SequenceTableBuilder,
    comb_indices: Dict[int, int],
    ucd: Any = unicodedata2,
) -> CharProperty:
    ch = chr(cp)
    category = _CATEGORY_CODES[ucd.category(ch)]
    combining_class = ucd.combining(ch)

    decomp_type, decomp = parse_decomposition(ucd.decomposition(ch))
    comp_exclusion = bool(decomp) and decomp_type == 0 and ucd.normalize("NFC", ch) != ch

    cf = ch.casefold()
    upper = _simple_upper(ch)
    lower = _simple_lower(ch, ucd)
    title = _simple_title(ch)

    ignorable = cp in sup.default_ignorable
    boundclass = _boundclass(cp, category, ignorable, sup)

    return CharProperty(
        category=category,
        combining_class=combining_class,
        bidi_class=_BIDI_CODES.get(ucd.bidirectional(ch), 0),
        decomp_type=decomp_type,
        decomp_seqindex=seqs.add(decomp) if decomp else 0,
        casefold_seqindex=seqs.add([ord(c) for c in cf]) if cf != ch else 0,
        uppercase_seqindex=seqs.add([upper]) if upper is not None else 0,
        lowercase_seqindex=seqs.add([lower]) if lower is not None else 0,
        titlecase_seqindex=seqs.add([title]) if title is not None else 0,
        comb_index=comb_indices.get(cp, 0),
        flags=pack_flags(
            bidi_mirrored=ucd.mirrored(ch),
            comp_exclusion=comp_exclusion,
            ignorable=ignorable,
            control_boundary=category in _CONTROL_BOUNDARY and cp not in (0x200C, 0x200D),
            charwidth=_charwidth(cp, category, ucd.east_asian_width(ch)),
            boundclass=boundclass,
            indic_conjunct_break=_indic_conjunct_break(cp, boundclass, combining_class, sup),
        ),
    )


def build_table(sup: Supplement, ucd: Any = unicodedata2) -> PropertyTable:
    t0 = time.perf_counter()

    pairs = composition_pairs(ucd)
    comb_indices: Dict[int, int] = {}
    compositions: List[Dict[int, int]] = [{}]
    for first in sorted(pairs):
        comb_indices[first] = len(compositions)
        compositions.append(pairs[first])

    seqs = SequenceTableBuilder()
    properties: List[CharProperty] = [UNASSIGNED]
    records: Dict[CharProperty, int] = {UNASSIGNED: 0}
    # Private use and surrogate codepoints have uniform properties.
    uniform: Dict[str, int] = {}
    special = sup.special_unassigned()
    lumps: Dict[int, int] = dict(sup.lump_codepoints)

    stage1 = array("H")
    stage2 = array("I")
    blocks: Dict[Tuple[int, ...], int] = {}

    for block in range(CODEPOINT_LIMIT >> 8):
        entries: List[int] = []
        for cp in range(block << 8, (block + 1) << 8):
            cat = ucd.category(chr(cp))
            target = sup.lump_categories.get(cat)
            if target is not None and target != cp:
                lumps.setdefault(cp, target)

            if cp not in special:
                if cat == "Cn":
                    entries.append(0)
                    continue
                if cat in uniform:
                    entries.append(uniform[cat])
                    continue

            prop = derive_property(cp, sup, seqs, comb_indices, ucd)
            idx = records.get(prop)
            if idx is None:
                idx = len(properties)
                properties.append(prop)
                records[prop] = idx
            if cat in ("Co", "Cs"):
                uniform.setdefault(cat, idx)
            entries.append(idx)

        key = tuple(entries)
        bid = blocks.get(key)
        if bid is None:
            bid = len(blocks)
            blocks[key] = bid
            stage2.extend(key)
        stage1.append(bid)

    table = PropertyTable(
        properties=properties,
        stage1=stage1,
        stage2=stage2,
        sequences=seqs.build(),
        compositions=compositions,
        lumps=lumps,
        unicode_version=ucd.unidata_version,
    )
    logger.debug(
        "built property table: %d records, %d blocks, %d sequences, %d composition starters in %.2fs",
        table.property_count,
        table.block_count,
        len(seqs),
        len(comb_indices),
        time.perf_counter() - t0,
    )
    return table


def check_version(supplement_version: str, ucd_version: str, strict: bool = True) -> None:
    if supplement_version == ucd_version:
        return
    msg = (
        f"unicodedata2 is Unicode {ucd_version} but the property supplement "
        f"is Unicode {supplement_version}"
    )
    if strict:
        raise DataError(msg)
    logger.warning("%s; grapheme and ignorable properties follow the supplement", msg)


def load_table(settings: Settings, ucd: Any = unicodedata2) -> PropertyTable:
    sup = load_supplement(settings.supplement_path, validate=settings.validate_data)
    check_version(sup.unicode_version, ucd.unidata_version, strict=settings.strict_unicode_version)
    return build_table(sup, ucd)


_LOCK = threading.Lock()
_TABLE: PropertyTable | None = None


def get_table() -> PropertyTable:
    """The process-wide table, built on first use from `load_settings()`."""
    global _TABLE
    table = _TABLE
    if table is None:
        with _LOCK:
            if _TABLE is None:
                _TABLE = load_table(load_settings())
            table = _TABLE
    return table


def unicode_version() -> str:
    return get_table().unicode_version
