"""Supplementary Unicode properties not exposed by `unicodedata`.

The bundled resource (data/supplement-v1.json) pins the Unicode release it
was extracted from. It is read once, validated, and turned into frozensets
that the table builder consults per codepoint.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Mapping

from .errors import DataError
from .schema import validate_or_raise


def parse_ranges(items: Iterable[str]) -> FrozenSet[int]:
    """Expand UCD-style "XXXX" / "XXXX..YYYY" entries into a set of codepoints."""
    out = set()
    for item in items:
        lo, _, hi = item.partition("..")
        start = int(lo, 16)
        stop = int(hi, 16) if hi else start
        if stop < start:
            raise DataError(f"inverted range: {item}")
        out.update(range(start, stop + 1))
    return frozenset(out)


@dataclass(frozen=True)
class Supplement:
    unicode_version: str
    prepend: FrozenSet[int]
    grapheme_extend: FrozenSet[int]  # Other_Grapheme_Extend + Emoji_Modifier
    spacing_mark_extra: FrozenSet[int]
    spacing_mark_exclude: FrozenSet[int]
    regional_indicator: FrozenSet[int]
    hangul_l: FrozenSet[int]
    hangul_v: FrozenSet[int]
    hangul_t: FrozenSet[int]
    extended_pictographic: FrozenSet[int]
    incb_linker: FrozenSet[int]
    incb_consonant: FrozenSet[int]
    default_ignorable: FrozenSet[int]
    lump_categories: Mapping[str, int]
    lump_codepoints: Mapping[int, int]

    def special_unassigned(self) -> FrozenSet[int]:
        """Codepoints that carry properties even when unassigned."""
        return self.extended_pictographic | self.default_ignorable

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Supplement":
        gb = d["grapheme_break"]
        incb = d["indic_conjunct_break"]
        lump = d["lump"]
        return Supplement(
            unicode_version=d["unicode_version"],
            prepend=parse_ranges(gb["prepend"]),
            grapheme_extend=parse_ranges(gb["other_grapheme_extend"]) | parse_ranges(gb["emoji_modifier"]),
            spacing_mark_extra=parse_ranges(gb["spacing_mark_extra"]),
            spacing_mark_exclude=parse_ranges(gb["spacing_mark_exclude"]),
            regional_indicator=parse_ranges(gb["regional_indicator"]),
            hangul_l=parse_ranges(gb["hangul_l"]),
            hangul_v=parse_ranges(gb["hangul_v"]),
            hangul_t=parse_ranges(gb["hangul_t"]),
            extended_pictographic=parse_ranges(d["extended_pictographic"]),
            incb_linker=parse_ranges(incb["linker"]),
            incb_consonant=parse_ranges(incb["consonant"]),
            default_ignorable=parse_ranges(d["default_ignorable"]),
            lump_categories={k: int(v, 16) for k, v in lump["categories"].items()},
            lump_codepoints={int(k, 16): int(v, 16) for k, v in lump["codepoints"].items()},
        )


def load_supplement(path: Path, validate: bool = True) -> Supplement:
    p = Path(path)
    if not p.exists():
        raise DataError(f"missing supplement resource: {p}")
    try:
        d = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataError(f"supplement is not valid JSON: {p}: {e}") from e
    if validate:
        validate_or_raise(d, which="supplement")
    return Supplement.from_dict(d)
