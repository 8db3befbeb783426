"""Immutable two-stage codepoint property table.

Layout:
  - `properties[0]` is the unassigned sentinel (every field zero).
  - `stage1[cp >> 8]` is a block id; `stage2[(block << 8) + (cp & 0xFF)]`
    indexes `properties`. Identical 256-codepoint blocks share one id.
  - `sequences` is a flat length-prefixed codepoint list; a seqindex points at
    the length slot. Index 0 holds the empty entry and means "no mapping".
  - `compositions[comb_index]` maps a second codepoint to the composite for
    one first codepoint. Index 0 is empty.

Nothing here is mutated after construction.
"""

from __future__ import annotations

from array import array
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Sequence, Tuple

from .constants import CODEPOINT_LIMIT

# Bit ranges of CharProperty.flags: (offset, width).
FLAG_FIELDS: Tuple[Tuple[str, int, int], ...] = (
    ("bidi_mirrored", 0, 1),
    ("comp_exclusion", 1, 1),
    ("ignorable", 2, 1),
    ("control_boundary", 3, 1),
    ("charwidth", 4, 2),
    # bits 6-7 reserved
    ("boundclass", 8, 6),
    ("indic_conjunct_break", 14, 2),
)


def pack_flags(
    bidi_mirrored: int = 0,
    comp_exclusion: int = 0,
    ignorable: int = 0,
    control_boundary: int = 0,
    charwidth: int = 0,
    boundclass: int = 0,
    indic_conjunct_break: int = 0,
) -> int:
    values = {
        "bidi_mirrored": int(bidi_mirrored),
        "comp_exclusion": int(comp_exclusion),
        "ignorable": int(ignorable),
        "control_boundary": int(control_boundary),
        "charwidth": int(charwidth),
        "boundclass": int(boundclass),
        "indic_conjunct_break": int(indic_conjunct_break),
    }
    flags = 0
    for name, offset, width in FLAG_FIELDS:
        v = values[name]
        if v < 0 or v >> width:
            raise ValueError(f"flag {name}={v} does not fit in {width} bit(s)")
        flags |= v << offset
    return flags


@dataclass(frozen=True)
class CharProperty:
    category: int = 0
    combining_class: int = 0
    bidi_class: int = 0
    decomp_type: int = 0
    decomp_seqindex: int = 0
    casefold_seqindex: int = 0
    uppercase_seqindex: int = 0
    lowercase_seqindex: int = 0
    titlecase_seqindex: int = 0
    comb_index: int = 0
    flags: int = 0

    @property
    def bidi_mirrored(self) -> bool:
        return bool(self.flags & 0x01)

    @property
    def comp_exclusion(self) -> bool:
        return bool((self.flags >> 1) & 0x01)

    @property
    def ignorable(self) -> bool:
        return bool((self.flags >> 2) & 0x01)

    @property
    def control_boundary(self) -> bool:
        return bool((self.flags >> 3) & 0x01)

    @property
    def charwidth(self) -> int:
        return (self.flags >> 4) & 0x03

    @property
    def boundclass(self) -> int:
        return (self.flags >> 8) & 0x3F

    @property
    def indic_conjunct_break(self) -> int:
        return (self.flags >> 14) & 0x03


UNASSIGNED = CharProperty()


class PropertyTable:
    def __init__(
        self,
        properties: Sequence[CharProperty],
        stage1: array,
        stage2: array,
        sequences: array,
        compositions: Sequence[Mapping[int, int]],
        lumps: Mapping[int, int],
        unicode_version: str,
    ) -> None:
        if not properties or properties[0] != UNASSIGNED:
            raise ValueError("properties[0] must be the unassigned sentinel")
        if len(stage1) != CODEPOINT_LIMIT >> 8:
            raise ValueError(f"stage1 must have {CODEPOINT_LIMIT >> 8} entries, got {len(stage1)}")
        self._properties = tuple(properties)
        self._stage1 = stage1
        self._stage2 = stage2
        self._sequences = sequences
        self._compositions = tuple(MappingProxyType(dict(c)) for c in compositions)
        self._lumps = MappingProxyType(dict(lumps))
        self.unicode_version = unicode_version

    @property
    def property_count(self) -> int:
        return len(self._properties)

    @property
    def block_count(self) -> int:
        return len(self._stage2) >> 8

    def lookup(self, codepoint: int) -> CharProperty:
        if codepoint < 0 or codepoint >= CODEPOINT_LIMIT:
            return self._properties[0]
        block = self._stage1[codepoint >> 8]
        return self._properties[self._stage2[(block << 8) + (codepoint & 0xFF)]]

    def sequence(self, seqindex: int) -> Tuple[int, ...]:
        n = self._sequences[seqindex]
        return tuple(self._sequences[seqindex + 1:seqindex + 1 + n])

    def composition(self, first: CharProperty, second: int) -> int | None:
        if not first.comb_index:
            return None
        return self._compositions[first.comb_index].get(second)

    def lump(self, codepoint: int) -> int | None:
        return self._lumps.get(codepoint)


class SequenceTableBuilder:
    """Interns codepoint sequences into a flat length-prefixed array."""

    def __init__(self) -> None:
        self._data = array("I", [0])
        self._index: Dict[Tuple[int, ...], int] = {(): 0}

    def add(self, seq: Sequence[int]) -> int:
        key = tuple(seq)
        idx = self._index.get(key)
        if idx is None:
            idx = len(self._data)
            self._data.append(len(key))
            self._data.extend(key)
            self._index[key] = idx
        return idx

    def __len__(self) -> int:
        return len(self._index)

    def build(self) -> array:
        return array("I", self._data)
