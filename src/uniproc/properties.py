"""Per-codepoint property queries against the shared PropertyTable.

None of these fail: invalid or unassigned codepoints resolve to the
unassigned sentinel record, whose mappings are empty.
"""

from __future__ import annotations

from .builder import get_table
from .constants import CATEGORY_STRINGS, CODEPOINT_LIMIT, Category
from .tables import CharProperty


def get_property(codepoint: int) -> CharProperty:
    return get_table().lookup(codepoint)


def codepoint_valid(codepoint: int) -> bool:
    """In range and not a surrogate (assignment is not checked)."""
    return 0 <= codepoint < CODEPOINT_LIMIT and not (0xD800 <= codepoint < 0xE000)


def category(codepoint: int) -> Category:
    return Category(get_property(codepoint).category)


def category_string(codepoint: int) -> str:
    """Two-letter category such as "Lu" or "Co"."""
    return CATEGORY_STRINGS[get_property(codepoint).category]


def combining_class(codepoint: int) -> int:
    return get_property(codepoint).combining_class


def bidi_class(codepoint: int) -> int:
    return get_property(codepoint).bidi_class


def bidi_mirrored(codepoint: int) -> bool:
    return get_property(codepoint).bidi_mirrored


def ignorable(codepoint: int) -> bool:
    return get_property(codepoint).ignorable


def charwidth(codepoint: int) -> int:
    """Like wcwidth(), but 0 instead of -1 for non-printable codepoints."""
    return get_property(codepoint).charwidth


def _case_target(codepoint: int, seqindex: int) -> int:
    if not seqindex:
        return codepoint
    return get_table().sequence(seqindex)[0]


def tolower(codepoint: int) -> int:
    return _case_target(codepoint, get_property(codepoint).lowercase_seqindex)


def toupper(codepoint: int) -> int:
    return _case_target(codepoint, get_property(codepoint).uppercase_seqindex)


def totitle(codepoint: int) -> int:
    return _case_target(codepoint, get_property(codepoint).titlecase_seqindex)


def islower(codepoint: int) -> bool:
    p = get_property(codepoint)
    return p.lowercase_seqindex != p.uppercase_seqindex and p.lowercase_seqindex == 0


def isupper(codepoint: int) -> bool:
    p = get_property(codepoint)
    return (
        p.lowercase_seqindex != p.uppercase_seqindex
        and p.uppercase_seqindex == 0
        and p.category != Category.LT
    )
