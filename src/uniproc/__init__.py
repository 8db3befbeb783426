"""Unicode codepoint properties, normalization, case folding and grapheme segmentation."""

from __future__ import annotations

from .builder import get_table, unicode_version
from .constants import (
    CASEFOLD,
    CHARBOUND,
    COMPAT,
    COMPOSE,
    DECOMPOSE,
    GRAPHEME_BOUNDARY,
    IGNORE,
    LUMP,
    NLF2LF,
    NLF2LS,
    NLF2PS,
    NULLTERM,
    REJECTNA,
    STABLE,
    STRIPCC,
    STRIPMARK,
    STRIPNA,
    BidiClass,
    BoundClass,
    Category,
    DecompType,
    IndicConjunctBreak,
    Option,
)
from .decompose import decompose, decompose_char, decompose_custom
from .errors import DataError, ErrorCode, UnicodeProcError, errmsg
from .grapheme import grapheme_break, grapheme_break_stateful, graphemes
from .normalization import normalize_codepoints, reencode
from .pipeline import (
    NFC,
    NFD,
    NFKC,
    NFKD,
    NFKC_Casefold,
    isequal_normalized,
    map,
    map_custom,
    map_into,
    normalize,
    options_from_flags,
    textwidth,
    validate_options,
)
from .properties import (
    bidi_class,
    bidi_mirrored,
    category,
    category_string,
    charwidth,
    codepoint_valid,
    combining_class,
    get_property,
    ignorable,
    islower,
    isupper,
    tolower,
    totitle,
    toupper,
)
from .results import MapResult
from .tables import CharProperty, PropertyTable
from .utf8 import decode, encode_char, iterate

__version__ = "0.1.0"
