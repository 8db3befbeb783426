"""Option flags, property enumerations and fixed numeric constants.

Numeric values are part of the public contract: option bits, category codes,
bidi classes, decomposition types and bound classes keep the numbering of the
Unicode data tables they are loaded from.
"""

from __future__ import annotations

import sys
from enum import IntEnum, IntFlag
from typing import Tuple


class Option(IntFlag):
    NULLTERM = 1 << 0  # input ends at the first NUL byte
    STABLE = 1 << 1  # respect Unicode versioning stability
    COMPAT = 1 << 2  # compatibility decomposition
    COMPOSE = 1 << 3
    DECOMPOSE = 1 << 4
    IGNORE = 1 << 5  # strip default-ignorable codepoints
    REJECTNA = 1 << 6  # unassigned codepoints are an error
    NLF2LS = 1 << 7  # newline sequences become LINE SEPARATOR
    NLF2PS = 1 << 8  # newline sequences become PARAGRAPH SEPARATOR
    NLF2LF = NLF2LS | NLF2PS  # newline sequences become LF
    STRIPCC = 1 << 9
    CASEFOLD = 1 << 10
    CHARBOUND = 1 << 11  # mark grapheme cluster starts
    LUMP = 1 << 12
    STRIPMARK = 1 << 13  # only together with COMPOSE or DECOMPOSE
    STRIPNA = 1 << 14


NULLTERM = Option.NULLTERM
STABLE = Option.STABLE
COMPAT = Option.COMPAT
COMPOSE = Option.COMPOSE
DECOMPOSE = Option.DECOMPOSE
IGNORE = Option.IGNORE
REJECTNA = Option.REJECTNA
NLF2LS = Option.NLF2LS
NLF2PS = Option.NLF2PS
NLF2LF = Option.NLF2LF
STRIPCC = Option.STRIPCC
CASEFOLD = Option.CASEFOLD
CHARBOUND = Option.CHARBOUND
LUMP = Option.LUMP
STRIPMARK = Option.STRIPMARK
STRIPNA = Option.STRIPNA


class Category(IntEnum):
    CN = 0  # Other, not assigned
    LU = 1  # Letter, uppercase
    LL = 2  # Letter, lowercase
    LT = 3  # Letter, titlecase
    LM = 4  # Letter, modifier
    LO = 5  # Letter, other
    MN = 6  # Mark, nonspacing
    MC = 7  # Mark, spacing combining
    ME = 8  # Mark, enclosing
    ND = 9  # Number, decimal digit
    NL = 10  # Number, letter
    NO = 11  # Number, other
    PC = 12  # Punctuation, connector
    PD = 13  # Punctuation, dash
    PS = 14  # Punctuation, open
    PE = 15  # Punctuation, close
    PI = 16  # Punctuation, initial quote
    PF = 17  # Punctuation, final quote
    PO = 18  # Punctuation, other
    SM = 19  # Symbol, math
    SC = 20  # Symbol, currency
    SK = 21  # Symbol, modifier
    SO = 22  # Symbol, other
    ZS = 23  # Separator, space
    ZL = 24  # Separator, line
    ZP = 25  # Separator, paragraph
    CC = 26  # Other, control
    CF = 27  # Other, format
    CS = 28  # Other, surrogate
    CO = 29  # Other, private use


# Two-letter strings in Category order.
CATEGORY_STRINGS: Tuple[str, ...] = (
    "Cn", "Lu", "Ll", "Lt", "Lm", "Lo", "Mn", "Mc", "Me", "Nd",
    "Nl", "No", "Pc", "Pd", "Ps", "Pe", "Pi", "Pf", "Po", "Sm",
    "Sc", "Sk", "So", "Zs", "Zl", "Zp", "Cc", "Cf", "Cs", "Co",
)

MARK_CATEGORIES = frozenset((Category.MN, Category.MC, Category.ME))


class BidiClass(IntEnum):
    L = 1  # Left-to-Right
    LRE = 2  # Left-to-Right Embedding
    LRO = 3  # Left-to-Right Override
    R = 4  # Right-to-Left
    AL = 5  # Right-to-Left Arabic
    RLE = 6  # Right-to-Left Embedding
    RLO = 7  # Right-to-Left Override
    PDF = 8  # Pop Directional Format
    EN = 9  # European Number
    ES = 10  # European Separator
    ET = 11  # European Number Terminator
    AN = 12  # Arabic Number
    CS = 13  # Common Number Separator
    NSM = 14  # Nonspacing Mark
    BN = 15  # Boundary Neutral
    B = 16  # Paragraph Separator
    S = 17  # Segment Separator
    WS = 18  # Whitespace
    ON = 19  # Other Neutrals
    LRI = 20  # Left-to-Right Isolate
    RLI = 21  # Right-to-Left Isolate
    FSI = 22  # First Strong Isolate
    PDI = 23  # Pop Directional Isolate


class DecompType(IntEnum):
    FONT = 1
    NOBREAK = 2
    INITIAL = 3
    MEDIAL = 4
    FINAL = 5
    ISOLATED = 6
    CIRCLE = 7
    SUPER = 8
    SUB = 9
    VERTICAL = 10
    WIDE = 11
    NARROW = 12
    SMALL = 13
    SQUARE = 14
    FRACTION = 15
    COMPAT = 16


class BoundClass(IntEnum):
    START = 0
    OTHER = 1
    CR = 2
    LF = 3
    CONTROL = 4
    EXTEND = 5
    L = 6
    V = 7
    T = 8
    LV = 9
    LVT = 10
    REGIONAL_INDICATOR = 11
    SPACINGMARK = 12
    PREPEND = 13
    ZWJ = 14
    # 15-18 were retired in Unicode 11; the numbers stay reserved.
    E_BASE = 15
    E_MODIFIER = 16
    GLUE_AFTER_ZWJ = 17
    E_BASE_GAZ = 18
    EXTENDED_PICTOGRAPHIC = 19
    E_ZWG = 20  # Extended_Pictographic followed by ZWJ (state only)


class IndicConjunctBreak(IntEnum):
    NONE = 0
    LINKER = 1
    CONSONANT = 2
    EXTEND = 3


# Hangul syllable arithmetic (Unicode chapter 3.12).
HANGUL_SBASE = 0xAC00
HANGUL_LBASE = 0x1100
HANGUL_VBASE = 0x1161
HANGUL_TBASE = 0x11A7
HANGUL_LCOUNT = 19
HANGUL_VCOUNT = 21
HANGUL_TCOUNT = 28
HANGUL_NCOUNT = HANGUL_VCOUNT * HANGUL_TCOUNT
HANGUL_SCOUNT = HANGUL_LCOUNT * HANGUL_NCOUNT

CODEPOINT_LIMIT = 0x110000

# Inserted before each grapheme cluster under CHARBOUND; encodes as 0xFF.
GRAPHEME_BOUNDARY = -1

# Largest codepoint/byte count a single call may produce.
MAX_BUFFER_LENGTH = sys.maxsize // 8
