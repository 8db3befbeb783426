"""UTF-8 decoding and encoding.

Decoding is strict: overlong forms, encoded surrogates, values above
U+10FFFF and truncated sequences are rejected at the first bad byte.
Encoding trusts its caller and always emits the shortest form.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from .constants import CODEPOINT_LIMIT, GRAPHEME_BOUNDARY
from .errors import ErrorCode, UnicodeProcError


def _cont(b: int) -> bool:
    return (b & 0xC0) == 0x80


def iterate(data: bytes, pos: int = 0, end: int = -1) -> Tuple[int, int]:
    """Read one codepoint starting at `pos`.

    `end` bounds the read (exclusive); a negative `end` allows up to four
    bytes. Returns (bytes_read, codepoint), (0, -1) on empty input, or
    (ErrorCode.INVALIDUTF8, -1) on malformed input.
    """
    if end < 0:
        limit = min(pos + 4, len(data))
    else:
        limit = min(end, len(data))
    if pos >= limit:
        return 0, -1

    b0 = data[pos]
    if b0 < 0x80:
        return 1, b0
    # Lead bytes 0xC0, 0xC1 and above 0xF4 can only start invalid sequences.
    if not 0xC2 <= b0 <= 0xF4:
        return ErrorCode.INVALIDUTF8, -1

    if b0 < 0xE0:
        if pos + 1 >= limit or not _cont(data[pos + 1]):
            return ErrorCode.INVALIDUTF8, -1
        return 2, ((b0 & 0x1F) << 6) | (data[pos + 1] & 0x3F)

    if b0 < 0xF0:
        if pos + 2 >= limit or not _cont(data[pos + 1]) or not _cont(data[pos + 2]):
            return ErrorCode.INVALIDUTF8, -1
        if b0 == 0xED and data[pos + 1] > 0x9F:
            return ErrorCode.INVALIDUTF8, -1  # surrogate
        cp = ((b0 & 0x0F) << 12) | ((data[pos + 1] & 0x3F) << 6) | (data[pos + 2] & 0x3F)
        if cp < 0x800:
            return ErrorCode.INVALIDUTF8, -1  # overlong
        return 3, cp

    if (
        pos + 3 >= limit
        or not _cont(data[pos + 1])
        or not _cont(data[pos + 2])
        or not _cont(data[pos + 3])
    ):
        return ErrorCode.INVALIDUTF8, -1
    if b0 == 0xF0 and data[pos + 1] < 0x90:
        return ErrorCode.INVALIDUTF8, -1  # overlong
    if b0 == 0xF4 and data[pos + 1] > 0x8F:
        return ErrorCode.INVALIDUTF8, -1  # above U+10FFFF
    cp = (
        ((b0 & 0x07) << 18)
        | ((data[pos + 1] & 0x3F) << 12)
        | ((data[pos + 2] & 0x3F) << 6)
        | (data[pos + 3] & 0x3F)
    )
    return 4, cp


def decode(data: bytes, null_terminated: bool = False) -> Iterator[int]:
    """Lazily yield codepoints; raises UnicodeProcError(INVALIDUTF8) at the first bad byte."""
    data = bytes(data)
    pos = 0
    n = len(data)
    while pos < n:
        nbytes, cp = iterate(data, pos, n)
        if cp < 0:
            raise UnicodeProcError(ErrorCode.INVALIDUTF8, f"invalid UTF-8 at byte offset {pos}")
        if null_terminated and cp == 0:
            return
        yield cp
        pos += nbytes


def encode_char(codepoint: int) -> bytes:
    """Shortest UTF-8 encoding; b"" when `codepoint` is outside 0..0x10FFFF."""
    if codepoint < 0:
        return b""
    if codepoint < 0x80:
        return bytes((codepoint,))
    if codepoint < 0x800:
        return bytes((0xC0 | (codepoint >> 6), 0x80 | (codepoint & 0x3F)))
    if codepoint < 0x10000:
        return bytes((
            0xE0 | (codepoint >> 12),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ))
    if codepoint < CODEPOINT_LIMIT:
        return bytes((
            0xF0 | (codepoint >> 18),
            0x80 | ((codepoint >> 12) & 0x3F),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ))
    return b""


def charbound_encode_char(codepoint: int) -> bytes:
    """encode_char, plus GRAPHEME_BOUNDARY -> 0xFF."""
    if codepoint == GRAPHEME_BOUNDARY:
        return b"\xff"
    return encode_char(codepoint)


def encode(codepoints: Iterable[int], charbound: bool = False) -> bytes:
    enc = charbound_encode_char if charbound else encode_char
    return b"".join(enc(cp) for cp in codepoints)
