"""Single-call transforms: decode -> custom -> decompose -> normalize -> encode.

`map` / `map_custom` / `map_into` report failures as error codes. The
normalization-form helpers and `normalize` are string conveniences and raise
UnicodeProcError instead.
"""

from __future__ import annotations

from typing import Dict, Optional, Union, overload

from .constants import (
    CASEFOLD,
    CHARBOUND,
    COMPAT,
    COMPOSE,
    DECOMPOSE,
    IGNORE,
    LUMP,
    NLF2LF,
    NLF2LS,
    NLF2PS,
    REJECTNA,
    STABLE,
    STRIPCC,
    STRIPMARK,
    STRIPNA,
    Option,
)
from .decompose import CustomFunc, check_options, decompose_codepoints
from .errors import ErrorCode, UnicodeProcError
from .normalization import normalize_list
from .properties import charwidth
from .results import MapResult
from .utf8 import encode

NFD_OPTIONS = DECOMPOSE | STABLE
NFC_OPTIONS = COMPOSE | STABLE
NFKD_OPTIONS = DECOMPOSE | COMPAT | STABLE
NFKC_OPTIONS = COMPOSE | COMPAT | STABLE
NFKC_CASEFOLD_OPTIONS = COMPOSE | COMPAT | CASEFOLD | IGNORE | STABLE

FORMS: Dict[str, Option] = {
    "NFD": NFD_OPTIONS,
    "NFC": NFC_OPTIONS,
    "NFKD": NFKD_OPTIONS,
    "NFKC": NFKC_OPTIONS,
    "NFKC_CASEFOLD": NFKC_CASEFOLD_OPTIONS,
}


def validate_options(options: int) -> int:
    return check_options(int(options))


def map_custom(data: bytes, options: int = 0, custom_func: Optional[CustomFunc] = None) -> MapResult:
    """Transform a UTF-8 string under `options`.

    `custom_func(cp) -> cp` runs on each decoded codepoint before any
    built-in option.
    """
    options = int(options)
    try:
        codepoints = decompose_codepoints(data, options, custom_func)
        codepoints = normalize_list(codepoints, options)
        return MapResult(True, encode(codepoints, charbound=bool(options & CHARBOUND)))
    except UnicodeProcError as e:
        return MapResult.failure(e.code)
    except MemoryError:
        return MapResult.failure(ErrorCode.NOMEM)


def map(data: bytes, options: int = 0) -> MapResult:
    return map_custom(data, options)


def map_into(
    data: bytes,
    dest: Optional[bytearray] = None,
    options: int = 0,
    custom_func: Optional[CustomFunc] = None,
) -> int:
    """Two-call form of map_custom.

    Returns the byte length of the result, or a negative ErrorCode. `dest`
    is filled only when it is at least that long; None (or an empty buffer)
    just asks for the size.
    """
    r = map_custom(data, options, custom_func)
    if not r.ok:
        return r.code
    n = len(r.data)
    if dest is not None and len(dest) >= n:
        dest[:n] = r.data
    return n


@overload
def _apply(text: str, options: int) -> str: ...


@overload
def _apply(text: bytes, options: int) -> bytes: ...


def _apply(text: Union[str, bytes], options: int) -> Union[str, bytes]:
    if isinstance(text, str):
        r = map(text.encode("utf-8", "surrogatepass"), options)
        if not r.ok:
            raise UnicodeProcError(r.code)
        return r.data.decode("utf-8")
    r = map(text, options)
    if not r.ok:
        raise UnicodeProcError(r.code)
    return r.data


def NFD(text: Union[str, bytes]) -> Union[str, bytes]:
    return _apply(text, NFD_OPTIONS)


def NFC(text: Union[str, bytes]) -> Union[str, bytes]:
    return _apply(text, NFC_OPTIONS)


def NFKD(text: Union[str, bytes]) -> Union[str, bytes]:
    return _apply(text, NFKD_OPTIONS)


def NFKC(text: Union[str, bytes]) -> Union[str, bytes]:
    return _apply(text, NFKC_OPTIONS)


def NFKC_Casefold(text: Union[str, bytes]) -> Union[str, bytes]:
    return _apply(text, NFKC_CASEFOLD_OPTIONS)


def options_from_flags(
    *,
    stable: bool = False,
    compat: bool = False,
    compose: bool = True,
    decompose: bool = False,
    stripignore: bool = False,
    rejectna: bool = False,
    newline2ls: bool = False,
    newline2ps: bool = False,
    newline2lf: bool = False,
    stripcc: bool = False,
    casefold: bool = False,
    lump: bool = False,
    stripmark: bool = False,
    stripna: bool = False,
) -> Option:
    """Build an option mask from keywords; `decompose=True` takes precedence over `compose`."""
    options = Option(0)
    if stable:
        options |= STABLE
    if compat:
        options |= COMPAT
    if decompose:
        options |= DECOMPOSE
    elif compose:
        options |= COMPOSE
    elif compat or stripmark:
        raise ValueError("compat=True or stripmark=True require compose=True or decompose=True")
    if stripignore:
        options |= IGNORE
    if rejectna:
        options |= REJECTNA
    if newline2ls + newline2ps + newline2lf > 1:
        raise ValueError("only one newline conversion may be specified")
    if newline2ls:
        options |= NLF2LS
    if newline2ps:
        options |= NLF2PS
    if newline2lf:
        options |= NLF2LF
    if stripcc:
        options |= STRIPCC
    if casefold:
        options |= CASEFOLD
    if lump:
        options |= LUMP
    if stripmark:
        options |= STRIPMARK
    if stripna:
        options |= STRIPNA
    return options


def normalize(
    text: str,
    form: Optional[str] = None,
    *,
    chartransform: Optional[CustomFunc] = None,
    **flags: bool,
) -> str:
    """Normalize a `str`.

    Either name a form ("NFC", "NFD", "NFKC", "NFKD", "NFKC_Casefold") or pass
    keyword flags understood by options_from_flags. `chartransform` maps each
    codepoint before the other transforms.
    """
    if form is not None:
        if flags:
            raise ValueError("keyword flags cannot be combined with a normalization form")
        try:
            options = FORMS[form.upper()]
        except KeyError:
            raise ValueError(f"unknown normalization form: {form!r}") from None
    else:
        options = options_from_flags(**flags)

    r = map_custom(text.encode("utf-8", "surrogatepass"), options, chartransform)
    if not r.ok:
        raise UnicodeProcError(r.code)
    return r.data.decode("utf-8")


def isequal_normalized(a: str, b: str, *, casefold: bool = False, stripmark: bool = False) -> bool:
    """Canonical equivalence of two strings, optionally ignoring case and marks."""
    def nfd(s: str) -> str:
        return normalize(s, decompose=True, casefold=casefold, stripmark=stripmark)

    return a == b or nfd(a) == nfd(b)


def textwidth(text: str) -> int:
    return sum(charwidth(ord(c)) for c in text)
