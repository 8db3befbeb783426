from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_SUPPLEMENT_PATH = DATA_DIR / "supplement-v1.json"

ENV_SUPPLEMENT_PATH = "UNIPROC_SUPPLEMENT_PATH"
ENV_VALIDATE_DATA = "UNIPROC_VALIDATE_DATA"
ENV_STRICT_VERSION = "UNIPROC_STRICT_VERSION"

_ON = frozenset(("1", "true", "yes", "y", "on"))
_OFF = frozenset(("0", "false", "no", "n", "off"))


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    """Unknown values fall back to `default`."""
    word = environ.get(name, "").strip().lower()
    if word in _ON:
        return True
    if word in _OFF:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    supplement_path: Path
    validate_data: bool = True
    strict_unicode_version: bool = True


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read loader settings from the environment.

    Controls:
      - UNIPROC_SUPPLEMENT_PATH: alternate supplement JSON (default: bundled file)
      - UNIPROC_VALIDATE_DATA: schema-validate the supplement (default ON)
      - UNIPROC_STRICT_VERSION: fail when the `unicodedata2` database version
        differs from the supplement's; off only logs a warning (default ON)
    """
    if environ is None:
        environ = os.environ

    p = environ.get(ENV_SUPPLEMENT_PATH)
    path = Path(p) if p else DEFAULT_SUPPLEMENT_PATH

    return Settings(
        supplement_path=path,
        validate_data=_flag(environ, ENV_VALIDATE_DATA, True),
        strict_unicode_version=_flag(environ, ENV_STRICT_VERSION, True),
    )
