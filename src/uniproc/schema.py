from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator
from referencing import Registry, Resource

from .config import DATA_DIR
from .errors import DataError

SUPPLEMENT_SCHEMA_ID = "uniproc:supplement-v1"
RANGES_SCHEMA_ID = "uniproc:ranges-v1"


def _load(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=1)
def _schemas() -> Dict[str, Any]:
    return {
        SUPPLEMENT_SCHEMA_ID: _load(DATA_DIR / "supplement-v1.schema.json"),
        RANGES_SCHEMA_ID: _load(DATA_DIR / "ranges-v1.schema.json"),
    }


def validate_or_raise(obj: Any, *, which: str = "supplement") -> None:
    """Validate a data resource against its pinned Draft 2020-12 schema.

    `which` is "supplement" or "ranges". Errors are reported in path order,
    at most five per message.
    """

    schemas = _schemas()
    reg = Registry().with_resources([
        (sid, Resource.from_contents(s)) for sid, s in schemas.items()
    ])

    schema = schemas[SUPPLEMENT_SCHEMA_ID] if which == "supplement" else schemas[RANGES_SCHEMA_ID]
    v = Draft202012Validator(schema, registry=reg)

    errs = sorted(v.iter_errors(obj), key=lambda e: [str(p) for p in e.path])
    if errs:
        msg = "; ".join([f"{list(e.path)}: {e.message}" for e in errs[:5]])
        raise DataError(msg)
