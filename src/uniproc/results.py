from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorCode, errmsg


@dataclass(frozen=True)
class MapResult:
    ok: bool
    data: bytes = b""
    code: int = 0  # 0, or a negative ErrorCode when not ok

    @property
    def message(self) -> str:
        return "" if self.ok else errmsg(self.code)

    def __len__(self) -> int:
        return len(self.data)

    @staticmethod
    def failure(code: int) -> "MapResult":
        return MapResult(False, b"", int(ErrorCode(code)))
