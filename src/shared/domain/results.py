"""Result type for best-effort cross-system operations.

Mirrors, secondary-table writes and notification inserts never raise past
the primary operation.  They report their outcome through ``SyncResult``,
which is truthy only when the operation succeeded (or was skipped because
the target state was already in place).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SyncResult:
    ok: bool
    error: Optional[str] = None
    skipped: bool = False

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> SyncResult:
        return cls(ok=True)

    @classmethod
    def already_applied(cls) -> SyncResult:
        """The target state was already present; nothing was written."""
        return cls(ok=True, skipped=True)

    @classmethod
    def failure(cls, error: str) -> SyncResult:
        return cls(ok=False, error=error)
