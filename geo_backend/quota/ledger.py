"""In-memory ledger of per-client quota usage.

The ledger maps a client identity to an immutable :class:`LedgerEntry`.
Entries are only ever replaced wholesale, so a reader never sees a
half-updated entry. Multi-step sequences (read, decide, write) must hold
:attr:`QuotaLedger.lock` for their whole duration.

State lives in process memory only and is lost on restart.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple

from geo_backend.quota.window import as_utc


@dataclass(frozen=True)
class LedgerEntry:
    """Usage of one identity within one window."""
    count: int
    reset_at: datetime

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count must be non-negative")
        object.__setattr__(self, "reset_at", as_utc(self.reset_at))

    def incremented(self) -> "LedgerEntry":
        return LedgerEntry(count=self.count + 1, reset_at=self.reset_at)


class QuotaLedger:
    """Thread-safe mapping of identity -> :class:`LedgerEntry`."""

    def __init__(self) -> None:
        self._entries: Dict[str, LedgerEntry] = {}
        # Re-entrant so callers holding ``lock`` can still use get/set/delete
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def get(self, identity: str) -> Optional[LedgerEntry]:
        with self._lock:
            return self._entries.get(identity)

    def set(self, identity: str, entry: LedgerEntry) -> None:
        with self._lock:
            self._entries[identity] = entry

    def delete(self, identity: str) -> None:
        with self._lock:
            self._entries.pop(identity, None)

    def items(self) -> List[Tuple[str, LedgerEntry]]:
        """Snapshot of all (identity, entry) pairs."""
        with self._lock:
            return list(self._entries.items())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter([identity for identity, _ in self.items()])


__all__ = ["LedgerEntry", "QuotaLedger"]
