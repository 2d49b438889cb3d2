from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from app.exceptions.custom import BookingInProgressError


class EntryStatus(StrEnum):
    in_progress = "in_progress"
    completed = "completed"


class IdempotencyEntry(BaseModel):
    key: str
    status: EntryStatus
    created_at: datetime
    finished_at: datetime | None = None
    result: dict[str, Any] | None = None


def booking_key(prebook_id: str, transaction_id: str) -> str:
    return hashlib.sha256(f"{prebook_id}:{transaction_id}".encode()).hexdigest()


class IdempotencyStore:
    """Server-side guard against finalizing the same booking twice.

    Entries live in process memory. Callers must not await between
    ``begin`` and the check that precedes it.
    """

    def __init__(self, max_entries: int = 1000) -> None:
        self._entries: dict[str, IdempotencyEntry] = {}
        self._max_entries = max_entries

    def _evict(self) -> None:
        if len(self._entries) <= self._max_entries:
            return
        # Oldest completed entries go first; in-flight ones are never evicted
        candidates = sorted(
            (e for e in self._entries.values() if e.status == EntryStatus.completed),
            key=lambda e: e.created_at,
        )
        while len(self._entries) > self._max_entries and candidates:
            self._entries.pop(candidates.pop(0).key, None)

    def get(self, key: str) -> IdempotencyEntry | None:
        return self._entries.get(key)

    def begin(self, key: str) -> IdempotencyEntry | None:
        """Claim ``key``.

        Returns the finished entry when the key already completed, ``None``
        when the claim succeeded, and raises when another call holds it.
        """
        entry = self._entries.get(key)
        if entry is not None:
            if entry.status == EntryStatus.completed:
                return entry
            raise BookingInProgressError(key)

        self._entries[key] = IdempotencyEntry(
            key=key,
            status=EntryStatus.in_progress,
            created_at=datetime.now(timezone.utc),
        )
        self._evict()
        return None

    def complete(self, key: str, result: dict[str, Any]) -> None:
        if entry := self._entries.get(key):
            entry.status = EntryStatus.completed
            entry.result = result
            entry.finished_at = datetime.now(timezone.utc)

    def release(self, key: str) -> None:
        self._entries.pop(key, None)
