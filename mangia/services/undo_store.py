"""Short-lived undo snapshots for pantry deductions.

A deduction stores the pre-deduction quantities under an opaque token; the
token can be redeemed once before it expires. The store is the only shared
mutable state of the pantry engine, so it sits behind UndoStore and callers
pick a backend:

- InMemoryUndoStore: process-local, valid for a single-instance deployment.
- RedisUndoStore: shared across instances, Redis handles expiry.
- DatabaseUndoStore: shared across instances through the deduct_undo_snapshots table.
"""

import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

import redis
from sqlalchemy import delete
from sqlalchemy.orm import Session

from mangia.config import get_settings
from mangia.models.deduct_undo_snapshot import DeductUndoSnapshot
from mangia.schemas.deduction import UndoEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class UndoStore(ABC):
    """Key-value store of undo entries with expiry."""

    def __init__(self, clock: Clock = time.time):
        self.clock = clock

    @abstractmethod
    def set(self, token: str, entry: UndoEntry) -> None:
        """Store an entry; it stops being readable at entry.expires_at."""

    @abstractmethod
    def get(self, token: str) -> UndoEntry | None:
        """Return the entry for token, or None if absent or expired."""

    @abstractmethod
    def take(self, token: str, owner: int | str) -> UndoEntry | None:
        """Atomically remove and return the entry for token.

        Returns None when the entry is absent or expired, and when it belongs
        to a user other than owner, in which case it stays redeemable by its
        owner. Concurrent callers never both receive the same entry.
        """

    @abstractmethod
    def delete(self, token: str) -> None:
        """Remove the entry for token if present."""


def _owned_by(entry: UndoEntry, owner: int | str) -> bool:
    return str(entry.user_id) == str(owner)


class InMemoryUndoStore(UndoStore):
    """Dict-backed store, swept of expired entries on every access."""

    def __init__(self, clock: Clock = time.time):
        super().__init__(clock)
        self._entries: dict[str, UndoEntry] = {}
        self._lock = threading.Lock()

    def _sweep(self) -> None:
        now = self.clock()
        expired = [token for token, entry in self._entries.items() if entry.expires_at <= now]
        for token in expired:
            del self._entries[token]

    def set(self, token: str, entry: UndoEntry) -> None:
        with self._lock:
            self._sweep()
            self._entries[token] = entry

    def get(self, token: str) -> UndoEntry | None:
        with self._lock:
            self._sweep()
            return self._entries.get(token)

    def take(self, token: str, owner: int | str) -> UndoEntry | None:
        with self._lock:
            self._sweep()
            entry = self._entries.get(token)
            if entry is None or not _owned_by(entry, owner):
                return None
            return self._entries.pop(token)

    def delete(self, token: str) -> None:
        with self._lock:
            self._sweep()
            self._entries.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            self._sweep()
            return len(self._entries)


class RedisUndoStore(UndoStore):
    """Entries stored as JSON with a Redis TTL."""

    KEY_PREFIX = "deduct-undo:"

    def __init__(self, client: redis.Redis | None = None, clock: Clock = time.time):
        super().__init__(clock)
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(get_settings().redis_url)
        return self._client

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def set(self, token: str, entry: UndoEntry) -> None:
        ttl = max(1, math.ceil(entry.expires_at - self.clock()))
        self.client.set(self._key(token), entry.model_dump_json(), ex=ttl)

    def get(self, token: str) -> UndoEntry | None:
        raw = self.client.get(self._key(token))
        if raw is None:
            return None
        entry = UndoEntry.model_validate_json(raw)
        # Redis TTLs are whole seconds; honour the exact expiry
        if entry.expires_at <= self.clock():
            return None
        return entry

    def take(self, token: str, owner: int | str) -> UndoEntry | None:
        key = self._key(token)
        raw = self.client.getdel(key)
        if raw is None:
            return None
        entry = UndoEntry.model_validate_json(raw)
        remaining = entry.expires_at - self.clock()
        if remaining <= 0:
            return None
        if not _owned_by(entry, owner):
            # Not ours to consume; put it back for its owner
            self.client.set(key, raw, ex=max(1, math.ceil(remaining)), nx=True)
            return None
        return entry

    def delete(self, token: str) -> None:
        self.client.delete(self._key(token))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class DatabaseUndoStore(UndoStore):
    """Entries stored as rows; expired rows are swept on every write."""

    def __init__(self, db: Session, clock: Clock = time.time):
        super().__init__(clock)
        self.db = db

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self.clock(), UTC)

    def _sweep(self) -> None:
        self.db.query(DeductUndoSnapshot).filter(
            DeductUndoSnapshot.expires_at <= self._now()
        ).delete(synchronize_session=False)

    def set(self, token: str, entry: UndoEntry) -> None:
        self._sweep()
        self.db.add(
            DeductUndoSnapshot(
                token=token,
                user_id=entry.user_id,
                snapshot=[item.model_dump() for item in entry.snapshot],
                expires_at=datetime.fromtimestamp(entry.expires_at, UTC),
            )
        )
        self.db.commit()

    def get(self, token: str) -> UndoEntry | None:
        row = self.db.query(DeductUndoSnapshot).filter(DeductUndoSnapshot.token == token).first()
        if row is None:
            return None
        expires_at = _as_utc(row.expires_at).timestamp()
        if expires_at <= self.clock():
            return None
        return UndoEntry(user_id=row.user_id, snapshot=row.snapshot, expires_at=expires_at)

    def take(self, token: str, owner: int | str) -> UndoEntry | None:
        # The DELETE locks the row, so a concurrent take finds nothing once this commits
        row = self.db.execute(
            delete(DeductUndoSnapshot)
            .where(DeductUndoSnapshot.token == token)
            .returning(
                DeductUndoSnapshot.user_id,
                DeductUndoSnapshot.snapshot,
                DeductUndoSnapshot.expires_at,
            )
        ).first()
        if row is None:
            self.db.rollback()
            return None

        entry = UndoEntry(
            user_id=row.user_id,
            snapshot=row.snapshot,
            expires_at=_as_utc(row.expires_at).timestamp(),
        )
        if not _owned_by(entry, owner):
            self.db.rollback()
            return None

        self.db.commit()
        if entry.expires_at <= self.clock():
            return None
        return entry

    def delete(self, token: str) -> None:
        self.db.query(DeductUndoSnapshot).filter(DeductUndoSnapshot.token == token).delete(
            synchronize_session=False
        )
        self._sweep()
        self.db.commit()


# Process-wide stores for the backends that are not bound to a session
_memory_store: InMemoryUndoStore | None = None
_redis_store: RedisUndoStore | None = None


def get_undo_store(db: Session | None = None) -> UndoStore:
    """Get the undo store selected by the UNDO_BACKEND setting."""
    global _memory_store, _redis_store
    backend = get_settings().undo_backend

    if backend == "redis":
        if _redis_store is None:
            _redis_store = RedisUndoStore()
        return _redis_store

    if backend == "database":
        if db is None:
            raise ValueError("The database undo store needs a session")
        return DatabaseUndoStore(db)

    if _memory_store is None:
        _memory_store = InMemoryUndoStore()
    return _memory_store
