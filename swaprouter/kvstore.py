"""A persistent key-value store with batches and ordered iteration.

Keys and values are byte strings. Iteration runs in binary-alphabetical key
order over a snapshot taken when the iteration starts.
"""

from __future__ import annotations

import os
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Protocol

from . import logger

__all__ = [
    "NotFoundError",
    "Database",
    "Batch",
    "HookedBatch",
]

MIN_CACHE = 16
MIN_HANDLES = 16
_MIB = 1 << 20
_DB_FILE = "store.sqlite"

_PUT = "put"
_DELETE = "delete"


class NotFoundError(KeyError):
    """The requested key or property does not exist."""

    def __init__(self, what: object = "leveldb: not found") -> None:
        super().__init__(what)


class _KeyValueWriter(Protocol):
    def put(self, key: bytes, value: bytes) -> None: ...

    def delete(self, key: bytes) -> None: ...


def _prefix_limit(prefix: bytes) -> bytes | None:
    """Return the smallest key greater than every key starting with prefix."""
    trimmed = prefix.rstrip(b"\xff")
    if not trimmed:
        return None
    return trimmed[:-1] + bytes([trimmed[-1] + 1])


class Database:
    """A key-value store kept in a directory on disk."""

    def __init__(
        self,
        path: str | os.PathLike,
        cache: int = MIN_CACHE,
        handles: int = MIN_HANDLES,
        readonly: bool = False,
    ) -> None:
        cache = max(cache, MIN_CACHE)
        handles = max(handles, MIN_HANDLES)
        block_cache = cache // 2 * _MIB
        write_buffer = cache // 4 * _MIB
        self._path = os.fspath(path)
        self._readonly = bool(readonly)
        self._lock = threading.RLock()

        fields: list[object] = [
            "database", self._path,
            "cache", block_cache + write_buffer * 2,
            "handles", handles,
        ]
        if self._readonly:
            fields += ["readonly", "true"]
        logger.info("Allocated cache and file handles", *fields)

        self._conn: sqlite3.Connection | None = self._open(block_cache)

    def _open(self, block_cache: int) -> sqlite3.Connection:
        file = os.path.join(self._path, _DB_FILE)
        if self._readonly:
            if not os.path.exists(file):
                raise FileNotFoundError(f"no database at {self._path}")
            uri = Path(file).resolve().as_uri() + "?mode=ro"
            conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        else:
            os.makedirs(self._path, exist_ok=True)
            conn = sqlite3.connect(file, check_same_thread=False)
            with conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv "
                    "(key BLOB PRIMARY KEY, value BLOB NOT NULL) WITHOUT ROWID"
                )
        conn.execute(f"PRAGMA cache_size = {-(block_cache // 1024)}")
        return conn

    @property
    def path(self) -> str:
        """The directory holding the database."""
        return self._path

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise ValueError("leveldb: closed")
        return self._conn

    def _writable(self) -> sqlite3.Connection:
        conn = self._connection()
        if self._readonly:
            raise PermissionError("leveldb: read-only mode")
        return conn

    def close(self) -> None:
        """Flush pending data and release the store; closing twice is harmless."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def has(self, key: bytes) -> bool:
        """Return whether key is present."""
        with self._lock:
            row = self._connection().execute(
                "SELECT 1 FROM kv WHERE key = ?", (bytes(key),)
            ).fetchone()
        return row is not None

    def get(self, key: bytes) -> bytes:
        """Return the value of key; raise NotFoundError if it is absent."""
        with self._lock:
            row = self._connection().execute(
                "SELECT value FROM kv WHERE key = ?", (bytes(key),)
            ).fetchone()
        if row is None:
            raise NotFoundError()
        return bytes(row[0])

    def put(self, key: bytes, value: bytes) -> None:
        """Store value under key."""
        self._apply([(_PUT, bytes(key), bytes(value))])

    def delete(self, key: bytes) -> None:
        """Remove key; removing an absent key is not an error."""
        self._apply([(_DELETE, bytes(key), b"")])

    def _apply(self, ops: list[tuple[str, bytes, bytes]]) -> None:
        with self._lock:
            conn = self._writable()
            with conn:
                for op, key, value in ops:
                    if op == _PUT:
                        conn.execute(
                            "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                            (key, value),
                        )
                    else:
                        conn.execute("DELETE FROM kv WHERE key = ?", (key,))

    def new_batch(self) -> "Batch":
        """Return a batch that buffers writes until it is written."""
        return Batch(self)

    def iterate(
        self, prefix: bytes = b"", start: bytes = b""
    ) -> Iterator[tuple[bytes, bytes]]:
        """Yield (key, value) pairs whose key has prefix, from prefix + start on.

        The start key is given without the prefix.
        """
        prefix = bytes(prefix or b"")
        lower = prefix + bytes(start or b"")
        upper = _prefix_limit(prefix)
        with self._lock:
            conn = self._connection()
            if upper is None:
                rows = conn.execute(
                    "SELECT key, value FROM kv WHERE key >= ? ORDER BY key", (lower,)
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT key, value FROM kv WHERE key >= ? AND key < ? ORDER BY key",
                    (lower, upper),
                ).fetchall()
        return iter([(bytes(k), bytes(v)) for k, v in rows])

    def stat(self, property: str) -> str:
        """Return an internal statistic; ``leveldb.stats`` is supported."""
        if property != "leveldb.stats":
            raise NotFoundError()
        with self._lock:
            count, size = self._connection().execute(
                "SELECT COUNT(*), COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) FROM kv"
            ).fetchone()
        return f"Keys: {count}\nBytes: {size}"

    def compact(self, start: bytes | None = None, limit: bytes | None = None) -> None:
        """Reclaim space left by deleted and overwritten entries.

        The whole store is compacted whatever range is given.
        """
        with self._lock:
            conn = self._writable()
            conn.commit()
            conn.execute("VACUUM")


class Batch:
    """A write-only buffer of puts and deletes committed by :meth:`write`."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._ops: list[tuple[str, bytes, bytes]] = []
        self._size = 0

    def put(self, key: bytes, value: bytes) -> None:
        """Queue storing value under key."""
        value = bytes(value)
        self._ops.append((_PUT, bytes(key), value))
        self._size += len(value)

    def delete(self, key: bytes) -> None:
        """Queue removing key."""
        key = bytes(key)
        self._ops.append((_DELETE, key, b""))
        self._size += len(key)

    def value_size(self) -> int:
        """Return the amount of data queued for writing."""
        return self._size

    def write(self) -> None:
        """Commit all queued operations to the database at once."""
        self._db._apply(list(self._ops))

    def reset(self) -> None:
        """Drop all queued operations so the batch can be reused."""
        self._ops.clear()
        self._size = 0

    def replay(self, writer: _KeyValueWriter) -> None:
        """Apply the queued operations, in order, to writer; stops at the first error."""
        for op, key, value in self._ops:
            if op == _PUT:
                writer.put(key, value)
            else:
                writer.delete(key)


@dataclass
class HookedBatch:
    """A batch whose puts and deletes are reported to callbacks first."""

    batch: Batch
    on_put: Callable[[bytes, bytes], None] | None = None
    on_delete: Callable[[bytes], None] | None = None

    def put(self, key: bytes, value: bytes) -> None:
        if self.on_put is not None:
            self.on_put(key, value)
        self.batch.put(key, value)

    def delete(self, key: bytes) -> None:
        if self.on_delete is not None:
            self.on_delete(key)
        self.batch.delete(key)

    def value_size(self) -> int:
        return self.batch.value_size()

    def write(self) -> None:
        self.batch.write()

    def reset(self) -> None:
        self.batch.reset()

    def replay(self, writer: _KeyValueWriter) -> None:
        self.batch.replay(writer)