"""L2 persistent cache backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from simple_db_cache.config.defaults import DB_FILENAME, DEFAULT_CACHE_DIR
from simple_db_cache.errors.exceptions import ConstraintViolation, StorageError
from simple_db_cache.types import CacheEntry

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger(f"{__name__}.trace")

_SQL_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS file_cache (
        file    TEXT NOT NULL,
        added   TEXT NOT NULL,
        content BLOB
    )
"""
_SQL_CREATE_INDEX = "CREATE UNIQUE INDEX IF NOT EXISTS file_idx ON file_cache (file)"
_SQL_DROP = "DROP TABLE IF EXISTS file_cache"


class DiskCache:
    """SQLite-backed persistent store, one row per file path."""

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        replace_on_conflict: bool = True,
    ) -> None:
        cache_dir = Path(cache_dir or DEFAULT_CACHE_DIR)
        self._db_path = cache_dir / DB_FILENAME
        self._replace_on_conflict = replace_on_conflict
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(
                f"Cannot open cache database {self._db_path}: {e}",
                db_path=self._db_path,
                original=e,
            ) from e
        self._conn.row_factory = sqlite3.Row
        if trace_logger.isEnabledFor(logging.DEBUG):
            self._conn.set_trace_callback(trace_logger.debug)
        self._create_table()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def get(self, path: str) -> CacheEntry | None:
        try:
            row = self._conn.execute(
                "SELECT content, added FROM file_cache WHERE file = ?", (path,)
            ).fetchone()
        except sqlite3.Error as e:
            raise self._storage_error("read", e) from e
        if row is None:
            return None
        return self._row_to_entry(row)

    def put(self, path: str, entry: CacheEntry) -> None:
        verb = "INSERT OR REPLACE" if self._replace_on_conflict else "INSERT"
        try:
            self._conn.execute(
                f"{verb} INTO file_cache (file, content, added) VALUES (?, ?, ?)",
                (path, entry.content, entry.inserted_at.isoformat()),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as e:
            self._conn.rollback()
            raise ConstraintViolation(
                f"{path} is already cached",
                key=path,
                db_path=self._db_path,
                original=e,
            ) from e
        except sqlite3.Error as e:
            raise self._storage_error("write", e) from e

    def scan_all(self) -> Iterator[tuple[str, CacheEntry]]:
        """Yield every persisted (path, entry) pair once."""
        try:
            rows = self._conn.execute("SELECT file, content, added FROM file_cache").fetchall()
        except sqlite3.Error as e:
            raise self._storage_error("read", e) from e
        for row in rows:
            yield row["file"], self._row_to_entry(row)

    def reset(self) -> None:
        """Drop and recreate the schema in a single transaction."""
        try:
            if self._conn.in_transaction:
                self._conn.commit()
            self._conn.execute("BEGIN")
            self._conn.execute(_SQL_DROP)
            self._conn.execute(_SQL_CREATE_TABLE)
            self._conn.execute(_SQL_CREATE_INDEX)
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            raise self._storage_error("reset", e) from e

    @property
    def entry_count(self) -> int:
        try:
            row = self._conn.execute("SELECT COUNT(*) FROM file_cache").fetchone()
        except sqlite3.Error as e:
            raise self._storage_error("read", e) from e
        return row[0]

    @property
    def size_mb(self) -> float:
        try:
            row = self._conn.execute(
                "SELECT COALESCE(SUM(LENGTH(CAST(content AS BLOB))), 0) FROM file_cache"
            ).fetchone()
        except sqlite3.Error as e:
            raise self._storage_error("read", e) from e
        return row[0] / (1024 * 1024)

    def close(self) -> None:
        self._conn.close()

    def _create_table(self) -> None:
        logger.debug("Creating file_cache table in %s", self._db_path)
        try:
            self._conn.execute(_SQL_CREATE_TABLE)
            self._conn.execute(_SQL_CREATE_INDEX)
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.close()
            raise self._storage_error("initialize", e) from e

    def _storage_error(self, action: str, exc: Exception) -> StorageError:
        return StorageError(
            f"Failed to {action} cache database {self._db_path}: {exc}",
            db_path=self._db_path,
            original=exc,
        )

    def _row_to_entry(self, row: sqlite3.Row) -> CacheEntry:
        try:
            return CacheEntry(
                content=row["content"] or "",
                inserted_at=datetime.fromisoformat(row["added"]),
            )
        except (TypeError, ValueError) as e:
            raise self._storage_error("read", e) from e
