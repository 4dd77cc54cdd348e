"""
SQLite Contact Store.

Keeps the serialized collection in a small key-value table, so several
namespaced collections can share one database file.

Features:
    - Automatic schema creation
    - Last-writer-wins replace on save

Author: cardbook maintainers
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import ensure_directory
from cardbook.utils.exceptions import PersistenceError
from .base import ContactStore

logger = get_logger(__name__)


class SQLiteContactStore(ContactStore):
    """
    ContactStore backed by a SQLite key-value table.

    Attributes:
        db_path: Path to the SQLite database file
        table_name: Name of the key-value table

    Example:
        >>> store = SQLiteContactStore("data/contacts.db")
        >>> store.save(contacts)
        >>> len(store.load())
        3
    """

    backend_name = "sqlite"
    table_name = "kv_store"

    def __init__(
        self,
        db_path: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
        quota_bytes: Optional[int] = None
    ) -> None:
        """
        Initialize the SQLite store.

        Args:
            db_path: Path to database file. If None, uses configuration.
            key: Namespaced key for the collection.
            quota_bytes: Largest payload accepted.
        """
        super().__init__(key=key, quota_bytes=quota_bytes)

        if db_path:
            self.db_path = Path(db_path)
        else:
            data_dir = Path(get_config("paths.data_dir", "data"))
            self.db_path = data_dir / get_config("storage.sqlite_file", "contacts.db")

        ensure_directory(self.db_path.parent)
        self._create_tables()

        logger.debug(f"SQLiteContactStore initialized (db: {self.db_path})")

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _create_tables(self) -> None:
        """
        Create the key-value table if it doesn't exist.

        Raises:
            PersistenceError: If the database cannot be created.
        """
        create_sql = f"""
        CREATE TABLE IF NOT EXISTS {self.table_name} (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT
        )
        """

        try:
            conn = self._connect()
            try:
                conn.execute(create_sql)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError("create tables", str(e)) from e

        logger.debug("Database tables created/verified")

    def _read(self) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT value FROM {self.table_name} WHERE key = ?",
                (self.key,)
            ).fetchone()
        finally:
            conn.close()

        return row[0] if row else None

    def _write(self, payload: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    f"INSERT OR REPLACE INTO {self.table_name} (key, value, updated_at) "
                    f"VALUES (?, ?, ?)",
                    (self.key, payload, datetime.now().isoformat())
                )
        finally:
            conn.close()

    def _remove(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    f"DELETE FROM {self.table_name} WHERE key = ?",
                    (self.key,)
                )
        finally:
            conn.close()
