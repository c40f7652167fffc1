"""
Storage client — wraps SQLite via raw SQL.

A ``Database`` is constructed once per process and handed to every handler;
there is no module-level connection.
"""

import logging
import sqlite3
import threading

from storefront.config import DATABASE_URL

logger = logging.getLogger(__name__)


SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'user',
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT,
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    CREATE TABLE IF NOT EXISTS products (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT,
        price TEXT NOT NULL,
        stock_quantity INTEGER NOT NULL DEFAULT 0,
        category_id INTEGER REFERENCES categories(id),
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    CREATE TABLE IF NOT EXISTS orders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id),
        status TEXT NOT NULL DEFAULT 'pending',
        total_amount TEXT NOT NULL,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    CREATE TABLE IF NOT EXISTS order_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        order_id INTEGER NOT NULL REFERENCES orders(id),
        product_id INTEGER NOT NULL REFERENCES products(id),
        quantity INTEGER NOT NULL,
        unit_price TEXT NOT NULL,
        subtotal TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
"""


def sqlite_path(url: str) -> str:
    """Turn ``sqlite:///./shop.db`` into ``./shop.db``."""
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///"):]
    if url.startswith("sqlite://"):
        return url[len("sqlite://"):] or ":memory:"
    return url


class Database:
    """Shared SQLite connection guarded by a lock."""

    def __init__(self, url: str = DATABASE_URL):
        self.url = url
        self.path = sqlite_path(url)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> sqlite3.Connection:
        """Open the connection (once) and create tables if they don't exist yet."""
        with self._lock:
            if self._conn is None:
                conn = sqlite3.connect(self.path, check_same_thread=False)
                conn.row_factory = sqlite3.Row
                conn.executescript(SCHEMA)
                conn.commit()
                self._conn = conn
                logger.info("Opened database at %s", self.path)
            return self._conn

    def close(self):
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("Closed database at %s", self.path)

    def query(self, sql, params=(), one=False):
        """Execute a SELECT and return rows as dicts."""
        with self._lock:
            conn = self.connect()
            cur = conn.execute(sql, params)
            rows = [dict(r) for r in cur.fetchall()]
        if one:
            return rows[0] if rows else None
        return rows

    def execute(self, sql, params=()):
        """Execute an INSERT / UPDATE / DELETE and return lastrowid."""
        return self._write(sql, params).lastrowid

    def execute_rowcount(self, sql, params=()):
        """Execute an UPDATE / DELETE and return how many rows it touched."""
        return self._write(sql, params).rowcount

    def count(self, table: str) -> int:
        row = self.query(f"SELECT COUNT(*) AS n FROM {table}", one=True)
        return row["n"]

    def _write(self, sql, params):
        with self._lock:
            conn = self.connect()
            try:
                cur = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
            return cur
