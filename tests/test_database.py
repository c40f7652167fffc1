# tests/test_database.py
import logging

from storefront.database import Database, sqlite_path
from storefront.utils.logging_utils import LOGGER_NAME, setup_logging


def test_sqlite_path():
    assert sqlite_path("sqlite:///./shop.db") == "./shop.db"
    assert sqlite_path("sqlite:///:memory:") == ":memory:"
    assert sqlite_path("/tmp/plain.db") == "/tmp/plain.db"


def test_connect_creates_tables(db):
    tables = {r["name"] for r in db.query("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"users", "categories", "products", "orders", "order_items"} <= tables


def test_context_manager_opens_and_closes(tmp_path):
    path = tmp_path / "store.db"
    with Database(f"sqlite:///{path}") as database:
        assert database.connected
        database.execute(
            "INSERT INTO categories (name, is_active, created_at, updated_at) VALUES (?, ?, ?, ?)",
            ("Books", 1, "2024-01-01T00:00:00+00:00", "2024-01-01T00:00:00+00:00"),
        )
    assert not database.connected

    # Data survives reopening the file
    with Database(f"sqlite:///{path}") as database:
        assert database.count("categories") == 1


def test_query_one_returns_none_when_empty(db):
    assert db.query("SELECT * FROM users WHERE id = ?", (1,), one=True) is None


def test_execute_rowcount(db):
    assert db.execute_rowcount("DELETE FROM users WHERE id = ?", (1,)) == 0


def test_setup_logging_is_idempotent():
    logger = setup_logging("debug")
    handlers = list(logger.handlers)

    again = setup_logging("debug")
    assert again is logger
    assert again.handlers == handlers
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
