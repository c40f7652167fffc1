"""
Shared pieces of the per-entity handlers: existence checks, partial
UPDATE statements and the hard-delete convention.
"""

import functools
import logging
import sqlite3

from storefront.errors import NotFoundError, ReferenceNotFoundError

logger = logging.getLogger(__name__)


def row_exists(db, table: str, row_id: int) -> bool:
    return db.query(f"SELECT id FROM {table} WHERE id = ?", (row_id,), one=True) is not None


def require_reference(db, table: str, entity: str, row_id: int):
    """Raise before any write if a foreign key points at nothing."""
    if not row_exists(db, table, row_id):
        raise ReferenceNotFoundError(entity, row_id)


def require_row(db, table: str, entity: str, row_id: int) -> dict:
    """Fetch the row an update targets, or raise NotFoundError."""
    row = db.query(f"SELECT * FROM {table} WHERE id = ?", (row_id,), one=True)
    if row is None:
        raise NotFoundError(f"{entity} with id {row_id} not found")
    return row


def apply_update(db, table: str, row_id: int, values: dict) -> dict:
    """Write only the given columns and return the stored row."""
    if values:
        columns = ", ".join(f"{name} = ?" for name in values)
        db.execute(
            f"UPDATE {table} SET {columns} WHERE id = ?",
            (*values.values(), row_id),
        )
    return db.query(f"SELECT * FROM {table} WHERE id = ?", (row_id,), one=True)


def delete_row(db, table: str, row_id: int) -> dict:
    """Hard delete, no cascade. ``success`` says whether a row went away."""
    removed = db.execute_rowcount(f"DELETE FROM {table} WHERE id = ?", (row_id,))
    return {"success": removed > 0}


def log_failures(action: str):
    """Log storage errors under ``action`` and re-raise them unchanged."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except sqlite3.Error as e:
                logger.error("%s failed: %s", action, e)
                raise
        return wrapper
    return decorator
