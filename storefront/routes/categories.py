"""
Category handlers.
"""

from storefront.database import Database
from storefront.models import Category
from storefront.routes.common import apply_update, delete_row, log_failures, require_row
from storefront.schemas import CreateCategoryInput, DeleteInput, GetByIdInput, UpdateCategoryInput
from storefront.utils.helpers import next_timestamp, parse_timestamp, to_timestamp_text


@log_failures("Category creation")
def create_category(db: Database, data: CreateCategoryInput) -> Category:
    now = to_timestamp_text(next_timestamp())
    cid = db.execute(
        "INSERT INTO categories (name, description, is_active, created_at, updated_at) "
        "VALUES (?, ?, ?, ?, ?)",
        (data.name, data.description, int(data.is_active), now, now),
    )
    return Category.from_row(db.query("SELECT * FROM categories WHERE id = ?", (cid,), one=True))


@log_failures("Fetching categories")
def get_categories(db: Database) -> list[Category]:
    return [Category.from_row(r) for r in db.query("SELECT * FROM categories ORDER BY id")]


@log_failures("Fetching category by id")
def get_category_by_id(db: Database, data: GetByIdInput) -> Category | None:
    row = db.query("SELECT * FROM categories WHERE id = ?", (data.id,), one=True)
    return Category.from_row(row) if row else None


@log_failures("Category update")
def update_category(db: Database, data: UpdateCategoryInput) -> Category:
    existing = require_row(db, "categories", "Category", data.id)

    values = data.changes()
    if "is_active" in values:
        values["is_active"] = int(values["is_active"])
    values["updated_at"] = to_timestamp_text(
        next_timestamp(parse_timestamp(existing["updated_at"]))
    )

    return Category.from_row(apply_update(db, "categories", data.id, values))


@log_failures("Category deletion")
def delete_category(db: Database, data: DeleteInput) -> dict:
    """Products that point at the category keep their category_id."""
    return delete_row(db, "categories", data.id)
