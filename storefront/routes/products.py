"""
Product routes — admin CRUD over the catalogue.

``price`` is stored as fixed-precision text and comes back as a float.
"""

from storefront.database import Database
from storefront.models import Product
from storefront.routes.common import (
    apply_update, delete_row, log_failures, require_reference, require_row,
)
from storefront.schemas import CreateProductInput, DeleteInput, GetByIdInput, UpdateProductInput
from storefront.utils.helpers import (
    next_timestamp, parse_timestamp, to_numeric_text, to_timestamp_text,
)


@log_failures("Product creation")
def create_product(db: Database, data: CreateProductInput) -> Product:
    if data.category_id is not None:
        require_reference(db, "categories", "Category", data.category_id)

    now = to_timestamp_text(next_timestamp())
    pid = db.execute(
        "INSERT INTO products (name, description, price, stock_quantity, category_id, "
        "is_active, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        (data.name, data.description, to_numeric_text(data.price), data.stock_quantity,
         data.category_id, int(data.is_active), now, now),
    )
    return Product.from_row(db.query("SELECT * FROM products WHERE id = ?", (pid,), one=True))


@log_failures("Fetching products")
def get_products(db: Database) -> list[Product]:
    return [Product.from_row(r) for r in db.query("SELECT * FROM products ORDER BY id")]


@log_failures("Fetching product by id")
def get_product_by_id(db: Database, data: GetByIdInput) -> Product | None:
    row = db.query("SELECT * FROM products WHERE id = ?", (data.id,), one=True)
    return Product.from_row(row) if row else None


@log_failures("Product update")
def update_product(db: Database, data: UpdateProductInput) -> Product:
    existing = require_row(db, "products", "Product", data.id)

    values = data.changes()
    if values.get("category_id") is not None:
        require_reference(db, "categories", "Category", values["category_id"])
    if "price" in values:
        values["price"] = to_numeric_text(values["price"])
    if "is_active" in values:
        values["is_active"] = int(values["is_active"])
    values["updated_at"] = to_timestamp_text(
        next_timestamp(parse_timestamp(existing["updated_at"]))
    )

    return Product.from_row(apply_update(db, "products", data.id, values))


@log_failures("Product deletion")
def delete_product(db: Database, data: DeleteInput) -> dict:
    return delete_row(db, "products", data.id)
