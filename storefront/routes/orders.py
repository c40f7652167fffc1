"""
Order routes — every order belongs to an existing user.
"""

from storefront.database import Database
from storefront.models import Order
from storefront.routes.common import (
    apply_update, delete_row, log_failures, require_reference, require_row,
)
from storefront.schemas import CreateOrderInput, DeleteInput, GetByIdInput, UpdateOrderInput
from storefront.utils.helpers import (
    next_timestamp, parse_timestamp, to_numeric_text, to_timestamp_text,
)


@log_failures("Order creation")
def create_order(db: Database, data: CreateOrderInput) -> Order:
    """Insert an order once its user is known to exist."""
    require_reference(db, "users", "User", data.user_id)

    now = to_timestamp_text(next_timestamp())
    order_id = db.execute(
        "INSERT INTO orders (user_id, status, total_amount, notes, created_at, updated_at) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (data.user_id, data.status, to_numeric_text(data.total_amount), data.notes, now, now),
    )
    return Order.from_row(db.query("SELECT * FROM orders WHERE id = ?", (order_id,), one=True))


@log_failures("Fetching orders")
def get_orders(db: Database) -> list[Order]:
    return [Order.from_row(r) for r in db.query("SELECT * FROM orders ORDER BY id")]


@log_failures("Fetching order by id")
def get_order_by_id(db: Database, data: GetByIdInput) -> Order | None:
    row = db.query("SELECT * FROM orders WHERE id = ?", (data.id,), one=True)
    return Order.from_row(row) if row else None


@log_failures("Order update")
def update_order(db: Database, data: UpdateOrderInput) -> Order:
    """
    Apply the supplied fields. Status may move between any two values;
    a new user_id must point at an existing user.
    """
    existing = require_row(db, "orders", "Order", data.id)

    values = data.changes()
    if "user_id" in values:
        require_reference(db, "users", "User", values["user_id"])
    if "total_amount" in values:
        values["total_amount"] = to_numeric_text(values["total_amount"])
    values["updated_at"] = to_timestamp_text(
        next_timestamp(parse_timestamp(existing["updated_at"]))
    )

    return Order.from_row(apply_update(db, "orders", data.id, values))


@log_failures("Order deletion")
def delete_order(db: Database, data: DeleteInput) -> dict:
    """Order items that reference the order are left in place."""
    return delete_row(db, "orders", data.id)
