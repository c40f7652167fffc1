"""
Order item routes: line items tied to an order and a product.
"""

from storefront.database import Database
from storefront.models import OrderItem
from storefront.routes.common import (
    apply_update, delete_row, log_failures, require_reference, require_row,
)
from storefront.schemas import (
    CreateOrderItemInput, DeleteInput, GetByIdInput, UpdateOrderItemInput,
)
from storefront.utils.helpers import next_timestamp, to_numeric_text, to_timestamp_text


@log_failures("Order item creation")
def create_order_item(db: Database, data: CreateOrderItemInput) -> OrderItem:
    require_reference(db, "orders", "Order", data.order_id)
    require_reference(db, "products", "Product", data.product_id)

    item_id = db.execute(
        "INSERT INTO order_items (order_id, product_id, quantity, unit_price, subtotal, "
        "created_at) VALUES (?, ?, ?, ?, ?, ?)",
        (data.order_id, data.product_id, data.quantity, to_numeric_text(data.unit_price),
         to_numeric_text(data.subtotal), to_timestamp_text(next_timestamp())),
    )
    return OrderItem.from_row(
        db.query("SELECT * FROM order_items WHERE id = ?", (item_id,), one=True)
    )


@log_failures("Fetching order items")
def get_order_items(db: Database) -> list[OrderItem]:
    return [OrderItem.from_row(r) for r in db.query("SELECT * FROM order_items ORDER BY id")]


@log_failures("Fetching order item by id")
def get_order_item_by_id(db: Database, data: GetByIdInput) -> OrderItem | None:
    row = db.query("SELECT * FROM order_items WHERE id = ?", (data.id,), one=True)
    return OrderItem.from_row(row) if row else None


@log_failures("Fetching order items by order id")
def get_order_items_by_order_id(db: Database, data: GetByIdInput) -> list[OrderItem]:
    """Line items of one order; an unknown order simply has none."""
    rows = db.query(
        "SELECT * FROM order_items WHERE order_id = ? ORDER BY id", (data.id,)
    )
    return [OrderItem.from_row(r) for r in rows]


@log_failures("Order item update")
def update_order_item(db: Database, data: UpdateOrderItemInput) -> OrderItem:
    require_row(db, "order_items", "Order item", data.id)

    values = data.changes()
    if "order_id" in values:
        require_reference(db, "orders", "Order", values["order_id"])
    if "product_id" in values:
        require_reference(db, "products", "Product", values["product_id"])
    for column in ("unit_price", "subtotal"):
        if column in values:
            values[column] = to_numeric_text(values[column])

    return OrderItem.from_row(apply_update(db, "order_items", data.id, values))


@log_failures("Order item deletion")
def delete_order_item(db: Database, data: DeleteInput) -> dict:
    return delete_row(db, "order_items", data.id)
