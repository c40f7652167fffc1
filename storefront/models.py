"""
Data models — plain dataclasses built from storage rows.

``from_row`` is the single read path: it turns numeric-as-text columns into
floats, 0/1 into booleans and ISO text into datetimes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from storefront.utils.helpers import from_numeric_text, parse_timestamp


@dataclass
class User:
    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"],
            is_active=bool(row["is_active"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class Category:
    id: int
    name: str
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "Category":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            is_active=bool(row["is_active"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class Product:
    id: int
    name: str
    description: Optional[str]
    price: float
    stock_quantity: int
    category_id: Optional[int]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=from_numeric_text(row["price"]),
            stock_quantity=row["stock_quantity"],
            category_id=row["category_id"],
            is_active=bool(row["is_active"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class Order:
    id: int
    user_id: int
    status: str
    total_amount: float
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "Order":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            status=row["status"],
            total_amount=from_numeric_text(row["total_amount"]),
            notes=row["notes"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class OrderItem:
    id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "OrderItem":
        return cls(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=row["quantity"],
            unit_price=from_numeric_text(row["unit_price"]),
            subtotal=from_numeric_text(row["subtotal"]),
            created_at=parse_timestamp(row["created_at"]),
        )
