"""
Input schemas for every procedure.

Each model validates untyped client input before a handler touches the
database. Create inputs require the mandatory fields and leave defaulted ones
optional; update inputs require only ``id``.
"""

from typing import Annotated, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from storefront.config import CURRENCY_PLACES

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MAX = 2**63 - 1

# Smallest amount that survives rounding to the stored precision
MIN_AMOUNT = 10 ** -CURRENCY_PLACES
MAX_AMOUNT = 10 ** 12

RowId = Annotated[int, Field(ge=-SQLITE_INT_MAX - 1, le=SQLITE_INT_MAX)]
Count = Annotated[int, Field(ge=0, le=SQLITE_INT_MAX)]

UserRole = Literal["admin", "user", "guest"]
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class InputModel(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")


class UpdateInput(InputModel):
    """Partial update: only the fields the caller sent are applied."""

    id: RowId

    # Fields that may be omitted but never set to null
    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_null(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self

    def changes(self) -> dict:
        """The supplied fields other than ``id``, keyed by column name."""
        supplied = self.model_fields_set - {"id"}
        if not supplied:
            return {}
        return self.model_dump(include=supplied)


class GetByIdInput(InputModel):
    id: RowId


class DeleteInput(InputModel):
    id: RowId


# --------------- Users ----------------------------------------------------

class CreateUserInput(InputModel):
    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr = Field(..., description="Email address")
    role: UserRole = Field("user", description="Account role")
    is_active: bool = True


class UpdateUserInput(UpdateInput):
    non_nullable = ("name", "email", "role", "is_active")

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


# --------------- Categories -----------------------------------------------

class CreateCategoryInput(InputModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_active: bool = True


class UpdateCategoryInput(UpdateInput):
    non_nullable = ("name", "is_active")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


# --------------- Products -------------------------------------------------

class CreateProductInput(InputModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: float = Field(..., ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False,
                         description="Unit price")
    stock_quantity: Count = Field(0, description="Units in stock")
    category_id: Optional[RowId] = None
    is_active: bool = True


class UpdateProductInput(UpdateInput):
    non_nullable = ("name", "price", "stock_quantity", "is_active")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    stock_quantity: Optional[Count] = None
    category_id: Optional[RowId] = None
    is_active: Optional[bool] = None


# --------------- Orders ---------------------------------------------------

class CreateOrderInput(InputModel):
    user_id: RowId
    status: OrderStatus = "pending"
    total_amount: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    notes: Optional[str] = None


class UpdateOrderInput(UpdateInput):
    non_nullable = ("user_id", "status", "total_amount")

    user_id: Optional[RowId] = None
    status: Optional[OrderStatus] = None
    total_amount: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    notes: Optional[str] = None


# --------------- Order items ----------------------------------------------

class CreateOrderItemInput(InputModel):
    order_id: RowId
    product_id: RowId
    quantity: Count = Field(..., gt=0)
    unit_price: float = Field(..., ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    subtotal: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)


class UpdateOrderItemInput(UpdateInput):
    non_nullable = ("order_id", "product_id", "quantity", "unit_price", "subtotal")

    order_id: Optional[RowId] = None
    product_id: Optional[RowId] = None
    quantity: Optional[Count] = Field(None, gt=0)
    unit_price: Optional[float] = Field(None, ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    subtotal: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
