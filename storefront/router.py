"""
Procedure registry and dispatch.

Every operation has a dotted name (``users.create``, ``orderItems.getByOrderId``)
that maps to a handler, the schema its input must satisfy, and whether it is
a read-only query or a mutation.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Type

from pydantic import BaseModel, ValidationError

from storefront.errors import InputValidationError, MethodNotAllowedError, UnknownProcedureError
from storefront.routes import categories, order_items, orders, products, users
from storefront.schemas import (
    CreateCategoryInput, CreateOrderInput, CreateOrderItemInput, CreateProductInput,
    CreateUserInput, DeleteInput, GetByIdInput, UpdateCategoryInput, UpdateOrderInput,
    UpdateOrderItemInput, UpdateProductInput, UpdateUserInput,
)
from storefront.utils.helpers import utcnow

logger = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"


@dataclass(frozen=True)
class Procedure:
    handler: Callable
    input_schema: Optional[Type[BaseModel]]
    kind: str
    needs_db: bool = True


def healthcheck() -> dict:
    return {"status": "ok", "timestamp": utcnow().isoformat()}


PROCEDURES: dict[str, Procedure] = {
    "healthcheck": Procedure(healthcheck, None, QUERY, needs_db=False),

    "users.create": Procedure(users.create_user, CreateUserInput, MUTATION),
    "users.getAll": Procedure(users.get_users, None, QUERY),
    "users.getById": Procedure(users.get_user_by_id, GetByIdInput, QUERY),
    "users.update": Procedure(users.update_user, UpdateUserInput, MUTATION),
    "users.delete": Procedure(users.delete_user, DeleteInput, MUTATION),

    "categories.create": Procedure(categories.create_category, CreateCategoryInput, MUTATION),
    "categories.getAll": Procedure(categories.get_categories, None, QUERY),
    "categories.getById": Procedure(categories.get_category_by_id, GetByIdInput, QUERY),
    "categories.update": Procedure(categories.update_category, UpdateCategoryInput, MUTATION),
    "categories.delete": Procedure(categories.delete_category, DeleteInput, MUTATION),

    "products.create": Procedure(products.create_product, CreateProductInput, MUTATION),
    "products.getAll": Procedure(products.get_products, None, QUERY),
    "products.getById": Procedure(products.get_product_by_id, GetByIdInput, QUERY),
    "products.update": Procedure(products.update_product, UpdateProductInput, MUTATION),
    "products.delete": Procedure(products.delete_product, DeleteInput, MUTATION),

    "orders.create": Procedure(orders.create_order, CreateOrderInput, MUTATION),
    "orders.getAll": Procedure(orders.get_orders, None, QUERY),
    "orders.getById": Procedure(orders.get_order_by_id, GetByIdInput, QUERY),
    "orders.update": Procedure(orders.update_order, UpdateOrderInput, MUTATION),
    "orders.delete": Procedure(orders.delete_order, DeleteInput, MUTATION),

    "orderItems.create": Procedure(order_items.create_order_item, CreateOrderItemInput, MUTATION),
    "orderItems.getAll": Procedure(order_items.get_order_items, None, QUERY),
    "orderItems.getById": Procedure(order_items.get_order_item_by_id, GetByIdInput, QUERY),
    "orderItems.getByOrderId": Procedure(
        order_items.get_order_items_by_order_id, GetByIdInput, QUERY,
    ),
    "orderItems.update": Procedure(order_items.update_order_item, UpdateOrderItemInput, MUTATION),
    "orderItems.delete": Procedure(order_items.delete_order_item, DeleteInput, MUTATION),
}


def validate_input(procedure: Procedure, raw_input):
    """Run the raw input through the procedure's schema."""
    if procedure.input_schema is None:
        return None
    try:
        return procedure.input_schema.model_validate(raw_input if raw_input is not None else {})
    except ValidationError as e:
        raise InputValidationError(e) from e


def dispatch(db, name: str, raw_input=None, method: str = "POST"):
    """
    Resolve ``name``, validate ``raw_input`` and call the handler.

    Queries may arrive over GET or POST; mutations only over POST.
    Returns the handler's result unchanged.
    """
    procedure = PROCEDURES.get(name)
    if procedure is None:
        raise UnknownProcedureError(name)
    if procedure.kind == MUTATION and method.upper() != "POST":
        raise MethodNotAllowedError(name, method.upper())

    data = validate_input(procedure, raw_input)
    logger.debug("Calling %s", name)

    args = []
    if procedure.needs_db:
        args.append(db)
    if data is not None:
        args.append(data)
    return procedure.handler(*args)
