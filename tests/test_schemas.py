# tests/test_schemas.py
import pytest
from pydantic import ValidationError

from storefront.schemas import (
    CreateOrderInput, CreateOrderItemInput, CreateProductInput, CreateUserInput,
    GetByIdInput, UpdateCategoryInput, UpdateOrderInput, UpdateProductInput, UpdateUserInput,
)


def test_user_requires_name_and_valid_email():
    with pytest.raises(ValidationError):
        CreateUserInput(name="", email="ada@example.com")
    with pytest.raises(ValidationError):
        CreateUserInput(name="Ada", email="not-an-email")


def test_user_role_must_be_known():
    with pytest.raises(ValidationError):
        CreateUserInput.model_validate({"name": "Ada", "email": "ada@example.com", "role": "owner"})


@pytest.mark.parametrize("price", [0, -1, -0.01])
def test_product_price_must_be_positive(price):
    with pytest.raises(ValidationError):
        CreateProductInput(name="Widget", price=price)


def test_product_stock_must_be_non_negative_integer():
    with pytest.raises(ValidationError):
        CreateProductInput(name="Widget", price=1, stock_quantity=-1)
    with pytest.raises(ValidationError):
        CreateProductInput.model_validate({"name": "Widget", "price": 1, "stock_quantity": 1.5})


def test_numbers_are_not_coerced_from_strings():
    with pytest.raises(ValidationError):
        CreateProductInput.model_validate({"name": "Widget", "price": "19.99"})
    with pytest.raises(ValidationError):
        GetByIdInput.model_validate({"id": "1"})


def test_order_total_may_be_zero_but_not_negative():
    assert CreateOrderInput(user_id=1, total_amount=0).total_amount == 0
    with pytest.raises(ValidationError):
        CreateOrderInput(user_id=1, total_amount=-5)


def test_order_status_enum():
    assert CreateOrderInput(user_id=1, total_amount=1).status == "pending"
    with pytest.raises(ValidationError):
        CreateOrderInput.model_validate({"user_id": 1, "total_amount": 1, "status": "lost"})


def test_order_item_constraints():
    base = {"order_id": 1, "product_id": 1, "quantity": 1, "unit_price": 1, "subtotal": 0}
    assert CreateOrderItemInput.model_validate(base).subtotal == 0

    for field, value in [("quantity", 0), ("quantity", 1.5), ("unit_price", 0), ("subtotal", -1)]:
        with pytest.raises(ValidationError):
            CreateOrderItemInput.model_validate({**base, field: value})


def test_update_changes_only_include_supplied_fields():
    data = UpdateProductInput.model_validate({"id": 3, "price": 5.5, "category_id": None})
    assert data.changes() == {"price": 5.5, "category_id": None}


def test_update_changes_empty_when_only_id():
    assert UpdateUserInput(id=1).changes() == {}


def test_update_rejects_null_for_required_columns():
    with pytest.raises(ValidationError):
        UpdateUserInput.model_validate({"id": 1, "name": None})
    with pytest.raises(ValidationError):
        UpdateOrderInput.model_validate({"id": 1, "status": None})


def test_update_applies_create_constraints():
    with pytest.raises(ValidationError):
        UpdateCategoryInput(id=1, name="")
    with pytest.raises(ValidationError):
        UpdateProductInput(id=1, price=0)


def test_unknown_keys_are_ignored():
    data = CreateUserInput.model_validate(
        {"name": "Ada", "email": "ada@example.com", "favourite_colour": "green"}
    )
    assert not hasattr(data, "favourite_colour")


@pytest.mark.parametrize("model, field", [
    (GetByIdInput, "id"),
    (UpdateProductInput, "id"),
    (CreateOrderInput, "user_id"),
])
def test_ids_must_fit_sqlite_integer(model, field):
    base = {"id": 1, "user_id": 1, "total_amount": 1}
    with pytest.raises(ValidationError):
        model.model_validate({**base, field: 2**70})
    assert getattr(model.model_validate({**base, field: 2**63 - 1}), field) == 2**63 - 1


def test_counts_must_fit_sqlite_integer():
    with pytest.raises(ValidationError):
        CreateProductInput(name="Widget", price=1, stock_quantity=2**63)
    with pytest.raises(ValidationError):
        CreateOrderItemInput.model_validate(
            {"order_id": 1, "product_id": 1, "quantity": 2**64, "unit_price": 1, "subtotal": 1}
        )


@pytest.mark.parametrize("price", [0.001, 0.0049, 0.009])
def test_price_below_a_cent_is_rejected(price):
    """Anything that would round to 0.00 is not a positive price"""
    with pytest.raises(ValidationError):
        CreateProductInput(name="Tiny", price=price)
    with pytest.raises(ValidationError):
        UpdateProductInput(id=1, price=price)
    with pytest.raises(ValidationError):
        CreateOrderItemInput(order_id=1, product_id=1, quantity=1, unit_price=price, subtotal=0)


def test_one_cent_is_the_smallest_price():
    assert CreateProductInput(name="Tiny", price=0.01).price == 0.01


def test_amounts_are_bounded():
    with pytest.raises(ValidationError):
        CreateOrderInput(user_id=1, total_amount=1e300)
    with pytest.raises(ValidationError):
        CreateProductInput(name="Widget", price=1e13)
