# tests/test_categories.py
import pytest

from storefront.errors import NotFoundError
from storefront.routes.categories import (
    create_category, delete_category, get_categories, get_category_by_id, update_category,
)
from storefront.routes.products import get_product_by_id
from storefront.schemas import (
    CreateCategoryInput, DeleteInput, GetByIdInput, UpdateCategoryInput,
)


def test_create_category_defaults(db):
    category = create_category(db, CreateCategoryInput(name="Books"))

    assert category.id > 0
    assert category.name == "Books"
    assert category.description is None
    assert category.is_active is True
    assert category.created_at == category.updated_at


def test_get_categories(db, category):
    other = create_category(db, CreateCategoryInput(name="Music", is_active=False))

    result = get_categories(db)
    assert [c.id for c in result] == [category.id, other.id]
    assert result[1].is_active is False


def test_get_category_by_id_missing(db):
    assert get_category_by_id(db, GetByIdInput(id=12345)) is None


def test_update_category_clears_description(db, category):
    """An explicit null clears a nullable field; omitted fields are kept"""
    updated = update_category(db, UpdateCategoryInput(id=category.id, description=None))

    assert updated.description is None
    assert updated.name == category.name
    assert updated.updated_at > category.updated_at


def test_update_category_keeps_description_when_omitted(db, category):
    updated = update_category(db, UpdateCategoryInput(id=category.id, name="Renamed"))

    assert updated.name == "Renamed"
    assert updated.description == "A category for testing"


def test_update_missing_category_raises(db):
    with pytest.raises(NotFoundError):
        update_category(db, UpdateCategoryInput(id=404, name="Nope"))


def test_delete_category_leaves_products(db, category, product):
    assert delete_category(db, DeleteInput(id=category.id)) == {"success": True}

    orphan = get_product_by_id(db, GetByIdInput(id=product.id))
    assert orphan is not None
    assert orphan.category_id == category.id


def test_delete_category_twice(db, category):
    assert delete_category(db, DeleteInput(id=category.id)) == {"success": True}
    assert delete_category(db, DeleteInput(id=category.id)) == {"success": False}
