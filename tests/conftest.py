import pytest
from fastapi.testclient import TestClient

from storefront.database import Database
from storefront.main import create_app
from storefront.routes import categories, orders, products, users
from storefront.schemas import (
    CreateCategoryInput, CreateOrderInput, CreateProductInput, CreateUserInput,
)


@pytest.fixture
def db():
    """A fresh in-memory database per test"""
    database = Database("sqlite:///:memory:")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def user(db):
    return users.create_user(db, CreateUserInput(name="Test User", email="test@example.com"))


@pytest.fixture
def category(db):
    return categories.create_category(
        db, CreateCategoryInput(name="Test Category", description="A category for testing")
    )


@pytest.fixture
def product(db, category):
    return products.create_product(db, CreateProductInput(
        name="Test Product",
        description="A product for testing",
        price=29.99,
        stock_quantity=100,
        category_id=category.id,
    ))


@pytest.fixture
def order(db, user):
    return orders.create_order(db, CreateOrderInput(
        user_id=user.id, total_amount=59.98, notes="Test order",
    ))


@pytest.fixture
def app(db):
    return create_app(db)


@pytest.fixture
def http(app):
    with TestClient(app) as client:
        yield client
