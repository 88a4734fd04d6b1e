"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal
from typing import Generator

# Set test environment variables (przed importem storefront.*)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from fastapi.testclient import TestClient

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import UserModel, ProductModel
from storefront.domain.cart import Cart, ProductRef
from storefront.domain.schemas import CatalogProduct
from storefront.main import create_app
from storefront.repos.cart_repo import CartRepo


CATALOG = {
    1: {
        "id": 1,
        "title": "Backpack",
        "price": 109.95,
        "category": "men's clothing",
        "description": "Fits 15 inch laptops",
        "image": "https://example.com/img/1.jpg",
        "rating": {"rate": 3.9, "count": 120},
    },
    3: {
        "id": 3,
        "title": "Silver Ring",
        "price": 9.99,
        "category": "jewelery",
        "description": "Classic ring",
        "image": "https://example.com/img/3.jpg",
        "rating": {"rate": 3.0, "count": 400},
    },
    4: {
        "id": 4,
        "title": "USB Flash Drive",
        "price": 5.0,
        "category": "electronics",
        "description": "64GB",
        "image": "https://example.com/img/4.jpg",
        "rating": {"rate": 4.8, "count": 319},
    },
}


class FakeProductClient:
    """Katalog w pamieci zamiast HTTP."""

    def __init__(self, products=None):
        self.products = dict(CATALOG if products is None else products)
        self.calls = []

    def fetch_categories(self):
        return sorted({p["category"] for p in self.products.values()})

    def fetch_products(self, category=None):
        return [
            CatalogProduct.model_validate(p)
            for p in self.products.values()
            if category is None or p["category"] == category
        ]

    def fetch_product(self, product_id):
        self.calls.append(product_id)
        if product_id not in self.products:
            raise ValueError(f"Produkt {product_id} nie istnieje w katalogu")
        return CatalogProduct.model_validate(self.products[product_id])


class FakeLockService:
    """Lock checkoutu bez redisa, ta sama semantyka NX + wlasciciel."""

    def __init__(self):
        self.locks = {}
        self.acquired = []
        self.released = []

    def acquire_checkout_lock(self, session_id, owner, ttl):
        if session_id in self.locks:
            return False
        self.locks[session_id] = owner
        self.acquired.append(session_id)
        return True

    def release_checkout_lock(self, session_id, owner):
        if self.locks.get(session_id) != owner:
            return False
        del self.locks[session_id]
        self.released.append(session_id)
        return True


@pytest.fixture(autouse=True)
def clean_database() -> Generator[None, None, None]:
    """Swieze tabele dla kazdego testu."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def product_a():
    return ProductRef(id="A", title="Product A", price=Decimal("9.99"))


@pytest.fixture
def product_b():
    return ProductRef(id="B", title="Product B", price=Decimal("5.00"))


@pytest.fixture
def cart_repo():
    return CartRepo(ttl_seconds=1800, remove_on_zero=True)


@pytest.fixture
def product_client():
    return FakeProductClient()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def sample_user(db_session):
    user = UserModel(id=10, name="Test User", email="test@example.com", address="1 Main St")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    user = UserModel(id=1, name="Admin", email="admin@example.com", is_admin=True)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def store_product(db_session):
    product = ProductModel(
        name="Sourdough Loaf",
        category="bakery",
        price=Decimal("6.50"),
        description="Baked daily",
        image_url="https://example.com/img/sourdough.jpg",
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def client(cart_repo, product_client, lock_service):
    app = create_app(cart_repo=cart_repo, product_client=product_client, lock_service=lock_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalog_records():
    return {k: dict(v) for k, v in CATALOG.items()}
