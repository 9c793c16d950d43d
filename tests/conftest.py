"""Shared fixtures: an in-memory SQLite database per test, repositories, services and an API client."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from product_app.api.main import create_app
from product_app.config import Settings
from product_app.db.session import build_engine, build_session_factory, create_schema
from product_app.domain.models import CategoryCreate
from product_app.persistence.category_repository import CategoryRepository
from product_app.persistence.product_repository import ProductRepository
from product_app.services.category_service import CategoryService
from product_app.services.product_service import ProductService
from tests.utils import SEED_PRODUCTS


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create a fresh database for each test."""
    engine = build_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture
def product_repository(session_factory) -> ProductRepository:
    return ProductRepository(session_factory)


@pytest.fixture
def category_repository(session_factory) -> CategoryRepository:
    return CategoryRepository(session_factory)


@pytest.fixture
def product_service(product_repository, category_repository) -> ProductService:
    return ProductService(product_repository, category_repository, require_description=True)


@pytest.fixture
def category_service(category_repository) -> CategoryService:
    return CategoryService(category_repository)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", require_description=True, create_schema=False)


@pytest.fixture(name="client")
def client_fixture(engine: Engine, settings: Settings) -> TestClient:
    """Create a test client bound to the per-test database."""
    return TestClient(create_app(engine=engine, settings=settings))


@pytest.fixture
def seeded_ids(product_repository: ProductRepository) -> list[int]:
    """Four products of "ABC TECH" followed by one of "Dekorasyon Sarayı"."""
    return [product_repository.add_product(product) for product in SEED_PRODUCTS]


@pytest.fixture
def electronics_id(category_repository: CategoryRepository) -> int:
    return category_repository.add_category(
        CategoryCreate(name="Electronics", description="Electronic devices and gadgets")
    )
