"""Builders for test products."""

from __future__ import annotations

from product_app.domain.models import ProductCreate


def make_product(**overrides) -> ProductCreate:
    values = {
        "name": "AirFryer",
        "price": 3000.0,
        "description": "AirFryer açıklaması",
        "discount": 22.0,
        "store": "ABC TECH",
    }
    values.update(overrides)
    return ProductCreate(**values)


SEED_PRODUCTS = [
    make_product(),
    make_product(name="Ütü", price=1500.0, description="Ütü açıklaması", discount=10.0),
    make_product(
        name="Çamaşır Makinesi",
        price=10000.0,
        description="Çamaşır Makinesi açıklaması",
        discount=15.0,
    ),
    make_product(
        name="Bulaşık Makinesi",
        price=12000.0,
        description="Bulaşık Makinesi açıklaması",
        discount=5.0,
    ),
    make_product(
        name="Lambader",
        price=2000.0,
        description="Lambader açıklaması",
        discount=0.0,
        store="Dekorasyon Sarayı",
    ),
]
