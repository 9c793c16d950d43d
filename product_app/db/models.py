"""
SQLAlchemy ORM models for the product catalog schema.

Important:
- `product_images` rows belong to exactly one product and are removed with it
  (ON DELETE CASCADE plus the ORM delete-orphan cascade).
- Deleting a category clears `products.category_id` (ON DELETE SET NULL).
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from product_app.db.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
_BigId = BigInteger().with_variant(Integer(), "sqlite")

# Largest value a BIGINT id column can hold.
MAX_ID = 2**63 - 1


def is_storable_id(record_id: int) -> bool:
    return 0 < record_id <= MAX_ID


class Category(Base):
    """categories table."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    products: Mapped[List["Product"]] = relationship("Product", back_populates="category", passive_deletes=True)


class Product(Base):
    """products table."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    discount: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    store: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    category_id: Mapped[Optional[int]] = mapped_column(
        _BigId, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )

    category: Mapped[Optional[Category]] = relationship("Category", back_populates="products")
    images: Mapped[List["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.display_order",
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="price_positive"),
        CheckConstraint("discount >= 0 AND discount <= 70", name="discount_range"),
    )


class ProductImage(Base):
    """product_images table."""

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        _BigId, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column("image_url", Text, nullable=False)
    is_main_image: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)

    product: Mapped[Product] = relationship("Product", back_populates="images")

    __table_args__ = (CheckConstraint("display_order >= 0", name="display_order_non_negative"),)
