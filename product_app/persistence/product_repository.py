"""
Product store: maps `Product` entities onto the `products` and `product_images`
tables.

Failure policy per operation:
- `get_all_products` / `get_all_products_by_store` log a store failure and
  return an empty list.
- Every other operation raises: `NotFoundError` when the id (or, for
  `delete_all_products`, any row at all) is missing, `PersistenceError` when
  the store call itself fails.

Writes touching both tables run inside one transaction, so a product is never
visible without its images or the other way round.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from product_app.db import models
from product_app.domain.models import Product, ProductCreate
from product_app.errors import NotFoundError, PersistenceError, ValidationError
from product_app.services.validation import PRICE_MUST_BE_POSITIVE


def _to_entity(row: models.Product) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=row.price,
        description=row.description,
        discount=row.discount,
        store=row.store,
        category_id=row.category_id,
        image_urls=[image.url for image in row.images],
    )


def _image_rows(image_urls: List[str]) -> List[models.ProductImage]:
    return [
        models.ProductImage(url=url, is_main_image=position == 0, display_order=position)
        for position, url in enumerate(image_urls)
    ]


class ProductRepository:
    """Data-access layer for products and their images."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _select_products(self):
        return select(models.Product).options(selectinload(models.Product.images)).order_by(models.Product.id)

    def get_all_products(self) -> List[Product]:
        try:
            with self._session_factory() as session:
                rows = session.scalars(self._select_products()).all()
                return [_to_entity(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error("Error while getting all products: {}", exc)
            return []

    def get_all_products_by_store(self, store_name: str) -> List[Product]:
        statement = self._select_products().where(models.Product.store == store_name)
        try:
            with self._session_factory() as session:
                return [_to_entity(row) for row in session.scalars(statement).all()]
        except SQLAlchemyError as exc:
            logger.error("Error while getting products of store {}: {}", store_name, exc)
            return []

    def get_products_by_category_id(self, category_id: int) -> List[Product]:
        if not models.is_storable_id(category_id):
            return []
        statement = self._select_products().where(models.Product.category_id == category_id)
        try:
            with self._session_factory() as session:
                return [_to_entity(row) for row in session.scalars(statement).all()]
        except SQLAlchemyError as exc:
            logger.error("Error while getting products of category {}: {}", category_id, exc)
            raise PersistenceError(f"Error while getting products with category id {category_id}") from exc

    def get_by_id(self, product_id: int) -> Product:
        if not models.is_storable_id(product_id):
            raise NotFoundError(f"Product not found with id {product_id}")
        try:
            with self._session_factory() as session:
                row: Optional[models.Product] = session.get(
                    models.Product, product_id, options=[selectinload(models.Product.images)]
                )
                if row is None:
                    raise NotFoundError(f"Product not found with id {product_id}")
                return _to_entity(row)
        except SQLAlchemyError as exc:
            logger.error("Error while getting product with id {}: {}", product_id, exc)
            raise PersistenceError(f"Error while getting product with id {product_id}") from exc

    def add_product(self, product: ProductCreate) -> int:
        """Insert the product and one image row per URL; return the generated id."""
        row = models.Product(
            name=product.name,
            price=product.price,
            description=product.description,
            discount=product.discount,
            store=product.store,
            category_id=product.category_id,
            images=_image_rows(product.image_urls),
        )
        try:
            with self._session_factory.begin() as session:
                session.add(row)
                session.flush()
                product_id = row.id
        except SQLAlchemyError as exc:
            logger.error("Error while adding product {}: {}", product.name, exc)
            raise PersistenceError(f"Error while adding product {product.name}") from exc

        logger.info("Product added with id {} and {} image(s)", product_id, len(product.image_urls))
        return product_id

    def delete_by_id(self, product_id: int) -> None:
        if not models.is_storable_id(product_id):
            raise NotFoundError(f"Product not found with id {product_id}")
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(models.ProductImage).where(models.ProductImage.product_id == product_id))
                result = session.execute(delete(models.Product).where(models.Product.id == product_id))
                if result.rowcount == 0:
                    raise NotFoundError(f"Product not found with id {product_id}")
        except SQLAlchemyError as exc:
            logger.error("Error while deleting product with id {}: {}", product_id, exc)
            raise PersistenceError(f"Error while deleting product with id {product_id}") from exc

        logger.info("Product deleted with id {}", product_id)

    def delete_all_products(self) -> int:
        """Delete every product and image; an already empty table is reported as NotFoundError."""
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(models.ProductImage))
                result = session.execute(delete(models.Product))
                deleted = result.rowcount
                if deleted == 0:
                    raise NotFoundError("there are no products to delete")
        except SQLAlchemyError as exc:
            logger.error("Error while deleting all products: {}", exc)
            raise PersistenceError("Error while deleting all products") from exc

        logger.info("Deleted {} product(s)", deleted)
        return deleted

    def update_price(self, product_id: int, new_price: float) -> None:
        """Set the price of `product_id`. A missing id is not an error.

        A non-positive price is rejected by the `price_positive` check and reported
        as a ValidationError.
        """
        if not models.is_storable_id(product_id):
            logger.warning("Price update for product {} matched no rows", product_id)
            return
        statement = update(models.Product).where(models.Product.id == product_id).values(price=new_price)
        try:
            with self._session_factory.begin() as session:
                result = session.execute(statement)
        except IntegrityError as exc:
            logger.debug("Rejected price {} for product {}: {}", new_price, product_id, exc)
            raise ValidationError(PRICE_MUST_BE_POSITIVE) from exc
        except SQLAlchemyError as exc:
            logger.error("Error while updating product with id {}: {}", product_id, exc)
            raise PersistenceError(f"Error while updating product with id : {product_id}") from exc

        if result.rowcount == 0:
            logger.warning("Price update for product {} matched no rows", product_id)
        else:
            logger.info("Product {} price updated with new price {}", product_id, new_price)

    def count(self) -> int:
        try:
            with self._session_factory() as session:
                return session.scalar(select(func.count()).select_from(models.Product)) or 0
        except SQLAlchemyError as exc:
            raise PersistenceError("Error while counting products") from exc
