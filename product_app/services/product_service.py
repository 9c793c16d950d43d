"""Product service: validates writes, then delegates to the product store."""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from product_app.domain.models import Product, ProductCreate
from product_app.errors import ValidationError
from product_app.persistence.category_repository import CategoryRepository
from product_app.persistence.product_repository import ProductRepository
from product_app.services.validation import validate_product_create


class ProductService:
    """Entry point used by the HTTP layer for every product operation.

    Only `add` carries logic of its own (validation, then the category
    reference check); every other operation is a pass-through to the store.
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: Optional[CategoryRepository] = None,
        require_description: bool = True,
    ) -> None:
        self._product_repository = product_repository
        self._category_repository = category_repository
        self._require_description = require_description

    def add(self, product_create: ProductCreate) -> int:
        """Validate `product_create` and persist it with its images; return the new id."""
        try:
            validate_product_create(product_create, require_description=self._require_description)
            self._check_category(product_create.category_id)
        except ValidationError as exc:
            logger.debug("Rejected product {!r}: {}", product_create.name, exc.message)
            raise

        return self._product_repository.add_product(product_create)

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is None or self._category_repository is None:
            return
        if not self._category_repository.exists(category_id):
            raise ValidationError(f"category not found with id {category_id}")

    def delete_by_id(self, product_id: int) -> None:
        self._product_repository.delete_by_id(product_id)

    def get_by_id(self, product_id: int) -> Product:
        return self._product_repository.get_by_id(product_id)

    def update_price(self, product_id: int, new_price: float) -> None:
        self._product_repository.update_price(product_id, new_price)

    def get_all_products(self) -> List[Product]:
        return self._product_repository.get_all_products()

    def get_all_products_by_store(self, store_name: str) -> List[Product]:
        return self._product_repository.get_all_products_by_store(store_name)

    def get_products_by_category_id(self, category_id: int) -> List[Product]:
        return self._product_repository.get_products_by_category_id(category_id)

    def delete_all_products(self) -> int:
        return self._product_repository.delete_all_products()
