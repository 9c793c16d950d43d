from __future__ import annotations

from typing import List

from product_app.domain.models import Category, CategoryCreate
from product_app.persistence.category_repository import CategoryRepository
from product_app.services.validation import validate_category


class CategoryService:
    def __init__(self, category_repository: CategoryRepository) -> None:
        self._category_repository = category_repository

    def get_all_categories(self) -> List[Category]:
        return self._category_repository.get_all_categories()

    def get_by_id(self, category_id: int) -> Category:
        return self._category_repository.get_by_id(category_id)

    def add_category(self, category: CategoryCreate) -> int:
        validate_category(category)
        return self._category_repository.add_category(category)

    def update_category(self, category_id: int, category: CategoryCreate) -> None:
        validate_category(category)
        self._category_repository.update_category(category_id, category)

    def delete_by_id(self, category_id: int) -> None:
        self._category_repository.delete_by_id(category_id)
