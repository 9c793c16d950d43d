"""Category store over the `categories` table."""

from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from product_app.db import models
from product_app.domain.models import Category, CategoryCreate
from product_app.errors import NotFoundError, PersistenceError


def _to_entity(row: models.Category) -> Category:
    return Category(id=row.id, name=row.name, description=row.description)


class CategoryRepository:
    """Data-access layer for categories."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_all_categories(self) -> List[Category]:
        try:
            with self._session_factory() as session:
                rows = session.scalars(select(models.Category).order_by(models.Category.id)).all()
                return [_to_entity(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error("Error while getting all categories: {}", exc)
            return []

    def get_by_id(self, category_id: int) -> Category:
        if not models.is_storable_id(category_id):
            raise NotFoundError(f"Category not found with id {category_id}")
        try:
            with self._session_factory() as session:
                row = session.get(models.Category, category_id)
                if row is None:
                    raise NotFoundError(f"Category not found with id {category_id}")
                return _to_entity(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Error while getting category with id {category_id}") from exc

    def exists(self, category_id: int) -> bool:
        if not models.is_storable_id(category_id):
            return False
        statement = select(models.Category.id).where(models.Category.id == category_id)
        try:
            with self._session_factory() as session:
                return session.scalar(statement) is not None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Error while getting category with id {category_id}") from exc

    def add_category(self, category: CategoryCreate) -> int:
        row = models.Category(name=category.name, description=category.description)
        try:
            with self._session_factory.begin() as session:
                session.add(row)
                session.flush()
                category_id = row.id
        except SQLAlchemyError as exc:
            logger.error("Error while adding category {}: {}", category.name, exc)
            raise PersistenceError(f"Error while adding category {category.name}") from exc

        logger.info("Category added with id {}", category_id)
        return category_id

    def update_category(self, category_id: int, category: CategoryCreate) -> None:
        if not models.is_storable_id(category_id):
            raise NotFoundError(f"Category not found with id {category_id}")
        statement = (
            update(models.Category)
            .where(models.Category.id == category_id)
            .values(name=category.name, description=category.description)
        )
        try:
            with self._session_factory.begin() as session:
                result = session.execute(statement)
                if result.rowcount == 0:
                    raise NotFoundError(f"Category not found with id {category_id}")
        except SQLAlchemyError as exc:
            logger.error("Error while updating category with id {}: {}", category_id, exc)
            raise PersistenceError(f"Error while updating category with id {category_id}") from exc

    def delete_by_id(self, category_id: int) -> None:
        """Delete the category; its products stay, with `category_id` cleared."""
        if not models.is_storable_id(category_id):
            raise NotFoundError(f"Category not found with id {category_id}")
        try:
            with self._session_factory.begin() as session:
                session.execute(
                    update(models.Product)
                    .where(models.Product.category_id == category_id)
                    .values(category_id=None)
                )
                result = session.execute(delete(models.Category).where(models.Category.id == category_id))
                if result.rowcount == 0:
                    raise NotFoundError(f"Category not found with id {category_id}")
        except SQLAlchemyError as exc:
            logger.error("Error while deleting category with id {}: {}", category_id, exc)
            raise PersistenceError(f"Error while deleting category with id {category_id}") from exc

        logger.info("Category deleted with id {}", category_id)
