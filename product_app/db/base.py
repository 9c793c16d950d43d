"""
SQLAlchemy declarative base shared by all ORM models.

The deployed PostgreSQL database owns its schema (see `database_schema.sql`);
`create_schema` in `product_app.db.session` builds the same tables from these
mappings for local runs and tests.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Naming conventions keep constraint names stable between the SQL script and
# tables created from the mappings: CheckConstraint(..., name="price_positive")
# on "products" becomes ck_products_price_positive.
_NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for ORM models."""

    metadata = MetaData(naming_convention=_NAMING_CONVENTION)
