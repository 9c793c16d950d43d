"""
Business rules checked before anything is written.

Rules are plain predicates returning the violated rule's message (or None) and
are grouped into ordered tuples. Only the first failing message is surfaced, so
the order of a tuple is part of its contract.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence

from product_app.domain.models import CategoryCreate, ProductCreate
from product_app.errors import ValidationError

# Letters and digits in any script plus ASCII whitespace; `_` is a word character but not allowed.
_NAME_PATTERN = re.compile(r"(?:[^\W_]|[\t\n\f\r ])+")

INVALID_CHARACTERS_MESSAGE = "contains invalid characters (only alphanumeric and space allowed)"
PRODUCT_NAME_REQUIRED = "product name is required"
STORE_NAME_REQUIRED = "store name is required"
PRICE_MUST_BE_POSITIVE = "product price must be greater than zero"
DISCOUNT_OUT_OF_RANGE = "discount must be between 0 and 70 percent"
DESCRIPTION_REQUIRED = "product description is required"
CATEGORY_NAME_REQUIRED = "category name is required"
CATEGORY_DESCRIPTION_REQUIRED = "category description is required"

MIN_DISCOUNT = 0.0
MAX_DISCOUNT = 70.0

ProductRule = Callable[[ProductCreate], Optional[str]]
CategoryRule = Callable[[CategoryCreate], Optional[str]]


def check_name_text(value: str, required_message: str) -> Optional[str]:
    if not value:
        return required_message
    if not _NAME_PATTERN.fullmatch(value):
        return INVALID_CHARACTERS_MESSAGE
    return None


def check_product_name(candidate: ProductCreate) -> Optional[str]:
    return check_name_text(candidate.name, PRODUCT_NAME_REQUIRED)


def check_price(candidate: ProductCreate) -> Optional[str]:
    if not candidate.price > 0:
        return PRICE_MUST_BE_POSITIVE
    return None


def check_store_name(candidate: ProductCreate) -> Optional[str]:
    return check_name_text(candidate.store, STORE_NAME_REQUIRED)


def check_discount(candidate: ProductCreate) -> Optional[str]:
    if not MIN_DISCOUNT <= candidate.discount <= MAX_DISCOUNT:
        return DISCOUNT_OUT_OF_RANGE
    return None


def check_description(candidate: ProductCreate) -> Optional[str]:
    if not candidate.description.strip():
        return DESCRIPTION_REQUIRED
    return None


PRODUCT_RULES: tuple[ProductRule, ...] = (
    check_product_name,
    check_price,
    check_store_name,
    check_discount,
)

# Schema version in which every product carries a description.
PRODUCT_RULES_WITH_DESCRIPTION: tuple[ProductRule, ...] = PRODUCT_RULES + (check_description,)


def check_category_name(candidate: CategoryCreate) -> Optional[str]:
    return check_name_text(candidate.name, CATEGORY_NAME_REQUIRED)


def check_category_description(candidate: CategoryCreate) -> Optional[str]:
    if not candidate.description:
        return CATEGORY_DESCRIPTION_REQUIRED
    return None


CATEGORY_RULES: tuple[CategoryRule, ...] = (check_category_name, check_category_description)


def first_violation(candidate, rules: Sequence[Callable]) -> Optional[str]:
    """Return the message of the first rule `candidate` breaks, or None."""
    for rule in rules:
        message = rule(candidate)
        if message is not None:
            return message
    return None


# PUBLIC_INTERFACE
def validate_product_create(candidate: ProductCreate, require_description: bool = True) -> None:
    """Raise ValidationError carrying the first violated product rule."""
    rules = PRODUCT_RULES_WITH_DESCRIPTION if require_description else PRODUCT_RULES
    message = first_violation(candidate, rules)
    if message is not None:
        raise ValidationError(message)


# PUBLIC_INTERFACE
def validate_category(candidate: CategoryCreate) -> None:
    """Raise ValidationError carrying the first violated category rule."""
    message = first_violation(candidate, CATEGORY_RULES)
    if message is not None:
        raise ValidationError(message)
