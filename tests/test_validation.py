"""Unit tests for the product and category rules."""

import pytest

from product_app.domain.models import CategoryCreate
from product_app.errors import ErrorKind, ValidationError
from product_app.services.validation import (
    DESCRIPTION_REQUIRED,
    DISCOUNT_OUT_OF_RANGE,
    INVALID_CHARACTERS_MESSAGE,
    PRICE_MUST_BE_POSITIVE,
    PRODUCT_NAME_REQUIRED,
    PRODUCT_RULES,
    STORE_NAME_REQUIRED,
    check_product_name,
    first_violation,
    validate_category,
    validate_product_create,
)
from tests.utils import make_product


class TestProductRules:
    def test_valid_product_passes(self):
        """Should accept a product satisfying every rule."""
        validate_product_create(make_product())

    @pytest.mark.parametrize("name", ["Ütü", "Çamaşır Makinesi", "iPhone 15", "Кофемолка"])
    def test_unicode_letters_and_digits_are_accepted(self, name):
        assert check_product_name(make_product(name=name)) is None

    @pytest.mark.parametrize("name", ["Air-Fryer", "air_fryer", "Fryer!", "<script>"])
    def test_punctuation_and_underscore_are_rejected(self, name):
        assert check_product_name(make_product(name=name)) == INVALID_CHARACTERS_MESSAGE

    @pytest.mark.parametrize("name", ["Air\u00a0Fryer", "Air\u2003Fryer", "Air\u3000Fryer"])
    def test_non_ascii_whitespace_is_rejected(self, name):
        assert check_product_name(make_product(name=name)) == INVALID_CHARACTERS_MESSAGE

    def test_ascii_whitespace_is_accepted(self):
        assert check_product_name(make_product(name="Air\tFryer")) is None

    def test_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create(make_product(name=""))
        assert exc_info.value.message == PRODUCT_NAME_REQUIRED
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.parametrize("price", [0.0, -0.01, -1000.0])
    def test_price_must_be_greater_than_zero(self, price):
        with pytest.raises(ValidationError, match=PRICE_MUST_BE_POSITIVE):
            validate_product_create(make_product(price=price))

    def test_empty_store(self):
        with pytest.raises(ValidationError, match=STORE_NAME_REQUIRED):
            validate_product_create(make_product(store=""))

    def test_store_with_invalid_characters(self):
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_product_create(make_product(store="ABC-TECH"))

    @pytest.mark.parametrize("discount", [0.0, 35.5, 70.0])
    def test_discount_bounds_are_inclusive(self, discount):
        validate_product_create(make_product(discount=discount))

    @pytest.mark.parametrize("discount", [-0.5, 70.01, 100.0])
    def test_discount_outside_range(self, discount):
        with pytest.raises(ValidationError, match=DISCOUNT_OUT_OF_RANGE):
            validate_product_create(make_product(discount=discount))

    def test_first_failing_rule_wins(self):
        """Should report the name before the price, the price before the store, the store before the discount."""
        candidate = make_product(name="", price=0, store="", discount=99)
        assert first_violation(candidate, PRODUCT_RULES) == PRODUCT_NAME_REQUIRED

        candidate = make_product(price=0, store="", discount=99)
        assert first_violation(candidate, PRODUCT_RULES) == PRICE_MUST_BE_POSITIVE

        candidate = make_product(store="", discount=99)
        assert first_violation(candidate, PRODUCT_RULES) == STORE_NAME_REQUIRED

        candidate = make_product(discount=99)
        assert first_violation(candidate, PRODUCT_RULES) == DISCOUNT_OUT_OF_RANGE


class TestDescriptionPolicy:
    def test_required_description(self):
        with pytest.raises(ValidationError, match=DESCRIPTION_REQUIRED):
            validate_product_create(make_product(description="  "), require_description=True)

    def test_optional_description(self):
        validate_product_create(make_product(description=""), require_description=False)

    def test_description_checked_after_discount(self):
        with pytest.raises(ValidationError, match=DISCOUNT_OUT_OF_RANGE):
            validate_product_create(make_product(description="", discount=80), require_description=True)


class TestCategoryRules:
    def test_valid_category(self):
        validate_category(CategoryCreate(name="Home and Garden", description="Gardening supplies"))

    def test_category_name_required(self):
        with pytest.raises(ValidationError, match="category name is required"):
            validate_category(CategoryCreate(name="", description="x"))

    def test_category_name_characters(self):
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_category(CategoryCreate(name="Home & Garden", description="x"))

    def test_category_description_required(self):
        with pytest.raises(ValidationError, match="category description is required"):
            validate_category(CategoryCreate(name="Books", description=""))
