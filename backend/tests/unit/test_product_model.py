"""
Unit tests for the Product aggregate.
"""

from decimal import Decimal

import pytest

from ordermanagement.models.exceptions import InsufficientStockError
from ordermanagement.models.money import Money
from ordermanagement.models.product import Product


def make_product(stock: int = 10) -> Product:
    return Product(
        name="Laptop",
        description="High-performance laptop",
        price=Money.euro("1299.99"),
        stock_quantity=stock,
    )


class TestProductCreation:
    def test_fields(self):
        product = make_product()

        assert product.name == "Laptop"
        assert product.price == Money.euro("1299.99")
        assert product.price_amount == Decimal("1299.99")
        assert product.price_currency == "EUR"
        assert product.stock_quantity == 10

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            Product(name="   ", description=None, price=Money.euro(1), stock_quantity=1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValueError):
            make_product(stock=-1)

    def test_missing_price_rejected(self):
        with pytest.raises(TypeError):
            Product(name="Laptop", description=None, price=None, stock_quantity=1)

    def test_description_is_optional(self):
        product = Product(name="Cable", description=None, price=Money.euro(5), stock_quantity=0)
        assert product.description is None


class TestProductStock:
    """Tests for stock availability and reservation."""

    @pytest.mark.parametrize("quantity,expected", [(1, True), (10, True), (11, False)])
    def test_is_available(self, quantity, expected):
        assert make_product(stock=10).is_available(quantity) is expected

    def test_reduce_stock(self):
        product = make_product(stock=10)

        product.reduce_stock(3)

        assert product.stock_quantity == 7

    def test_reduce_stock_beyond_available(self):
        """
        Test that stock cannot go negative.

        Arrange: Product with 2 units
        Act: Reduce by 3
        Assert: InsufficientStockError naming the product; stock unchanged
        """
        # Arrange
        product = make_product(stock=2)

        # Act / Assert
        with pytest.raises(InsufficientStockError, match="Insufficient stock for product: Laptop"):
            product.reduce_stock(3)
        assert product.stock_quantity == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_reduce_stock_requires_positive_quantity(self, quantity):
        with pytest.raises(ValueError):
            make_product().reduce_stock(quantity)

    def test_increase_stock(self):
        product = make_product(stock=0)

        product.increase_stock(5)

        assert product.stock_quantity == 5

    def test_increase_stock_requires_positive_quantity(self):
        with pytest.raises(ValueError):
            make_product().increase_stock(0)
