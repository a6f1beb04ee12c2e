"""
Pydantic schemas for orders.

Defines request/response models for placing orders and reading their
state, including the order lines.
"""

from datetime import datetime
from typing import List

from pydantic import ConfigDict, Field

from ordermanagement.models.order import Order, OrderItem, OrderStatus
from ordermanagement.schemas.common import MAX_ID, CamelModel, IdString, MoneyAmount


class OrderItemRequest(CamelModel):
    """
    One requested order line.

    Attributes:
        product_id: Catalog product to order
        quantity: Number of units, at least 1
    """
    product_id: int = Field(ge=1, le=MAX_ID, description="Catalog product id")
    quantity: int = Field(gt=0, description="Number of units")


class CreateOrderRequest(CamelModel):
    """
    Request body for placing an order.

    Attributes:
        customer_id: Ordering customer
        items: Requested lines (at least one)
    """
    customer_id: int = Field(ge=1, le=MAX_ID, description="Ordering customer id")
    items: List[OrderItemRequest] = Field(min_length=1, description="Order lines")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customerId": 1,
                "items": [
                    {"productId": 1, "quantity": 2},
                    {"productId": 3, "quantity": 1},
                ],
            }
        }
    )


class OrderItemResponse(CamelModel):
    product_id: IdString
    product_name: str
    unit_price: MoneyAmount
    quantity: int
    total_price: MoneyAmount

    @classmethod
    def from_domain(cls, item: OrderItem) -> "OrderItemResponse":
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price.amount,
            quantity=item.quantity,
            total_price=item.total_price.amount,
        )


class OrderResponse(CamelModel):
    """
    Order state as returned by the API.

    Attributes:
        order_id: Generated order id
        customer_id: Ordering customer
        items: Order lines with snapshotted name and price
        total_amount: Sum of the line totals
        currency: ISO currency code of total_amount
        status: Lifecycle status
        created_at / updated_at: UTC timestamps
    """
    order_id: IdString
    customer_id: IdString
    items: List[OrderItemResponse]
    total_amount: MoneyAmount
    currency: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        total = order.total_amount
        return cls(
            order_id=order.id,
            customer_id=order.customer_id,
            items=[OrderItemResponse.from_domain(item) for item in order.items],
            total_amount=total.amount,
            currency=total.currency,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
