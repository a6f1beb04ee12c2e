"""
FastAPI dependency functions.

Provides reusable dependency injection functions for FastAPI routes:
database sessions, repositories, application services and the
per-request event publisher.

FastAPI caches dependencies per request, so every dependency below that
asks for the session or the publisher receives the same instance within
one request.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.core.database import get_db
from ordermanagement.repositories.customer import CustomerRepository
from ordermanagement.repositories.order import OrderRepository
from ordermanagement.repositories.product import ProductRepository
from ordermanagement.services.customer import CustomerService
from ordermanagement.services.event_handlers import build_event_publisher
from ordermanagement.services.event_publisher import EventPublisher
from ordermanagement.services.order import OrderService
from ordermanagement.services.payment import PaymentService
from ordermanagement.services.shipping import ShippingService


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def get_event_publisher() -> EventPublisher:
    """
    Dependency providing the publisher for the current request.

    Events published during the request are dispatched by the route once
    the session has committed.
    """
    return build_event_publisher()


Publisher = Annotated[EventPublisher, Depends(get_event_publisher)]


def get_product_repository(db: DatabaseSession) -> ProductRepository:
    return ProductRepository(db)


def get_order_repository(db: DatabaseSession) -> OrderRepository:
    return OrderRepository(db)


def get_customer_repository(db: DatabaseSession) -> CustomerRepository:
    return CustomerRepository(db)


ProductRepo = Annotated[ProductRepository, Depends(get_product_repository)]
OrderRepo = Annotated[OrderRepository, Depends(get_order_repository)]
CustomerRepo = Annotated[CustomerRepository, Depends(get_customer_repository)]


def get_payment_service() -> PaymentService:
    return PaymentService()


def get_shipping_service() -> ShippingService:
    return ShippingService()


def get_order_service(
    orders: OrderRepo,
    products: ProductRepo,
    publisher: Publisher,
    payment: Annotated[PaymentService, Depends(get_payment_service)],
    shipping: Annotated[ShippingService, Depends(get_shipping_service)],
) -> OrderService:
    """
    Dependency to inject OrderService.

    Example:
        @router.put("/orders/{order_id}/confirm")
        async def confirm(order_id: int, service: OrderServiceDep):
            await service.confirm_order(order_id)
    """
    return OrderService(
        order_repository=orders,
        product_repository=products,
        payment_service=payment,
        shipping_service=shipping,
        event_publisher=publisher,
    )


def get_customer_service(customers: CustomerRepo) -> CustomerService:
    return CustomerService(customers)


OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]
