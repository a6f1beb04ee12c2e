"""
Order endpoints.

Place orders, query them and drive them through their lifecycle:

    PENDING -> CONFIRMED -> PAID -> SHIPPED -> DELIVERED -> RETURNED

Paying an order ships it automatically once the payment has committed.
Domain events raised by a request are dispatched in the background after
its transaction commits; a failed request discards them.
"""

from typing import Annotated, Awaitable, Callable, List, Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.api.dependencies import DatabaseSession, OrderServiceDep, Publisher
from ordermanagement.models.exceptions import (
    DomainError,
    InsufficientStockError,
    OrderNotFoundError,
    PaymentFailedError,
    ProductNotFoundError,
)
from ordermanagement.models.order import Order, OrderStatus
from ordermanagement.schemas.common import MAX_ID
from ordermanagement.schemas.order import CreateOrderRequest, OrderResponse
from ordermanagement.services.event_publisher import EventPublisher
from ordermanagement.services.order import OrderLine

router = APIRouter(prefix="/orders", tags=["Orders"])

OrderId = Annotated[int, Path(ge=1, le=MAX_ID, description="Order id")]


_TRANSITION_RESPONSES = {
    200: {"description": "Transition applied"},
    400: {"description": "Transition not allowed in the current status"},
    404: {"description": "Order not found"},
}


def _http_error(exc: DomainError) -> HTTPException:
    if isinstance(exc, OrderNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PaymentFailedError):
        return HTTPException(status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


async def _run_transition(
    operation: Callable[[int], Awaitable[Order]],
    order_id: int,
    db: AsyncSession,
    publisher: EventPublisher,
    background_tasks: BackgroundTasks,
) -> Response:
    """
    Apply one lifecycle operation as a unit of work.

    Commits and schedules event dispatch on success; rolls back, drops the
    queued events and maps the domain error to an HTTP error otherwise.
    """
    try:
        await operation(order_id)
    except DomainError as e:
        await db.rollback()
        publisher.discard()
        raise _http_error(e)

    await db.commit()
    background_tasks.add_task(publisher.dispatch)
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new order",
    description="Creates a new order for a customer with the specified items",
    responses={400: {"description": "Invalid input, unknown product or insufficient stock"}},
)
async def create_order(
    request: CreateOrderRequest,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> OrderResponse:
    """
    Place a new order.

    Product names and prices are snapshotted into the order lines.

    Raises:
        HTTPException 400: If a product does not exist or lacks stock
    """
    lines = [OrderLine(product_id=item.product_id, quantity=item.quantity) for item in request.items]
    try:
        order = await orders.create_order(request.customer_id, lines)
    except (ProductNotFoundError, InsufficientStockError) as e:
        await db.rollback()
        publisher.discard()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    await db.commit()
    background_tasks.add_task(publisher.dispatch)
    return OrderResponse.from_domain(order)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order by ID",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_id: OrderId, orders: OrderServiceDep) -> OrderResponse:
    order = await orders.find_by_id(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_id}"
        )
    return OrderResponse.from_domain(order)


@router.get(
    "",
    response_model=List[OrderResponse],
    summary="Get orders",
    description=(
        "Returns orders of a customer when customerId is given, otherwise "
        "orders in the given status, otherwise all orders"
    ),
)
async def list_orders(
    orders: OrderServiceDep,
    customer_id: Optional[int] = Query(default=None, alias="customerId", ge=1, le=MAX_ID, description="Filter by customer"),
    order_status: Optional[OrderStatus] = Query(default=None, alias="status", description="Filter by status"),
) -> List[OrderResponse]:
    if customer_id is not None:
        found = await orders.find_by_customer_id(customer_id)
    elif order_status is not None:
        found = await orders.find_by_status(order_status)
    else:
        found = await orders.find_all()
    return [OrderResponse.from_domain(order) for order in found]


@router.put(
    "/{order_id}/confirm",
    response_class=Response,
    summary="Confirm order",
    description="Confirms a pending order and reserves stock for its items",
    responses=_TRANSITION_RESPONSES,
)
async def confirm_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.confirm_order, order_id, db, publisher, background_tasks)


@router.put(
    "/{order_id}/pay",
    response_class=Response,
    summary="Process payment",
    description="Charges a confirmed order; the order is shipped automatically afterwards",
    responses={**_TRANSITION_RESPONSES, 402: {"description": "Payment declined"}},
)
async def pay_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.process_payment, order_id, db, publisher, background_tasks)


@router.put(
    "/{order_id}/ship",
    response_class=Response,
    summary="Ship order",
    description="Ships a paid order (manual override of automatic shipping)",
    responses=_TRANSITION_RESPONSES,
)
async def ship_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.ship_order, order_id, db, publisher, background_tasks)


@router.put(
    "/{order_id}/deliver",
    response_class=Response,
    summary="Mark order as delivered",
    responses=_TRANSITION_RESPONSES,
)
async def deliver_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.deliver_order, order_id, db, publisher, background_tasks)


@router.put(
    "/{order_id}/cancel",
    response_class=Response,
    summary="Cancel order",
    description="Cancels an order that has not shipped; reserved stock is released",
    responses=_TRANSITION_RESPONSES,
)
async def cancel_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.cancel_order, order_id, db, publisher, background_tasks)


@router.put(
    "/{order_id}/return",
    response_class=Response,
    summary="Return order",
    description="Returns a delivered order; its items go back into stock",
    responses=_TRANSITION_RESPONSES,
)
async def return_order(
    order_id: OrderId,
    db: DatabaseSession,
    orders: OrderServiceDep,
    publisher: Publisher,
    background_tasks: BackgroundTasks,
) -> Response:
    return await _run_transition(orders.return_order, order_id, db, publisher, background_tasks)
