"""
Domain exceptions.

Raised by aggregates and application services; the API layer maps them
onto HTTP status codes.
"""


class DomainError(Exception):
    """Base exception for order management domain failures"""
    pass


class EntityNotFoundError(DomainError, LookupError):
    """Raised when an aggregate cannot be found by its id"""

    entity_name = "Entity"

    def __init__(self, entity_id):
        self.entity_id = entity_id
        super().__init__(f"{self.entity_name} not found: {entity_id}")


class OrderNotFoundError(EntityNotFoundError):
    entity_name = "Order"


class ProductNotFoundError(EntityNotFoundError):
    entity_name = "Product"


class CustomerNotFoundError(EntityNotFoundError):
    entity_name = "Customer"


class InsufficientStockError(DomainError, ValueError):
    """Raised when a product cannot cover the requested quantity"""

    def __init__(self, product_name: str, requested: int, available: int):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product: {product_name} "
            f"(requested {requested}, available {available})"
        )


class InvalidOrderStateError(DomainError):
    """Raised when a lifecycle transition is not allowed from the current status"""

    def __init__(self, action: str, status):
        self.action = action
        self.status = status
        status_name = getattr(status, "value", status)
        super().__init__(f"Cannot {action} order in status {status_name}")


class PaymentFailedError(DomainError):
    """Raised when the payment provider declines a charge"""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Payment processing failed for order: {order_id}")


class DuplicateCustomerError(DomainError, ValueError):
    """Raised when a customer email is already registered"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Customer with email '{email}' already exists")
