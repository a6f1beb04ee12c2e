"""
Customer application service.
"""

import logging

from ordermanagement.models.customer import Address, Customer
from ordermanagement.models.exceptions import CustomerNotFoundError, DuplicateCustomerError
from ordermanagement.repositories.customer import CustomerRepository

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, customer_repository: CustomerRepository):
        self.customers = customer_repository

    async def register_customer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        address: Address,
    ) -> Customer:
        """
        Register a new customer.

        Raises:
            DuplicateCustomerError: Email is already registered (case-insensitive)
        """
        if await self.customers.email_exists(email):
            raise DuplicateCustomerError(email)

        customer = await self.customers.save(
            Customer(first_name=first_name, last_name=last_name, email=email, address=address)
        )
        logger.info("Customer registered", extra={"customer_id": customer.id})
        return customer

    async def get_customer(self, customer_id: int) -> Customer:
        customer = await self.customers.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def list_customers(self) -> list[Customer]:
        return await self.customers.list_all()
