"""
Pydantic schemas for customers.
"""

from pydantic import Field

from ordermanagement.models.customer import Address, Customer
from ordermanagement.schemas.common import CamelModel, IdString


class AddressSchema(CamelModel):
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            postal_code=self.postal_code,
            country=self.country,
        )


class CreateCustomerRequest(CamelModel):
    """
    Request body for registering a customer.

    Attributes:
        first_name / last_name: Customer name
        email: Unique email address
        address: Postal address
    """
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: AddressSchema


class CustomerResponse(CamelModel):
    customer_id: IdString
    first_name: str
    last_name: str
    full_name: str
    email: str
    address: AddressSchema

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
        address = customer.address
        return cls(
            customer_id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            full_name=customer.full_name,
            email=customer.email,
            address=AddressSchema(
                street=address.street,
                city=address.city,
                postal_code=address.postal_code,
                country=address.country,
            ),
        )
