"""
Customer endpoints.

Register, list and read customers.
"""

from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Path, status

from ordermanagement.api.dependencies import CustomerServiceDep, DatabaseSession
from ordermanagement.models.exceptions import CustomerNotFoundError, DuplicateCustomerError
from ordermanagement.schemas.common import MAX_ID
from ordermanagement.schemas.customer import CreateCustomerRequest, CustomerResponse

router = APIRouter(prefix="/customers", tags=["Customers"])

CustomerId = Annotated[int, Path(ge=1, le=MAX_ID, description="Customer id")]


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer",
    responses={
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
    },
)
async def create_customer(
    request: CreateCustomerRequest,
    db: DatabaseSession,
    customers: CustomerServiceDep,
) -> CustomerResponse:
    """
    Register a new customer.

    Raises:
        HTTPException 409: If the email address is already registered
    """
    try:
        customer = await customers.register_customer(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            address=request.address.to_domain(),
        )
    except DuplicateCustomerError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return CustomerResponse.from_domain(customer)


@router.get(
    "",
    response_model=List[CustomerResponse],
    summary="Get all customers",
)
async def list_customers(customers: CustomerServiceDep) -> List[CustomerResponse]:
    return [CustomerResponse.from_domain(c) for c in await customers.list_customers()]


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer by ID",
    responses={404: {"description": "Customer not found"}},
)
async def get_customer(customer_id: CustomerId, customers: CustomerServiceDep) -> CustomerResponse:
    try:
        customer = await customers.get_customer(customer_id)
    except CustomerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomerResponse.from_domain(customer)
