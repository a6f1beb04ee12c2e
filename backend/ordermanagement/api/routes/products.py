"""
Product catalog endpoints.

Create, list, search, read and delete catalog products. Prices are in EUR.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from ordermanagement.api.dependencies import ProductRepo
from ordermanagement.models.money import Money
from ordermanagement.models.product import Product
from ordermanagement.schemas.common import MAX_ID
from ordermanagement.schemas.product import CreateProductRequest, ProductResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

ProductId = Annotated[int, Path(ge=1, le=MAX_ID, description="Product id")]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Adds a new product to the catalog",
    responses={400: {"description": "Invalid input"}},
)
async def create_product(
    request: CreateProductRequest,
    products: ProductRepo,
) -> ProductResponse:
    product = Product(
        name=request.name,
        description=request.description,
        price=Money.euro(request.price),
        stock_quantity=request.stock_quantity,
    )
    product = await products.save(product)

    logger.info(f"Product created: {product.name}", extra={"product_id": product.id})
    return ProductResponse.from_domain(product)


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="Get all products",
    description="Retrieves all products in the catalog",
)
async def list_products(products: ProductRepo) -> List[ProductResponse]:
    return [ProductResponse.from_domain(p) for p in await products.list_all()]


@router.get(
    "/search",
    response_model=List[ProductResponse],
    summary="Search products by name",
    description="Case-insensitive search for products whose name contains the term",
)
async def search_products(
    products: ProductRepo,
    name: str = Query(description="Search term", examples=["Laptop"]),
) -> List[ProductResponse]:
    return [ProductResponse.from_domain(p) for p in await products.search_by_name(name)]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    responses={404: {"description": "Product not found"}},
)
async def get_product(product_id: ProductId, products: ProductRepo) -> ProductResponse:
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product not found: {product_id}"
        )
    return ProductResponse.from_domain(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete product",
    description="Removes a product from the catalog",
    responses={404: {"description": "Product not found"}},
)
async def delete_product(product_id: ProductId, products: ProductRepo) -> Response:
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product not found: {product_id}"
        )

    await products.delete(product)
    logger.info("Product deleted", extra={"product_id": product_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
