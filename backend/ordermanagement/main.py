"""
Order Management System - FastAPI Application Entry Point

This module initializes the FastAPI application with OpenAPI metadata,
middleware, routes, error handlers and lifecycle event handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordermanagement.api.routes import customers, health, orders, products
from ordermanagement.core.config import settings
from ordermanagement.core.database import init_db, close_db
from ordermanagement.core.logging_config import get_logger, setup_logging
from ordermanagement.middleware.logging import LoggingMiddleware
from ordermanagement.middleware.request_id import RequestIDMiddleware
from ordermanagement.schemas.health import ServiceInfo


API_VERSION = "1.0.0"

API_DESCRIPTION = """
REST API for managing products, customers and orders.

## Order status flow

```
PENDING -> CONFIRMED -> PAID -> SHIPPED -> DELIVERED -> RETURNED
   |           |          |
   +-----------+----------+--> CANCELLED
```

- Confirming an order reserves stock for its items
- Paying an order ships it automatically
- Cancelling a confirmed or paid order releases the reserved stock
- Returning a delivered order puts its items back into stock
"""

OPENAPI_TAGS = [
    {"name": "Products", "description": "Product catalog management operations"},
    {"name": "Orders", "description": "Order lifecycle management operations"},
    {"name": "Customers", "description": "Customer registration and lookup"},
    {"name": "health", "description": "Liveness and readiness probes"},
]

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up structured logging
        - Create the schema and seed reference data (if enabled)

    Shutdown:
        - Close database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    await init_db()
    logger.info(
        "Application started",
        extra={"environment": settings.environment}
    )

    yield

    await close_db()


app = FastAPI(
    title=settings.project_name,
    version=API_VERSION,
    description=API_DESCRIPTION,
    contact={
        "name": "HAW Hamburg - Software Architecture Course",
        "email": "noreply@haw-hamburg.de",
        "url": "https://www.haw-hamburg.de",
    },
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    servers=[
        {"url": "http://localhost:8080", "description": "Development Server"},
        {"url": "https://api.ordermanagement.example.com", "description": "Production Server (Example)"},
    ],
    openapi_tags=OPENAPI_TAGS,
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Middleware is executed in reverse order of registration
# (last registered = first executed)

# Logging middleware (runs after RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (sets correlation ID)
app.add_middleware(RequestIDMiddleware)

# CORS middleware - configured from environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies, paths and queries as 400 Bad Request."""
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": len(exc.errors())}
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(products.router, prefix=settings.api_prefix)
app.include_router(orders.router, prefix=settings.api_prefix)
app.include_router(customers.router, prefix=settings.api_prefix)


@app.get("/", response_model=ServiceInfo, include_in_schema=False)
async def root() -> ServiceInfo:
    """
    Root endpoint.

    Returns basic API information.
    """
    return ServiceInfo(
        service=settings.project_name,
        version=API_VERSION,
        docs="/docs",
        health=f"{settings.api_prefix}/health",
    )
