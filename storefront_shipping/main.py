"""
Storefront Shipping API
FastAPI application entry point
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_shipping import __version__
from storefront_shipping.api.routes import shipping
from storefront_shipping.core.config import settings
from storefront_shipping.core.error_handler import (
    ErrorSanitizationMiddleware,
    storefront_error_handler,
)
from storefront_shipping.core.exceptions import StorefrontBaseError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="""
## Storefront Shipping API

Shipping zone resolution and rate quotes for checkout.

### Features
- **Quotes**: Ordered shipping options for a cart and destination
- **BFPO**: Military addresses route to British Forces Post Office rates
- **Checkout**: Options in the payment provider's shipping_rate_data format
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Shipping", "description": "Shipping zones, quotes and address hints"},
    ],
)

app.add_exception_handler(StorefrontBaseError, storefront_error_handler)

# Error sanitization (catches unhandled exceptions)
app.add_middleware(ErrorSanitizationMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(shipping.router, prefix="/api", tags=["Shipping"])


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness check. The shipping engine has no external dependencies to ping."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
