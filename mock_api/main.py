"""
Mock Data API

In-memory stand-in for the remote data API behind the order console:
orders, payment sessions, the client directory and discount validation.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import orders_router, payments_router, clients_router, discounts_router

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Data API starting up...")
    logger.info(f"Merchant bank account: {'configured' if os.getenv('MERCHANT_BANK_ACCOUNT') else 'not configured'}")
    yield
    logger.info("Mock Data API shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Data API",
    description="Order, payment and client endpoints for checkout development",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(orders_router)
app.include_router(payments_router)
app.include_router(clients_router)
app.include_router(discounts_router)


@app.get("/")
async def home():
    return {
        "message": "Mock Data API",
        "docs": "/docs",
        "endpoints": {
            "orders": "/orders",
            "clients": "/clients",
            "payment_config": "/payment-config",
            "discount_codes": "/discount-codes",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-data-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
