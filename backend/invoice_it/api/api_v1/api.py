"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from invoice_it.api.api_v1.endpoints import auth, products, customers, quotations, database

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(quotations.router, prefix="/quotations", tags=["quotations"])
api_router.include_router(database.router, prefix="/database", tags=["database"])
