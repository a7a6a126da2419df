# Routes package
from fastapi import APIRouter
from .customer_routes import router as customer_router
from .bill_routes import router as bill_router
from .party_routes import router as party_router
from .sales_routes import router as sales_router
from .approval_routes import router as approval_router
from .payment_routes import router as payment_router
from .product_routes import router as product_router
from .purchase_routes import router as purchase_router

# Create main router
api_router = APIRouter()

# Include all route modules
api_router.include_router(customer_router, prefix="/customers", tags=["Customers"])
api_router.include_router(bill_router, prefix="/bills", tags=["Bills"])
api_router.include_router(party_router, prefix="/parties", tags=["Parties"])
api_router.include_router(sales_router, prefix="/sales", tags=["Sales"])
api_router.include_router(approval_router, prefix="/sales-approvals", tags=["Sales Approvals"])
api_router.include_router(payment_router, tags=["Payments"])
api_router.include_router(product_router, prefix="/products", tags=["Products"])
api_router.include_router(purchase_router, prefix="/purchases", tags=["Purchases"])


__all__ = ["api_router"]
