# backend/geezshoe/routes/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel

from geezshoe.database import get_db
from geezshoe.models.admin import Admin
from geezshoe.repositories import OrderRepository, ProductRepository
from geezshoe.utils.tokenJWT import get_current_admin

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)

# === Pydantic Response Schemas ===

class DashboardStats(BaseModel):
    total_orders: int
    pending_orders: int
    total_products: int
    out_of_stock_items: int


# === Endpoint: Dashboard Summary ===

@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    # Sold and cancelled orders are deleted, so every remaining row is pending
    total_orders = OrderRepository(db).count()

    products = ProductRepository(db)
    return {
        "total_orders": total_orders,
        "pending_orders": total_orders,
        "total_products": products.count(),
        "out_of_stock_items": products.count(out_of_stock=True),
    }
