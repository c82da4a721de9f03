# backend/geezshoe/routes/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from geezshoe.database import get_db
from geezshoe.models.admin import Admin
from geezshoe.repositories import SalesRepository, CustomerRepository
from geezshoe.schemas.aggregates import SalesList, CustomersList
from geezshoe.utils.tokenJWT import get_current_admin

router = APIRouter(tags=["Reports"])


# Units sold per product, most recently started first
@router.get("/sales", response_model=SalesList)
def list_sales(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"items": SalesRepository(db).list()}


# Customers ranked by items bought
@router.get("/customers", response_model=CustomersList)
def list_customers(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"items": CustomerRepository(db).list()}
