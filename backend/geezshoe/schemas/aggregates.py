from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class SaleOut(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    quantity_sold: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CustomerOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: str
    total_items_purchased: int

    model_config = ConfigDict(from_attributes=True)


class SalesList(BaseModel):
    items: List[SaleOut]


class CustomersList(BaseModel):
    items: List[CustomerOut]
