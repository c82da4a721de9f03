from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


# Customer and delivery details entered at checkout.
# Everything is optional here; the checkout workflow reports missing fields
# per field instead of failing on the first one.
class OrderFormData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    is_in_addis: bool = Field(default=False, alias="isInAddis")
    coupon_code: Optional[str] = None
    delivery_location: Optional[str] = None


# One line of an order, rebuilt from the parallel arrays
class OrderLineOut(BaseModel):
    product_id: str
    product_name: str
    size: str
    quantity: int
    unit_price: float
    total_price: float
    image: Optional[str] = None


# Output schema representing the full order row
class OrderResponse(BaseModel):
    id: int
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: str
    order_description: str
    delivery_location: str
    orderplace: bool
    coupon_code: Optional[str] = None
    order_date: Optional[datetime] = None
    order_status: str
    is_preorder: bool

    product_ids: List[str]
    product_names: List[str]
    product_sizes: List[str]
    quantities: List[int]
    unit_prices: List[float]
    total_prices: List[float]

    model_config = ConfigDict(from_attributes=True)


# Single order view for the admin, lines paired with product images
class OrderDetail(OrderResponse):
    lines: List[OrderLineOut]
    order_total: float


# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int
