# backend/geezshoe/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional, List
from datetime import datetime

MAX_PRODUCT_IMAGES = 3


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Admin product form (create and full update)
class ProductIn(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    item_number: int = Field(ge=0) # Stock quantity
    real_price: float = Field(gt=0)
    fake_price: Optional[float] = Field(default=None, ge=0)
    discount: bool = False
    discount_title: Optional[str] = None
    discount_price: Optional[float] = Field(default=None, gt=0)
    image_urls: List[str] = Field(min_length=1, max_length=MAX_PRODUCT_IMAGES)
    sizes_available: List[float] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_discount(self):
        self.name = self.name.strip()
        self.description = self.description.strip()
        if not self.name:
            raise ValueError("Product name is required.")
        if not self.description:
            raise ValueError("Product description is required.")
        if self.discount:
            if self.discount_price is None:
                raise ValueError("Sale price is required.")
            if self.discount_price >= self.real_price:
                raise ValueError("Sale price must be lower than regular price.")
        return self

    def to_row(self) -> dict:
        """Column values for the products table; derived fields included."""
        return {
            "name": self.name,
            "description": self.description,
            "item_number": self.item_number,
            "real_price": self.real_price,
            # On discount the regular price becomes the crossed-out price
            "fake_price": self.real_price if self.discount else self.fake_price,
            "discount": self.discount,
            "discount_title": ((self.discount_title or "").strip() or None) if self.discount else None,
            "discount_price": self.discount_price if self.discount else None,
            "image_urls": self.image_urls,
            "sizes_available": self.sizes_available,
            "is_active": self.item_number > 0,
        }


class ProductOut(ORMBase):
    id: int
    name: str
    description: str
    item_number: int
    real_price: float
    fake_price: Optional[float] = None
    discount: bool
    discount_title: Optional[str] = None
    discount_price: Optional[float] = None
    image_urls: List[str]
    sizes_available: List[float]
    is_active: bool
    created_at: Optional[datetime] = None


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int


class ImageUploadOut(BaseModel):
    url: str
    path: str
