from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

MIN_QTY = 1
MAX_QTY = 15

# A single cart line, identified by (id, size)
class CartItem(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0) # Effective unit price (after discount)
    original_price: Optional[float] = None # Pre-discount price, for "you save" display
    qty: int = Field(default=1, ge=MIN_QTY)
    size: Optional[float] = None
    image: Optional[str] = None
    is_preorder: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        # Product ids arrive as numbers from the catalog
        return str(v) if v is not None else v

# Request schema for adding an item to the cart
class CartAddItem(CartItem):
    qty: int = Field(default=1, ge=MIN_QTY, le=MAX_QTY)

# Request schema for changing the quantity of a cart line
class CartUpdateItem(BaseModel):
    id: str
    qty: int
    size: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v) if v is not None else v

# Request schema for removing a cart line
class CartRemoveItem(BaseModel):
    id: str
    size: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v) if v is not None else v

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartItem]
    total: float
    count: int
