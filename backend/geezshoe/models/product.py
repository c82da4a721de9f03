# backend/geezshoe/models/product.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, CheckConstraint, func
from geezshoe.database import Base

# Catalog product (a shoe model).
# item_number is the stock count; is_active mirrors item_number > 0 and is
# kept in sync by the product form and by fulfillment.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")

    item_number = Column(Integer, CheckConstraint("item_number >= 0"), nullable=False, default=0)

    # Prices. fake_price is the crossed-out "was" price shown next to real_price.
    real_price = Column(Float, CheckConstraint("real_price >= 0"), nullable=False)
    fake_price = Column(Float, nullable=True)
    discount = Column(Boolean, nullable=False, default=False)
    discount_title = Column(String, nullable=True)
    discount_price = Column(Float, nullable=True)

    image_urls = Column(JSON, nullable=False, default=list)
    sizes_available = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def effective_price(self) -> float:
        if self.discount and self.discount_price is not None:
            return self.discount_price
        return self.real_price
