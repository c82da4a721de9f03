from sqlalchemy import Column, Integer, String, DateTime, func
from geezshoe.database import Base

# Running count of units sold per product, one row per product
class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, unique=True, nullable=False, index=True)
    product_name = Column(String, nullable=True)
    quantity_sold = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


# Running count of items bought per customer, keyed by phone number
class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, unique=True, nullable=False, index=True)
    total_items_purchased = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
