from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, func
from geezshoe.database import Base

# Pending customer order.
# Line items are stored as parallel arrays (product_ids[i], quantities[i], ...),
# all of the same length. A resolved order (sold or cancelled) is deleted.
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # Customer and delivery details
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)
    customer_phone = Column(String, nullable=False, index=True)
    order_description = Column(String, nullable=False, default="")
    delivery_location = Column(String, nullable=False)
    orderplace = Column(Boolean, nullable=False, default=False) # True when delivering inside Addis Ababa
    coupon_code = Column(String, nullable=True)

    order_date = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    order_status = Column(String, nullable=False, default="pending")
    is_preorder = Column(Boolean, nullable=False, default=False)

    # Parallel line-item arrays
    product_ids = Column(JSON, nullable=False, default=list)
    product_names = Column(JSON, nullable=False, default=list)
    product_sizes = Column(JSON, nullable=False, default=list)
    quantities = Column(JSON, nullable=False, default=list)
    unit_prices = Column(JSON, nullable=False, default=list)
    total_prices = Column(JSON, nullable=False, default=list)

    def line_items(self):
        """Yields (product_id, name, size, qty, unit_price, total_price) per line."""
        return zip(
            self.product_ids or [],
            self.product_names or [],
            self.product_sizes or [],
            self.quantities or [],
            self.unit_prices or [],
            self.total_prices or [],
        )
