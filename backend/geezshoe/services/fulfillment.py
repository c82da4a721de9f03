# backend/geezshoe/services/fulfillment.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from geezshoe.errors import FulfillmentError, NotFoundError
from geezshoe.models.order import Order
from geezshoe.repositories import (
    OrderRepository, ProductRepository, SalesRepository, CustomerRepository
)

logger = logging.getLogger(__name__)


def _line_qty(qty) -> int:
    # A missing or zero quantity counts as one unit
    return int(qty or 1)


def order_item_count(order: Order) -> int:
    return sum(_line_qty(q) for q in (order.quantities or []))


def mark_as_sold(db: Session, order_id: int) -> None:
    """
    Marks a pending order as sold.

    1. add each line's quantity, as stored, to the product's sales counter
    2. add the order's item count to the customer's purchase total (by phone)
    3. decrement product stock, floored at zero, and sync is_active
    4. delete the order row

    All four steps share one transaction: a database error in any step rolls
    back the others and the order stays pending.
    """
    orders = OrderRepository(db)
    products = ProductRepository(db)
    sales = SalesRepository(db)
    customers = CustomerRepository(db)

    order = orders.get(order_id)
    if not order:
        raise NotFoundError(f"Order {order_id} not found")

    try:
        # 1. Sales counters, one increment per line
        for product_id, name, _size, qty, _unit, _total in order.line_items():
            sales.increment(int(product_id), name, int(qty or 0))

        # 2. Customer purchase total
        phone = (order.customer_phone or "").strip()
        customers.increment(phone, order.customer_name, order.customer_email, order_item_count(order))

        # 3. Stock
        for product_id, _name, _size, qty, _unit, _total in order.line_items():
            product = products.get(product_id)
            if not product:
                logger.warning("Order %s: product %s no longer exists, stock not updated", order.id, product_id)
                continue
            new_stock = max(0, (product.item_number or 0) - _line_qty(qty))
            products.set_stock(product, new_stock)

        # 4. Resolved orders are removed from the pending table
        orders.delete(order)
        db.commit()
    except (SQLAlchemyError, ValueError) as e:
        db.rollback()
        logger.exception("Error marking order %s as sold", order_id)
        raise FulfillmentError(f"Failed to process order {order_id}") from e

    logger.info("Order %s marked as sold", order_id)


def cancel_order(db: Session, order_id: int) -> None:
    """Deletes a pending order without touching stock or aggregates."""
    orders = OrderRepository(db)
    order = orders.get(order_id)
    if not order:
        raise NotFoundError(f"Order {order_id} not found")
    try:
        orders.delete(order)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error cancelling order %s: %s", order_id, e)
        raise FulfillmentError(f"Failed to cancel order {order_id}") from e
    logger.info("Order %s cancelled and removed", order_id)
