# backend/geezshoe/services/checkout.py
import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from geezshoe.cart import CartStore
from geezshoe.errors import OrderValidationError, OrderPlacementError
from geezshoe.models.order import Order
from geezshoe.repositories import OrderRepository
from geezshoe.schemas.cart import CartItem
from geezshoe.schemas.order import OrderFormData

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")

ORDER_STATUS_PENDING = "pending"


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def validate_order_form(form: OrderFormData, cart: List[CartItem]) -> Dict[str, str]:
    """Returns field -> message for every problem found (empty dict when valid)."""
    errors: Dict[str, str] = {}

    if _blank(form.name):
        errors["name"] = "Name is required"

    if _blank(form.phone):
        errors["phone"] = "Phone number is required"
    elif not PHONE_RE.match(form.phone.strip()):
        errors["phone"] = "Invalid phone number format"

    if _blank(form.delivery_location):
        errors["delivery_location"] = "Delivery location is required"

    # Email is optional, but must look like one when given
    if not _blank(form.email) and not EMAIL_RE.match(form.email.strip()):
        errors["email"] = "Invalid email format"

    if not cart:
        errors["cart"] = "Cart is empty"

    return errors


def format_size(size: Optional[float]) -> str:
    if size is None:
        return "N/A"
    return str(int(size)) if float(size).is_integer() else str(size)


def build_order(form: OrderFormData, cart: List[CartItem], now: Optional[datetime] = None) -> Order:
    """Flattens the cart into one order row with parallel line-item arrays."""
    email = (form.email or "").strip().lower() or None

    return Order(
        customer_name=form.name.strip(),
        customer_email=email,
        customer_phone=form.phone.strip(),
        order_description=(form.description or "").strip(),
        order_date=now or datetime.now(timezone.utc),
        product_ids=[str(item.id) for item in cart],
        product_names=[item.name for item in cart],
        product_sizes=[format_size(item.size) for item in cart],
        quantities=[item.qty for item in cart],
        unit_prices=[item.price for item in cart],
        total_prices=[item.price * item.qty for item in cart],
        order_status=ORDER_STATUS_PENDING,
        orderplace=form.is_in_addis,
        coupon_code=(form.coupon_code or "").strip() or None,
        delivery_location=form.delivery_location.strip(),
        is_preorder=any(item.is_preorder for item in cart),
    )


def place_order(form: OrderFormData, cart_store: CartStore, orders: OrderRepository,
                now: Optional[datetime] = None) -> Order:
    """
    Validates the checkout form, stores the cart as a pending order and empties the cart.

    The cart is cleared only after the order row is committed; on any failure
    it is left exactly as it was.
    """
    cart = cart_store.get_cart()

    errors = validate_order_form(form, cart)
    if errors:
        raise OrderValidationError(errors)

    order = build_order(form, cart, now)
    db = orders.db
    try:
        orders.add(order)
        db.commit()
        db.refresh(order)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to place order: %s", e)
        raise OrderPlacementError(f"Failed to place order: {e}") from e

    cart_store.clear_cart()
    logger.info("Order %s placed (%d lines)", order.id, len(cart))
    return order
