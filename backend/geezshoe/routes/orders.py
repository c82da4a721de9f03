# backend/geezshoe/routes/orders.py
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Request, Query, status
from sqlalchemy.orm import Session
import logging

from geezshoe.cart import CartStore
from geezshoe.database import get_db
from geezshoe.errors import OrderValidationError, OrderPlacementError, FulfillmentError, NotFoundError
from geezshoe.models.admin import Admin
from geezshoe.models.order import Order
from geezshoe.repositories import OrderRepository, ProductRepository
from geezshoe.routes.cart import get_cart_store
from geezshoe.schemas.order import OrderFormData, OrderResponse, OrderDetail, OrderLineOut, OrdersPage
from geezshoe.services.checkout import place_order
from geezshoe.services.fulfillment import mark_as_sold, cancel_order
from geezshoe.utils.audit import write_log
from geezshoe.utils.tokenJWT import get_current_admin

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

# Map an Order row to the detail schema, pairing each line with a product image
def _order_to_detail(order: Order, db: Session) -> OrderDetail:
    products = ProductRepository(db).get_many(
        pid for pid in (order.product_ids or []) if str(pid).isdigit()
    )
    images = {str(p.id): (p.image_urls or [None])[0] for p in products}

    lines: List[OrderLineOut] = []
    for product_id, name, size, qty, unit_price, total_price in order.line_items():
        lines.append(OrderLineOut(
            product_id=str(product_id),
            product_name=name,
            size=size,
            quantity=qty,
            unit_price=unit_price,
            total_price=total_price,
            image=images.get(str(product_id)),
        ))

    base = OrderResponse.model_validate(order).model_dump()
    return OrderDetail(**base, lines=lines, order_total=round(sum(order.total_prices or []), 2))


# Place an order from the shopper's cart (public)
@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderFormData,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    try:
        order = place_order(payload, store, OrderRepository(db))
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail={"errors": e.errors})
    except OrderPlacementError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return order


# List pending orders, newest first (admin)
@router.get("", response_model=OrdersPage)
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    is_preorder: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    rows, total = OrderRepository(db).list_page(page, page_size, is_preorder)
    return {"items": rows, "total": total, "page": page, "page_size": page_size}


# Get details of a specific order (admin)
@router.get("/{order_id}", response_model=OrderDetail)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    order = OrderRepository(db).get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return _order_to_detail(order, db)


# Mark an order as sold: update sales, customer and stock, then remove it (admin)
@router.post("/{order_id}/fulfill")
def fulfill_order(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    try:
        mark_as_sold(db, order_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except FulfillmentError:
        write_log(db, user_id=current_admin.id, action="ORDER_FULFILL", resource="orders", status="FAIL",
                  ip=request.client.host if request.client else None, meta={"order_id": order_id})
        raise HTTPException(status_code=500, detail="Failed to process order")

    write_log(db, user_id=current_admin.id, action="ORDER_FULFILL", resource="orders", status="SUCCESS",
              ip=request.client.host if request.client else None, meta={"order_id": order_id})
    return {"detail": "Order marked as sold and stock updated"}


# Cancel an order: the row is removed, nothing else changes (admin)
@router.delete("/{order_id}")
def cancel(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    try:
        cancel_order(db, order_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except FulfillmentError:
        raise HTTPException(status_code=500, detail="Failed to cancel order")

    write_log(db, user_id=current_admin.id, action="ORDER_CANCEL", resource="orders", status="SUCCESS",
              ip=request.client.host if request.client else None, meta={"order_id": order_id})
    return {"detail": "Order cancelled and removed"}
