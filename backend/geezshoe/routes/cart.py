# backend/geezshoe/routes/cart.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Header
from sqlalchemy.orm import Session

from geezshoe.cart import CartStore, SqlStorage, clamp_quantity
from geezshoe.database import get_db
from geezshoe.schemas.cart import CartAddItem, CartItem, CartUpdateItem, CartRemoveItem, CartOut

router = APIRouter(prefix="/cart", tags=["Cart"])

# Resolve the shopper's cart from the X-Cart-Token header
def get_cart_store(
    x_cart_token: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> CartStore:
    token = (x_cart_token or "").strip()
    if not token:
        raise HTTPException(status_code=400, detail="Missing X-Cart-Token header")
    return CartStore(SqlStorage(db, namespace=f"cart:{token}"))

def _cart_to_out(store: CartStore) -> CartOut:
    return CartOut(
        items=store.get_cart(),
        total=round(store.get_cart_total(), 2),
        count=store.get_cart_item_count(),
    )

@router.get("", response_model=CartOut)
def get_cart(store: CartStore = Depends(get_cart_store)):
    return _cart_to_out(store)

@router.post("/add", response_model=CartOut)
def add_to_cart(payload: CartAddItem, store: CartStore = Depends(get_cart_store)):
    store.add_to_cart(CartItem.model_validate(payload.model_dump()))
    return _cart_to_out(store)

@router.put("/items", response_model=CartOut)
def update_cart_item(payload: CartUpdateItem, store: CartStore = Depends(get_cart_store)):
    # Quantity stays within 1..15 whatever the client sends
    store.update_cart_item_quantity(payload.id, clamp_quantity(payload.qty), payload.size)
    return _cart_to_out(store)

@router.delete("/items", response_model=CartOut)
def remove_cart_item(payload: CartRemoveItem, store: CartStore = Depends(get_cart_store)):
    store.remove_from_cart(payload.id, payload.size)
    return _cart_to_out(store)

@router.delete("", response_model=CartOut)
def clear_cart(store: CartStore = Depends(get_cart_store)):
    store.clear_cart()
    return _cart_to_out(store)
