# backend/geezshoe/cart.py
"""
Cart store.

Keeps an ordered list of cart lines under a single key of a key/value
storage. Reads are forgiving: a missing or unreadable value is an empty cart,
and both a bare JSON list and ``{"cart": [...]}`` are accepted. Every mutation
writes the whole list back and then notifies all subscribers synchronously.
"""
import json
import logging
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy.orm import Session

from geezshoe.models.kv_store import KeyValue
from geezshoe.schemas.cart import CartItem, MIN_QTY, MAX_QTY

logger = logging.getLogger(__name__)

CART_KEY = "cart"

Listener = Callable[[List[CartItem]], None]


def clamp_quantity(qty: int) -> int:
    return min(max(MIN_QTY, int(qty)), MAX_QTY)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlStorage:
    """Key/value storage in the kv_store table, scoped to one namespace (a cart token)."""

    def __init__(self, db: Session, namespace: str):
        self.db = db
        self.namespace = namespace

    def _row(self, key: str) -> Optional[KeyValue]:
        return self.db.query(KeyValue).filter(
            KeyValue.namespace == self.namespace, KeyValue.key == key
        ).first()

    def get(self, key: str) -> Optional[str]:
        row = self._row(key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self._row(key)
        if row:
            row.value = value
        else:
            self.db.add(KeyValue(namespace=self.namespace, key=key, value=value))
        self.db.commit()

    def remove(self, key: str) -> None:
        row = self._row(key)
        if row:
            self.db.delete(row)
            self.db.commit()


class CartStore:
    def __init__(self, storage: KeyValueStorage, key: str = CART_KEY):
        self.storage = storage
        self.key = key
        self._listeners: List[Listener] = []

    # ---- subscriptions ----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, cart: List[CartItem]) -> None:
        for listener in list(self._listeners):
            listener(cart)

    # ---- persistence ----
    def get_cart(self) -> List[CartItem]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except (ValueError, TypeError):
            logger.warning("Unreadable cart under key %r, treating as empty", self.key)
            return []
        if isinstance(parsed, dict):
            parsed = parsed.get("cart") or []
        if not isinstance(parsed, list):
            return []

        cart = []
        for entry in parsed:
            try:
                cart.append(CartItem.model_validate(entry))
            except ValidationError:
                logger.warning("Dropping malformed cart entry under key %r: %r", self.key, entry)
        return cart

    def _save(self, cart: List[CartItem]) -> None:
        self.storage.set(self.key, json.dumps([item.model_dump() for item in cart]))
        self._notify(cart)

    @staticmethod
    def _find(cart: List[CartItem], id: str, size: Optional[float]) -> Optional[CartItem]:
        for item in cart:
            if item.id == str(id) and item.size == size:
                return item
        return None

    # ---- mutations ----
    def add_to_cart(self, item: CartItem) -> List[CartItem]:
        cart = self.get_cart()
        existing = self._find(cart, item.id, item.size)
        if existing:
            existing.qty = clamp_quantity(existing.qty + item.qty)
        else:
            cart.append(item.model_copy(update={"qty": clamp_quantity(item.qty)}))
        self._save(cart)
        return cart

    def remove_from_cart(self, id: str, size: Optional[float] = None) -> List[CartItem]:
        cart = [it for it in self.get_cart() if not (it.id == str(id) and it.size == size)]
        self._save(cart)
        return cart

    def update_cart_item_quantity(self, id: str, qty: int, size: Optional[float] = None) -> List[CartItem]:
        # Upper bound is the caller's job (see clamp_quantity)
        cart = self.get_cart()
        item = self._find(cart, id, size)
        if item:
            item.qty = max(MIN_QTY, int(qty))
            self._save(cart)
        return cart

    def clear_cart(self) -> None:
        self.storage.remove(self.key)
        self._notify([])

    # ---- summaries ----
    def get_cart_total(self) -> float:
        return sum(item.price * item.qty for item in self.get_cart())

    def get_cart_item_count(self) -> int:
        return sum(item.qty for item in self.get_cart())
