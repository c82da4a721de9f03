import pytest
from sqlalchemy.exc import OperationalError

from geezshoe.cart import CartStore, MemoryStorage
from geezshoe.errors import OrderValidationError, OrderPlacementError
from geezshoe.models.order import Order
from geezshoe.repositories import OrderRepository
from geezshoe.schemas.cart import CartItem
from geezshoe.schemas.order import OrderFormData
from geezshoe.services.checkout import place_order, validate_order_form


def _form(**overrides):
    data = {
        "name": "  Abebe Kebede ",
        "email": " Abebe@Mail.COM ",
        "phone": "+251 911-22-33-44",
        "description": " leave at gate ",
        "isInAddis": True,
        "coupon_code": " GEEZ10 ",
        "delivery_location": " Bole, Addis Ababa ",
    }
    data.update(overrides)
    return OrderFormData.model_validate(data)


def _cart(*items):
    store = CartStore(MemoryStorage())
    for item in items:
        store.add_to_cart(item)
    return store


def _item(id, qty, price, size=None, preorder=False):
    return CartItem(id=id, name=f"Shoe {id}", price=price, qty=qty, size=size, is_preorder=preorder)


class FailingOrderRepository(OrderRepository):
    def add(self, order):
        raise OperationalError("INSERT INTO orders", {}, Exception("database is locked"))


def test_place_order_flattens_cart_into_parallel_arrays(db):
    store = _cart(_item("1", 2, 120.0, size=42), _item("2", 1, 99.5), _item("3", 3, 10.25, size=40.5))

    order = place_order(_form(), store, OrderRepository(db))

    n = 3
    for column in (order.product_ids, order.product_names, order.product_sizes,
                   order.quantities, order.unit_prices, order.total_prices):
        assert len(column) == n
    for i in range(n):
        assert order.total_prices[i] == order.unit_prices[i] * order.quantities[i]

    assert order.product_ids == ["1", "2", "3"]
    assert order.product_sizes == ["42", "N/A", "40.5"]
    assert order.order_status == "pending"


def test_place_order_normalizes_fields_and_clears_cart(db):
    store = _cart(_item("1", 1, 50.0))

    order = place_order(_form(), store, OrderRepository(db))

    assert order.customer_name == "Abebe Kebede"
    assert order.customer_email == "abebe@mail.com"
    assert order.customer_phone == "+251 911-22-33-44"
    assert order.order_description == "leave at gate"
    assert order.coupon_code == "GEEZ10"
    assert order.delivery_location == "Bole, Addis Ababa"
    assert order.orderplace is True
    assert store.get_cart() == []
    assert db.query(Order).count() == 1


def test_email_is_optional(db):
    order = place_order(_form(email=None, coupon_code=""), _cart(_item("1", 1, 50.0)), OrderRepository(db))
    assert order.customer_email is None
    assert order.coupon_code is None

    order = place_order(_form(email="   "), _cart(_item("1", 1, 50.0)), OrderRepository(db))
    assert order.customer_email is None


def test_malformed_email_is_rejected_before_any_write(db):
    store = _cart(_item("1", 1, 50.0))

    with pytest.raises(OrderValidationError) as exc:
        place_order(_form(email="not-an-email"), store, OrderRepository(db))

    assert set(exc.value.errors) == {"email"}
    assert db.query(Order).count() == 0
    assert store.get_cart_item_count() == 1


def test_validation_collects_every_field_error():
    errors = validate_order_form(_form(name=" ", phone="call me", delivery_location=None, email="x@y"), [])
    assert set(errors) == {"name", "phone", "delivery_location", "email", "cart"}


def test_empty_cart_is_rejected(db):
    with pytest.raises(OrderValidationError) as exc:
        place_order(_form(), _cart(), OrderRepository(db))
    assert exc.value.errors == {"cart": "Cart is empty"}


def test_preorder_flag_is_set_when_any_line_is_preorder(db):
    order = place_order(_form(), _cart(_item("1", 1, 10.0), _item("2", 1, 10.0, preorder=True)), OrderRepository(db))
    assert order.is_preorder is True

    order = place_order(_form(), _cart(_item("1", 1, 10.0)), OrderRepository(db))
    assert order.is_preorder is False


def test_failed_insert_leaves_cart_untouched(db):
    store = _cart(_item("1", 2, 50.0, size=42), _item("2", 1, 70.0))
    before = store.get_cart()

    with pytest.raises(OrderPlacementError):
        place_order(_form(), store, FailingOrderRepository(db))

    assert store.get_cart() == before
    assert db.query(Order).count() == 0
