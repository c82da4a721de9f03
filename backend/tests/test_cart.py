import json

from geezshoe.cart import CartStore, MemoryStorage, SqlStorage, clamp_quantity, CART_KEY
from geezshoe.schemas.cart import CartItem


def _item(id="7", size=42, qty=1, price=50.0, **extra):
    return CartItem(id=id, name=f"Shoe {id}", price=price, qty=qty, size=size, **extra)


def test_adding_same_id_and_size_merges_quantity():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(qty=1))
    store.add_to_cart(_item(qty=2))

    cart = store.get_cart()
    assert len(cart) == 1
    assert cart[0].id == "7" and cart[0].size == 42 and cart[0].qty == 3


def test_adding_new_size_appends_entry():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(size=42))
    store.add_to_cart(_item(size=43))
    store.add_to_cart(_item(id="8", size=42))

    assert [(it.id, it.size) for it in store.get_cart()] == [("7", 42), ("7", 43), ("8", 42)]


def test_merged_quantity_never_exceeds_fifteen():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(qty=10))
    store.add_to_cart(_item(qty=10))
    assert store.get_cart()[0].qty == 15


def test_remove_deletes_only_matching_key():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(size=42))
    store.add_to_cart(_item(size=43))

    store.remove_from_cart("7", 42)
    assert [(it.id, it.size) for it in store.get_cart()] == [("7", 43)]


def test_item_without_size_is_its_own_key():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(size=None))
    store.add_to_cart(_item(size=42))
    store.remove_from_cart("7")
    assert [it.size for it in store.get_cart()] == [42]


def test_update_quantity_has_lower_bound_only():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(qty=3))

    store.update_cart_item_quantity("7", 0, 42)
    assert store.get_cart()[0].qty == 1

    store.update_cart_item_quantity("7", -4, 42)
    assert store.get_cart()[0].qty == 1

    store.update_cart_item_quantity("7", 20, 42)
    assert store.get_cart()[0].qty == 20


def test_clamp_quantity():
    assert clamp_quantity(0) == 1
    assert clamp_quantity(-3) == 1
    assert clamp_quantity(1) == 1
    assert clamp_quantity(15) == 15
    assert clamp_quantity(16) == 15


def test_totals_and_count():
    store = CartStore(MemoryStorage())
    store.add_to_cart(_item(qty=2, price=30.0))
    store.add_to_cart(_item(id="9", qty=1, price=45.5))

    assert store.get_cart_total() == 105.5
    assert store.get_cart_item_count() == 3


def test_clear_cart_empties_storage():
    storage = MemoryStorage()
    store = CartStore(storage)
    store.add_to_cart(_item())
    store.clear_cart()

    assert store.get_cart() == []
    assert storage.get(CART_KEY) is None


def test_corrupt_or_missing_storage_reads_as_empty():
    assert CartStore(MemoryStorage()).get_cart() == []
    assert CartStore(MemoryStorage({CART_KEY: "{not json"})).get_cart() == []
    assert CartStore(MemoryStorage({CART_KEY: json.dumps("text")})).get_cart() == []
    assert CartStore(MemoryStorage({CART_KEY: json.dumps([{"qty": "many"}])})).get_cart() == []


def test_wrapped_cart_object_is_accepted():
    raw = json.dumps({"cart": [{"id": 3, "name": "Boot", "price": 80, "qty": 2, "size": 41}]})
    cart = CartStore(MemoryStorage({CART_KEY: raw})).get_cart()
    assert len(cart) == 1
    assert cart[0].id == "3" and cart[0].qty == 2


def test_every_mutation_notifies_subscribers():
    store = CartStore(MemoryStorage())
    seen_a, seen_b = [], []
    store.subscribe(lambda cart: seen_a.append(len(cart)))
    unsubscribe_b = store.subscribe(lambda cart: seen_b.append(len(cart)))

    store.add_to_cart(_item(size=42))
    store.add_to_cart(_item(size=43))
    store.update_cart_item_quantity("7", 4, 42)
    unsubscribe_b()
    store.remove_from_cart("7", 43)
    store.clear_cart()

    assert seen_a == [1, 2, 2, 1, 0]
    assert seen_b == [1, 2, 2]


def test_sql_storage_is_scoped_by_namespace(db):
    alice = CartStore(SqlStorage(db, "cart:alice"))
    bob = CartStore(SqlStorage(db, "cart:bob"))

    alice.add_to_cart(_item(qty=2))
    assert alice.get_cart_item_count() == 2
    assert bob.get_cart() == []

    alice.clear_cart()
    assert alice.get_cart() == []


def test_malformed_entries_are_dropped_individually():
    raw = json.dumps([
        {"id": 3, "name": "Boot", "price": 80, "qty": 2, "size": 41},
        {"id": 4, "qty": "many"},
        {"id": 5, "name": "Sandal", "price": 40, "qty": 1},
    ])
    cart = CartStore(MemoryStorage({CART_KEY: raw})).get_cart()
    assert [it.id for it in cart] == ["3", "5"]
