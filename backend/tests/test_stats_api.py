CART = {"X-Cart-Token": "stats-browser"}

CHECKOUT = {
    "name": "Hana",
    "phone": "0911000000",
    "isInAddis": True,
    "delivery_location": "Bole",
}


def _place_order(client, product):
    client.post("/cart/add", headers=CART, json={
        "id": product.id, "name": product.name, "price": product.real_price, "qty": 1, "size": 42,
    })
    resp = client.post("/orders", headers=CART, json=CHECKOUT)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_dashboard_requires_admin(client):
    assert client.get("/stats/dashboard").status_code in (401, 403)


def test_dashboard_counts(client, admin_headers, make_product):
    boot = make_product(name="Boot", item_number=5)
    make_product(name="Sandal", item_number=0)
    first = _place_order(client, boot)
    _place_order(client, boot)

    stats = client.get("/stats/dashboard", headers=admin_headers).json()
    assert stats == {"total_orders": 2, "pending_orders": 2, "total_products": 2, "out_of_stock_items": 1}

    assert client.post(f"/orders/{first}/fulfill", headers=admin_headers).status_code == 200

    stats = client.get("/stats/dashboard", headers=admin_headers).json()
    assert stats["pending_orders"] == 1
    assert stats["total_orders"] == 1
    assert stats["out_of_stock_items"] == 1
