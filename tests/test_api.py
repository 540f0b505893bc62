"""HTTP contract tests: status codes, validation and response shapes."""

from app.models.inventory import Inventory


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "API is running successfully!"}


# =============================================================================
# Products
# =============================================================================


class TestProducts:

    def test_create_with_zero_price_and_default_unit(self, client):
        response = client.post("/api/products", json={"name": "Free sample", "price": 0})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product added"

        products = client.get("/api/products").json()
        assert products == [
            {"id": body["product_id"], "name": "Free sample", "price": 0.0, "unit": "pcs"}
        ]

    def test_create_requires_price(self, client):
        response = client.post("/api/products", json={"name": "Cola"})

        assert response.status_code == 400
        assert "price" in response.json()["error"]

    def test_create_rejects_null_price(self, client):
        response = client.post("/api/products", json={"name": "Cola", "price": None})

        assert response.status_code == 400

    def test_create_requires_name(self, client):
        assert client.post("/api/products", json={"price": 1}).status_code == 400
        assert client.post("/api/products", json={"name": "  ", "price": 1}).status_code == 400

    def test_update(self, client, make_product):
        product_id = make_product(name="Cola", price="1.50")

        response = client.put(
            f"/api/products/{product_id}",
            json={"name": "Cola Zero", "price": 1.75, "unit": "can"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Product updated"}
        assert client.get("/api/products").json() == [
            {"id": product_id, "name": "Cola Zero", "price": 1.75, "unit": "can"}
        ]

    def test_update_unknown(self, client):
        response = client.put("/api/products/404", json={"name": "X", "price": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_delete_unreferenced(self, client, make_product):
        product_id = make_product()

        response = client.delete(f"/api/products/{product_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted"}
        assert client.get("/api/products").json() == []

    def test_delete_referenced_surfaces_store_message(self, client, make_machine, make_product, make_inventory):
        product_id = make_product()
        make_inventory(make_machine(), product_id, 3)

        response = client.delete(f"/api/products/{product_id}")

        assert response.status_code == 400
        assert "FOREIGN KEY" in response.json()["error"]
        assert len(client.get("/api/products").json()) == 1


def test_list_machines(client, make_machine):
    first = make_machine(location="Lobby", description="Snacks")
    second = make_machine()

    assert client.get("/api/machines").json() == [
        {"machine_id": first, "location": "Lobby", "description": "Snacks"},
        {"machine_id": second, "location": "", "description": ""},
    ]


# =============================================================================
# Inventory
# =============================================================================


class TestInventory:

    def test_restock_then_list(self, client, make_machine, make_product):
        machine_id = make_machine()
        product_id = make_product(name="Cola", price="1.50")
        payload = {"machine_id": machine_id, "product_id": product_id, "qty": 5}

        first = client.post("/api/inventory", json=payload)
        second = client.post("/api/inventory", json={**payload, "qty": 3})

        assert first.status_code == 201
        assert first.json() == {"ok": True}
        assert second.status_code == 201

        rows = client.get(f"/api/inventory/{machine_id}").json()
        assert len(rows) == 1
        assert rows[0]["qty"] == 8
        assert rows[0]["product_name"] == "Cola"
        assert rows[0]["price"] == 1.5

    def test_restock_accepts_quantity_alias(self, client, make_machine, make_product):
        machine_id = make_machine()
        payload = {"machine_id": machine_id, "product_id": make_product(), "quantity": 4}

        assert client.post("/api/inventory", json=payload).status_code == 201
        assert client.get(f"/api/inventory/{machine_id}").json()[0]["qty"] == 4

    def test_restock_missing_or_zero_fields(self, client, make_machine, make_product):
        machine_id = make_machine()
        product_id = make_product()

        for payload in [
            {"product_id": product_id, "qty": 1},
            {"machine_id": machine_id, "qty": 1},
            {"machine_id": machine_id, "product_id": product_id},
            {"machine_id": machine_id, "product_id": product_id, "qty": 0},
        ]:
            response = client.post("/api/inventory", json=payload)
            assert response.status_code == 400
            assert "error" in response.json()

        assert client.get(f"/api/inventory/{machine_id}").json() == []

    def test_restock_unknown_product(self, client, make_machine):
        response = client.post(
            "/api/inventory",
            json={"machine_id": make_machine(), "product_id": 999, "qty": 1},
        )

        assert response.status_code == 400

    def test_set_quantity_returns_joined_row(self, client, make_machine, make_product, make_inventory):
        machine_id = make_machine()
        product_id = make_product(name="Gum", price="0.75")
        inv_id = make_inventory(machine_id, product_id, 9)

        response = client.put(f"/api/inventory/{inv_id}", json={"qty": 2})

        assert response.status_code == 200
        assert response.json() == {
            "inv_id": inv_id,
            "machine_id": machine_id,
            "product_id": product_id,
            "product_name": "Gum",
            "price": 0.75,
            "qty": 2,
        }

    def test_set_quantity_validation(self, client, db, make_machine, make_product, make_inventory):
        inv_id = make_inventory(make_machine(), make_product(), 9)

        assert client.put(f"/api/inventory/{inv_id}", json={}).status_code == 400
        assert client.put(f"/api/inventory/{inv_id}", json={"qty": "abc"}).status_code == 400
        assert client.put(f"/api/inventory/{inv_id}", json={"qty": -1}).status_code == 400
        nan = client.put(
            f"/api/inventory/{inv_id}",
            content=b'{"qty": NaN}',
            headers={"Content-Type": "application/json"},
        )
        assert nan.status_code == 400

        db.expire_all()
        assert db.get(Inventory, inv_id).qty == 9

    def test_oversized_quantities_are_client_errors(self, client, db, make_machine, make_product, make_inventory):
        machine_id = make_machine()
        product_id = make_product()
        inv_id = make_inventory(machine_id, product_id, 9)

        responses = [
            client.put(f"/api/inventory/{inv_id}", json={"qty": 2**63}),
            client.put(f"/api/inventory/{inv_id}", json={"qty": 2_147_483_648}),
            client.post(
                "/api/inventory",
                json={"machine_id": machine_id, "product_id": product_id, "qty": 2**63},
            ),
            client.post(f"/api/inventory/{inv_id}/remove", json={"amount": 2**63}),
            client.post(
                "/api/inventory/distribute",
                json={"product_id": product_id, "total_qty": 2**64},
            ),
        ]

        for response in responses:
            assert response.status_code == 400
            assert "error" in response.json()

        db.expire_all()
        assert db.get(Inventory, inv_id).qty == 9

    def test_restock_past_column_limit_rejected(self, client, db, make_machine, make_product, make_inventory):
        machine_id = make_machine()
        product_id = make_product()
        inv_id = make_inventory(machine_id, product_id, 2_147_483_647)

        response = client.post(
            "/api/inventory",
            json={"machine_id": machine_id, "product_id": product_id, "qty": 1},
        )

        assert response.status_code == 400
        db.expire_all()
        assert db.get(Inventory, inv_id).qty == 2_147_483_647

    def test_remove_clamps(self, client, make_machine, make_product, make_inventory):
        inv_id = make_inventory(make_machine(), make_product(), 10)

        response = client.post(f"/api/inventory/{inv_id}/remove", json={"amount": 15})

        assert response.status_code == 200
        assert response.json()["qty"] == 0

    def test_delete_row(self, client, make_machine, make_product, make_inventory):
        machine_id = make_machine()
        inv_id = make_inventory(machine_id, make_product(), 10)

        response = client.delete(f"/api/inventory/{inv_id}")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get(f"/api/inventory/{machine_id}").json() == []

    def test_distribute(self, client, make_machine, make_product):
        machines = [make_machine() for _ in range(4)]
        product_id = make_product()

        response = client.post(
            "/api/inventory/distribute",
            json={"product_id": product_id, "total_qty": 6},
        )

        assert response.status_code == 201
        assert response.json() == {
            "ok": True,
            "allocations": [
                {"machine_id": machines[0], "qty": 2},
                {"machine_id": machines[1], "qty": 2},
                {"machine_id": machines[2], "qty": 1},
                {"machine_id": machines[3], "qty": 1},
            ],
        }


# =============================================================================
# Metrics
# =============================================================================


class TestMetricsEndpoints:

    def test_metrics_shape_on_empty_store(self, client):
        response = client.get("/api/metrics")

        assert response.status_code == 200
        assert response.json() == {
            "total_products": 0,
            "total_machines": 0,
            "total_stock_quantity": 0,
            "total_stock_value": 0.0,
            "total_revenue": 0.0,
            "total_sales_count": 0,
            "top_selling_products": [],
        }

    def test_top_limit(self, client, make_product, make_sale):
        ids = [make_product(name=f"P{n}") for n in range(4)]
        make_sale(1, items=[(pid, n + 1) for n, pid in enumerate(ids)])

        top = client.get("/api/metrics", params={"top": 2}).json()["top_selling_products"]

        assert top == [
            {"product_name": "P3", "total_sales": 4},
            {"product_name": "P2", "total_sales": 3},
        ]

    def test_compat_aliases_agree_with_primary(self, client, make_machine, make_product, make_inventory):
        make_inventory(make_machine(), make_product(price="2.50"), 4)

        primary = client.get("/api/metrics").json()
        compat = client.get("/api/dashboard-metrics").json()

        assert compat == client.get("/api/dashboard/summary").json()
        assert compat == {
            "totalProducts": primary["total_products"],
            "activeMachines": primary["total_machines"],
            "itemsInStock": primary["total_stock_quantity"],
            "stockValue": primary["total_stock_value"],
        }

    def test_revenue_trend_includes_today(self, client, make_sale):
        make_sale(4.00)
        make_sale(1.50)

        trend = client.get("/api/revenue-trend").json()

        assert len(trend) == 1
        assert trend[0]["revenue"] == 5.5

    def test_revenue_trend_days_bounds(self, client):
        assert client.get("/api/revenue-trend", params={"days": 0}).status_code == 400

    def test_machine_distribution(self, client, make_machine):
        machine_id = make_machine(description="Hallway")

        assert client.get("/api/machine-distribution").json() == [
            {"machine_id": machine_id, "machine_name": "Hallway", "total_qty": 0, "total_value": 0.0}
        ]
