"""HTTP tests for the product form, table and notification endpoints."""

import pytest
from fastapi.testclient import TestClient

from product_manager.main import create_app
from product_manager.services.product_manager import MSG_CREATED, MSG_INVALID

EXAMPLE = {
    "name": "Kursi",
    "description": "Kursi kayu buatan tangan lokal",
    "price": 150000,
    "category": "Pakaian",
    "release_date": "2023-01-01",
    "stock": 10,
    "is_active": True,
}


@pytest.fixture
def client(settings, manager):
    app = create_app(settings=settings, manager=manager)
    with TestClient(app) as test_client:
        yield test_client


def create(client, **overrides):
    client.patch("/api/products/form", json={**EXAMPLE, **overrides})
    response = client.post("/api/products/form/submit")
    assert response.status_code == 201, response.text
    return response.json()["product"]


class TestForm:
    def test_initial_form_is_in_create_mode(self, client):
        form = client.get("/api/products/form").json()

        assert form["mode"] == "create"
        assert form["title"] == "Add Product"
        assert form["submit_label"] == "Add Product"
        assert form["show_cancel"] is False
        assert form["draft"]["stock"] == 0
        assert form["controls"]["stock_max"] == 1000
        assert [c["label"] for c in form["controls"]["categories"]] == [
            "Electronics",
            "Clothing",
            "Food",
            "Beverage",
        ]

    def test_patch_updates_draft_only(self, client):
        response = client.patch("/api/products/form", json={"name": "Meja"})

        assert response.status_code == 200
        assert response.json()["draft"]["name"] == "Meja"
        assert client.get("/api/products/").json()["total"] == 0

    def test_patch_rejects_stock_above_slider(self, client):
        response = client.patch("/api/products/form", json={"stock": 1001})
        assert response.status_code == 400

    def test_patch_rejects_unknown_fields(self, client):
        response = client.patch("/api/products/form", json={"colour": "red"})
        assert response.status_code == 422


class TestSubmit:
    def test_create_example(self, client):
        product = create(client)

        assert product["name"] == "Kursi"
        assert product["price"] == 150000
        table = client.get("/api/products/").json()
        assert table["total"] == 1
        row = table["items"][0]
        assert row["index"] == 1
        assert row["id"] == product["id"]
        assert row["price_display"] == "Rp 150,000"
        assert row["status"] == "Active"
        assert row["category"] == "Pakaian"

        notification = client.get("/api/notifications/current").json()
        assert notification["message"] == MSG_CREATED
        assert notification["variant"] == "success"

    def test_invalid_submit_returns_field_errors(self, client):
        client.patch(
            "/api/products/form",
            json={"name": "", "price": "", "stock": -1},
        )

        response = client.post("/api/products/form/submit")

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == MSG_INVALID
        assert {"name", "description", "price", "category", "release_date", "stock"} <= set(
            detail["errors"]
        )
        form = client.get("/api/products/form").json()
        assert form["errors"] == detail["errors"]
        assert client.get("/api/notifications/current").json()["variant"] == "danger"

    def test_edit_flow(self, client):
        older = create(client, name="Older")
        newer = create(client, name="Newer")

        form = client.post(f"/api/products/{older['id']}/edit").json()
        assert form["mode"] == "edit"
        assert form["title"] == "Edit Product"
        assert form["submit_label"] == "Save Changes"
        assert form["show_cancel"] is True
        assert form["draft"]["name"] == "Older"

        client.patch("/api/products/form", json={"name": "Older v2"})
        response = client.post("/api/products/form/submit")

        assert response.status_code == 200
        assert response.json()["outcome"] == "updated"
        names = [row["name"] for row in client.get("/api/products/").json()["items"]]
        assert names == ["Newer", "Older v2"]
        assert client.get(f"/api/products/{older['id']}").json()["name"] == "Older v2"
        assert client.get(f"/api/products/{newer['id']}").status_code == 200

    def test_cancel_returns_to_create_mode(self, client):
        product = create(client)
        client.post(f"/api/products/{product['id']}/edit")

        form = client.post("/api/products/form/cancel").json()

        assert form["mode"] == "create"
        assert form["draft"]["name"] == ""

    def test_edit_unknown_product_is_silent(self, client):
        response = client.post("/api/products/999/edit")
        assert response.status_code == 200
        assert response.json()["mode"] == "create"


class TestDelete:
    def test_request_and_confirm(self, client):
        product = create(client)

        pending = client.post(f"/api/products/{product['id']}/delete-request").json()
        assert pending["prompt"] == 'Delete product "Kursi"?'

        response = client.post(f"/api/products/delete-requests/{pending['token']}/confirm")

        assert response.status_code == 204
        table = client.get("/api/products/").json()
        assert table["total"] == 0
        assert table["empty_message"] == "No products yet."
        assert client.get(f"/api/products/{product['id']}").status_code == 404

    def test_cancel_keeps_product(self, client):
        product = create(client)
        pending = client.post(f"/api/products/{product['id']}/delete-request").json()

        response = client.post(f"/api/products/delete-requests/{pending['token']}/cancel")

        assert response.status_code == 204
        assert client.get("/api/products/").json()["total"] == 1

    def test_request_for_unknown_product_is_silent(self, client):
        response = client.post("/api/products/999/delete-request")
        assert response.status_code == 204

    def test_unknown_token_is_not_found(self, client):
        response = client.post("/api/products/delete-requests/nope/confirm")
        assert response.status_code == 404


class TestNotifications:
    def test_no_notification_initially(self, client):
        response = client.get("/api/notifications/current")
        assert response.status_code == 200
        assert response.json() is None

    def test_dismiss(self, client):
        create(client)

        response = client.delete("/api/notifications/current")

        assert response.status_code == 204
        assert client.get("/api/notifications/current").json() is None

    def test_notification_expires(self, client, clock):
        create(client)
        clock.advance(3)
        assert client.get("/api/notifications/current").json() is None


class TestHealth:
    def test_live(self, client):
        assert client.get("/health/live").json()["status"] == "ok"

    def test_ready(self, client):
        body = client.get("/health/ready").json()
        assert body["checks"]["storage"]["status"] == "healthy"
