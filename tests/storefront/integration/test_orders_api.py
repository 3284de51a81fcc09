"""Integration tests for the /orders endpoints."""


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, buyer, order_payload):
        response = client.post("/orders", json=order_payload, headers=buyer)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "confirmed"
        assert data["buyerId"] == "buyer-1"
        assert data["totalAmount"] == 1400
        assert data["shippingAddress"]["street"] == "12 MG Road"
        assert data["shippingAddress"]["zipCode"] == "560001"
        assert data["shippingAddress"]["country"] == "India"
        assert data["items"][0]["productId"] == "prod-1"
        assert data["trackingUpdates"] == []

    def test_requires_identity(self, client, order_payload):
        response = client.post("/orders", json=order_payload)
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    def test_empty_cart(self, client, buyer, order_payload):
        response = client.post("/orders", json={**order_payload, "items": []}, headers=buyer)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_input"
        assert "items" in body["messages"]

    def test_zero_total(self, client, buyer, order_payload):
        response = client.post("/orders", json={**order_payload, "totalAmount": 0}, headers=buyer)
        assert response.status_code == 400

    def test_missing_payment_method(self, client, buyer, order_payload):
        payload = {key: value for key, value in order_payload.items() if key != "paymentMethod"}
        response = client.post("/orders", json=payload, headers=buyer)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_malformed_body(self, client, buyer, order_payload):
        response = client.post("/orders", json={**order_payload, "totalAmount": "lots"}, headers=buyer)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"


class TestReadOrderEndpoints:
    def test_my_orders(self, client, buyer, other_buyer, create_order):
        create_order()
        create_order(headers=other_buyer)
        response = client.get("/orders/my-orders", headers=buyer)
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_owner_reads_order(self, client, buyer, create_order):
        order_id = create_order()
        response = client.get(f"/orders/{order_id}", headers=buyer)
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_other_buyer_forbidden(self, client, other_buyer, create_order):
        order_id = create_order()
        response = client.get(f"/orders/{order_id}", headers=other_buyer)
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_missing_order(self, client, buyer):
        response = client.get("/orders/does-not-exist", headers=buyer)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_admin_listing(self, client, admin, create_order):
        for _ in range(3):
            create_order()
        response = client.get("/orders", params={"page": 1, "limit": 2}, headers=admin)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert len(data["orders"]) == 2

    def test_listing_requires_admin(self, client, buyer):
        assert client.get("/orders", headers=buyer).status_code == 403

    def test_confirmed_count(self, client, admin, create_order):
        create_order()
        response = client.get("/orders/count/confirmed", headers=admin)
        assert response.json() == {"count": 1}


class TestStatusEndpoints:
    def test_admin_updates_status(self, client, admin, create_order):
        order_id = create_order()
        response = client.put(f"/orders/{order_id}/status", json={"status": "delivered"}, headers=admin)
        assert response.status_code == 200
        assert response.json()["status"] == "delivered"

    def test_buyer_cannot_update_status(self, client, buyer, create_order):
        order_id = create_order()
        response = client.put(f"/orders/{order_id}/status", json={"status": "shipped"}, headers=buyer)
        assert response.status_code == 403

    def test_invalid_status(self, client, admin, create_order):
        order_id = create_order()
        response = client.put(f"/orders/{order_id}/status", json={"status": "lost"}, headers=admin)
        assert response.status_code == 400

    def test_buyer_cancels(self, client, buyer, create_order):
        order_id = create_order()
        response = client.put(f"/orders/{order_id}/cancel", headers=buyer)
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"


class TestTrackingEndpoints:
    def test_append_and_track(self, client, admin, create_order):
        order_id = create_order()
        response = client.post(
            f"/orders/{order_id}/tracking",
            json={"trackingId": "TRK-42", "status": "in_transit", "message": "Left hub", "location": "Pune"},
            headers=admin,
        )
        assert response.status_code == 200
        assert response.json()["trackingUpdates"][0]["location"] == "Pune"
        assert response.json()["status"] == "confirmed"

        tracked = client.get("/orders/track/TRK-42")
        assert tracked.status_code == 200
        assert tracked.json()["id"] == order_id

    def test_unknown_tracking_id(self, client):
        assert client.get("/orders/track/TRK-NONE").status_code == 404


class TestDeleteEndpoint:
    def test_owner_deletes(self, client, buyer, create_order):
        order_id = create_order()
        response = client.delete(f"/orders/{order_id}", headers=buyer)
        assert response.status_code == 200
        assert client.get(f"/orders/{order_id}", headers=buyer).status_code == 404

    def test_other_buyer_cannot_delete(self, client, other_buyer, create_order):
        order_id = create_order()
        assert client.delete(f"/orders/{order_id}", headers=other_buyer).status_code == 403
