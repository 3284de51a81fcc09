import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import coupon_router, invoice_router, order_router, register_error_handlers, settings_router

BUYER = {"X-Account-Id": "buyer-1", "X-Account-Role": "customer"}
OTHER_BUYER = {"X-Account-Id": "buyer-2", "X-Account-Role": "customer"}
ADMIN = {"X-Account-Id": "admin-1", "X-Account-Role": "admin"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(coupon_router)
    app.include_router(invoice_router)
    app.include_router(settings_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def buyer():
    return BUYER


@pytest.fixture()
def other_buyer():
    return OTHER_BUYER


@pytest.fixture()
def admin():
    return ADMIN


@pytest.fixture()
def order_payload():
    return {
        "items": [
            {"productId": "prod-1", "name": "Silk Saree", "price": 500, "quantity": 2, "size": "M"},
            {"productId": "prod-2", "name": "Cotton Dupatta", "price": 300, "quantity": 1},
        ],
        "totalAmount": 1400,
        "shippingCost": 100,
        "shippingAddress": {
            "name": "Asha Rao",
            "address": "12 MG Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560001",
            "phone": "+91-98450-00000",
        },
        "paymentMethod": "cod",
        "contactEmail": "asha@example.com",
    }


@pytest.fixture()
def create_order(client, buyer, order_payload):
    def _create(headers=None, **overrides):
        payload = {**order_payload, **overrides}
        response = client.post("/orders", json=payload, headers=headers or buyer)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create
