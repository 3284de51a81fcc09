from datetime import UTC, datetime, timedelta

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def outbox():
    """The fake email adapter, emptied around each test."""
    from storefront.notification.channel import get_email_sender, reset_channels

    reset_channels()
    sender = get_email_sender()
    yield sender
    sender.reset()
    reset_channels()


@pytest.fixture()
def now():
    return datetime.now(UTC)


@pytest.fixture()
def window(now):
    """A validity window that is open right now."""
    return now - timedelta(days=1), now + timedelta(days=30)


@pytest.fixture()
def lines():
    return [
        {"product_ref": "prod-1", "name": "Silk Saree", "unit_price": 500.0, "quantity": 2, "size": "M"},
        {"product_ref": "prod-2", "name": "Cotton Dupatta", "unit_price": 300.0, "quantity": 1, "color": "Red"},
    ]


@pytest.fixture()
def address():
    return {
        "name": "Asha Rao",
        "street": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zip_code": "560001",
        "phone": "+91-98450-00000",
    }


@pytest.fixture()
def place_order(lines, address):
    """Place an order through the command pipeline and return its id."""
    import json

    from protean import current_domain
    from storefront.order.placement import PlaceOrder

    def _place(buyer_id="buyer-1", **overrides):
        values = {
            "buyer_id": buyer_id,
            "items": json.dumps(lines),
            "total_amount": 1400.0,
            "shipping_address": json.dumps(address),
            "payment_method": "upi",
            "contact_email": "asha@example.com",
            "shipping_cost": 100.0,
            "tax_amount": 0.0,
        }
        values.update(overrides)
        return current_domain.process(PlaceOrder(**values), asynchronous=False)

    return _place


@pytest.fixture()
def create_coupon(window):
    """Create a coupon through the command pipeline and return its id."""
    from protean import current_domain
    from storefront.coupon.management import CreateCoupon

    def _create(code="SAVE20", **overrides):
        start, end = window
        values = {
            "code": code,
            "discount_type": "percentage",
            "discount_value": 20.0,
            "min_order_amount": 5000.0,
            "max_discount": 1000.0,
            "start_date": start,
            "end_date": end,
            "requester_role": "admin",
        }
        values.update(overrides)
        return current_domain.process(CreateCoupon(**values), asynchronous=False)

    return _create
