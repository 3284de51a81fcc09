"""Rendering tests for the order email templates."""

import json

import pytest
from storefront.notification.templates import NotificationKind, get_template
from storefront.notification.templates.formatting import format_amount


class TestTemplateRegistry:
    @pytest.mark.parametrize("kind", [k.value for k in NotificationKind])
    def test_every_kind_has_a_template(self, kind):
        rendered = get_template(kind).render({"order_id": "ord-1"})
        assert rendered["subject"]
        assert "ord-1" in rendered["body"]

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="No template registered"):
            get_template("order_refunded")


class TestTemplates:
    def test_order_placed_lists_items(self):
        items = json.dumps([{"name": "Silk Saree", "quantity": 2, "unit_price": 500.0}])
        rendered = get_template("order_placed").render(
            {"order_id": "ord-1", "buyer_name": "Asha", "items": items, "total_amount": 1400.0}
        )
        assert "Hi Asha" in rendered["body"]
        assert "Silk Saree x 2: ₹1,000" in rendered["body"]
        assert "Order Total: ₹1,400" in rendered["body"]

    def test_shipped_includes_tracking_id(self):
        rendered = get_template("order_shipped").render({"order_id": "ord-1", "tracking_id": "TRK-9"})
        assert "Tracking ID: TRK-9" in rendered["body"]

    def test_shipped_without_tracking_id(self):
        rendered = get_template("order_shipped").render({"order_id": "ord-1"})
        assert "Tracking ID" not in rendered["body"]

    @pytest.mark.parametrize("kind", [k.value for k in NotificationKind])
    def test_every_template_renders_html(self, kind):
        rendered = get_template(kind).render({"order_id": "ord-1", "buyer_name": "Asha"})
        assert rendered["html_body"].startswith("<!DOCTYPE html>")
        assert "<p>Hi Asha,</p>" in rendered["html_body"]

    def test_html_escapes_buyer_text(self):
        items = json.dumps([{"name": "Saree <Silk>", "quantity": 1, "unit_price": 500.0}])
        rendered = get_template("order_placed").render(
            {"order_id": "ord-1", "buyer_name": "<b>Asha</b>", "items": items, "total_amount": 500.0}
        )
        assert "&lt;b&gt;Asha&lt;/b&gt;" in rendered["html_body"]
        assert "<li>Saree &lt;Silk&gt; x 1: ₹500</li>" in rendered["html_body"]
        assert "<b>Asha</b>" not in rendered["html_body"]


@pytest.mark.parametrize(
    "amount,expected",
    [(1000, "₹1,000"), (1499.5, "₹1,499.50"), (None, "₹0")],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected
