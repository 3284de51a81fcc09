"""Domain tests for Invoice.issue — the snapshot taken from an order."""

import re
from datetime import UTC, datetime, timedelta

from storefront.invoice.events import InvoiceGenerated
from storefront.invoice.invoice import Invoice, invoice_number_for
from storefront.order.order import Order

PROFILE = {
    "logo": "",
    "name": "Vasstra Fashion",
    "gst": "29ABCDE1234F1Z5",
    "address": "4 Residency Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560025",
    "country": "India",
    "phone": "080-4000-0000",
    "email": "billing@vasstra.example",
}


def _order(lines, address, **overrides):
    values = {
        "buyer_id": "buyer-1",
        "items_data": lines,
        "total_amount": 1400.0,
        "payment_method": "upi",
        "shipping_address": address,
        "contact_email": "asha@example.com",
        "shipping_cost": 100.0,
        "tax_amount": 12.5,
        "payment_details": {"transaction_id": "TXN-77"},
    }
    values.update(overrides)
    return Order.place(**values)


class TestInvoiceIssue:
    def test_subtotal_excludes_shipping(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        assert invoice.subtotal == 1300.0
        assert invoice.shipping_cost == 100.0
        assert invoice.total_amount == 1400.0
        assert invoice.tax_amount == 12.5

    def test_subtotal_equals_total_without_shipping(self, lines, address):
        invoice = Invoice.issue(_order(lines, address, shipping_cost=0), PROFILE)
        assert invoice.subtotal == invoice.total_amount

    def test_line_subtotals(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        subtotals = sorted(line.subtotal for line in invoice.order_items)
        assert subtotals == [300.0, 1000.0]

    def test_customer_copied_from_shipping_address(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        assert invoice.customer.name == "Asha Rao"
        assert invoice.customer.address == "12 MG Road"
        assert invoice.customer.email == "asha@example.com"
        assert invoice.customer.country == "India"

    def test_company_snapshot(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        assert invoice.company.name == "Vasstra Fashion"
        assert invoice.company.gst == "29ABCDE1234F1Z5"

    def test_payment_copied(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        assert invoice.payment_method == "upi"
        assert invoice.transaction_id == "TXN-77"

    def test_due_thirty_days_after_issue(self, lines, address):
        issued_at = datetime(2026, 5, 1, 9, 30, tzinfo=UTC)
        invoice = Invoice.issue(_order(lines, address), PROFILE, issued_at=issued_at)
        assert invoice.due_date - invoice.invoice_date == timedelta(days=30)

    def test_invoice_number_format(self, lines, address):
        order = _order(lines, address)
        invoice = Invoice.issue(order, PROFILE)
        assert re.fullmatch(r"INV-\d{13}-.{6}", invoice.invoice_number)
        assert invoice.invoice_number.endswith(str(order.id)[-6:])

    def test_raises_invoice_generated(self, lines, address):
        invoice = Invoice.issue(_order(lines, address), PROFILE)
        assert isinstance(invoice._events[-1], InvoiceGenerated)


def test_invoice_number_uses_epoch_millis():
    issued_at = datetime(2026, 1, 1, tzinfo=UTC)
    assert invoice_number_for("abcdef123456", issued_at) == "INV-1767225600000-123456"
