"""Application tests for GenerateInvoice — get-or-create and snapshot immutability."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from storefront.exceptions import Forbidden
from storefront.invoice.generation import GenerateInvoice
from storefront.invoice.invoice import Invoice
from storefront.invoice.queries import get_invoice, invoice_for_order, list_invoices
from storefront.order.deletion import DeleteOrder
from storefront.order.status import UpdateOrderStatus
from storefront.settings.billing_profile import UpdateBillingProfile


def _generate(order_id, requester_id="buyer-1", role="customer"):
    invoice_id = current_domain.process(
        GenerateInvoice(order_id=order_id, requester_id=requester_id, requester_role=role),
        asynchronous=False,
    )
    return current_domain.repository_for(Invoice).get(invoice_id)


class TestGenerateInvoice:
    def test_snapshot_of_order(self, place_order):
        order_id = place_order()
        invoice = _generate(order_id)

        assert invoice.order_id == order_id
        assert invoice.buyer_id == "buyer-1"
        assert invoice.subtotal == 1300.0
        assert invoice.total_amount == 1400.0
        assert sorted(line.subtotal for line in invoice.order_items) == [300.0, 1000.0]

    def test_default_company_profile(self, place_order):
        invoice = _generate(place_order())
        assert invoice.company.name == "Vasstra Fashion"
        assert invoice.company.country == "India"

    def test_idempotent(self, place_order):
        order_id = place_order()
        first = _generate(order_id)
        second = _generate(order_id)

        assert second.id == first.id
        assert second.invoice_number == first.invoice_number
        assert len(list_invoices("admin-1", "admin")[0]) == 1

    def test_admin_may_generate(self, place_order):
        invoice = _generate(place_order(), requester_id="admin-1", role="admin")
        assert invoice.buyer_id == "buyer-1"

    def test_other_buyer_forbidden(self, place_order):
        with pytest.raises(Forbidden):
            _generate(place_order(), requester_id="buyer-2")

    def test_other_buyer_forbidden_for_existing_invoice(self, place_order):
        order_id = place_order()
        _generate(order_id)
        with pytest.raises(Forbidden):
            _generate(order_id, requester_id="buyer-2")

    def test_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            _generate("no-such-order")


class TestSnapshotImmutability:
    def test_profile_changes_do_not_touch_issued_invoice(self, place_order):
        order_id = place_order()
        _generate(order_id)

        current_domain.process(
            UpdateBillingProfile(changes=json.dumps({"name": "Vasstra Couture"}), requester_role="admin"),
            asynchronous=False,
        )

        assert _generate(order_id).company.name == "Vasstra Fashion"

    def test_new_invoices_use_updated_profile(self, place_order):
        current_domain.process(
            UpdateBillingProfile(changes=json.dumps({"name": "Vasstra Couture", "gst": "GST-1"}), requester_role="admin"),
            asynchronous=False,
        )
        invoice = _generate(place_order())
        assert invoice.company.name == "Vasstra Couture"
        assert invoice.company.gst == "GST-1"

    def test_order_changes_do_not_touch_issued_invoice(self, place_order):
        order_id = place_order()
        before = _generate(order_id)
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="cancelled", requester_role="admin"), asynchronous=False
        )
        after = _generate(order_id)
        assert after.total_amount == before.total_amount
        assert after.invoice_date == before.invoice_date

    def test_invoice_survives_order_deletion(self, place_order):
        order_id = place_order()
        invoice = _generate(order_id)
        current_domain.process(
            DeleteOrder(order_id=order_id, requester_id="buyer-1", requester_role="customer"), asynchronous=False
        )
        assert invoice_for_order(order_id, "buyer-1", "customer").id == invoice.id


class TestInvoiceReads:
    def test_by_id_for_owner(self, place_order):
        invoice = _generate(place_order())
        assert get_invoice(invoice.id, "buyer-1", "customer").invoice_number == invoice.invoice_number

    def test_by_id_forbidden_for_others(self, place_order):
        invoice = _generate(place_order())
        with pytest.raises(Forbidden):
            get_invoice(invoice.id, "buyer-2", "customer")

    def test_missing_invoice_for_order(self, place_order):
        with pytest.raises(ObjectNotFoundError):
            invoice_for_order(place_order(), "buyer-1", "customer")

    def test_buyers_list_their_own(self, place_order):
        _generate(place_order())
        _generate(place_order(buyer_id="buyer-2"), requester_id="buyer-2")

        invoices, total = list_invoices("buyer-1", "customer")
        assert total == 1
        assert invoices[0].buyer_id == "buyer-1"

        _, admin_total = list_invoices("admin-1", "admin")
        assert admin_total == 2
