"""Invoice generation — issue an order's invoice on first request.

Generation is get-or-create: once an order has an invoice, every later
request returns that same invoice. ``order_id`` is unique on the Invoice
aggregate, so when two first requests race, the store rejects the second
insert and the loser returns the winner's invoice.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.access import ensure_owner_or_admin
from storefront.domain import storefront
from storefront.invoice.invoice import Invoice
from storefront.order.order import Order
from storefront.settings.billing_profile import current_billing_profile

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Invoice")
class GenerateInvoice:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=Invoice)
class GenerateInvoiceHandler:
    @handle(GenerateInvoice)
    def generate_invoice(self, command):
        repo = current_domain.repository_for(Invoice)

        existing = repo.find_for_order(command.order_id)
        if existing is not None:
            ensure_owner_or_admin(existing.buyer_id, command.requester_id, command.requester_role)
            return str(existing.id)

        order = current_domain.repository_for(Order).get(command.order_id)
        ensure_owner_or_admin(order.buyer_id, command.requester_id, command.requester_role)

        invoice = Invoice.issue(order, current_billing_profile().snapshot())
        try:
            repo.add(invoice)
        except ValidationError:
            winner = repo.find_for_order(command.order_id)
            if winner is None:
                raise
            logger.info("Invoice already issued concurrently", order_id=str(command.order_id))
            return str(winner.id)

        logger.info(
            "Invoice generated",
            invoice_id=str(invoice.id),
            invoice_number=invoice.invoice_number,
            order_id=str(order.id),
        )
        return str(invoice.id)
