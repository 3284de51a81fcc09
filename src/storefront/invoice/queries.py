"""Read access to invoices, restricted to their owner and admins."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.access import ensure_owner_or_admin, is_admin
from storefront.invoice.invoice import Invoice


def invoice_for_order(order_id: str, requester_id: str, requester_role: str | None) -> Invoice:
    invoice = current_domain.repository_for(Invoice).find_for_order(order_id)
    if invoice is None:
        raise ObjectNotFoundError("Invoice not found")
    ensure_owner_or_admin(invoice.buyer_id, requester_id, requester_role)
    return invoice


def get_invoice(invoice_id: str, requester_id: str, requester_role: str | None) -> Invoice:
    invoice = current_domain.repository_for(Invoice).get(invoice_id)
    ensure_owner_or_admin(invoice.buyer_id, requester_id, requester_role)
    return invoice


def list_invoices(requester_id: str, requester_role: str | None, page: int = 1, limit: int = 10):
    """Admins page through every invoice; buyers get all of their own.

    Returns ``(invoices, total)``.
    """
    repo = current_domain.repository_for(Invoice)
    if is_admin(requester_role):
        results = repo.page(page=max(page, 1), limit=max(limit, 1))
        return results.items, results.total
    invoices = repo.for_buyer(requester_id)
    return invoices, len(invoices)
