from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Invoice")
class InvoiceGenerated:
    """An invoice snapshot was issued for an order."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    invoice_number = String(required=True)
    total_amount = Float(required=True)
    invoice_date = DateTime(required=True)
