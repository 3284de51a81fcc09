"""Invoice aggregate (CQRS) — an immutable billing snapshot of one order.

An invoice is issued at most once per order, copying the order's lines and
amounts together with the company billing profile as it stood at that
moment. Nothing on an issued invoice changes afterwards, not even when the
order or the billing profile is edited.
"""

from datetime import UTC, datetime, timedelta

from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.invoice.events import InvoiceGenerated

PAYMENT_TERMS = timedelta(days=30)


def invoice_number_for(order_id, issued_at: datetime) -> str:
    """``INV-<epoch millis>-<last six characters of the order id>``."""
    return f"INV-{int(issued_at.timestamp() * 1000)}-{str(order_id)[-6:]}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Invoice")
class CustomerDetails:
    name = String(max_length=255)
    email = String(max_length=254)
    phone = String(max_length=30)
    address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@storefront.value_object(part_of="Invoice")
class CompanySnapshot:
    """The seller's billing profile as printed on this invoice."""

    logo = Text()
    name = String(max_length=255)
    gst = String(max_length=50)
    address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    phone = String(max_length=30)
    email = String(max_length=254)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Invoice")
class InvoiceLine:
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)
    image = String(max_length=1000)
    size = String(max_length=50)
    color = String(max_length=50)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Invoice:
    order_id = Identifier(required=True, unique=True)
    buyer_id = Identifier(required=True)
    invoice_number = String(required=True, max_length=100)
    invoice_date = DateTime(required=True)
    due_date = DateTime(required=True)
    customer = ValueObject(CustomerDetails)
    order_items = HasMany(InvoiceLine)
    subtotal = Float(required=True)
    tax_amount = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total_amount = Float(required=True)
    company = ValueObject(CompanySnapshot)
    payment_method = String(max_length=50)
    transaction_id = String(max_length=255)
    notes = Text()
    created_at = DateTime()

    @classmethod
    def issue(cls, order, company_profile: dict, issued_at: datetime | None = None):
        """Snapshot ``order`` and the billing profile into a new invoice.

        ``company_profile`` is a plain dict of profile fields.
        """
        issued_at = issued_at or datetime.now(UTC)
        shipping_cost = order.shipping_cost or 0.0
        address = order.shipping_address
        payment = order.payment_details

        invoice = cls(
            order_id=str(order.id),
            buyer_id=str(order.buyer_id),
            invoice_number=invoice_number_for(order.id, issued_at),
            invoice_date=issued_at,
            due_date=issued_at + PAYMENT_TERMS,
            customer=CustomerDetails(
                name=address.name if address else None,
                email=order.contact_email,
                phone=address.phone if address else None,
                address=address.street if address else None,
                city=address.city if address else None,
                state=address.state if address else None,
                zip_code=address.zip_code if address else None,
                country=address.country if address else None,
            ),
            subtotal=order.total_amount - shipping_cost,
            tax_amount=order.tax_amount or 0.0,
            shipping_cost=shipping_cost,
            total_amount=order.total_amount,
            company=CompanySnapshot(**company_profile),
            payment_method=order.payment_method,
            transaction_id=payment.transaction_id if payment else None,
            notes=order.notes,
            created_at=issued_at,
        )
        for line in order.items:
            invoice.add_order_items(
                InvoiceLine(
                    name=line.name,
                    quantity=line.quantity,
                    price=line.unit_price,
                    subtotal=line.unit_price * line.quantity,
                    image=line.image,
                    size=line.size,
                    color=line.color,
                )
            )

        invoice.raise_(
            InvoiceGenerated(
                invoice_id=str(invoice.id),
                order_id=invoice.order_id,
                buyer_id=invoice.buyer_id,
                invoice_number=invoice.invoice_number,
                total_amount=invoice.total_amount,
                invoice_date=issued_at,
            )
        )
        return invoice
