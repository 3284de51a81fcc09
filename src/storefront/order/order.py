"""Order aggregate (CQRS) — a buyer's purchase and its fulfilment progress.

Orders are created already ``confirmed``. Admins may then set the status
to any value; moves that do not go forward along

    pending → confirmed → shipped → delivered

are accepted but reported by the caller as suspicious. Cancellation is a
status like any other, reachable from everywhere for admins and only from
``pending``/``confirmed`` for the buyer.

Line items, amounts and the shipping address are frozen at placement.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
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
from storefront.order.events import OrderPlaced, OrderStatusChanged, TrackingRecorded


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class TrackingStatus(Enum):
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    UPI = "upi"
    WALLET = "wallet"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Position along the happy path; cancellation sits outside it
_LIFECYCLE_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.CONFIRMED: 1,
    OrderStatus.SHIPPED: 2,
    OrderStatus.DELIVERED: 3,
}

# States from which the buyer may cancel
_BUYER_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

DEFAULT_COUNTRY = "India"


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Invalid status '{value}'"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address captured at checkout; never edited afterwards."""

    name = String(max_length=255)
    street = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100, default=DEFAULT_COUNTRY)
    phone = String(max_length=30)


@storefront.value_object(part_of="Order")
class PaymentDetails:
    transaction_id = String(max_length=255)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    """One purchased product, with name and price copied at checkout."""

    product_ref = Identifier()
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1000)
    size = String(max_length=50)
    color = String(max_length=50)
    sku = String(max_length=100)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@storefront.entity(part_of="Order")
class TrackingUpdate:
    status = String(choices=TrackingStatus, default=TrackingStatus.CONFIRMED.value)
    message = String(max_length=1000)
    location = String(max_length=255)
    timestamp = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    buyer_id = Identifier(required=True)
    items = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    tax_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(ShippingAddress)
    contact_email = String(max_length=254)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_details = ValueObject(PaymentDetails)
    coupon_code = String(max_length=50)
    notes = Text()
    tracking_id = String(max_length=255)
    tracking_updates = HasMany(TrackingUpdate)
    estimated_delivery = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        buyer_id,
        items_data,
        total_amount,
        payment_method,
        shipping_address=None,
        payment_details=None,
        contact_email=None,
        shipping_cost=None,
        tax_amount=None,
        coupon_code=None,
        notes=None,
    ):
        """Create a confirmed order from checkout data.

        ``items_data`` is a list of dicts with OrderLine fields.
        ``shipping_address`` and ``payment_details`` are plain dicts.
        """
        errors = {}
        if not items_data:
            errors["items"] = ["Order must contain at least one item"]
        if total_amount is None or total_amount <= 0:
            errors["total_amount"] = ["Invalid total amount"]
        if not payment_method:
            errors["payment_method"] = ["Payment method is required"]
        if errors:
            raise ValidationError(errors)

        address = dict(shipping_address or {})
        address["country"] = address.get("country") or DEFAULT_COUNTRY
        payment = dict(payment_details or {})
        payment["payment_status"] = payment.get("payment_status") or PaymentStatus.PENDING.value

        now = datetime.now(UTC)
        order = cls(
            buyer_id=buyer_id,
            total_amount=total_amount,
            shipping_cost=shipping_cost or 0.0,
            tax_amount=tax_amount or 0.0,
            status=OrderStatus.CONFIRMED.value,
            shipping_address=ShippingAddress(**address),
            contact_email=contact_email,
            payment_method=payment_method,
            payment_details=PaymentDetails(**payment),
            coupon_code=coupon_code.strip().upper() if coupon_code else None,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        for line in items_data:
            order.add_items(OrderLine(**line))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                buyer_name=order.shipping_address.name,
                contact_email=contact_email,
                items=json.dumps(
                    [
                        {"name": line.name, "quantity": line.quantity, "unit_price": line.unit_price}
                        for line in order.items
                    ]
                ),
                item_count=sum(line.quantity for line in order.items),
                total_amount=total_amount,
                coupon_code=order.coupon_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_forward_move(self, target: OrderStatus) -> bool:
        """True when ``target`` continues along the lifecycle.

        Staying put, and cancelling from anything but ``cancelled``, both
        count as forward.
        """
        current = OrderStatus(self.status)
        if target == current:
            return True
        if target == OrderStatus.CANCELLED:
            return True
        if current == OrderStatus.CANCELLED:
            return False
        return _LIFECYCLE_RANK[target] > _LIFECYCLE_RANK[current]

    def buyer_may_cancel(self) -> bool:
        return OrderStatus(self.status) in _BUYER_CANCELLABLE_STATES

    @property
    def items_subtotal(self) -> float:
        return sum(line.line_total for line in self.items)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def update_status(self, new_status: str, changed_by: str | None = None) -> None:
        """Set the coarse status. Any target is accepted."""
        target = parse_status(new_status)
        previous = self.status
        now = datetime.now(UTC)

        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                buyer_name=self.shipping_address.name if self.shipping_address else None,
                contact_email=self.contact_email,
                previous_status=previous,
                new_status=target.value,
                total_amount=self.total_amount,
                tracking_id=self.tracking_id,
                changed_by=changed_by,
                changed_at=now,
            )
        )

    def cancel(self, by_buyer: bool, changed_by: str | None = None) -> None:
        if by_buyer and not self.buyer_may_cancel():
            raise ValidationError({"status": [f"Order cannot be cancelled once it is {self.status}"]})
        self.update_status(OrderStatus.CANCELLED.value, changed_by=changed_by)

    def record_tracking(
        self,
        tracking_id: str | None = None,
        status: str | None = None,
        message: str | None = None,
        location: str | None = None,
        estimated_delivery: datetime | None = None,
    ) -> None:
        """Set the tracking id and/or append a tracking update.

        An update entry is only appended when a status or message is given.
        """
        has_note = bool(status or message)
        if not (tracking_id or has_note or estimated_delivery):
            raise ValidationError({"tracking": ["Nothing to record"]})

        now = datetime.now(UTC)
        if tracking_id:
            self.tracking_id = tracking_id
        if estimated_delivery:
            self.estimated_delivery = estimated_delivery
        if has_note:
            self.add_tracking_updates(
                TrackingUpdate(
                    status=status or TrackingStatus.CONFIRMED.value,
                    message=message,
                    location=location,
                    timestamp=now,
                )
            )
        self.updated_at = now

        self.raise_(
            TrackingRecorded(
                order_id=str(self.id),
                tracking_id=self.tracking_id,
                status=status,
                message=message,
                location=location,
                recorded_at=now,
            )
        )
