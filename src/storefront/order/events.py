"""Order domain events — facts about placed orders and their progress."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out and the order was persisted."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    buyer_name = String()
    contact_email = String()
    items = Text(required=True)  # JSON list of {name, quantity, unit_price}
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    coupon_code = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The coarse order status was set, by an admin or a cancelling buyer."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    buyer_name = String()
    contact_email = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    total_amount = Float()
    tracking_id = String()
    changed_by = String()
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class TrackingRecorded:
    """Shipment tracking detail was added to an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_id = String()
    status = String()
    message = String()
    location = String()
    recorded_at = DateTime(required=True)
