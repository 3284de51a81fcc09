"""Coupon domain events."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    """An admin created a new coupon."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount_type = String(required=True)
    discount_value = Float(required=True)
    usage_limit = Integer()
    start_date = DateTime(required=True)
    end_date = DateTime(required=True)


@storefront.event(part_of="Coupon")
class CouponUpdated:
    """An admin edited a coupon's terms."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    updated_at = DateTime(required=True)
