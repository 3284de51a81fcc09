"""Storefront errors that carry a machine-readable reason.

Malformed input is reported with Protean's ``ValidationError`` and missing
records with ``ObjectNotFoundError``; the classes below cover authorization
and coupon rejections, which need their own HTTP status and reason string.
"""

from storefront.notification.templates.formatting import format_amount


class StorefrontError(Exception):
    reason = "storefront_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Forbidden(StorefrontError):
    reason = "forbidden"
    status_code = 403


class CouponRejected(StorefrontError):
    """Base class for the reasons a coupon cannot be applied."""


class CouponNotFound(CouponRejected):
    reason = "coupon_not_found"
    status_code = 404


class MinimumOrderNotMet(CouponRejected):
    reason = "minimum_order_not_met"

    def __init__(self, min_order_amount: float):
        super().__init__(f"Minimum order amount is {format_amount(min_order_amount)}")
        self.min_order_amount = min_order_amount


class UsageLimitReached(CouponRejected):
    reason = "usage_limit_reached"

    def __init__(self, message: str = "This coupon has reached its usage limit"):
        super().__init__(message)


class RedemptionConflict(StorefrontError):
    """Concurrent redemptions kept winning the usage counter; the coupon may still have uses left."""

    reason = "redemption_conflict"
    status_code = 409

    def __init__(self, message: str = "Coupon is being redeemed concurrently, please retry"):
        super().__init__(message)
