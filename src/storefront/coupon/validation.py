"""Coupon validation — the discount preview shown at checkout.

Checks run in a fixed order and the first failure wins:
lookup (active, inside the window) → minimum order → usage limit.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon
from storefront.exceptions import CouponNotFound, MinimumOrderNotMet, UsageLimitReached

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CouponQuote:
    coupon_id: str
    code: str
    discount_type: str
    discount_value: float
    discount: int
    max_discount: float | None


def validate_coupon(code: str, order_amount: float, now: datetime | None = None) -> CouponQuote:
    """Compute the discount ``code`` gives on ``order_amount``.

    Raises:
        CouponNotFound: unknown code, inactive coupon, or outside its window.
        MinimumOrderNotMet: ``order_amount`` below the coupon's floor.
        UsageLimitReached: the coupon has been redeemed ``usage_limit`` times.
    """
    now = now or datetime.now(UTC)
    coupon = current_domain.repository_for(Coupon).find_by_code(code)

    if coupon is None or not coupon.is_redeemable_at(now):
        logger.info("Coupon lookup failed", code=code)
        raise CouponNotFound("Coupon not found or expired")

    if order_amount < coupon.min_order_amount:
        raise MinimumOrderNotMet(coupon.min_order_amount)

    if coupon.usage_exhausted:
        raise UsageLimitReached()

    return CouponQuote(
        coupon_id=str(coupon.id),
        code=coupon.code,
        discount_type=coupon.discount_type,
        discount_value=coupon.discount_value,
        discount=coupon.discount_for(order_amount),
        max_discount=coupon.max_discount,
    )
