"""Coupon redemption — recording one use of a coupon.

Usage is recorded after an order is persisted and is not part of the
order's unit of work. The increment is a compare-and-set on the stored
counter guarded by the usage limit, so concurrent redemptions can never
push ``used_count`` past ``usage_limit``.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon
from storefront.domain import storefront
from storefront.exceptions import RedemptionConflict, UsageLimitReached

logger = structlog.get_logger(__name__)

MAX_REDEMPTION_ATTEMPTS = 5


@storefront.command(part_of="Coupon")
class RecordCouponUsage:
    """Increment a coupon's usage count by exactly one."""

    coupon_id = Identifier(required=True)


def redeem_coupon(coupon_id: str) -> int:
    """Increment ``used_count`` by one and return the new count.

    Re-reads and retries when another redemption wins the compare-and-set.

    Raises:
        ObjectNotFoundError: no coupon with ``coupon_id``.
        UsageLimitReached: the limit was reached before this redemption landed.
        RedemptionConflict: every attempt lost the compare-and-set to a competing redemption.
    """
    repo = current_domain.repository_for(Coupon)

    for attempt in range(1, MAX_REDEMPTION_ATTEMPTS + 1):
        coupon = repo.get(coupon_id)
        if coupon.usage_exhausted:
            raise UsageLimitReached()

        observed = coupon.used_count or 0
        if repo.increment_usage(coupon_id, observed):
            logger.info(
                "Coupon redeemed",
                coupon_id=str(coupon_id),
                code=coupon.code,
                used_count=observed + 1,
            )
            return observed + 1

        logger.info("Coupon redemption lost a race, retrying", coupon_id=str(coupon_id), attempt=attempt)

    logger.warning("Coupon redemption gave up after repeated conflicts", coupon_id=str(coupon_id))
    raise RedemptionConflict()


@storefront.command_handler(part_of=Coupon)
class RecordCouponUsageHandler:
    @handle(RecordCouponUsage)
    def record_usage(self, command):
        return redeem_coupon(command.coupon_id)
