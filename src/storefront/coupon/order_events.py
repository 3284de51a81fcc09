"""Coupon usage is recorded when an order placed with a coupon is persisted.

Recording is best effort: the order already exists, so any failure here
(an unknown code, an exhausted coupon, a storage error) is logged and the
order stands.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.coupon.coupon import Coupon
from storefront.coupon.redemption import redeem_coupon
from storefront.domain import storefront
from storefront.exceptions import UsageLimitReached
from storefront.order.events import OrderPlaced

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Coupon, stream_category="storefront::order")
class OrderEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.coupon_code:
            return

        order_id = str(event.order_id)
        try:
            coupon = current_domain.repository_for(Coupon).find_by_code(event.coupon_code)
            if coupon is None:
                logger.warning("Order placed with unknown coupon", order_id=order_id, code=event.coupon_code)
                return

            redeem_coupon(str(coupon.id))
        except UsageLimitReached as exc:
            logger.warning("Coupon usage not recorded", order_id=order_id, code=event.coupon_code, error=str(exc))
        except Exception as exc:
            logger.warning(
                "Coupon usage recording failed",
                order_id=order_id,
                code=event.coupon_code,
                error=str(exc),
                exc_info=exc,
            )
