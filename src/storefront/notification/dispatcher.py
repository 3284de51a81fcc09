"""Order notifications — email the buyer when an order is placed or progresses.

Delivery is fire-and-forget: a failed or raising send is logged as a
warning and never propagates back into the order operation.
"""

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notification.channel import get_email_sender
from storefront.notification.templates import NotificationKind, get_template
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)

_KIND_FOR_STATUS = {
    OrderStatus.CONFIRMED.value: NotificationKind.ORDER_CONFIRMED.value,
    OrderStatus.SHIPPED.value: NotificationKind.ORDER_SHIPPED.value,
    OrderStatus.DELIVERED.value: NotificationKind.ORDER_DELIVERED.value,
}


def dispatch(kind: str, to: str | None, context: dict) -> bool:
    """Render and send one email. Returns True when the adapter accepted it."""
    if not to:
        logger.info("No contact email on order, notification skipped", kind=kind, order_id=context.get("order_id"))
        return False

    try:
        content = get_template(kind).render(context)
        result = get_email_sender().send(
            to=to,
            subject=content["subject"],
            html_body=content["html_body"],
            text_body=content["body"],
        )
    except Exception as exc:
        logger.warning("Order notification failed", kind=kind, order_id=context.get("order_id"), error=str(exc))
        return False

    if result.get("status") != "sent":
        logger.warning(
            "Order notification was not delivered",
            kind=kind,
            order_id=context.get("order_id"),
            error=result.get("error"),
        )
        return False

    logger.info("Order notification sent", kind=kind, order_id=context.get("order_id"), message_id=result["message_id"])
    return True


@storefront.event_handler(part_of=Order)
class OrderNotificationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        dispatch(
            NotificationKind.ORDER_PLACED.value,
            event.contact_email,
            {
                "order_id": str(event.order_id),
                "buyer_name": event.buyer_name,
                "items": event.items,
                "total_amount": event.total_amount,
            },
        )

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        kind = _KIND_FOR_STATUS.get(event.new_status)
        if kind is None:
            return

        dispatch(
            kind,
            event.contact_email,
            {
                "order_id": str(event.order_id),
                "buyer_name": event.buyer_name,
                "total_amount": event.total_amount,
                "tracking_id": event.tracking_id,
            },
        )
