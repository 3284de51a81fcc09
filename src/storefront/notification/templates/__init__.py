"""Template registry — maps a notification kind to its template class."""

from enum import Enum

from storefront.notification.templates.order_confirmed import OrderConfirmedTemplate
from storefront.notification.templates.order_delivered import OrderDeliveredTemplate
from storefront.notification.templates.order_placed import OrderPlacedTemplate
from storefront.notification.templates.order_shipped import OrderShippedTemplate


class NotificationKind(Enum):
    ORDER_PLACED = "order_placed"
    ORDER_CONFIRMED = "order_confirmed"
    ORDER_SHIPPED = "order_shipped"
    ORDER_DELIVERED = "order_delivered"


TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationKind.ORDER_PLACED.value: OrderPlacedTemplate,
    NotificationKind.ORDER_CONFIRMED.value: OrderConfirmedTemplate,
    NotificationKind.ORDER_SHIPPED.value: OrderShippedTemplate,
    NotificationKind.ORDER_DELIVERED.value: OrderDeliveredTemplate,
}


def get_template(kind: str):
    """Look up a template class by notification kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template_cls
