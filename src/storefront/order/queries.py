"""Read access to orders, with the ownership and admin checks applied."""

from protean.utils.globals import current_domain

from storefront.access import ensure_admin, ensure_owner_or_admin
from storefront.order.order import Order, OrderStatus, parse_status


def get_order(order_id: str, requester_id: str, requester_role: str | None) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    ensure_owner_or_admin(order.buyer_id, requester_id, requester_role)
    return order


def orders_for_buyer(buyer_id: str) -> list[Order]:
    return current_domain.repository_for(Order).for_buyer(buyer_id)


def track_order(tracking_id: str) -> Order:
    """Public lookup by tracking id; no authentication involved."""
    return current_domain.repository_for(Order).find_by_tracking_id(tracking_id)


def list_orders(requester_role: str | None, status: str | None = None, page: int = 1, limit: int = 10):
    ensure_admin(requester_role, "listing orders")
    if status:
        status = parse_status(status).value
    page = max(page, 1)
    limit = max(limit, 1)
    return current_domain.repository_for(Order).page(status=status, page=page, limit=limit)


def count_confirmed(requester_role: str | None) -> int:
    ensure_admin(requester_role, "order counts")
    return current_domain.repository_for(Order).count_with_status(OrderStatus.CONFIRMED.value)
