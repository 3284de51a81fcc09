"""Order status changes — admin status updates and cancellation."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.access import ensure_admin, ensure_owner_or_admin, is_admin
from storefront.domain import storefront
from storefront.order.order import Order, parse_status

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    requester_id = Identifier()
    requester_role = String(max_length=20)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        ensure_admin(command.requester_role, "order status updates")
        target = parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if not order.is_forward_move(target):
            logger.warning(
                "Non-forward order status change",
                order_id=str(order.id),
                from_status=order.status,
                to_status=target.value,
            )

        order.update_status(target.value, changed_by=command.requester_role)
        repo.add(order)

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        ensure_owner_or_admin(order.buyer_id, command.requester_id, command.requester_role)

        by_buyer = not is_admin(command.requester_role)
        order.cancel(by_buyer=by_buyer, changed_by=command.requester_role)
        repo.add(order)

        logger.info("Order cancelled", order_id=str(order.id), by_buyer=by_buyer)
