"""Hard deletion of orders.

Invoices already issued for the order are kept.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.access import ensure_owner_or_admin
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        ensure_owner_or_admin(order.buyer_id, command.requester_id, command.requester_role)
        repo.delete_order(order)
        logger.info("Order deleted", order_id=str(command.order_id), requester_id=str(command.requester_id))
