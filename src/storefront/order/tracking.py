"""Shipment tracking — admins attach tracking ids and updates to orders."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.access import ensure_admin
from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class AppendTracking:
    order_id = Identifier(required=True)
    tracking_id = String(max_length=255)
    status = String(max_length=50)
    message = String(max_length=1000)
    location = String(max_length=255)
    estimated_delivery = DateTime()
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=Order)
class AppendTrackingHandler:
    @handle(AppendTracking)
    def record_tracking(self, command):
        ensure_admin(command.requester_role, "order tracking")
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_tracking(
            tracking_id=command.tracking_id,
            status=command.status,
            message=command.message,
            location=command.location,
            estimated_delivery=command.estimated_delivery,
        )
        repo.add(order)
