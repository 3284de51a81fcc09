"""Order placement — PlaceOrder command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)

_LINE_FIELDS = ("product_ref", "name", "unit_price", "quantity", "image", "size", "color", "sku")
_ADDRESS_FIELDS = ("name", "street", "city", "state", "zip_code", "country", "phone")
_PAYMENT_FIELDS = ("transaction_id", "payment_status")


@storefront.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of line dicts
    total_amount = Float(required=True)
    payment_method = String(required=True, max_length=50)
    shipping_address = Text()  # JSON dict
    payment_details = Text()  # JSON dict
    contact_email = String(max_length=254)
    shipping_cost = Float()
    tax_amount = Float()
    coupon_code = String(max_length=50)
    notes = Text()


def _load(payload, default):
    if not payload:
        return default
    return json.loads(payload) if isinstance(payload, str) else payload


def _pick(data: dict, fields) -> dict:
    return {key: data[key] for key in fields if data.get(key) is not None}


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = [_pick(line, _LINE_FIELDS) for line in _load(command.items, [])]

        order = Order.place(
            buyer_id=command.buyer_id,
            items_data=items,
            total_amount=command.total_amount,
            payment_method=command.payment_method,
            shipping_address=_pick(_load(command.shipping_address, {}), _ADDRESS_FIELDS),
            payment_details=_pick(_load(command.payment_details, {}), _PAYMENT_FIELDS),
            contact_email=command.contact_email,
            shipping_cost=command.shipping_cost,
            tax_amount=command.tax_amount,
            coupon_code=command.coupon_code,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            buyer_id=str(order.buyer_id),
            total_amount=order.total_amount,
            item_count=len(order.items),
        )
        return str(order.id)
