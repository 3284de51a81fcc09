"""Order placed template — sent right after checkout."""

import json

from storefront.notification.templates.formatting import format_amount
from storefront.notification.templates.layout import html_email


class OrderPlacedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("buyer_name") or "there"
        order_id = context.get("order_id", "N/A")
        items = context.get("items") or []
        if isinstance(items, str):
            items = json.loads(items)

        lines = [
            f"{item['name']} x {item['quantity']}: {format_amount(item['unit_price'] * item['quantity'])}"
            for item in items
        ]
        greeting = f"Hi {name},"
        thanks = f"Thank you for your order #{order_id}."
        total = f"Order Total: {format_amount(context.get('total_amount'))}"
        closing = "We'll let you know as soon as it ships."
        item_block = "\n".join(f"  - {line}" for line in lines)
        return {
            "subject": "Order Placed Successfully",
            "body": f"{greeting}\n\n{thanks}\n\n{item_block}\n\n{total}\n\n{closing}",
            "html_body": html_email("Order Placed", [greeting, thanks, total, closing], items=lines),
        }
