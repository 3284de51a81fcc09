"""Order confirmed template."""

from storefront.notification.templates.formatting import format_amount
from storefront.notification.templates.layout import html_email


class OrderConfirmedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        paragraphs = [
            f"Hi {context.get('buyer_name') or 'there'},",
            f"Your order #{order_id} has been confirmed and is being prepared.",
            f"Order Total: {format_amount(context.get('total_amount'))}",
        ]
        return {
            "subject": "Order Confirmed",
            "body": "\n\n".join(paragraphs),
            "html_body": html_email("Order Confirmed", paragraphs),
        }
