"""Order shipped template — includes the tracking id when one is known."""

from storefront.notification.templates.layout import html_email


class OrderShippedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        tracking_id = context.get("tracking_id")
        paragraphs = [
            f"Hi {context.get('buyer_name') or 'there'},",
            f"Great news! Your order #{order_id} is on its way.",
        ]
        if tracking_id:
            paragraphs.append(f"Tracking ID: {tracking_id}")
        paragraphs.append("You can follow your package from the order tracking page.")
        return {
            "subject": "Your Order Has Shipped!",
            "body": "\n\n".join(paragraphs),
            "html_body": html_email("Order Shipped", paragraphs),
        }
