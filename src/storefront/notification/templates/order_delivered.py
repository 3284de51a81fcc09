"""Order delivered template."""

from storefront.notification.templates.layout import html_email


class OrderDeliveredTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        paragraphs = [
            f"Hi {context.get('buyer_name') or 'there'},",
            f"Your order #{order_id} has been delivered.",
            "We hope you love it. Thank you for shopping with us!",
        ]
        return {
            "subject": "Your Order Has Been Delivered!",
            "body": "\n\n".join(paragraphs),
            "html_body": html_email("Order Delivered", paragraphs),
        }
