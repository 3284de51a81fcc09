"""Storefront HTTP API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import coupon_router, invoice_router, order_router, settings_router

__all__ = ["order_router", "coupon_router", "invoice_router", "settings_router", "register_error_handlers"]
