"""Storefront bounded context — coupons, orders, invoices and their notifications.

Handles the order fulfillment pipeline of the apparel storefront: coupon
validation and redemption, order placement and status tracking, and lazy
invoice snapshots backed by the company billing profile.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
