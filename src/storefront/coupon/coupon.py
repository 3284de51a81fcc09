"""Coupon aggregate (CQRS) — discount terms and usage accounting.

A coupon is looked up by its upper-cased code and applies while it is
active and the current time falls inside ``[start_date, end_date]``. The
``used_count`` counter is never assigned through the aggregate after
creation; redemptions go through ``CouponRepository.increment_usage``,
a guarded compare-and-set against the stored value.
"""

import math
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront.coupon.events import CouponCreated, CouponUpdated
from storefront.domain import storefront

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code: str) -> str:
    return code.strip().upper()


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare against aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@storefront.aggregate
class Coupon:
    code = String(required=True, max_length=50, unique=True)
    discount_type = String(required=True, choices=DiscountType)
    discount_value = Float(required=True, min_value=0.0)
    min_order_amount = Float(default=0.0, min_value=0.0)
    max_discount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    used_count = Integer(default=0, min_value=0)
    start_date = DateTime(required=True)
    end_date = DateTime(required=True)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def percentage_must_not_exceed_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.discount_value > 100:
            raise ValidationError({"discount_value": ["Percentage discount must be between 0 and 100"]})

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.start_date and self.end_date and as_utc(self.end_date) < as_utc(self.start_date):
            raise ValidationError({"end_date": ["End date must not be before start date"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        code,
        discount_type,
        discount_value,
        start_date,
        end_date,
        min_order_amount=None,
        max_discount=None,
        usage_limit=None,
        is_active=None,
    ):
        """Create a coupon. Zero caps and limits are stored as "no cap" / "no limit"."""
        now = datetime.now(UTC)
        coupon = cls(
            code=normalize_code(code),
            discount_type=discount_type,
            discount_value=discount_value,
            min_order_amount=min_order_amount or 0.0,
            max_discount=max_discount or None,
            usage_limit=usage_limit or None,
            used_count=0,
            start_date=start_date,
            end_date=end_date,
            is_active=True if is_active is None else is_active,
            created_at=now,
            updated_at=now,
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=coupon.code,
                discount_type=coupon.discount_type,
                discount_value=coupon.discount_value,
                usage_limit=coupon.usage_limit,
                start_date=coupon.start_date,
                end_date=coupon.end_date,
            )
        )
        return coupon

    def update_terms(
        self,
        code=_UNSET,
        discount_type=_UNSET,
        discount_value=_UNSET,
        min_order_amount=_UNSET,
        max_discount=_UNSET,
        usage_limit=_UNSET,
        start_date=_UNSET,
        end_date=_UNSET,
        is_active=_UNSET,
    ):
        """Partially update the coupon; only the supplied terms change."""
        now = datetime.now(UTC)
        with atomic_change(self):
            if code is not _UNSET and code:
                self.code = normalize_code(code)
            if discount_type is not _UNSET and discount_type:
                self.discount_type = discount_type
            if discount_value is not _UNSET:
                self.discount_value = discount_value
            if min_order_amount is not _UNSET:
                self.min_order_amount = min_order_amount
            if max_discount is not _UNSET:
                self.max_discount = max_discount or None
            if usage_limit is not _UNSET:
                self.usage_limit = usage_limit or None
            if start_date is not _UNSET and start_date:
                self.start_date = start_date
            if end_date is not _UNSET and end_date:
                self.end_date = end_date
            if is_active is not _UNSET:
                self.is_active = is_active
            self.updated_at = now

        self.raise_(
            CouponUpdated(
                coupon_id=str(self.id),
                code=self.code,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_redeemable_at(self, moment: datetime) -> bool:
        """Active and inside the validity window, both ends inclusive."""
        if not self.is_active:
            return False
        moment = as_utc(moment)
        return as_utc(self.start_date) <= moment <= as_utc(self.end_date)

    @property
    def usage_exhausted(self) -> bool:
        return self.usage_limit is not None and self.used_count >= self.usage_limit

    def discount_for(self, order_amount: float) -> int:
        """Discount in whole currency units, truncated.

        Fixed discounts are returned verbatim, even when they exceed the
        order amount; callers clamp the resulting total.
        """
        if DiscountType(self.discount_type) == DiscountType.PERCENTAGE:
            discount = order_amount * self.discount_value / 100
            if self.max_discount is not None:
                discount = min(discount, self.max_discount)
        else:
            discount = self.discount_value
        return math.floor(discount)
