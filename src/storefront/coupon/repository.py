"""Repository for the Coupon aggregate."""

from datetime import datetime

from protean.utils.query import Q

from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import storefront

_MAX_RESULTS = 1000


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code: str) -> Coupon | None:
        """Find a coupon by code, case-insensitively."""
        results = self._dao.query.filter(code=normalize_code(code)).all().items
        return results[0] if results else None

    def newest_first(self) -> list[Coupon]:
        return self._dao.query.order_by("-created_at").limit(_MAX_RESULTS).all().items

    def redeemable_at(self, moment: datetime) -> list[Coupon]:
        active = self._dao.query.filter(is_active=True).limit(_MAX_RESULTS).all().items
        return [coupon for coupon in active if coupon.is_redeemable_at(moment)]

    def increment_usage(self, coupon_id: str, observed_count: int) -> bool:
        """Compare-and-set ``used_count`` from ``observed_count`` to ``observed_count + 1``.

        Runs as a single conditional update in the store. Returns False when
        another redemption changed the counter since it was read.
        """
        updated = self._dao._update_all(
            Q(id=str(coupon_id), used_count=observed_count),
            used_count=observed_count + 1,
        )
        return updated == 1

    def delete_coupon(self, coupon: Coupon) -> None:
        self._dao.delete(coupon)
