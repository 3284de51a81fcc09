"""Application tests for validate_coupon — lookup, threshold and limit checks in order."""

from datetime import timedelta

import pytest
from protean import current_domain
from storefront.coupon.coupon import Coupon
from storefront.coupon.validation import validate_coupon
from storefront.exceptions import CouponNotFound, MinimumOrderNotMet, UsageLimitReached


class TestPercentageCoupon:
    def test_discount_capped_at_max(self, create_coupon):
        create_coupon()
        quote = validate_coupon("SAVE20", 6000)
        assert quote.discount == 1000
        assert quote.code == "SAVE20"
        assert quote.max_discount == 1000.0

    def test_lookup_is_case_insensitive(self, create_coupon):
        create_coupon()
        assert validate_coupon("save20", 5000).discount == 1000

    def test_below_minimum(self, create_coupon):
        create_coupon()
        with pytest.raises(MinimumOrderNotMet) as exc:
            validate_coupon("SAVE20", 1000)
        assert "₹5,000" in exc.value.message

    def test_large_threshold_reported_in_full(self, create_coupon):
        create_coupon(min_order_amount=1234567.0)
        with pytest.raises(MinimumOrderNotMet) as exc:
            validate_coupon("SAVE20", 1000)
        assert exc.value.message == "Minimum order amount is ₹1,234,567"

    def test_minimum_is_inclusive(self, create_coupon):
        create_coupon(max_discount=None)
        assert validate_coupon("SAVE20", 5000).discount == 1000


class TestFixedCoupon:
    def test_fixed_discount(self, create_coupon):
        create_coupon(code="FLAT250", discount_type="fixed", discount_value=250.0, min_order_amount=0, max_discount=None)
        quote = validate_coupon("FLAT250", 100)
        assert quote.discount == 250
        assert quote.discount_type == "fixed"


class TestRejections:
    def test_unknown_code(self):
        with pytest.raises(CouponNotFound):
            validate_coupon("NOPE", 1000)

    def test_inactive_coupon(self, create_coupon):
        create_coupon(is_active=False)
        with pytest.raises(CouponNotFound):
            validate_coupon("SAVE20", 6000)

    def test_expired_coupon(self, create_coupon, now):
        create_coupon(start_date=now - timedelta(days=10), end_date=now - timedelta(days=1))
        with pytest.raises(CouponNotFound):
            validate_coupon("SAVE20", 6000)

    def test_not_yet_started(self, create_coupon, now):
        create_coupon(start_date=now + timedelta(days=1), end_date=now + timedelta(days=10))
        with pytest.raises(CouponNotFound):
            validate_coupon("SAVE20", 6000)

    def test_exhausted_coupon(self, create_coupon):
        coupon_id = create_coupon(usage_limit=1)
        repo = current_domain.repository_for(Coupon)
        assert repo.increment_usage(coupon_id, 0)

        with pytest.raises(UsageLimitReached):
            validate_coupon("SAVE20", 6000)

    def test_lookup_failure_reported_before_threshold(self, create_coupon, now):
        create_coupon(end_date=now - timedelta(seconds=1), start_date=now - timedelta(days=2))
        with pytest.raises(CouponNotFound):
            validate_coupon("SAVE20", 10)

    def test_threshold_reported_before_limit(self, create_coupon):
        coupon_id = create_coupon(usage_limit=1)
        current_domain.repository_for(Coupon).increment_usage(coupon_id, 0)
        with pytest.raises(MinimumOrderNotMet):
            validate_coupon("SAVE20", 10)
