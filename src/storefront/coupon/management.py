"""Coupon administration — create, update and delete commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.access import ensure_admin
from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import storefront

_EDITABLE_TERMS = {
    "code",
    "discount_type",
    "discount_value",
    "min_order_amount",
    "max_discount",
    "usage_limit",
    "start_date",
    "end_date",
    "is_active",
}


@storefront.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    discount_type = String(required=True, max_length=20)
    discount_value = Float(required=True)
    min_order_amount = Float()
    max_discount = Float()
    usage_limit = Integer()
    start_date = DateTime(required=True)
    end_date = DateTime(required=True)
    is_active = Boolean()
    requester_role = String(max_length=20)


@storefront.command(part_of="Coupon")
class UpdateCoupon:
    coupon_id = Identifier(required=True)
    changes = Text(required=True)  # JSON: only the terms being changed
    requester_role = String(max_length=20)


@storefront.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id = Identifier(required=True)
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=Coupon)
class CouponManagementHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        ensure_admin(command.requester_role, "coupon management")
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code) is not None:
            raise ValidationError({"code": ["Coupon code already exists"]})

        coupon = Coupon.create(
            code=command.code,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            start_date=command.start_date,
            end_date=command.end_date,
            min_order_amount=command.min_order_amount,
            max_discount=command.max_discount,
            usage_limit=command.usage_limit,
            is_active=command.is_active,
        )
        repo.add(coupon)
        return str(coupon.id)

    @handle(UpdateCoupon)
    def update_coupon(self, command):
        ensure_admin(command.requester_role, "coupon management")
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)

        changes = json.loads(command.changes) if isinstance(command.changes, str) else command.changes
        unknown = set(changes) - _EDITABLE_TERMS
        if unknown:
            raise ValidationError({"changes": [f"Unknown coupon terms: {', '.join(sorted(unknown))}"]})

        new_code = changes.get("code")
        if new_code and normalize_code(new_code) != coupon.code:
            clash = repo.find_by_code(new_code)
            if clash is not None:
                raise ValidationError({"code": ["Coupon code already exists"]})

        coupon.update_terms(**changes)
        repo.add(coupon)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        ensure_admin(command.requester_role, "coupon management")
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        repo.delete_coupon(coupon)
