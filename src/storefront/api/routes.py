"""FastAPI endpoints for orders, coupons, invoices and billing settings."""

import json
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.access import ensure_admin
from storefront.api.dependencies import Requester, current_requester
from storefront.api.schemas import (
    BillingProfileRequest,
    BillingProfileResponse,
    CountResponse,
    CouponIdResponse,
    CouponQuoteResponse,
    CouponResponse,
    CouponUsageResponse,
    CreateCouponRequest,
    InvoicePageResponse,
    InvoiceResponse,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    StatusResponse,
    TrackingRequest,
    UpdateCouponRequest,
    UpdateStatusRequest,
    page_count,
)
from storefront.coupon.coupon import Coupon
from storefront.coupon.management import CreateCoupon, DeleteCoupon, UpdateCoupon
from storefront.coupon.redemption import RecordCouponUsage
from storefront.coupon.validation import validate_coupon
from storefront.invoice.generation import GenerateInvoice
from storefront.invoice.invoice import Invoice
from storefront.invoice.queries import get_invoice, invoice_for_order, list_invoices
from storefront.order.deletion import DeleteOrder
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.queries import count_confirmed, get_order, list_orders, orders_for_buyer, track_order
from storefront.order.status import CancelOrder, UpdateOrderStatus
from storefront.order.tracking import AppendTracking
from storefront.settings.billing_profile import UpdateBillingProfile, current_billing_profile

order_router = APIRouter(prefix="/orders", tags=["orders"])
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])
invoice_router = APIRouter(prefix="/invoices", tags=["invoices"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, requester: Requester = Depends(current_requester)) -> OrderResponse:
    command = PlaceOrder(
        buyer_id=requester.account_id,
        items=json.dumps([line.to_line() for line in body.items]),
        total_amount=body.total_amount,
        payment_method=body.payment_method,
        shipping_address=json.dumps(body.shipping_address.to_address()) if body.shipping_address else None,
        payment_details=json.dumps(body.payment_details.model_dump()) if body.payment_details else None,
        contact_email=body.contact_email,
        shipping_cost=body.shipping_cost,
        tax_amount=body.tax_amount,
        coupon_code=body.coupon_code,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


@order_router.get("/my-orders", response_model=list[OrderResponse])
async def my_orders(requester: Requester = Depends(current_requester)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in orders_for_buyer(requester.account_id)]


@order_router.get("/track/{tracking_id}", response_model=OrderResponse)
async def track(tracking_id: str) -> OrderResponse:
    return OrderResponse.from_order(track_order(tracking_id))


@order_router.get("", response_model=OrderPageResponse)
async def all_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    requester: Requester = Depends(current_requester),
) -> OrderPageResponse:
    results = list_orders(requester.role, status=status, page=page, limit=limit)
    return OrderPageResponse(
        orders=[OrderResponse.from_order(order) for order in results.items],
        total=results.total,
        page=page,
        limit=limit,
        pages=page_count(results.total, limit),
    )


@order_router.get("/count/confirmed", response_model=CountResponse)
async def confirmed_count(requester: Requester = Depends(current_requester)) -> CountResponse:
    return CountResponse(count=count_confirmed(requester.role))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, requester: Requester = Depends(current_requester)) -> OrderResponse:
    return OrderResponse.from_order(get_order(order_id, requester.account_id, requester.role))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateStatusRequest, requester: Requester = Depends(current_requester)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        requester_id=requester.account_id,
        requester_role=requester.role,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, requester: Requester = Depends(current_requester)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, requester_id=requester.account_id, requester_role=requester.role)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.post("/{order_id}/tracking", response_model=OrderResponse)
async def append_tracking(
    order_id: str, body: TrackingRequest, requester: Requester = Depends(current_requester)
) -> OrderResponse:
    command = AppendTracking(
        order_id=order_id,
        tracking_id=body.tracking_id,
        status=body.status,
        message=body.message,
        location=body.location,
        estimated_delivery=body.estimated_delivery,
        requester_role=requester.role,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str, requester: Requester = Depends(current_requester)) -> StatusResponse:
    command = DeleteOrder(order_id=order_id, requester_id=requester.account_id, requester_role=requester.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Coupon endpoints ---


@coupon_router.get("/active", response_model=list[CouponResponse])
async def active_coupons() -> list[CouponResponse]:
    coupons = current_domain.repository_for(Coupon).redeemable_at(datetime.now(UTC))
    return [CouponResponse.from_coupon(coupon) for coupon in coupons]


@coupon_router.get("/validate/{code}", response_model=CouponQuoteResponse)
async def preview_coupon(code: str, order_amount: float = Query(..., alias="orderAmount", ge=0)) -> CouponQuoteResponse:
    quote = validate_coupon(code, order_amount)
    return CouponQuoteResponse(
        coupon_id=quote.coupon_id,
        code=quote.code,
        discount_type=quote.discount_type,
        discount_value=quote.discount_value,
        discount=quote.discount,
        max_discount=quote.max_discount,
    )


@coupon_router.get("", response_model=list[CouponResponse])
async def all_coupons(requester: Requester = Depends(current_requester)) -> list[CouponResponse]:
    ensure_admin(requester.role, "coupon management")
    return [CouponResponse.from_coupon(coupon) for coupon in current_domain.repository_for(Coupon).newest_first()]


@coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest, requester: Requester = Depends(current_requester)) -> CouponIdResponse:
    command = CreateCoupon(
        code=body.code,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
        min_order_amount=body.min_order_amount,
        max_discount=body.max_discount,
        usage_limit=body.usage_limit,
        start_date=body.start_date,
        end_date=body.end_date,
        is_active=body.is_active,
        requester_role=requester.role,
    )
    coupon_id = current_domain.process(command, asynchronous=False)
    return CouponIdResponse(coupon_id=coupon_id)


@coupon_router.put("/{coupon_id}", response_model=CouponResponse)
async def update_coupon(
    coupon_id: str, body: UpdateCouponRequest, requester: Requester = Depends(current_requester)
) -> CouponResponse:
    command = UpdateCoupon(
        coupon_id=coupon_id,
        changes=json.dumps(body.model_dump(mode="json", exclude_unset=True)),
        requester_role=requester.role,
    )
    current_domain.process(command, asynchronous=False)
    return CouponResponse.from_coupon(current_domain.repository_for(Coupon).get(coupon_id))


@coupon_router.delete("/{coupon_id}", response_model=StatusResponse)
async def delete_coupon(coupon_id: str, requester: Requester = Depends(current_requester)) -> StatusResponse:
    current_domain.process(DeleteCoupon(coupon_id=coupon_id, requester_role=requester.role), asynchronous=False)
    return StatusResponse()


@coupon_router.post("/{coupon_id}/use", response_model=CouponUsageResponse)
async def use_coupon(coupon_id: str, requester: Requester = Depends(current_requester)) -> CouponUsageResponse:
    used_count = current_domain.process(RecordCouponUsage(coupon_id=coupon_id), asynchronous=False)
    return CouponUsageResponse(used_count=used_count)


# --- Invoice endpoints ---


@invoice_router.post("/{order_id}", response_model=InvoiceResponse)
async def generate_invoice(order_id: str, requester: Requester = Depends(current_requester)) -> InvoiceResponse:
    command = GenerateInvoice(order_id=order_id, requester_id=requester.account_id, requester_role=requester.role)
    invoice_id = current_domain.process(command, asynchronous=False)
    return InvoiceResponse.from_invoice(current_domain.repository_for(Invoice).get(invoice_id))


@invoice_router.get("/order/{order_id}", response_model=InvoiceResponse)
async def invoice_by_order(order_id: str, requester: Requester = Depends(current_requester)) -> InvoiceResponse:
    return InvoiceResponse.from_invoice(invoice_for_order(order_id, requester.account_id, requester.role))


@invoice_router.get("/{invoice_id}", response_model=InvoiceResponse)
async def invoice_detail(invoice_id: str, requester: Requester = Depends(current_requester)) -> InvoiceResponse:
    return InvoiceResponse.from_invoice(get_invoice(invoice_id, requester.account_id, requester.role))


@invoice_router.get("", response_model=InvoicePageResponse)
async def all_invoices(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    requester: Requester = Depends(current_requester),
) -> InvoicePageResponse:
    invoices, total = list_invoices(requester.account_id, requester.role, page=page, limit=limit)
    return InvoicePageResponse(
        invoices=[InvoiceResponse.from_invoice(invoice) for invoice in invoices],
        total=total,
        page=page,
        limit=limit,
        pages=page_count(total, limit),
    )


# --- Settings endpoints ---


@settings_router.get("/billing-profile", response_model=BillingProfileResponse)
async def billing_profile() -> BillingProfileResponse:
    return BillingProfileResponse(**current_billing_profile().snapshot())


@settings_router.put("/billing-profile", response_model=BillingProfileResponse)
async def update_billing_profile(
    body: BillingProfileRequest, requester: Requester = Depends(current_requester)
) -> BillingProfileResponse:
    command = UpdateBillingProfile(
        changes=json.dumps(body.model_dump(exclude_unset=True)),
        requester_role=requester.role,
    )
    current_domain.process(command, asynchronous=False)
    return BillingProfileResponse(**current_billing_profile().snapshot())
