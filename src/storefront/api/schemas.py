"""Pydantic request/response schemas for the storefront API.

Fields are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResponse(CamelModel):
    status: str = "ok"


# --- Order Request Schemas ---


class OrderLineIn(CamelModel):
    product_id: str | None = None
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str | None = None
    size: str | None = None
    color: str | None = None
    sku: str | None = None

    def to_line(self) -> dict:
        return {
            "product_ref": self.product_id,
            "name": self.name,
            "unit_price": self.price,
            "quantity": self.quantity,
            "image": self.image,
            "size": self.size,
            "color": self.color,
            "sku": self.sku,
        }


class AddressIn(CamelModel):
    name: str | None = None
    street: str | None = None
    address: str | None = None  # legacy name for street
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    pincode: str | None = None  # legacy name for zip_code
    country: str | None = None
    phone: str | None = None

    def to_address(self) -> dict:
        return {
            "name": self.name,
            "street": self.street or self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code or self.pincode,
            "country": self.country,
            "phone": self.phone,
        }


class PaymentDetailsIn(CamelModel):
    transaction_id: str | None = None
    payment_status: str | None = None


class PlaceOrderRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [{"productId": "p-101", "name": "Silk Saree", "price": 2500, "quantity": 2}],
                    "totalAmount": 5000,
                    "shippingAddress": {
                        "name": "Asha Rao",
                        "street": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "zipCode": "560001",
                        "phone": "+91-98450-00000",
                    },
                    "paymentMethod": "upi",
                    "contactEmail": "asha@example.com",
                }
            ]
        },
    )

    items: list[OrderLineIn] = Field(default_factory=list)
    total_amount: float
    shipping_address: AddressIn | None = None
    payment_method: str | None = None
    payment_details: PaymentDetailsIn | None = None
    notes: str | None = None
    shipping_cost: float | None = Field(None, ge=0)
    tax_amount: float | None = Field(None, ge=0)
    contact_email: str | None = Field(None, max_length=254)
    coupon_code: str | None = Field(None, max_length=50)


class UpdateStatusRequest(CamelModel):
    status: str


class TrackingRequest(CamelModel):
    tracking_id: str | None = Field(None, max_length=255)
    status: str | None = None
    message: str | None = None
    location: str | None = None
    estimated_delivery: datetime | None = None


# --- Order Response Schemas ---


class OrderLineOut(CamelModel):
    product_id: str | None = None
    name: str
    price: float
    quantity: int
    image: str | None = None
    size: str | None = None
    color: str | None = None
    sku: str | None = None


class AddressOut(CamelModel):
    name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None


class PaymentDetailsOut(CamelModel):
    transaction_id: str | None = None
    payment_status: str | None = None


class TrackingUpdateOut(CamelModel):
    status: str | None = None
    message: str | None = None
    location: str | None = None
    timestamp: datetime | None = None


class OrderResponse(CamelModel):
    id: str
    buyer_id: str
    items: list[OrderLineOut]
    total_amount: float
    shipping_cost: float = 0.0
    tax_amount: float = 0.0
    status: str
    shipping_address: AddressOut | None = None
    contact_email: str | None = None
    payment_method: str | None = None
    payment_details: PaymentDetailsOut | None = None
    coupon_code: str | None = None
    notes: str | None = None
    tracking_id: str | None = None
    tracking_updates: list[TrackingUpdateOut] = Field(default_factory=list)
    estimated_delivery: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        address = order.shipping_address
        payment = order.payment_details
        return cls(
            id=str(order.id),
            buyer_id=str(order.buyer_id),
            items=[
                OrderLineOut(
                    product_id=str(line.product_ref) if line.product_ref else None,
                    name=line.name,
                    price=line.unit_price,
                    quantity=line.quantity,
                    image=line.image,
                    size=line.size,
                    color=line.color,
                    sku=line.sku,
                )
                for line in order.items
            ],
            total_amount=order.total_amount,
            shipping_cost=order.shipping_cost or 0.0,
            tax_amount=order.tax_amount or 0.0,
            status=order.status,
            shipping_address=(
                AddressOut(
                    name=address.name,
                    street=address.street,
                    city=address.city,
                    state=address.state,
                    zip_code=address.zip_code,
                    country=address.country,
                    phone=address.phone,
                )
                if address
                else None
            ),
            contact_email=order.contact_email,
            payment_method=order.payment_method,
            payment_details=(
                PaymentDetailsOut(transaction_id=payment.transaction_id, payment_status=payment.payment_status)
                if payment
                else None
            ),
            coupon_code=order.coupon_code,
            notes=order.notes,
            tracking_id=order.tracking_id,
            tracking_updates=[
                TrackingUpdateOut(
                    status=update.status,
                    message=update.message,
                    location=update.location,
                    timestamp=update.timestamp,
                )
                for update in sorted(order.tracking_updates, key=lambda u: u.timestamp)
            ],
            estimated_delivery=order.estimated_delivery,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderPageResponse(CamelModel):
    orders: list[OrderResponse]
    total: int
    page: int
    limit: int
    pages: int


class CountResponse(CamelModel):
    count: int


# --- Coupon Schemas ---


class CreateCouponRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=50)
    discount_type: str
    discount_value: float = Field(..., ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount: float | None = Field(None, ge=0)
    usage_limit: int | None = Field(None, ge=0)
    start_date: datetime
    end_date: datetime
    is_active: bool | None = None


class UpdateCouponRequest(CamelModel):
    code: str | None = Field(None, min_length=1, max_length=50)
    discount_type: str | None = None
    discount_value: float | None = Field(None, ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount: float | None = Field(None, ge=0)
    usage_limit: int | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None


class CouponIdResponse(CamelModel):
    coupon_id: str


class CouponResponse(CamelModel):
    id: str
    code: str
    discount_type: str
    discount_value: float
    min_order_amount: float = 0.0
    max_discount: float | None = None
    usage_limit: int | None = None
    used_count: int = 0
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_at: datetime | None = None

    @classmethod
    def from_coupon(cls, coupon) -> CouponResponse:
        return cls(
            id=str(coupon.id),
            code=coupon.code,
            discount_type=coupon.discount_type,
            discount_value=coupon.discount_value,
            min_order_amount=coupon.min_order_amount or 0.0,
            max_discount=coupon.max_discount,
            usage_limit=coupon.usage_limit,
            used_count=coupon.used_count or 0,
            start_date=coupon.start_date,
            end_date=coupon.end_date,
            is_active=coupon.is_active,
            created_at=coupon.created_at,
        )


class CouponQuoteResponse(CamelModel):
    valid: bool = True
    coupon_id: str
    code: str
    discount_type: str
    discount_value: float
    discount: int
    max_discount: float | None = None


class CouponUsageResponse(CamelModel):
    used_count: int


# --- Invoice Schemas ---


class CustomerOut(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class CompanyOut(CamelModel):
    logo: str | None = None
    name: str | None = None
    gst: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None


class InvoiceLineOut(CamelModel):
    name: str
    quantity: int
    price: float
    subtotal: float
    image: str | None = None
    size: str | None = None
    color: str | None = None


class InvoiceResponse(CamelModel):
    id: str
    order_id: str
    buyer_id: str
    invoice_number: str
    invoice_date: datetime
    due_date: datetime
    customer: CustomerOut | None = None
    order_items: list[InvoiceLineOut]
    subtotal: float
    tax_amount: float = 0.0
    shipping_cost: float = 0.0
    total_amount: float
    company: CompanyOut | None = None
    payment_method: str | None = None
    transaction_id: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_invoice(cls, invoice) -> InvoiceResponse:
        customer = invoice.customer
        company = invoice.company
        return cls(
            id=str(invoice.id),
            order_id=str(invoice.order_id),
            buyer_id=str(invoice.buyer_id),
            invoice_number=invoice.invoice_number,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            customer=(
                CustomerOut(**{field: getattr(customer, field) for field in CustomerOut.model_fields})
                if customer
                else None
            ),
            order_items=[
                InvoiceLineOut(
                    name=line.name,
                    quantity=line.quantity,
                    price=line.price,
                    subtotal=line.subtotal,
                    image=line.image,
                    size=line.size,
                    color=line.color,
                )
                for line in invoice.order_items
            ],
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount or 0.0,
            shipping_cost=invoice.shipping_cost or 0.0,
            total_amount=invoice.total_amount,
            company=(
                CompanyOut(**{field: getattr(company, field) for field in CompanyOut.model_fields})
                if company
                else None
            ),
            payment_method=invoice.payment_method,
            transaction_id=invoice.transaction_id,
            notes=invoice.notes,
            created_at=invoice.created_at,
        )


class InvoicePageResponse(CamelModel):
    invoices: list[InvoiceResponse]
    total: int
    page: int
    limit: int
    pages: int


# --- Settings Schemas ---


class BillingProfileRequest(CamelModel):
    logo: str | None = None
    name: str | None = Field(None, max_length=255)
    gst: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    email: str | None = Field(None, max_length=254)


class BillingProfileResponse(CompanyOut):
    pass


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
