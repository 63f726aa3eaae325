"""
Order, checkout and payment schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from storefront.models.enums import OrderStatus, PaymentMethod
from storefront.schemas.base import CamelModel
from storefront.schemas.catalog import ProductOut


class OrderLineIn(CamelModel):
    product_id: int
    quantity: int = Field(1, ge=1)
    # Accepted for compatibility; line prices are always priced server-side
    price: Optional[Decimal] = None


class CheckoutRequest(CamelModel):
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_phone: str = Field(..., min_length=1, max_length=50)
    customer_email: Optional[EmailStr] = None
    shipping_address: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1, max_length=20)
    payment_method: PaymentMethod = PaymentMethod.COD
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    order_items: List[OrderLineIn] = Field(default_factory=list)

    @property
    def has_gateway_confirmation(self) -> bool:
        return any([self.razorpay_order_id, self.razorpay_payment_id, self.razorpay_signature])


class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    created_at: Optional[datetime] = None
    product: Optional[ProductOut] = None


class OrderOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    total: Decimal
    status: str
    payment_status: str
    payment_method: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    shipping_address: str
    pincode: str
    tracking_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    order_items: List[OrderItemOut] = Field(default_factory=list)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class TrackingStep(CamelModel):
    key: str
    title: str
    description: str
    location: str
    status: str
    date: Optional[datetime] = None


class TrackingOut(CamelModel):
    order_id: int
    status: str
    tracking_id: Optional[str] = None
    steps: List[TrackingStep]


class PaymentConfigOut(CamelModel):
    key: str
    enabled: bool


class GatewayOrderRequest(CamelModel):
    amount: Decimal = Field(..., gt=0)
    currency: str = Field("INR", min_length=3, max_length=3)


class PaymentVerification(BaseModel):
    """Fields exactly as the hosted checkout widget reports them"""
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class PaymentVerified(CamelModel):
    success: bool
    message: str
