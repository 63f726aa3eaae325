"""
Hosted checkout endpoints: widget config, gateway orders, payment verification
"""
from fastapi import APIRouter, Depends

from storefront.dependencies import get_payment_service
from storefront.schemas import GatewayOrderRequest, PaymentConfigOut, PaymentVerification, PaymentVerified
from storefront.services import PaymentService

router = APIRouter(prefix="/api", tags=["payments"])


@router.get("/payment/config", response_model=PaymentConfigOut)
def payment_config(payments: PaymentService = Depends(get_payment_service)):
    return payments.public_config()


@router.post("/create-razorpay-order")
@router.post("/payment/create-order")
def create_gateway_order(data: GatewayOrderRequest, payments: PaymentService = Depends(get_payment_service)):
    return payments.create_gateway_order(data.amount, data.currency)


@router.post("/verify-razorpay-payment", response_model=PaymentVerified)
@router.post("/payment/verify", response_model=PaymentVerified)
def verify_payment(data: PaymentVerification, payments: PaymentService = Depends(get_payment_service)):
    payments.verify_payment(data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature)
    return PaymentVerified(success=True, message="Payment verified successfully")
