"""
Razorpay hosted checkout glue: gateway orders and signature checks
"""
import hashlib
import hmac
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

import requests
from loguru import logger

from storefront.config import Settings
from storefront.exceptions import ConfigurationError, PaymentError, PaymentGatewayError


def to_paise(amount: Decimal) -> int:
    """Rupees to the smallest currency unit the gateway expects"""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def sign_payment(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class PaymentService:
    TIMEOUT = 15

    def __init__(self, settings: Settings, session: requests.Session = None):
        self.settings = settings
        self.http = session or requests.Session()

    def _require_config(self):
        if not self.settings.payments_enabled:
            raise ConfigurationError("Payment gateway not configured")

    def public_config(self) -> Dict[str, Any]:
        """Key id the hosted checkout widget is opened with"""
        self._require_config()
        return {"key": self.settings.razorpay_key_id, "enabled": True}

    def create_gateway_order(self, amount: Decimal, currency: str = None) -> Dict[str, Any]:
        """
        Create an order on the gateway for the hosted checkout widget.

        Args:
            amount: Amount in rupees
            currency: ISO currency code, defaults to the store currency

        Returns:
            The gateway order as returned by the vendor
        """
        self._require_config()
        payload = {
            "amount": to_paise(amount),
            "currency": (currency or self.settings.default_currency).upper(),
            "receipt": f"order_{int(time.time() * 1000)}",
        }
        url = f"{self.settings.razorpay_api_url.rstrip('/')}/orders"

        try:
            response = self.http.post(
                url,
                json=payload,
                auth=(self.settings.razorpay_key_id, self.settings.razorpay_key_secret),
                timeout=self.TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Gateway order request failed: {e}")
            raise PaymentGatewayError("Failed to create payment order") from e

        if response.status_code >= 400:
            logger.error(f"Gateway rejected order ({response.status_code}): {response.text}")
            raise PaymentGatewayError("Failed to create payment order")

        gateway_order = response.json()
        logger.info(f"Gateway order created: {gateway_order.get('id')} amount={payload['amount']} {payload['currency']}")
        return gateway_order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        self._require_config()
        if not (order_id and payment_id and signature):
            return False
        expected = sign_payment(order_id, payment_id, self.settings.razorpay_key_secret)
        return hmac.compare_digest(expected, signature)

    def verify_payment(self, order_id: str, payment_id: str, signature: str) -> None:
        """Raise PaymentError unless the confirmation was signed by the gateway"""
        if not self.verify_signature(order_id, payment_id, signature):
            logger.warning(f"Payment signature mismatch for gateway order {order_id}")
            raise PaymentError("Invalid signature")
        logger.info(f"Payment verified: order={order_id} payment={payment_id}")
