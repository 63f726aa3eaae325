"""
Checkout, order history and shipment tracking
"""
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from sqlalchemy.orm import Session, joinedload

from storefront.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.models import Order, OrderItem, Product
from storefront.models.enums import OrderStatus, PaymentStatus
from storefront.models.product import as_utc
from storefront.schemas import CheckoutRequest, OrderLineIn
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.payment_service import PaymentService

# (key, title, description, location, days after the order was placed)
TRACKING_STAGES = [
    ("placed", "Order Placed", "We have received your order and payment", "Mumbai, India", 0),
    ("processing", "Order Processing", "Your order is being prepared for shipment", "Warehouse, Mumbai", 1),
    ("shipped", "Shipped", "Your order has been shipped and is on its way", "In Transit", 2),
    ("out-for-delivery", "Out for Delivery", "Your package is out for delivery and will arrive today",
     "Local Delivery Hub", 6),
    ("delivered", "Delivered", "Your order has been successfully delivered", "Delivered to Customer", 7),
]

# Index of the stage in progress for each order status
_CURRENT_STAGE = {
    OrderStatus.PENDING.value: 1,
    OrderStatus.PROCESSING.value: 2,
    OrderStatus.SHIPPED.value: 3,
    OrderStatus.DELIVERED.value: len(TRACKING_STAGES),
}


def tracking_id_for(order_id: int) -> str:
    return f"TR{order_id:08d}"


class OrderService:
    def __init__(self, db: Session, payments: PaymentService, cart: CartService = None):
        self.db = db
        self.payments = payments
        self.catalog = CatalogService(db)
        self.cart = cart or CartService(db, self.catalog)

    def checkout_cart(self, user_id: int, data: CheckoutRequest, user_email: Optional[str] = None) -> Order:
        """Place an order for a signed-in user from the request lines or their cart"""
        if data.order_items:
            lines = self._lines_from_request(data.order_items)
        else:
            lines = [(item.product, item.quantity) for item in self.cart.list_items(user_id)]
        return self._place_order(user_id, data, lines, user_email)

    def direct_checkout(self, user_id: Optional[int], data: CheckoutRequest,
                        user_email: Optional[str] = None) -> Order:
        """Buy Now: price only the lines in the request, guests included"""
        return self._place_order(user_id, data, self._lines_from_request(data.order_items), user_email)

    def _lines_from_request(self, items: List[OrderLineIn]) -> List[Tuple[Product, int]]:
        return [(self.catalog.get_product(item.product_id), item.quantity) for item in items]

    def _confirm_payment(self, data: CheckoutRequest) -> str:
        if not data.has_gateway_confirmation:
            return PaymentStatus.PENDING.value

        self.payments.verify_payment(data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature)
        duplicate = (
            self.db.query(Order.id)
            .filter(Order.razorpay_payment_id == data.razorpay_payment_id)
            .first()
        )
        if duplicate:
            raise ConflictError("Payment has already been used for another order")
        return PaymentStatus.PAID.value

    def _place_order(self, user_id: Optional[int], data: CheckoutRequest,
                     lines: List[Tuple[Product, int]], user_email: Optional[str] = None) -> Order:
        """Orders without a contact email fall back to the account email"""
        if not lines:
            raise ValidationError("No items to order")

        for product, quantity in lines:
            if quantity < 1:
                raise ValidationError("Quantity must be at least 1")
            if product.in_stock is False:
                raise ValidationError(f"{product.name} is out of stock")

        payment_status = self._confirm_payment(data)

        order = Order(
            user_id=user_id,
            total=sum((product.effective_price * quantity for product, quantity in lines), Decimal("0")),
            status=OrderStatus.PENDING.value,
            payment_status=payment_status,
            payment_method=data.payment_method.value,
            razorpay_order_id=data.razorpay_order_id,
            razorpay_payment_id=data.razorpay_payment_id,
            razorpay_signature=data.razorpay_signature,
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            customer_email=data.customer_email or user_email,
            shipping_address=data.shipping_address,
            pincode=data.pincode,
        )
        order.order_items = [
            OrderItem(product_id=product.id, quantity=quantity, price=product.effective_price)
            for product, quantity in lines
        ]

        try:
            self.db.add(order)
            self.db.flush()
            order.tracking_id = tracking_id_for(order.id)
            if user_id is not None:
                self.cart.clear(user_id, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(
            f"Order placed: id={order.id} user={user_id} total={order.total} "
            f"method={order.payment_method} payment_status={order.payment_status}"
        )
        return order

    def list_orders(self, user_id: int) -> List[Order]:
        return (
            self.db.query(Order)
            .options(joinedload(Order.order_items).joinedload(OrderItem.product))
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def get_order(self, order_id: int, viewer_id: Optional[int] = None) -> Order:
        """Orders of other users are reported as missing"""
        order = (
            self.db.query(Order)
            .options(joinedload(Order.order_items).joinedload(OrderItem.product))
            .filter(Order.id == order_id)
            .first()
        )
        if order is None or (order.user_id is not None and order.user_id != viewer_id):
            raise NotFoundError("Order not found")
        return order

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.db.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        previous = order.status
        order.status = status.value
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} status {previous} -> {order.status}")
        return order

    def tracking(self, order: Order) -> Dict[str, Any]:
        status = order.status or OrderStatus.PENDING.value
        current = _CURRENT_STAGE.get(status, 1)
        cancelled = status == OrderStatus.CANCELLED.value
        placed_at = as_utc(order.created_at) if order.created_at else None

        steps = []
        for index, (key, title, description, location, days) in enumerate(TRACKING_STAGES):
            if cancelled:
                state = "completed" if index == 0 else "pending"
            elif index < current:
                state = "completed"
            elif index == current:
                state = "current"
            else:
                state = "pending"
            steps.append({
                "key": key,
                "title": title,
                "description": description,
                "location": location,
                "status": state,
                "date": placed_at + timedelta(days=days) if state == "completed" and placed_at else None,
            })

        return {
            "order_id": order.id,
            "status": status,
            "tracking_id": order.tracking_id or tracking_id_for(order.id),
            "steps": steps,
        }

    @staticmethod
    def email_payload(order: Order) -> Dict[str, Any]:
        """Plain data for the confirmation emails, safe to use after the session closes"""
        return {
            "id": order.id,
            "tracking_id": order.tracking_id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "customer_phone": order.customer_phone,
            "shipping_address": order.shipping_address,
            "pincode": order.pincode,
            "payment_method": order.payment_method,
            "payment_status": order.payment_status,
            "razorpay_payment_id": order.razorpay_payment_id,
            "total": order.total,
            "items": [
                {
                    "name": item.product.name if item.product else f"Product {item.product_id}",
                    "quantity": item.quantity,
                    "price": item.price,
                }
                for item in order.order_items
            ],
        }
