"""
Checkout, order history and tracking endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from storefront.dependencies import get_current_user, get_email_service, get_order_service, require_admin, require_user
from storefront.models import Order, User
from storefront.schemas import CheckoutRequest, OrderOut, OrderStatusUpdate, TrackingOut
from storefront.services import EmailService, OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _queue_order_emails(background_tasks: BackgroundTasks, emails: EmailService, order: Order):
    background_tasks.add_task(emails.notify_order, OrderService.email_payload(order))


@router.post("", response_model=OrderOut)
def checkout(
    data: CheckoutRequest,
    background_tasks: BackgroundTasks,
    user: User = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
    emails: EmailService = Depends(get_email_service),
):
    order = orders.checkout_cart(user.id, data, user.email)
    _queue_order_emails(background_tasks, emails, order)
    return order


@router.post("/direct-checkout", response_model=OrderOut)
def direct_checkout(
    data: CheckoutRequest,
    background_tasks: BackgroundTasks,
    user: Optional[User] = Depends(get_current_user),
    orders: OrderService = Depends(get_order_service),
    emails: EmailService = Depends(get_email_service),
):
    order = orders.direct_checkout(user.id if user else None, data, user.email if user else None)
    _queue_order_emails(background_tasks, emails, order)
    return order


@router.get("", response_model=List[OrderOut])
def list_orders(user: User = Depends(require_user), orders: OrderService = Depends(get_order_service)):
    return orders.list_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: Optional[User] = Depends(get_current_user),
    orders: OrderService = Depends(get_order_service),
):
    return orders.get_order(order_id, user.id if user else None)


@router.get("/{order_id}/tracking", response_model=TrackingOut)
def track_order(
    order_id: int,
    user: Optional[User] = Depends(get_current_user),
    orders: OrderService = Depends(get_order_service),
):
    order = orders.get_order(order_id, user.id if user else None)
    return orders.tracking(order)


@router.put("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    orders: OrderService = Depends(get_order_service),
):
    return orders.update_status(order_id, data.status)
