"""
FastAPI dependencies: session user, admin guard and service factories
"""
import hmac
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from storefront.config import Settings, get_settings
from storefront.exceptions import AuthenticationError, PermissionDeniedError
from storefront.models import User
from storefront.services import (
    AccountService,
    AppointmentService,
    Auth0Client,
    CartService,
    CatalogService,
    EmailService,
    OrderService,
    PaymentService,
    RateLimiter,
    ReviewService,
    SupportService,
    WishlistService,
)
from storefront.utils.database import get_db

SESSION_USER_KEY = "user_id"

# Shared across requests so the per-recipient window survives between calls
email_rate_limiter = RateLimiter(
    get_settings().email_max_per_window,
    get_settings().email_rate_limit_window,
)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Signed-in user from the session cookie, None for anonymous callers"""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    user = db.get(User, user_id)
    if user is None:
        request.session.pop(SESSION_USER_KEY, None)
    return user


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise AuthenticationError()
    return user


def require_admin(
    x_admin_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.admin_api_key:
        return
    if not x_admin_key or not hmac.compare_digest(x_admin_key, settings.admin_api_key):
        raise PermissionDeniedError("Admin access required")


def open_session(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = user.id


def close_session(request: Request) -> None:
    request.session.clear()


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_identity_client(settings: Settings = Depends(get_settings)) -> Auth0Client:
    return Auth0Client(settings)


def get_payment_service(settings: Settings = Depends(get_settings)) -> PaymentService:
    return PaymentService(settings)


def get_order_service(
    db: Session = Depends(get_db),
    payments: PaymentService = Depends(get_payment_service),
) -> OrderService:
    return OrderService(db, payments)


def get_email_service(settings: Settings = Depends(get_settings)) -> EmailService:
    return EmailService(settings, rate_limiter=email_rate_limiter)


def get_appointment_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AppointmentService:
    return AppointmentService(db, settings.meeting_base_url)


def get_support_service(db: Session = Depends(get_db)) -> SupportService:
    return SupportService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)
