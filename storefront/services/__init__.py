"""
Service layer: business operations over a database session
"""
from .catalog_service import CatalogService
from .cart_service import CartService, WishlistService
from .payment_service import PaymentService, to_paise, sign_payment
from .order_service import OrderService, tracking_id_for
from .account_service import AccountService, hash_password, check_password
from .identity import Auth0Client
from .email_service import EmailService, RateLimiter, DeliveryStatus
from .appointment_service import AppointmentService
from .support_service import SupportService
from .review_service import ReviewService
