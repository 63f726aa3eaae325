"""
SQLAlchemy models for the furniture storefront
"""

# Import all models to make them available when importing from models
from .user import User
from .product import Category, Subcategory, Product
from .cart import CartItem, WishlistItem
from .order import Order, OrderItem
from .support import SupportTicket, ContactInquiry
from .appointment import Appointment
from .review import ProductReview, ProductQuestion

__all__ = [
    "User",
    "Category",
    "Subcategory",
    "Product",
    "CartItem",
    "WishlistItem",
    "Order",
    "OrderItem",
    "SupportTicket",
    "ContactInquiry",
    "Appointment",
    "ProductReview",
    "ProductQuestion",
]
