"""
User model
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.utils.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(255), unique=True, nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    first_name = Column(String(100))
    last_name = Column(String(100))
    phone = Column(String(50))
    address = Column(Text)
    profile_image_url = Column(String(500))
    password_hash = Column(String(255), nullable=True)
    provider = Column(String(50), default="auth0")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    cart_items = relationship("CartItem", back_populates="user", cascade="all, delete-orphan")
    wishlist_items = relationship("WishlistItem", back_populates="user", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user")
    reviews = relationship("ProductReview", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, provider={self.provider})>"
