"""
Pydantic request and response schemas
"""
from .base import CamelModel, MessageResponse
from .catalog import CategoryCreate, CategoryOut, SubcategoryCreate, SubcategoryOut, ProductCreate, ProductOut
from .account import AuthSyncRequest, IdentityProfile, RegisterRequest, LoginRequest, ProfileUpdate, UserOut, ProfileUpdated
from .cart import CartItemCreate, CartItemUpdate, CartItemOut, WishlistItemCreate, WishlistItemOut
from .order import (
    OrderLineIn,
    CheckoutRequest,
    OrderItemOut,
    OrderOut,
    OrderStatusUpdate,
    TrackingStep,
    TrackingOut,
    PaymentConfigOut,
    GatewayOrderRequest,
    PaymentVerification,
    PaymentVerified,
)
from .engagement import (
    AppointmentRequest,
    AppointmentOut,
    VideoCallRequest,
    VideoCallStarted,
    TicketRequest,
    TicketCreated,
    TicketOut,
    TicketUpdate,
    ChatRequest,
    ChatMessageOut,
    ContactRequest,
    ContactOut,
    ReviewCreate,
    ReviewOut,
    QuestionCreate,
    QuestionAnswer,
    QuestionOut,
)
