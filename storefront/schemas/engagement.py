"""
Appointments, support, contact, review and question schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from storefront.models.enums import TicketPriority, TicketStatus
from storefront.models.product import as_utc
from storefront.schemas.base import CamelModel


class AppointmentRequest(CamelModel):
    """Both the old (appointmentDate/appointmentTime/meetingType) and the
    new (date/time/type) form spellings are accepted"""
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    appointment_date: Optional[str] = None
    appointment_time: Optional[str] = None
    meeting_type: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    type: Optional[str] = None


class AppointmentOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    appointment_date: datetime
    duration: int
    meeting_type: str
    status: str
    meeting_link: Optional[str] = None
    meeting_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("appointment_date")
    @classmethod
    def appointment_date_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class VideoCallRequest(CamelModel):
    appointment_id: Optional[int] = None


class VideoCallStarted(CamelModel):
    success: bool = True
    session_id: str
    message: str
    meeting_link: Optional[str] = None


class TicketRequest(CamelModel):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    priority: TicketPriority = TicketPriority.MEDIUM


class TicketCreated(CamelModel):
    success: bool = True
    ticket_id: str
    message: str


class TicketOut(CamelModel):
    id: int
    ticket_number: str
    user_id: Optional[int] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    subject: str
    message: str
    status: str
    priority: str
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketUpdate(CamelModel):
    status: Optional[TicketStatus] = None
    assigned_to: Optional[str] = None


class ChatRequest(CamelModel):
    message: Optional[str] = None
    ticket_id: Optional[str] = None


class ChatMessageOut(CamelModel):
    id: str
    message: str
    sender: str
    timestamp: datetime
    sender_name: str
    ticket_id: Optional[str] = None


class ContactRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    inquiry_type: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1)


class ContactOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    inquiry_type: str
    message: str
    status: str
    created_at: Optional[datetime] = None


class ReviewCreate(CamelModel):
    user_name: str = Field(..., min_length=1, max_length=255)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    images: List[str] = Field(default_factory=list, max_length=5)


class ReviewOut(CamelModel):
    id: int
    product_id: int
    user_id: Optional[int] = None
    user_name: str
    rating: int
    comment: str
    images: Optional[List[str]] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None


class QuestionCreate(CamelModel):
    user_name: str = Field(..., min_length=1, max_length=255)
    user_email: Optional[EmailStr] = None
    question: str = Field(..., min_length=1)


class QuestionAnswer(CamelModel):
    answer: Optional[str] = None
    answered_by: Optional[str] = None
    is_public: Optional[bool] = None


class QuestionOut(CamelModel):
    id: int
    product_id: int
    user_id: Optional[int] = None
    user_name: str
    question: str
    answer: Optional[str] = None
    answered_by: Optional[str] = None
    answered_at: Optional[datetime] = None
    is_public: bool = True
    created_at: Optional[datetime] = None
