"""
Help desk tickets, chat messages and contact inquiries
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError, ValidationError
from storefront.models import ContactInquiry, SupportTicket, User
from storefront.models.enums import InquiryStatus, TicketStatus
from storefront.schemas import ContactRequest, TicketRequest, TicketUpdate


class SupportService:
    def __init__(self, db: Session):
        self.db = db

    def _ticket_number(self) -> str:
        number = f"TICKET-{int(time.time() * 1000)}"
        # Two tickets inside the same millisecond
        while self.db.query(SupportTicket.id).filter(SupportTicket.ticket_number == number).first():
            time.sleep(0.001)
            number = f"TICKET-{int(time.time() * 1000)}"
        return number

    def create_ticket(self, data: TicketRequest, user_id: Optional[int] = None) -> SupportTicket:
        if not (data.customer_name and data.customer_email and data.subject and data.message):
            raise ValidationError("Missing required fields")

        ticket = SupportTicket(
            ticket_number=self._ticket_number(),
            user_id=user_id,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            subject=data.subject,
            message=data.message,
            status=TicketStatus.OPEN.value,
            priority=data.priority.value,
        )
        self.db.add(ticket)
        self.db.commit()
        self.db.refresh(ticket)
        logger.info(f"Support ticket created: {ticket}")
        return ticket

    def list_for_user(self, user: User) -> List[SupportTicket]:
        """Tickets opened while signed in or with the account's email"""
        return (
            self.db.query(SupportTicket)
            .filter((SupportTicket.user_id == user.id) | (SupportTicket.customer_email == user.email))
            .order_by(SupportTicket.created_at.desc(), SupportTicket.id.desc())
            .all()
        )

    def update_ticket(self, ticket_id: int, data: TicketUpdate) -> SupportTicket:
        ticket = self.db.get(SupportTicket, ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found")
        if data.status is not None:
            ticket.status = data.status.value
        if data.assigned_to is not None:
            ticket.assigned_to = data.assigned_to
        self.db.commit()
        self.db.refresh(ticket)
        logger.info(f"Support ticket updated: {ticket}")
        return ticket

    def chat_message(self, message: Optional[str], ticket_id: Optional[str] = None,
                     user: Optional[User] = None) -> Dict[str, Any]:
        if not message or not message.strip():
            raise ValidationError("Message is required")
        envelope = {
            "id": str(int(time.time() * 1000)),
            "message": message,
            "sender": "customer",
            "timestamp": datetime.now(timezone.utc),
            "sender_name": (user.name or user.email) if user else "Customer",
            "ticket_id": ticket_id,
        }
        logger.info(f"Chat message from {envelope['sender_name']} ticket={ticket_id}")
        return envelope

    def create_inquiry(self, data: ContactRequest) -> ContactInquiry:
        inquiry = ContactInquiry(**data.model_dump(), status=InquiryStatus.NEW.value)
        self.db.add(inquiry)
        self.db.commit()
        self.db.refresh(inquiry)
        logger.info(f"Contact inquiry received: {inquiry}")
        return inquiry

    @staticmethod
    def ticket_payload(ticket: SupportTicket) -> Dict[str, Any]:
        return {
            "ticket_number": ticket.ticket_number,
            "customer_name": ticket.customer_name,
            "customer_email": ticket.customer_email,
            "subject": ticket.subject,
            "priority": ticket.priority,
        }

    @staticmethod
    def inquiry_payload(inquiry: ContactInquiry) -> Dict[str, Any]:
        return {
            "id": inquiry.id,
            "first_name": inquiry.first_name,
            "last_name": inquiry.last_name,
            "email": inquiry.email,
            "phone": inquiry.phone,
            "inquiry_type": inquiry.inquiry_type,
            "message": inquiry.message,
        }
