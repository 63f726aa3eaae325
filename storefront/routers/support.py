"""
Help desk, support ticket and contact form endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from storefront.dependencies import get_current_user, get_email_service, get_support_service, require_admin, require_user
from storefront.models import User
from storefront.schemas import (
    ChatMessageOut,
    ChatRequest,
    ContactOut,
    ContactRequest,
    TicketCreated,
    TicketOut,
    TicketRequest,
    TicketUpdate,
)
from storefront.services import EmailService, SupportService

router = APIRouter(prefix="/api", tags=["support"])


@router.post("/support/tickets", response_model=TicketCreated)
def create_ticket(
    data: TicketRequest,
    background_tasks: BackgroundTasks,
    user: Optional[User] = Depends(get_current_user),
    support: SupportService = Depends(get_support_service),
    emails: EmailService = Depends(get_email_service),
):
    ticket = support.create_ticket(data, user.id if user else None)
    background_tasks.add_task(emails.notify_ticket, SupportService.ticket_payload(ticket))
    return TicketCreated(
        ticket_id=ticket.ticket_number,
        message="Support ticket created successfully. We will get back to you within 24 hours.",
    )


@router.put("/support/tickets/{ticket_id}/status", response_model=TicketOut, dependencies=[Depends(require_admin)])
def update_ticket(ticket_id: int, data: TicketUpdate, support: SupportService = Depends(get_support_service)):
    return support.update_ticket(ticket_id, data)


@router.get("/helpdesk/tickets", response_model=List[TicketOut])
def list_tickets(user: User = Depends(require_user), support: SupportService = Depends(get_support_service)):
    return support.list_for_user(user)


@router.post("/helpdesk/chat", response_model=ChatMessageOut)
def send_chat_message(
    data: ChatRequest,
    user: Optional[User] = Depends(get_current_user),
    support: SupportService = Depends(get_support_service),
):
    return support.chat_message(data.message, data.ticket_id, user)


@router.post("/contact", response_model=ContactOut)
def submit_contact(
    data: ContactRequest,
    background_tasks: BackgroundTasks,
    support: SupportService = Depends(get_support_service),
    emails: EmailService = Depends(get_email_service),
):
    inquiry = support.create_inquiry(data)
    background_tasks.add_task(emails.notify_contact, SupportService.inquiry_payload(inquiry))
    return inquiry
