"""
Appointment booking and video call endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from storefront.dependencies import get_appointment_service, get_current_user, get_email_service, require_user
from storefront.models import User
from storefront.schemas import AppointmentOut, AppointmentRequest, VideoCallRequest, VideoCallStarted
from storefront.services import AppointmentService, EmailService

router = APIRouter(prefix="/api", tags=["appointments"])


@router.post("/appointments", response_model=AppointmentOut)
def book_appointment(
    data: AppointmentRequest,
    background_tasks: BackgroundTasks,
    user: Optional[User] = Depends(get_current_user),
    appointments: AppointmentService = Depends(get_appointment_service),
    emails: EmailService = Depends(get_email_service),
):
    appointment = appointments.book(data, user.id if user else None)
    background_tasks.add_task(emails.notify_appointment, AppointmentService.email_payload(appointment))
    return appointment


@router.get("/appointments", response_model=List[AppointmentOut])
def list_appointments(
    user: User = Depends(require_user),
    appointments: AppointmentService = Depends(get_appointment_service),
):
    return appointments.list_for_user(user.id)


@router.post("/video-call/start", response_model=VideoCallStarted)
def start_video_call(
    data: VideoCallRequest,
    user: User = Depends(require_user),
    appointments: AppointmentService = Depends(get_appointment_service),
):
    return appointments.start_video_call(user.id, data.appointment_id)
