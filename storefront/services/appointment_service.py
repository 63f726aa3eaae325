"""
Virtual showroom appointments and video call sessions
"""
import time
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import ValidationError
from storefront.models import Appointment
from storefront.models.enums import AppointmentStatus, MeetingType
from storefront.schemas import AppointmentRequest

TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


def _parse_instant(day: str) -> Optional[datetime]:
    """A full ISO timestamp with an offset, as browsers send from toISOString()"""
    if len(day) <= 10:
        return None
    try:
        moment = datetime.fromisoformat(day.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is None:
        return None
    return moment.astimezone(timezone.utc)


def parse_slot(day: str, slot: str) -> datetime:
    """
    Resolve the booking moment from the form's date and time slot.

    A timezone-aware ISO timestamp already carries the client's local slot and
    is kept as is; a bare YYYY-MM-DD date is combined with the slot as UTC.
    """
    day = day.strip()
    moment = _parse_instant(day)
    if moment is not None:
        return moment

    try:
        booking_day = date.fromisoformat(day[:10])
    except ValueError:
        raise ValidationError(f"Invalid appointment date: {day}")

    for fmt in TIME_FORMATS:
        try:
            slot_time = datetime.strptime(slot.strip().upper(), fmt).time()
            break
        except ValueError:
            continue
    else:
        raise ValidationError(f"Invalid appointment time: {slot}")

    return datetime.combine(booking_day, slot_time, tzinfo=timezone.utc)


class AppointmentService:
    DEFAULT_DURATION = 30

    def __init__(self, db: Session, meeting_base_url: str = "https://meet.jit.si"):
        self.db = db
        self.meeting_base_url = meeting_base_url.rstrip("/")

    def book(self, data: AppointmentRequest, user_id: Optional[int] = None) -> Appointment:
        day = data.date or data.appointment_date
        slot = data.time or data.appointment_time
        if not (data.customer_name and data.customer_email and day and slot):
            raise ValidationError("Missing required fields")

        meeting_type = data.type or data.meeting_type or MeetingType.VIRTUAL_SHOWROOM.value
        try:
            meeting_type = MeetingType(meeting_type).value
        except ValueError:
            raise ValidationError(f"Unknown meeting type: {meeting_type}")

        meeting_id = f"APT-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"
        appointment = Appointment(
            user_id=user_id,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone or "",
            appointment_date=parse_slot(day, slot),
            duration=self.DEFAULT_DURATION,
            meeting_type=meeting_type,
            status=AppointmentStatus.SCHEDULED.value,
            meeting_id=meeting_id,
            meeting_link=f"{self.meeting_base_url}/indosaga-{meeting_id.lower()}",
            notes=data.notes or "",
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(f"Appointment booked: {appointment} user={user_id or 'guest'}")
        return appointment

    def list_for_user(self, user_id: int) -> List[Appointment]:
        return (
            self.db.query(Appointment)
            .filter(Appointment.user_id == user_id)
            .order_by(Appointment.appointment_date.desc(), Appointment.id.desc())
            .all()
        )

    def start_video_call(self, user_id: int, appointment_id: Optional[int] = None) -> Dict[str, Any]:
        session_id = f"VIDEO-{int(time.time() * 1000)}"
        meeting_link = None

        if appointment_id is not None:
            appointment = self.db.get(Appointment, appointment_id)
            if appointment is not None and appointment.user_id == user_id:
                appointment.status = AppointmentStatus.IN_PROGRESS.value
                meeting_link = appointment.meeting_link
                self.db.commit()

        logger.info(f"Video call started: session={session_id} appointment={appointment_id} user={user_id}")
        return {
            "success": True,
            "session_id": session_id,
            "message": "Video call session started",
            "meeting_link": meeting_link,
        }

    @staticmethod
    def email_payload(appointment: Appointment) -> Dict[str, Any]:
        return {
            "meeting_id": appointment.meeting_id,
            "customer_name": appointment.customer_name,
            "customer_email": appointment.customer_email,
            "customer_phone": appointment.customer_phone,
            "appointment_date": appointment.appointment_date,
            "meeting_type": appointment.meeting_type,
            "duration": appointment.duration,
            "meeting_link": appointment.meeting_link,
            "notes": appointment.notes,
        }
