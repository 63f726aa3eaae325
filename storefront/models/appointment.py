"""
Appointment model for virtual showroom meetings
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.sql import func

from storefront.utils.database import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False, default="")
    appointment_date = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, default=30)  # minutes
    meeting_type = Column(String(50), default="virtual_showroom")
    status = Column(String(50), default="scheduled")
    meeting_link = Column(String(500))
    meeting_id = Column(String(100), unique=True)
    notes = Column(Text)
    reminder_sent = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Appointment(id={self.id}, date={self.appointment_date}, status={self.status})>"
