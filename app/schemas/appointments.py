"""Appointment schemas for request/response validation."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    BOOKED = "Booked"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""

    doctor_id: int = Field(..., gt=0)
    patient_id: int = Field(..., gt=0)
    hospital_id: int = Field(..., gt=0)
    appointment_date: datetime

    @field_validator("appointment_date")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Store timestamps as naive UTC."""
        if v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class AppointmentCreate(AppointmentBase):
    """Schema for booking a new appointment."""


class AppointmentStatusUpdate(BaseModel):
    """Schema for updating appointment status."""

    status: AppointmentStatus


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""

    id: int
    status: AppointmentStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class AppointmentDetailResponse(AppointmentResponse):
    """Appointment with doctor, patient and hospital names."""

    doctor_name: str
    patient_name: str
    hospital_name: str


class AvailableSlotsResponse(BaseModel):
    """Free booking slots for a doctor at a hospital on one day."""

    doctor_id: int
    hospital_id: int
    day: date
    slots: list[datetime]
