"""Patient schemas for request/response validation."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class PatientBase(BaseModel):
    """Base patient schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200)
    date_of_birth: date | None = None
    contact_number: str = Field(..., min_length=7, max_length=20)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank names."""
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v

    @field_validator("contact_number")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate phone number format."""
        # Remove common separators
        cleaned = (
            v.replace("-", "").replace(" ", "").replace("(", "").replace(")", "").replace("+", "")
        )
        if not cleaned.isdigit():
            raise ValueError("Phone number must contain only digits and separators")
        if len(cleaned) < 7:
            raise ValueError("Phone number must have at least 7 digits")
        return v


class PatientCreate(PatientBase):
    """Schema for registering a new patient."""


class PatientUpdate(PatientBase):
    """Schema for editing a patient (full replace)."""


class PatientResponse(PatientBase):
    """Schema for patient response."""

    id: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
