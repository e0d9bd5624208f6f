"""Hospital schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer, field_validator


class HospitalBase(BaseModel):
    """Base schema for hospital."""

    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)

    @field_validator("name", "address")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("Must not be blank")
        return v


class HospitalCreate(HospitalBase):
    """Schema for creating a hospital."""


class HospitalUpdate(HospitalBase):
    """Schema for updating a hospital."""


class HospitalResponse(HospitalBase):
    """Hospital response schema."""

    id: int

    model_config = {"from_attributes": True}


class DoctorAtHospitalResponse(BaseModel):
    """Doctor information listed under a hospital."""

    id: int
    name: str
    specialization: str
    consultation_fee: Decimal

    model_config = {"from_attributes": True}

    @field_serializer("consultation_fee", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)


class HospitalDetailResponse(HospitalResponse):
    """Hospital with the doctors associated with it."""

    doctors: list[DoctorAtHospitalResponse] = Field(default_factory=list)
