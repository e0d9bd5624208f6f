"""Doctor schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.schemas.hospitals import HospitalResponse

# ============================================================================
# Doctor Base Schemas
# ============================================================================


class DoctorBase(BaseModel):
    """Base schema for doctor."""

    name: str = Field(..., min_length=1, max_length=100)
    specialization: str = Field(..., min_length=1, max_length=50)
    consultation_fee: Decimal = Field(Decimal("0"), ge=0, le=100000, decimal_places=2)
    availability_json: str | None = Field(
        None, description="Free-form availability, e.g. days and hours; stored as given"
    )

    @field_validator("name", "specialization")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("Must not be blank")
        return v


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""

    hospital_ids: list[int] = Field(default_factory=list)


class DoctorUpdate(DoctorCreate):
    """Schema for updating a doctor and replacing its hospitals."""


class DoctorResponse(DoctorBase):
    """Doctor response schema."""

    id: int

    model_config = {"from_attributes": True}

    @field_serializer("consultation_fee", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)


class DoctorDetailResponse(DoctorResponse):
    """Doctor with hospital associations."""

    hospitals: list[HospitalResponse] = Field(default_factory=list)


# ============================================================================
# Doctor Lookup Schemas
# ============================================================================


class DoctorOptionResponse(BaseModel):
    """Compact doctor entry for specialization lookups."""

    id: int
    name: str
    consultation_fee: Decimal

    model_config = {"from_attributes": True}

    @field_serializer("consultation_fee", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)
