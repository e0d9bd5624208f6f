"""Doctor endpoints."""

from fastapi import APIRouter, Query, status
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException, NotFoundException
from app.dependencies import DoctorServiceDep
from app.schemas.doctors import (
    DoctorCreate,
    DoctorDetailResponse,
    DoctorOptionResponse,
    DoctorUpdate,
)

router = APIRouter()


# ============================================================================
# Doctor Lookup Endpoints
# ============================================================================


@router.get("/specializations", response_model=list[str])
async def list_specializations(service: DoctorServiceDep):
    """List the distinct specializations, sorted alphabetically."""
    return await service.get_specializations()


@router.get("/by-specialization", response_model=list[DoctorOptionResponse])
async def list_doctors_by_specialization(
    service: DoctorServiceDep,
    specialization: str = Query(..., min_length=1, description="Exact specialization"),
):
    """
    List doctors with a given specialization.

    Used to fill the doctor picker once a specialization is chosen.
    """
    doctors = await service.get_doctors_by_specialization(specialization)
    return [DoctorOptionResponse.model_validate(d) for d in doctors]


# ============================================================================
# Doctor CRUD Endpoints
# ============================================================================


@router.post("/", response_model=DoctorDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(data: DoctorCreate, service: DoctorServiceDep):
    """
    Register a new doctor.

    - **name**: Doctor's name (required, up to 100 characters)
    - **specialization**: Specialization (required, up to 50 characters)
    - **consultation_fee**: Fee between 0 and 100000
    - **availability_json**: Free-form availability notes
    - **hospital_ids**: Hospitals the doctor works at; unknown IDs are ignored
    """
    doctor_id = await service.create_doctor(data, data.hospital_ids)
    return await service.get_doctor_with_hospitals(doctor_id)


@router.get("/", response_model=list[DoctorDetailResponse])
async def list_doctors(service: DoctorServiceDep):
    """List all doctors with their hospitals."""
    doctors = await service.get_all_doctors()
    return [DoctorDetailResponse.model_validate(d) for d in doctors]


@router.get("/{doctor_id}", response_model=DoctorDetailResponse)
async def get_doctor(doctor_id: int, service: DoctorServiceDep):
    """Get a doctor with its hospitals."""
    doctor = await service.get_doctor_with_hospitals(doctor_id)
    if not doctor:
        raise NotFoundException("Doctor not found")
    return doctor


@router.put("/{doctor_id}", response_model=DoctorDetailResponse)
async def update_doctor(doctor_id: int, data: DoctorUpdate, service: DoctorServiceDep):
    """Update a doctor and replace its hospital associations."""
    doctor = await service.update_doctor(doctor_id, data, data.hospital_ids)
    if not doctor:
        raise NotFoundException("Doctor not found")
    return doctor


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(doctor_id: int, service: DoctorServiceDep) -> None:
    """Delete a doctor. Doctors with appointments cannot be deleted."""
    try:
        await service.delete_doctor(doctor_id)
    except IntegrityError as e:
        raise ConflictException("Doctor has appointments and cannot be deleted") from e
