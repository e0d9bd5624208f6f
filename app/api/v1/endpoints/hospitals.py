"""Hospital management endpoints."""

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException, NotFoundException
from app.dependencies import HospitalServiceDep
from app.schemas.hospitals import (
    HospitalCreate,
    HospitalDetailResponse,
    HospitalResponse,
    HospitalUpdate,
)

router = APIRouter()


@router.post("/", response_model=HospitalResponse, status_code=status.HTTP_201_CREATED)
async def create_hospital(data: HospitalCreate, service: HospitalServiceDep):
    """
    Create a new hospital.

    - **name**: Hospital name (required, up to 100 characters)
    - **address**: Physical address (required, up to 200 characters)
    """
    hospital_id = await service.create_hospital(data)
    return await service.get_hospital_by_id(hospital_id)


@router.get("/", response_model=list[HospitalResponse])
async def list_hospitals(service: HospitalServiceDep):
    """List all hospitals."""
    hospitals = await service.get_all_hospitals()
    return [HospitalResponse.model_validate(h) for h in hospitals]


@router.get("/{hospital_id}", response_model=HospitalDetailResponse)
async def get_hospital(hospital_id: int, service: HospitalServiceDep):
    """Get a hospital with the doctors who work there."""
    hospital = await service.get_hospital_with_doctors(hospital_id)
    if not hospital:
        raise NotFoundException("Hospital not found")
    return hospital


@router.put("/{hospital_id}", response_model=HospitalResponse)
async def update_hospital(hospital_id: int, data: HospitalUpdate, service: HospitalServiceDep):
    """Replace a hospital's details."""
    hospital = await service.update_hospital(hospital_id, data)
    if not hospital:
        raise NotFoundException("Hospital not found")
    return hospital


@router.delete("/{hospital_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hospital(hospital_id: int, service: HospitalServiceDep) -> None:
    """
    Delete a hospital.

    Hospitals referenced by appointments cannot be deleted.
    """
    try:
        await service.delete_hospital(hospital_id)
    except IntegrityError as e:
        raise ConflictException("Hospital has appointments and cannot be deleted") from e
