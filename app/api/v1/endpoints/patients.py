"""Patient endpoints."""

from fastapi import APIRouter, Query, status
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException, NotFoundException
from app.dependencies import PatientServiceDep
from app.schemas.patients import PatientCreate, PatientResponse, PatientUpdate

router = APIRouter()


@router.post(
    "/",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
)
async def register_patient(
    data: PatientCreate,
    service: PatientServiceDep,
) -> PatientResponse:
    """
    Register a new patient.

    Args:
        data: Patient registration data
        service: Patient service

    Returns:
        Registered patient

    Raises:
        ConflictException: If a patient with the same contact number exists
    """
    existing = await service.get_patient_by_phone(data.contact_number)
    if existing:
        raise ConflictException("A patient with this phone number already exists")

    patient_id = await service.register_patient(data)
    patient = await service.get_patient_by_id(patient_id)
    return PatientResponse.model_validate(patient)


@router.get(
    "/",
    response_model=list[PatientResponse],
    status_code=status.HTTP_200_OK,
    summary="List or search patients",
)
async def list_patients(
    service: PatientServiceDep,
    search: str | None = Query(None, description="Part of the patient's name"),
) -> list[PatientResponse]:
    """List all patients, or those whose name contains the search term."""
    patients = await service.search_patients(search)
    return [PatientResponse.model_validate(p) for p in patients]


@router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    summary="Get patient by ID",
)
async def get_patient(patient_id: int, service: PatientServiceDep) -> PatientResponse:
    """Get a specific patient by ID."""
    patient = await service.get_patient_by_id(patient_id)
    if not patient:
        raise NotFoundException("Patient not found")
    return PatientResponse.model_validate(patient)


@router.put(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    summary="Edit patient",
)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    service: PatientServiceDep,
) -> PatientResponse:
    """
    Replace a patient's details.

    Raises:
        NotFoundException: If the patient does not exist
    """
    patient = await service.update_patient(patient_id, data)
    if not patient:
        raise NotFoundException("Patient not found")
    return PatientResponse.model_validate(patient)


@router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete patient",
)
async def delete_patient(patient_id: int, service: PatientServiceDep) -> None:
    """
    Delete a patient. Deleting an unknown ID is not an error.

    Raises:
        ConflictException: If the patient still has appointments
    """
    try:
        await service.delete_patient(patient_id)
    except IntegrityError as e:
        raise ConflictException("Patient has appointments and cannot be deleted") from e
