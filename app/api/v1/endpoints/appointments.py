"""Appointment endpoints."""

from datetime import date

from fastapi import APIRouter, Query, status
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import BadRequestException, ConflictException, NotFoundException
from app.dependencies import AppointmentServiceDep
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentDetailResponse,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AvailableSlotsResponse,
)
from app.services.appointment_service import utcnow

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Book appointment",
)
async def book_appointment(
    data: AppointmentCreate,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Book an appointment with a doctor at a hospital.

    Args:
        data: Appointment booking data
        service: Appointment service

    Returns:
        Booked appointment

    Raises:
        BadRequestException: If the date is not in the future or a reference is unknown
        ConflictException: If the doctor's slot is already booked
    """
    if data.appointment_date <= utcnow():
        raise BadRequestException("Appointment date must be in the future")

    try:
        appointment = await service.book_appointment(data)
    except IntegrityError as e:
        raise BadRequestException("Unknown doctor, patient or hospital") from e

    if appointment is None:
        raise ConflictException(
            "This time slot is already booked. Please select a different date/time."
        )

    return AppointmentResponse.model_validate(appointment)


@router.get(
    "/",
    response_model=list[AppointmentDetailResponse],
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments",
)
async def list_appointments(service: AppointmentServiceDep) -> list[AppointmentDetailResponse]:
    """List all appointments, latest appointment date first."""
    appointments = await service.get_all_appointments()
    return [AppointmentDetailResponse.model_validate(a) for a in appointments]


@router.get(
    "/available-slots",
    response_model=AvailableSlotsResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List free slots",
)
async def get_available_slots(
    service: AppointmentServiceDep,
    doctor_id: int = Query(..., gt=0),
    hospital_id: int = Query(..., gt=0),
    day: date = Query(..., alias="date"),
) -> AvailableSlotsResponse:
    """
    List a doctor's free booking slots at a hospital on a given date.

    Args:
        service: Appointment service
        doctor_id: Doctor ID
        hospital_id: Hospital ID
        day: Calendar date (UTC)

    Returns:
        Free slot start times
    """
    slots = await service.get_available_slots(doctor_id, hospital_id, day)
    return AvailableSlotsResponse(
        doctor_id=doctor_id,
        hospital_id=hospital_id,
        day=day,
        slots=slots,
    )


@router.get(
    "/{appointment_id}",
    response_model=AppointmentDetailResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Get appointment by ID",
)
async def get_appointment(
    appointment_id: int,
    service: AppointmentServiceDep,
) -> AppointmentDetailResponse:
    """Get a specific appointment by ID."""
    appointment = await service.get_appointment_by_id(appointment_id)
    if not appointment:
        raise NotFoundException("Appointment not found")
    return AppointmentDetailResponse.model_validate(appointment)


@router.post(
    "/{appointment_id}/cancel",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Cancel appointment",
)
async def cancel_appointment(
    appointment_id: int,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Cancel an appointment and free its slot.

    Raises:
        NotFoundException: If the appointment does not exist
        ConflictException: If the appointment is already completed
    """
    appointment = await service.cancel_appointment(appointment_id)
    if not appointment:
        raise NotFoundException("Appointment not found")
    return AppointmentResponse.model_validate(appointment)


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment status",
)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Update appointment status (e.g., confirm, complete, cancel).

    Raises:
        NotFoundException: If the appointment does not exist
        ConflictException: If the status change is not allowed
    """
    appointment = await service.update_status(appointment_id, data.status)
    if not appointment:
        raise NotFoundException("Appointment not found")
    return AppointmentResponse.model_validate(appointment)
