"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.appointment_service import AppointmentService
from app.services.doctor_service import DoctorService
from app.services.hospital_service import HospitalService
from app.services.patient_service import PatientService


def get_patient_service(db: Annotated[AsyncSession, Depends(get_db)]) -> PatientService:
    """Get patient service bound to the request's session."""
    return PatientService(db)


def get_doctor_service(db: Annotated[AsyncSession, Depends(get_db)]) -> DoctorService:
    """Get doctor service bound to the request's session."""
    return DoctorService(db)


def get_hospital_service(db: Annotated[AsyncSession, Depends(get_db)]) -> HospitalService:
    """Get hospital service bound to the request's session."""
    return HospitalService(db)


def get_appointment_service(db: Annotated[AsyncSession, Depends(get_db)]) -> AppointmentService:
    """Get appointment service bound to the request's session."""
    return AppointmentService(db)


# Type aliases for dependency injection
PatientServiceDep = Annotated[PatientService, Depends(get_patient_service)]
DoctorServiceDep = Annotated[DoctorService, Depends(get_doctor_service)]
HospitalServiceDep = Annotated[HospitalService, Depends(get_hospital_service)]
AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]
