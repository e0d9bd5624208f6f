"""Patient service for business logic."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.patient_repository import PatientRepository
from app.schemas.patients import PatientCreate, PatientUpdate

logger = structlog.get_logger()


class PatientService:
    """Service for patient registration and lookup."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.repository = PatientRepository(db)

    async def get_all_patients(self) -> list[dict]:
        """Get every registered patient."""
        return await self.repository.get_all()

    async def get_patient_by_id(self, patient_id: int) -> dict | None:
        """Get patient by ID."""
        return await self.repository.get_by_id(patient_id)

    async def get_patient_by_phone(self, phone: str) -> dict | None:
        """Get patient by contact number."""
        return await self.repository.get_by_phone(phone)

    async def search_patients(self, search_term: str | None) -> list[dict]:
        """
        Search patients by name.

        Args:
            search_term: Substring of the name, matched as given; blank or None lists everyone

        Returns:
            Matching patients
        """
        if search_term is None or not search_term.strip():
            return await self.get_all_patients()

        return await self.repository.search_by_name(search_term)

    async def register_patient(self, data: PatientCreate) -> int:
        """
        Register a new patient.

        The caller is responsible for rejecting duplicate contact numbers
        beforehand; this method inserts unconditionally.

        Returns:
            Generated patient ID
        """
        patient = await self.repository.add(data.model_dump())
        await self.repository.save_changes()

        logger.info("patient_registered", patient_id=patient["id"])
        return patient["id"]

    async def update_patient(self, patient_id: int, data: PatientUpdate) -> dict | None:
        """Replace a patient's details; returns None when the patient does not exist."""
        patient = await self.repository.update({"id": patient_id, **data.model_dump()})
        await self.repository.save_changes()

        return patient

    async def delete_patient(self, patient_id: int) -> None:
        """
        Delete a patient.

        Raises:
            IntegrityError: If an appointment still references the patient
        """
        await self.repository.delete(patient_id)
        await self.repository.save_changes()
