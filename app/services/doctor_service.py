"""Doctor service for business logic."""

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.doctor_repository import DoctorRepository
from app.repositories.hospital_repository import HospitalRepository
from app.schemas.doctors import DoctorBase

logger = structlog.get_logger()


class DoctorService:
    """Service for doctor operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.repository = DoctorRepository(db)
        self.hospital_repository = HospitalRepository(db)

    @staticmethod
    def _doctor_values(data: DoctorBase) -> dict:
        return data.model_dump(exclude={"hospital_ids"})

    async def _resolve_hospital_ids(self, hospital_ids: Sequence[int]) -> list[int]:
        """Keep the ids that name an existing hospital, in the order given."""
        existing = {h["id"] for h in await self.hospital_repository.get_many(hospital_ids)}

        resolved: list[int] = []
        for hospital_id in hospital_ids:
            if hospital_id not in existing:
                logger.warning("hospital_id_skipped", hospital_id=hospital_id)
                continue
            if hospital_id not in resolved:
                resolved.append(hospital_id)

        return resolved

    async def get_all_doctors(self) -> list[dict]:
        """Get every doctor with its hospitals."""
        return await self.repository.get_all()

    async def get_doctor_by_id(self, doctor_id: int) -> dict | None:
        """Get doctor by ID."""
        return await self.repository.get_by_id(doctor_id)

    async def get_doctor_with_hospitals(self, doctor_id: int) -> dict | None:
        """Get doctor by ID with its hospitals."""
        return await self.repository.get_with_hospitals(doctor_id)

    async def get_doctors_by_specialization(self, specialization: str) -> list[dict]:
        """Get doctors with the given specialization."""
        return await self.repository.get_by_specialization(specialization)

    async def get_specializations(self) -> list[str]:
        """
        Get the distinct specializations, sorted ascending.

        Aggregated in memory over all doctors rather than with DISTINCT, so
        the cost grows with the size of the doctors table.
        """
        doctor_list = await self.repository.get_all()
        return sorted({d["specialization"] for d in doctor_list})

    async def create_doctor(self, data: DoctorBase, hospital_ids: Sequence[int]) -> int:
        """
        Create a doctor and associate it with hospitals.

        Hospital ids that do not resolve are skipped without error.

        Args:
            data: Doctor details
            hospital_ids: Hospitals the doctor works at

        Returns:
            Generated doctor ID
        """
        resolved = await self._resolve_hospital_ids(hospital_ids)

        doctor = await self.repository.add(self._doctor_values(data))
        await self.repository.set_hospitals(doctor["id"], resolved)
        await self.repository.save_changes()

        logger.info("doctor_created", doctor_id=doctor["id"], hospital_ids=resolved)
        return doctor["id"]

    async def update_doctor(
        self, doctor_id: int, data: DoctorBase, hospital_ids: Sequence[int]
    ) -> dict | None:
        """
        Overwrite a doctor's details and replace its hospitals.

        Returns:
            The updated doctor with hospitals, or None when it does not exist
        """
        existing = await self.repository.get_with_hospitals(doctor_id)
        if not existing:
            return None

        resolved = await self._resolve_hospital_ids(hospital_ids)

        await self.repository.update({"id": doctor_id, **self._doctor_values(data)})
        await self.repository.set_hospitals(doctor_id, resolved)
        await self.repository.save_changes()

        return await self.repository.get_with_hospitals(doctor_id)

    async def delete_doctor(self, doctor_id: int) -> None:
        """Delete a doctor; fails with IntegrityError while appointments reference it."""
        await self.repository.delete(doctor_id)
        await self.repository.save_changes()
