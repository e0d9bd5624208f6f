"""Hospital service for business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.hospital_repository import HospitalRepository
from app.schemas.hospitals import HospitalCreate, HospitalUpdate


class HospitalService:
    """Service for hospital operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.repository = HospitalRepository(db)

    async def get_all_hospitals(self) -> list[dict]:
        """Get every hospital."""
        return await self.repository.get_all()

    async def get_hospital_by_id(self, hospital_id: int) -> dict | None:
        """Get hospital by ID."""
        return await self.repository.get_by_id(hospital_id)

    async def get_hospital_with_doctors(self, hospital_id: int) -> dict | None:
        """Get hospital with its associated doctors."""
        return await self.repository.get_with_doctors(hospital_id)

    async def create_hospital(self, data: HospitalCreate) -> int:
        """Create a hospital and return its ID."""
        hospital = await self.repository.add(data.model_dump())
        await self.repository.save_changes()
        return hospital["id"]

    async def update_hospital(self, hospital_id: int, data: HospitalUpdate) -> dict | None:
        """Replace a hospital's details."""
        hospital = await self.repository.update({"id": hospital_id, **data.model_dump()})
        await self.repository.save_changes()
        return hospital

    async def delete_hospital(self, hospital_id: int) -> None:
        """Delete a hospital; fails with IntegrityError while appointments reference it."""
        await self.repository.delete(hospital_id)
        await self.repository.save_changes()
