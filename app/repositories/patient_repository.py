"""Patient repository."""

from sqlalchemy import select

from app.models.patients import patients
from app.repositories.base import Repository


class PatientRepository(Repository):
    """Repository for patient rows."""

    table = patients

    async def get_by_phone(self, phone: str) -> dict | None:
        """Get the first patient registered with a contact number."""
        query = select(patients).where(patients.c.contact_number == phone).order_by(patients.c.id)
        result = await self.db.execute(query)
        patient = result.mappings().first()

        return dict(patient) if patient else None

    async def search_by_name(self, name: str) -> list[dict]:
        """Get patients whose name contains the term, ignoring case."""
        query = (
            select(patients)
            .where(patients.c.name.icontains(name, autoescape=True))
            .order_by(patients.c.name, patients.c.id)
        )
        result = await self.db.execute(query)

        return [dict(p) for p in result.mappings().all()]
