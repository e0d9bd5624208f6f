"""Hospital repository."""

from sqlalchemy import select

from app.models.doctor_hospitals import doctor_hospitals
from app.models.doctors import doctors
from app.models.hospitals import hospitals
from app.repositories.base import Repository


class HospitalRepository(Repository):
    """Repository for hospital rows."""

    table = hospitals

    async def get_with_doctors(self, hospital_id: int) -> dict | None:
        """Get a hospital together with the doctors associated with it."""
        hospital = await self.get_by_id(hospital_id)
        if not hospital:
            return None

        doctors_query = (
            select(doctors)
            .join(doctor_hospitals, doctor_hospitals.c.doctor_id == doctors.c.id)
            .where(doctor_hospitals.c.hospital_id == hospital_id)
            .order_by(doctors.c.name)
        )
        doctors_result = await self.db.execute(doctors_query)
        hospital["doctors"] = [dict(row) for row in doctors_result.mappings().all()]

        return hospital
