"""Doctor repository."""

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import delete, insert, select

from app.models.doctor_hospitals import doctor_hospitals
from app.models.doctors import doctors
from app.models.hospitals import hospitals
from app.repositories.base import Repository


class DoctorRepository(Repository):
    """Repository for doctor rows and their hospital associations."""

    table = doctors

    async def get_by_specialization(self, specialization: str) -> list[dict]:
        """Get doctors with exactly this specialization."""
        query = (
            select(doctors)
            .where(doctors.c.specialization == specialization)
            .order_by(doctors.c.name)
        )
        result = await self.db.execute(query)

        return [dict(d) for d in result.mappings().all()]

    async def _hospitals_by_doctor(self, doctor_ids: Iterable[int]) -> dict[int, list[dict]]:
        """Load hospitals for a set of doctors, keyed by doctor id."""
        query = (
            select(doctor_hospitals.c.doctor_id, hospitals)
            .join(hospitals, doctor_hospitals.c.hospital_id == hospitals.c.id)
            .where(doctor_hospitals.c.doctor_id.in_(list(doctor_ids)))
            .order_by(hospitals.c.name)
        )
        result = await self.db.execute(query)

        grouped: dict[int, list[dict]] = defaultdict(list)
        for row in result.mappings().all():
            hospital = dict(row)
            grouped[hospital.pop("doctor_id")].append(hospital)

        return grouped

    async def get_with_hospitals(self, doctor_id: int) -> dict | None:
        """Get a doctor together with its hospitals."""
        doctor = await self.get_by_id(doctor_id)
        if not doctor:
            return None

        grouped = await self._hospitals_by_doctor([doctor_id])
        doctor["hospitals"] = grouped.get(doctor_id, [])

        return doctor

    async def get_all(self) -> list[dict]:
        """Get every doctor with its hospitals."""
        doctor_list = await super().get_all()
        if not doctor_list:
            return []

        grouped = await self._hospitals_by_doctor(d["id"] for d in doctor_list)
        for doctor in doctor_list:
            doctor["hospitals"] = grouped.get(doctor["id"], [])

        return doctor_list

    async def set_hospitals(self, doctor_id: int, hospital_ids: Iterable[int]) -> None:
        """Stage a replacement of the doctor's hospital associations."""
        await self.db.execute(
            delete(doctor_hospitals).where(doctor_hospitals.c.doctor_id == doctor_id)
        )

        rows = [{"doctor_id": doctor_id, "hospital_id": hid} for hid in dict.fromkeys(hospital_ids)]
        if rows:
            await self.db.execute(insert(doctor_hospitals), rows)
