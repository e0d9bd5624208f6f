"""Appointment repository."""

from datetime import date, datetime, time, timedelta

from sqlalchemy import select

from app.models.appointments import appointments
from app.models.doctors import doctors
from app.models.hospitals import hospitals
from app.models.patients import patients
from app.repositories.base import Repository
from app.schemas.appointments import AppointmentStatus


class AppointmentRepository(Repository):
    """Repository for appointment rows."""

    table = appointments

    def _with_details(self):
        return (
            select(
                appointments,
                doctors.c.name.label("doctor_name"),
                patients.c.name.label("patient_name"),
                hospitals.c.name.label("hospital_name"),
            )
            .join(doctors, appointments.c.doctor_id == doctors.c.id)
            .join(patients, appointments.c.patient_id == patients.c.id)
            .join(hospitals, appointments.c.hospital_id == hospitals.c.id)
        )

    async def get_by_doctor_and_date(self, doctor_id: int, day: date) -> list[dict]:
        """Get all of a doctor's appointments on one calendar day, any status."""
        start = datetime.combine(day, time.min)
        query = (
            select(appointments)
            .where(
                appointments.c.doctor_id == doctor_id,
                appointments.c.appointment_date >= start,
                appointments.c.appointment_date < start + timedelta(days=1),
            )
            .order_by(appointments.c.appointment_date)
        )
        result = await self.db.execute(query)

        return [dict(row) for row in result.mappings().all()]

    async def find_active_conflict(
        self,
        doctor_id: int,
        appointment_date: datetime,
        buffer: timedelta = timedelta(0),
    ) -> dict | None:
        """
        Find a non-cancelled appointment that occupies the doctor's slot.

        Args:
            doctor_id: Doctor ID
            appointment_date: Requested timestamp
            buffer: Minimum gap between appointments; zero means exact match

        Returns:
            The first conflicting appointment, or None when the slot is free
        """
        conditions = [
            appointments.c.doctor_id == doctor_id,
            appointments.c.status != AppointmentStatus.CANCELLED.value,
        ]

        if buffer > timedelta(0):
            conditions.append(appointments.c.appointment_date > appointment_date - buffer)
            conditions.append(appointments.c.appointment_date < appointment_date + buffer)
        else:
            conditions.append(appointments.c.appointment_date == appointment_date)

        query = select(appointments).where(*conditions).order_by(appointments.c.id).limit(1)
        result = await self.db.execute(query)
        row = result.mappings().first()

        return dict(row) if row else None

    async def get_all_with_details(self) -> list[dict]:
        """Get every appointment with names, most recent date first."""
        query = self._with_details().order_by(
            appointments.c.appointment_date.desc(), appointments.c.id.desc()
        )
        result = await self.db.execute(query)

        return [dict(row) for row in result.mappings().all()]

    async def get_with_details(self, appointment_id: int) -> dict | None:
        """Get one appointment with names."""
        query = self._with_details().where(appointments.c.id == appointment_id)
        result = await self.db.execute(query)
        row = result.mappings().first()

        return dict(row) if row else None
