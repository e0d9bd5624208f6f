"""Appointment service for business logic."""

from datetime import UTC, date, datetime, time, timedelta

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ConflictException
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.doctor_repository import DoctorRepository
from app.schemas.appointments import AppointmentCreate, AppointmentStatus

logger = structlog.get_logger()

# Terminal states have no way out
ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.BOOKED: frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(UTC).replace(tzinfo=None)


class AppointmentService:
    """Service for booking and managing appointments."""

    def __init__(self, db: AsyncSession, buffer_minutes: int | None = None):
        """
        Initialize service with database session.

        Args:
            db: Database session
            buffer_minutes: Minimum gap between a doctor's appointments;
                defaults to the configured value, 0 meaning exact-time conflicts only
        """
        self.repository = AppointmentRepository(db)
        self.doctor_repository = DoctorRepository(db)
        if buffer_minutes is None:
            buffer_minutes = settings.appointment_buffer_minutes
        self.buffer = timedelta(minutes=buffer_minutes)

    async def get_all_appointments(self) -> list[dict]:
        """Get every appointment with names, newest appointment date first."""
        return await self.repository.get_all_with_details()

    async def get_appointment_by_id(self, appointment_id: int) -> dict | None:
        """Get appointment by ID with names."""
        return await self.repository.get_with_details(appointment_id)

    async def is_slot_available(self, doctor_id: int, appointment_date: datetime) -> bool:
        """Check that the doctor has no active appointment at that time."""
        conflict = await self.repository.find_active_conflict(
            doctor_id, appointment_date, self.buffer
        )
        return conflict is None

    async def book_appointment(self, data: AppointmentCreate) -> dict | None:
        """
        Book an appointment if the doctor's slot is free.

        A booking that loses a race against a concurrent one is rejected by
        the active-slot unique index and reported the same way as a taken slot.

        Args:
            data: Appointment booking data

        Returns:
            The booked appointment, or None when the slot is already taken

        Raises:
            IntegrityError: If a referenced doctor, patient or hospital does not exist
        """
        log = logger.bind(doctor_id=data.doctor_id, appointment_date=str(data.appointment_date))

        if not await self.is_slot_available(data.doctor_id, data.appointment_date):
            log.info("appointment_slot_conflict")
            return None

        values = {
            **data.model_dump(),
            "status": AppointmentStatus.BOOKED.value,
            "created_at": utcnow(),
        }

        try:
            appointment = await self.repository.add(values)
            await self.repository.save_changes()
        except IntegrityError:
            await self.repository.discard_changes()
            if await self.is_slot_available(data.doctor_id, data.appointment_date):
                raise
            log.info("appointment_slot_conflict", detected_by="unique_index")
            return None

        log.info("appointment_booked", appointment_id=appointment["id"])
        return appointment

    async def _change_status(self, appointment: dict, target: AppointmentStatus) -> dict:
        current = AppointmentStatus(appointment["status"])
        if current == target:
            return appointment

        if target not in ALLOWED_TRANSITIONS[current]:
            raise ConflictException(
                f"Cannot change appointment status from {current.value} to {target.value}"
            )

        updated = await self.repository.update({**appointment, "status": target.value})
        await self.repository.save_changes()

        logger.info(
            "appointment_status_changed",
            appointment_id=appointment["id"],
            old_status=current.value,
            new_status=target.value,
        )
        return updated or appointment

    async def update_status(
        self, appointment_id: int, status: AppointmentStatus
    ) -> dict | None:
        """
        Move an appointment to a new status.

        Returns:
            The updated appointment, or None when it does not exist

        Raises:
            ConflictException: If the transition is not allowed
        """
        appointment = await self.repository.get_by_id(appointment_id)
        if not appointment:
            return None

        return await self._change_status(appointment, status)

    async def cancel_appointment(self, appointment_id: int) -> dict | None:
        """Cancel an appointment, freeing its slot; a missing id does nothing."""
        return await self.update_status(appointment_id, AppointmentStatus.CANCELLED)

    async def get_available_slots(
        self, doctor_id: int, hospital_id: int, day: date
    ) -> list[datetime]:
        """
        List the doctor's free slots at a hospital on one day.

        Slots cover the configured clinic hours in fixed steps. Past slots and
        slots holding an active appointment are left out. A doctor who does
        not work at the hospital has no slots.
        """
        doctor = await self.doctor_repository.get_with_hospitals(doctor_id)
        if not doctor or hospital_id not in {h["id"] for h in doctor["hospitals"]}:
            return []

        taken = [
            a["appointment_date"]
            for a in await self.repository.get_by_doctor_and_date(doctor_id, day)
            if a["status"] != AppointmentStatus.CANCELLED.value
        ]

        step = timedelta(minutes=settings.slot_duration_minutes)
        day_start = datetime.combine(day, time.min)
        slot = day_start + timedelta(hours=settings.clinic_day_start_hour)
        day_end = day_start + timedelta(hours=settings.clinic_day_end_hour)
        now = utcnow()

        slots: list[datetime] = []
        while slot + step <= day_end:
            blocked = any(slot <= t < slot + step or abs(t - slot) < self.buffer for t in taken)
            if slot > now and not blocked:
                slots.append(slot)
            slot += step

        return slots
