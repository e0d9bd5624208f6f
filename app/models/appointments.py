"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    text,
)

from app.models.metadata import metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True),
    # References (rows in use cannot be deleted)
    Column(
        "patient_id",
        Integer,
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    ),
    Column(
        "doctor_id",
        Integer,
        ForeignKey("doctors.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "hospital_id",
        Integer,
        ForeignKey("hospitals.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    ),
    # Appointment details (naive UTC)
    Column("appointment_date", DateTime, nullable=False),
    Column("status", String(20), nullable=False, server_default=text("'Booked'")),
    # Audit fields
    Column(
        "created_at",
        DateTime,
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    # Constraints
    CheckConstraint(
        "status IN ('Booked', 'Confirmed', 'Completed', 'Cancelled')",
        name="status",
    ),
)

Index("idx_appointments_doctor_date", appointments.c.doctor_id, appointments.c.appointment_date)

# One active appointment per doctor and time slot
Index(
    "uq_appointments_doctor_slot_active",
    appointments.c.doctor_id,
    appointments.c.appointment_date,
    unique=True,
    postgresql_where=text("status <> 'Cancelled'"),
    sqlite_where=text("status <> 'Cancelled'"),
)
