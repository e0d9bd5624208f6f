"""Doctor-Hospital junction table for many-to-many relationship."""

from sqlalchemy import Column, ForeignKey, Integer, Table

from app.models.metadata import metadata

doctor_hospitals = Table(
    "doctor_hospitals",
    metadata,
    Column(
        "doctor_id",
        Integer,
        ForeignKey("doctors.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "hospital_id",
        Integer,
        ForeignKey("hospitals.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
