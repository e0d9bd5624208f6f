"""Database models."""

from app.models.appointments import appointments
from app.models.doctor_hospitals import doctor_hospitals
from app.models.doctors import doctors
from app.models.hospitals import hospitals
from app.models.metadata import metadata
from app.models.patients import patients

__all__ = [
    "appointments",
    "doctor_hospitals",
    "doctors",
    "hospitals",
    "metadata",
    "patients",
]
