"""Tests for hospital management."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.appointments import AppointmentCreate
from app.schemas.hospitals import HospitalCreate
from app.services.appointment_service import AppointmentService
from app.services.hospital_service import HospitalService


@pytest.mark.asyncio
async def test_create_hospital(client: AsyncClient) -> None:
    """Test creating a hospital."""
    response = await client.post(
        "/api/v1/hospitals/",
        json={"name": "Nawaloka Hospital", "address": "23 Deshamanya H K Dharmadasa Mw"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Nawaloka Hospital"
    assert "id" in data


@pytest.mark.asyncio
async def test_create_hospital_requires_address(client: AsyncClient) -> None:
    response = await client.post("/api/v1/hospitals/", json={"name": "Nawaloka Hospital"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_hospital_lists_doctors(
    client: AsyncClient, test_hospital: int, test_doctor: int
) -> None:
    response = await client.get(f"/api/v1/hospitals/{test_hospital}")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Durdans Hospital"
    assert [d["id"] for d in data["doctors"]] == [test_doctor]
    assert data["doctors"][0]["specialization"] == "Cardiology"


@pytest.mark.asyncio
async def test_update_hospital(client: AsyncClient, test_hospital: int) -> None:
    response = await client.put(
        f"/api/v1/hospitals/{test_hospital}",
        json={"name": "Durdans Hospital Colombo", "address": "3 Alfred Place, Colombo 3"},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Durdans Hospital Colombo"


@pytest.mark.asyncio
async def test_update_hospital_not_found(client: AsyncClient) -> None:
    response = await client.put("/api/v1/hospitals/9999", json={"name": "X", "address": "Y"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_unreferenced_hospital(db_session: AsyncSession) -> None:
    service = HospitalService(db_session)
    hospital_id = await service.create_hospital(
        HospitalCreate(name="Hemas Hospital", address="Wattala")
    )

    await service.delete_hospital(hospital_id)

    assert await service.get_hospital_by_id(hospital_id) is None


@pytest.mark.asyncio
async def test_delete_hospital_with_appointments_is_refused(
    client: AsyncClient,
    db_session: AsyncSession,
    test_hospital: int,
    test_doctor: int,
    test_patient: int,
    future_slot,
) -> None:
    """A hospital referenced by an appointment cannot be deleted."""
    appointment = await AppointmentService(db_session).book_appointment(
        AppointmentCreate(
            doctor_id=test_doctor,
            patient_id=test_patient,
            hospital_id=test_hospital,
            appointment_date=future_slot + timedelta(hours=2),
        )
    )
    assert appointment is not None

    service = HospitalService(db_session)
    with pytest.raises(IntegrityError):
        await service.delete_hospital(test_hospital)
    await db_session.rollback()

    response = await client.delete(f"/api/v1/hospitals/{test_hospital}")
    assert response.status_code == 409

    assert await service.get_hospital_by_id(test_hospital) is not None


@pytest.mark.asyncio
async def test_create_hospital_rejects_blank_name_and_address(
    client: AsyncClient,
) -> None:
    response = await client.post(
        "/api/v1/hospitals/", json={"name": "   ", "address": "Galle Road"}
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/hospitals/", json={"name": "Nawaloka Hospital", "address": "   "}
    )
    assert response.status_code == 422

    listing = await client.get("/api/v1/hospitals/")
    assert listing.json() == []
