"""Tests for patient registration, search and editing."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.patients import PatientCreate
from app.services.patient_service import PatientService


def _patient(name: str, phone: str) -> PatientCreate:
    return PatientCreate(name=name, contact_number=phone)


@pytest.mark.asyncio
async def test_register_patient(client: AsyncClient, sample_patient_data: dict) -> None:
    """Test registering a patient."""
    response = await client.post("/api/v1/patients/", json=sample_patient_data)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Sunil Fernando"
    assert data["date_of_birth"] == "1985-04-12"
    assert data["contact_number"] == "+94 71 555 0101"
    assert "id" in data
    assert data["created_at"] is not None


@pytest.mark.asyncio
async def test_register_patient_duplicate_phone(
    client: AsyncClient, sample_patient_data: dict
) -> None:
    """A second registration with the same number is rejected and nothing is inserted."""
    first = await client.post("/api/v1/patients/", json=sample_patient_data)
    assert first.status_code == 201

    duplicate = {**sample_patient_data, "name": "Someone Else"}
    response = await client.post("/api/v1/patients/", json=duplicate)

    assert response.status_code == 409
    assert response.json()["message"] == "A patient with this phone number already exists"

    listing = await client.get("/api/v1/patients/")
    assert len(listing.json()) == 1


@pytest.mark.asyncio
async def test_register_patient_invalid_phone(
    client: AsyncClient, sample_patient_data: dict
) -> None:
    response = await client.post(
        "/api/v1/patients/", json={**sample_patient_data, "contact_number": "call me maybe"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_patient_blank_name(
    client: AsyncClient, sample_patient_data: dict
) -> None:
    response = await client.post("/api/v1/patients/", json={**sample_patient_data, "name": "   "})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_search_patients_by_name(client: AsyncClient, test_patient: int) -> None:
    """Search is a case-insensitive substring match."""
    response = await client.get("/api/v1/patients/", params={"search": "kamala"})
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [test_patient]

    response = await client.get("/api/v1/patients/", params={"search": "nobody"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_search_blank_term_lists_everyone(db_session: AsyncSession) -> None:
    service = PatientService(db_session)
    await service.register_patient(_patient("Amal Jayasuriya", "0771000001"))
    await service.register_patient(_patient("Nadeesha Ranasinghe", "0771000002"))

    assert len(await service.search_patients("")) == 2
    assert len(await service.search_patients("   ")) == 2
    assert len(await service.search_patients(None)) == 2
    assert await service.search_patients("foo") == []


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(db_session: AsyncSession) -> None:
    service = PatientService(db_session)
    await service.register_patient(_patient("Amal Jayasuriya", "0771000001"))

    assert await service.search_patients("%") == []
    assert await service.search_patients("_mal") == []


@pytest.mark.asyncio
async def test_get_patient_not_found(client: AsyncClient) -> None:
    response = await client.get("/api/v1/patients/9999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_patient(client: AsyncClient, test_patient: int) -> None:
    """Test editing a patient replaces its details."""
    response = await client.put(
        f"/api/v1/patients/{test_patient}",
        json={"name": "Kamala de Silva", "contact_number": "+94 77 765 4321"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Kamala de Silva"
    assert data["contact_number"] == "+94 77 765 4321"
    assert data["date_of_birth"] is None


@pytest.mark.asyncio
async def test_update_patient_not_found(client: AsyncClient, sample_patient_data: dict) -> None:
    response = await client.put("/api/v1/patients/9999", json=sample_patient_data)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_patient(client: AsyncClient, test_patient: int) -> None:
    response = await client.delete(f"/api/v1/patients/{test_patient}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/patients/{test_patient}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_unknown_patient_is_not_an_error(client: AsyncClient) -> None:
    response = await client.delete("/api/v1/patients/9999")
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_patient_with_appointments_is_refused(
    client: AsyncClient,
    db_session: AsyncSession,
    test_doctor: int,
    test_hospital: int,
    test_patient: int,
    future_slot,
) -> None:
    """A referenced patient survives the delete attempt."""
    booked = await client.post(
        "/api/v1/appointments/",
        json={
            "doctor_id": test_doctor,
            "patient_id": test_patient,
            "hospital_id": test_hospital,
            "appointment_date": (future_slot + timedelta(hours=1)).isoformat(),
        },
    )
    assert booked.status_code == 201

    response = await client.delete(f"/api/v1/patients/{test_patient}")
    assert response.status_code == 409

    service = PatientService(db_session)
    with pytest.raises(IntegrityError):
        await service.delete_patient(test_patient)
    await db_session.rollback()

    assert await service.get_patient_by_id(test_patient) is not None


@pytest.mark.asyncio
async def test_search_term_is_matched_as_given(db_session: AsyncSession) -> None:
    """Surrounding spaces in the term are part of what must appear in the name."""
    service = PatientService(db_session)
    ann_lee = await service.register_patient(_patient("Ann Lee", "0771000003"))
    await service.register_patient(_patient("Annlee", "0771000004"))

    results = await service.search_patients("Ann ")

    assert [p["id"] for p in results] == [ann_lee]
