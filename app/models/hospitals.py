"""Hospital model definition using SQLAlchemy Core."""

from sqlalchemy import Column, Integer, String, Table

from app.models.metadata import metadata

hospitals = Table(
    "hospitals",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False, index=True),
    Column("address", String(200), nullable=False),
)
