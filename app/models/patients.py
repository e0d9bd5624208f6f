"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    text,
)

from app.models.metadata import metadata

patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", Text, nullable=False, index=True),
    Column("date_of_birth", Date),
    # Looked up on registration; uniqueness is checked by the caller, not here
    Column("contact_number", String(20), nullable=False, index=True),
    # Metadata
    Column(
        "created_at",
        DateTime,
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
)
