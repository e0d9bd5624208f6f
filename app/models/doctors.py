"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    text,
)

from app.models.metadata import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("specialization", String(50), nullable=False, index=True),
    Column("consultation_fee", Numeric(10, 2), nullable=False, server_default=text("0")),
    # Free-form days/times blob, stored as given
    Column("availability_json", Text),
    # Constraints
    CheckConstraint(
        "consultation_fee >= 0 AND consultation_fee <= 100000",
        name="consultation_fee_range",
    ),
)
