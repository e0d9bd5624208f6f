"""Create clinic tables

Revision ID: 001_create_clinic_tables
Revises:
Create Date: 2026-10-19

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create patients, doctors, hospitals, doctor_hospitals and appointments."""
    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("contact_number", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_patients"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])
    op.create_index("ix_patients_contact_number", "patients", ["contact_number"])

    op.create_table(
        "doctors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("specialization", sa.String(length=50), nullable=False),
        sa.Column(
            "consultation_fee",
            sa.Numeric(precision=10, scale=2),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column("availability_json", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_doctors"),
        sa.CheckConstraint(
            "consultation_fee >= 0 AND consultation_fee <= 100000",
            name="ck_doctors_consultation_fee_range",
        ),
    )
    op.create_index("ix_doctors_specialization", "doctors", ["specialization"])

    op.create_table(
        "hospitals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("address", sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_hospitals"),
    )
    op.create_index("ix_hospitals_name", "hospitals", ["name"])

    op.create_table(
        "doctor_hospitals",
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("hospital_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("doctor_id", "hospital_id", name="pk_doctor_hospitals"),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_doctor_hospitals_doctor_id_doctors",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["hospital_id"],
            ["hospitals.id"],
            name="fk_doctor_hospitals_hospital_id_hospitals",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_doctor_hospitals_hospital_id", "doctor_hospitals", ["hospital_id"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("patient_id", sa.Integer(), nullable=False),
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("hospital_id", sa.Integer(), nullable=False),
        sa.Column("appointment_date", sa.DateTime(), nullable=False),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default=sa.text("'Booked'"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_appointments"),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_appointments_patient_id_patients",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_appointments_doctor_id_doctors",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["hospital_id"],
            ["hospitals.id"],
            name="fk_appointments_hospital_id_hospitals",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "status IN ('Booked', 'Confirmed', 'Completed', 'Cancelled')",
            name="ck_appointments_status",
        ),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_hospital_id", "appointments", ["hospital_id"])
    op.create_index(
        "idx_appointments_doctor_date",
        "appointments",
        ["doctor_id", "appointment_date"],
    )

    # One active appointment per doctor and time slot
    op.create_index(
        "uq_appointments_doctor_slot_active",
        "appointments",
        ["doctor_id", "appointment_date"],
        unique=True,
        postgresql_where=sa.text("status <> 'Cancelled'"),
        sqlite_where=sa.text("status <> 'Cancelled'"),
    )


def downgrade() -> None:
    """Drop clinic tables."""
    op.drop_table("appointments")
    op.drop_table("doctor_hospitals")
    op.drop_table("hospitals")
    op.drop_table("doctors")
    op.drop_table("patients")
