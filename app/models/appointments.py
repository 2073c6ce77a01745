"""Appointments table model using SQLAlchemy Core."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)

# Metadata for all tables
metadata = MetaData()

# Appointments table
appointments = Table(
    "appointments",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    # Opaque references owned by other systems
    Column("patient_id", Text, nullable=False, index=True),
    Column("doctor_id", Text, nullable=False),
    # Booking details
    Column("department", Text, nullable=False),
    Column("date", DateTime(timezone=True), nullable=False),
    Column("time_slot", Text, nullable=False),
    # Patient details (embedded snapshot, email stored normalized)
    Column("patient_full_name", Text, nullable=False),
    Column("patient_email", Text, nullable=False, index=True),
    Column("patient_phone", String(32), nullable=False),
    # Audit
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    ),
    # One booking per doctor, date and slot
    UniqueConstraint(
        "doctor_id",
        "date",
        "time_slot",
        name="uq_appointments_doctor_date_slot",
    ),
    Index("ix_appointments_date_time_slot", "date", "time_slot"),
)
