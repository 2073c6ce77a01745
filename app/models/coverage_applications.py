"""Coverage applications table model using SQLAlchemy Core."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    MetaData,
    Table,
    Text,
    Uuid,
)

metadata = MetaData()

coverage_applications = Table(
    "coverage_applications",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    # Applicant (denormalized identity, not derived from user_id at read time)
    Column("user_id", Text, nullable=False, index=True),
    Column("patient_name", Text, nullable=False),
    Column("patient_email", Text, nullable=False),
    # External policy
    Column("policy_id", Text, nullable=False),
    Column("provider", Text, nullable=False),
    Column("coverage_type", Text, nullable=False),
    # Approval workflow
    Column("status", Text, nullable=False, default="Pending"),
    Column("admin_notes", Text, nullable=True),
    Column(
        "application_date",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    ),
    Column("approved_by", Text, nullable=True),
    Column("approved_date", DateTime(timezone=True), nullable=True),
    # Constraints
    CheckConstraint(
        "coverage_type IN ('Full', 'Partial', 'Emergency Only', 'Dental', 'Vision')",
        name="coverage_applications_coverage_type_check",
    ),
    CheckConstraint(
        "status IN ('Pending', 'Approved', 'Declined')",
        name="coverage_applications_status_check",
    ),
)
