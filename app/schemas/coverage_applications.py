"""Coverage application schemas for request/response validation."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import Field, field_validator

from app.core.dates import ensure_utc
from app.core.validation import is_valid_email, normalize_email
from app.schemas.appointments import CamelModel


class CoverageType(str, Enum):
    """Kind of insurance coverage being requested."""

    FULL = "Full"
    PARTIAL = "Partial"
    EMERGENCY_ONLY = "Emergency Only"
    DENTAL = "Dental"
    VISION = "Vision"


class CoverageStatus(str, Enum):
    """Coverage application approval state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"


class CoverageApplicationCreate(CamelModel):
    """Schema for submitting a coverage application."""

    user_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1, max_length=200)
    patient_email: str
    policy_id: str = Field(..., min_length=1)
    provider: str = Field(..., min_length=1)
    coverage_type: CoverageType

    @field_validator("patient_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and check the applicant email."""
        email = normalize_email(v)
        if not is_valid_email(email):
            raise ValueError("Invalid email address")
        return email


class CoverageApplicationDecision(CamelModel):
    """Schema for an admin decision on a pending application."""

    status: CoverageStatus
    approved_by: str = Field(..., min_length=1)
    admin_notes: str | None = Field(None, max_length=2000)

    @field_validator("status")
    @classmethod
    def validate_final_status(cls, v: CoverageStatus) -> CoverageStatus:
        """A decision must move the application out of Pending."""
        if v == CoverageStatus.PENDING:
            raise ValueError("Decision status must be Approved or Declined")
        return v


class CoverageApplicationResponse(CamelModel):
    """Schema for coverage application response."""

    id: UUID
    user_id: str
    patient_name: str
    patient_email: str
    policy_id: str
    provider: str
    coverage_type: CoverageType
    status: CoverageStatus
    admin_notes: str | None = None
    application_date: datetime
    approved_by: str | None = None
    approved_date: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("application_date", "approved_date")
    @classmethod
    def validate_utc(cls, v: datetime | None) -> datetime | None:
        """Normalize timestamps read back from the store to UTC."""
        return ensure_utc(v) if v else v
