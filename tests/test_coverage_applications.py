"""Tests for coverage application schemas and service."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.core.exceptions import ConflictException, NotFoundException
from app.schemas.coverage_applications import (
    CoverageApplicationCreate,
    CoverageApplicationDecision,
    CoverageStatus,
    CoverageType,
)
from app.services.coverage_application_service import CoverageApplicationService


def test_create_schema_rejects_unknown_coverage_type(sample_coverage_application_data: dict):
    """Test coverage type is a closed set."""
    data = {**sample_coverage_application_data, "coverageType": "Cosmetic"}
    with pytest.raises(ValidationError):
        CoverageApplicationCreate.model_validate(data)


@pytest.mark.parametrize("field", ["userId", "patientName", "patientEmail", "policyId", "provider"])
def test_create_schema_requires_fields(sample_coverage_application_data: dict, field: str):
    """Test every applicant field is required."""
    data = dict(sample_coverage_application_data)
    del data[field]
    with pytest.raises(ValidationError):
        CoverageApplicationCreate.model_validate(data)


def test_create_schema_normalizes_email(sample_coverage_application_data: dict):
    """Test the applicant email is lowercased."""
    application = CoverageApplicationCreate.model_validate(sample_coverage_application_data)
    assert application.patient_email == "jane.roe@example.com"
    assert application.coverage_type is CoverageType.EMERGENCY_ONLY


def test_decision_cannot_be_pending():
    """Test a decision must be final."""
    with pytest.raises(ValidationError):
        CoverageApplicationDecision(status=CoverageStatus.PENDING, approved_by="admin-1")


@pytest.mark.asyncio
async def test_submit_application_starts_pending(
    db_session,
    sample_coverage_application_data: dict,
) -> None:
    """Test a new application is Pending with no approval stamp."""
    service = CoverageApplicationService(db_session)

    application = await service.submit_application(
        CoverageApplicationCreate.model_validate(sample_coverage_application_data)
    )

    assert application.status is CoverageStatus.PENDING
    assert application.coverage_type is CoverageType.EMERGENCY_ONLY
    assert application.approved_by is None
    assert application.approved_date is None
    assert application.application_date is not None

    fetched = await service.get_application(application.id)
    assert fetched == application


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [CoverageStatus.APPROVED, CoverageStatus.DECLINED])
async def test_decide_application(
    db_session,
    sample_coverage_application_data: dict,
    status: CoverageStatus,
) -> None:
    """Test a decision stamps the deciding admin and date."""
    service = CoverageApplicationService(db_session)
    application = await service.submit_application(
        CoverageApplicationCreate.model_validate(sample_coverage_application_data)
    )

    decided = await service.decide_application(
        application.id,
        CoverageApplicationDecision(status=status, approved_by="admin-1", admin_notes="Checked"),
    )

    assert decided.status is status
    assert decided.approved_by == "admin-1"
    assert decided.approved_date is not None
    assert decided.admin_notes == "Checked"


@pytest.mark.asyncio
async def test_decide_application_only_once(
    db_session,
    sample_coverage_application_data: dict,
) -> None:
    """Test an already decided application cannot be decided again."""
    service = CoverageApplicationService(db_session)
    application = await service.submit_application(
        CoverageApplicationCreate.model_validate(sample_coverage_application_data)
    )
    await service.decide_application(
        application.id,
        CoverageApplicationDecision(status=CoverageStatus.APPROVED, approved_by="admin-1"),
    )

    with pytest.raises(ConflictException):
        await service.decide_application(
            application.id,
            CoverageApplicationDecision(status=CoverageStatus.DECLINED, approved_by="admin-2"),
        )

    current = await service.get_application(application.id)
    assert current.status is CoverageStatus.APPROVED
    assert current.approved_by == "admin-1"


@pytest.mark.asyncio
async def test_get_missing_application(db_session) -> None:
    """Test looking up an unknown application."""
    service = CoverageApplicationService(db_session)
    with pytest.raises(NotFoundException):
        await service.get_application(uuid4())
