"""Coverage application service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

import structlog
from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException
from app.models.coverage_applications import coverage_applications
from app.schemas.coverage_applications import (
    CoverageApplicationCreate,
    CoverageApplicationDecision,
    CoverageApplicationResponse,
    CoverageStatus,
)

logger = structlog.get_logger()


class CoverageApplicationService:
    """Service for insurance coverage applications."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def submit_application(
        self,
        data: CoverageApplicationCreate,
    ) -> CoverageApplicationResponse:
        """
        Submit a new coverage application in the Pending state.

        Args:
            data: Application data

        Returns:
            Stored application
        """
        values = {
            "user_id": data.user_id,
            "patient_name": data.patient_name,
            "patient_email": data.patient_email,
            "policy_id": data.policy_id,
            "provider": data.provider,
            "coverage_type": data.coverage_type.value,
            "status": CoverageStatus.PENDING.value,
        }

        stmt = insert(coverage_applications).values(**values).returning(coverage_applications)
        result = await self.db.execute(stmt)
        row = result.mappings().one()
        await self.db.commit()

        logger.info("coverage_application_submitted", application_id=str(row["id"]))
        return CoverageApplicationResponse.model_validate(dict(row))

    async def get_application(self, application_id: UUID) -> CoverageApplicationResponse:
        """
        Get a coverage application by ID.

        Raises:
            NotFoundException: If the application does not exist
        """
        stmt = select(coverage_applications).where(coverage_applications.c.id == application_id)
        result = await self.db.execute(stmt)
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Coverage application not found")

        return CoverageApplicationResponse.model_validate(dict(row))

    async def decide_application(
        self,
        application_id: UUID,
        decision: CoverageApplicationDecision,
    ) -> CoverageApplicationResponse:
        """
        Approve or decline a pending application.

        The update only matches rows still in Pending, so two concurrent
        decisions cannot both succeed.

        Args:
            application_id: Application ID
            decision: Final status, deciding admin and optional notes

        Returns:
            Updated application

        Raises:
            NotFoundException: If the application does not exist
            ConflictException: If the application was already decided
        """
        current = await self.get_application(application_id)
        if current.status != CoverageStatus.PENDING:
            raise ConflictException(f"Coverage application already {current.status.value.lower()}")

        update_values = {
            "status": decision.status.value,
            "approved_by": decision.approved_by,
            "approved_date": datetime.now(UTC),
        }

        if decision.admin_notes is not None:
            update_values["admin_notes"] = decision.admin_notes

        stmt = (
            update(coverage_applications)
            .where(
                and_(
                    coverage_applications.c.id == application_id,
                    coverage_applications.c.status == CoverageStatus.PENDING.value,
                )
            )
            .values(**update_values)
            .returning(coverage_applications)
        )

        result = await self.db.execute(stmt)
        row = result.mappings().first()
        await self.db.commit()

        if not row:
            raise ConflictException("Coverage application already decided")

        logger.info(
            "coverage_application_decided",
            application_id=str(application_id),
            status=decision.status.value,
        )
        return CoverageApplicationResponse.model_validate(dict(row))
