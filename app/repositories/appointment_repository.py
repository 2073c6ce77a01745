"""Persistence port for appointments."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.appointments import appointments
from app.schemas.appointments import AppointmentFilters


class AppointmentStore(Protocol):
    """Operations the appointment service needs from storage."""

    async def insert(self, values: dict[str, Any]) -> dict: ...

    async def find_one(self, doctor_id: str, date: datetime, time_slot: str) -> dict | None: ...

    async def find_many(self, filters: AppointmentFilters) -> list[dict]: ...


class AppointmentRepository:
    """SQLAlchemy Core implementation of the appointment store."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session."""
        self.db = db

    async def insert(self, values: dict[str, Any]) -> dict:
        """
        Insert a new appointment row.

        Args:
            values: Column values for the new row

        Returns:
            The stored row, including generated columns

        Raises:
            IntegrityError: If the (doctor, date, slot) triple is already taken
        """
        stmt = insert(appointments).values(**values).returning(appointments)
        try:
            result = await self.db.execute(stmt)
            row = result.mappings().one()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return dict(row)

    async def find_one(self, doctor_id: str, date: datetime, time_slot: str) -> dict | None:
        """Find the appointment occupying an exact doctor/date/slot triple."""
        stmt = select(appointments).where(
            and_(
                appointments.c.doctor_id == doctor_id,
                appointments.c.date == date,
                appointments.c.time_slot == time_slot,
            )
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row else None

    async def find_many(self, filters: AppointmentFilters) -> list[dict]:
        """
        List appointments matching the given filters.

        Exact matches apply to doctor, patient and email; the date range is
        inclusive on both ends. Rows are ordered by ``filters.sort`` with the
        primary key as a final tie breaker.
        """
        conditions = []

        if filters.patient_id is not None:
            conditions.append(appointments.c.patient_id == filters.patient_id)

        if filters.doctor_id is not None:
            conditions.append(appointments.c.doctor_id == filters.doctor_id)

        if filters.patient_email is not None:
            conditions.append(appointments.c.patient_email == filters.patient_email)

        if filters.from_date is not None:
            conditions.append(appointments.c.date >= filters.from_date)

        if filters.to_date is not None:
            conditions.append(appointments.c.date <= filters.to_date)

        stmt = select(appointments).where(and_(True, *conditions))
        stmt = stmt.order_by(*self._order_by(filters.sort), appointments.c.id)

        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    @staticmethod
    def _order_by(sort: Sequence[str]) -> list:
        """Translate sort field names into ascending column clauses."""
        return [appointments.c[name].asc() for name in sort]
