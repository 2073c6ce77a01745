"""Appointment service for business logic."""

from urllib.parse import quote

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.dates import day_bounds, parse_date
from app.core.exceptions import BadRequestException, ConflictException, ServerErrorException
from app.core.redis_client import CacheManager
from app.core.validation import is_blank, is_valid_email, normalize_email
from app.repositories.appointment_repository import AppointmentStore
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentCreatedResponse,
    AppointmentFilters,
    AppointmentResponse,
    DoctorDayAppointmentsResponse,
)

logger = structlog.get_logger()

SLOT_TAKEN_MESSAGE = "This time slot is already booked. Please select another time."
SAVE_FAILED_MESSAGE = "Server error while saving appointment. Please try again."
FETCH_FAILED_MESSAGE = "Server error while fetching appointments."

# Bumped on every booking; list keys embed the generation they were read under
CACHE_GENERATION_KEY = "appointments:generation"


class AppointmentService:
    """Service for booking and querying appointments."""

    # Cache TTL in seconds for list queries
    APPOINTMENT_LIST_CACHE_TTL = 60

    def __init__(
        self,
        store: AppointmentStore,
        cache_manager: CacheManager | None = None,
        cache_ttl: int | None = None,
    ):
        """Initialize service with a persistence port and optional cache manager."""
        self.store = store
        self.cache = cache_manager
        self.cache_ttl = cache_ttl or self.APPOINTMENT_LIST_CACHE_TTL

    @staticmethod
    def _get_list_cache_key(generation: int, query: str, *parts: str) -> str:
        """
        Generate cache key for an appointment list query.

        Variable parts are percent-encoded, so a ``:`` inside an ID can never
        make one query's key look like another's.
        """
        encoded = (quote(part, safe="") for part in parts)
        return ":".join(("appointments", f"v{generation}", query, *encoded))

    async def create_appointment(self, data: AppointmentCreate) -> AppointmentCreatedResponse:
        """
        Book a new appointment.

        Args:
            data: Appointment creation data

        Returns:
            Confirmation message and the stored appointment

        Raises:
            BadRequestException: If a required field is missing or malformed
            ConflictException: If the doctor's slot on that date is already booked
            ServerErrorException: If the store fails unexpectedly
        """
        required = (data.patient_id, data.doctor_id, data.department, data.date, data.time_slot)
        if any(is_blank(value) for value in required):
            raise BadRequestException("All appointment fields are required.")

        details = data.patient_details
        if details is None or any(
            is_blank(value) for value in (details.full_name, details.email, details.phone)
        ):
            raise BadRequestException("Patient details (name, email, phone) are required.")

        email = normalize_email(details.email)
        if not is_valid_email(email):
            raise BadRequestException("Invalid email address.")

        date = parse_date(data.date)

        try:
            existing = await self.store.find_one(data.doctor_id, date, data.time_slot)
            if existing:
                logger.info(
                    "appointment_slot_conflict",
                    doctor_id=data.doctor_id,
                    date=date.isoformat(),
                    time_slot=data.time_slot,
                )
                raise ConflictException(SLOT_TAKEN_MESSAGE)

            row = await self.store.insert(
                {
                    "patient_id": data.patient_id,
                    "doctor_id": data.doctor_id,
                    "department": data.department,
                    "date": date,
                    "time_slot": data.time_slot,
                    "patient_full_name": details.full_name,
                    "patient_email": email,
                    "patient_phone": details.phone,
                }
            )
        except IntegrityError as e:
            # Lost a race with a concurrent booking for the same slot
            logger.info(
                "appointment_slot_conflict",
                doctor_id=data.doctor_id,
                date=date.isoformat(),
                time_slot=data.time_slot,
                detected_by="unique_constraint",
            )
            raise ConflictException(SLOT_TAKEN_MESSAGE) from e
        except SQLAlchemyError as e:
            logger.error("appointment_create_failed", error=str(e))
            raise ServerErrorException(SAVE_FAILED_MESSAGE) from e

        appointment = AppointmentResponse.from_row(row)
        logger.info(
            "appointment_created",
            appointment_id=str(appointment.id),
            doctor_id=appointment.doctor_id,
        )

        # Moving to a new generation orphans every cached list
        if self.cache:
            await self.cache.incr(CACHE_GENERATION_KEY)

        return AppointmentCreatedResponse(
            message="Appointment confirmed successfully!",
            appointment=appointment,
        )

    async def list_appointments(self) -> list[AppointmentResponse]:
        """List every appointment ordered by date, then time slot."""
        return await self._find(
            "list_appointments",
            AppointmentFilters(),
            ("all",),
        )

    async def get_appointments_by_patient(self, patient_id: str) -> list[AppointmentResponse]:
        """List a patient's appointments ordered by date, then time slot."""
        if is_blank(patient_id):
            raise BadRequestException("Patient ID is required.")

        return await self._find(
            "get_appointments_by_patient",
            AppointmentFilters(patient_id=patient_id),
            ("patient", patient_id),
        )

    async def get_appointments_by_email(self, email: str) -> list[AppointmentResponse]:
        """List appointments booked under a patient email (matched case-insensitively)."""
        if is_blank(email):
            raise BadRequestException("Email is required.")

        normalized_email = normalize_email(email)
        return await self._find(
            "get_appointments_by_email",
            AppointmentFilters(patient_email=normalized_email),
            ("email", normalized_email),
        )

    async def get_appointments_by_doctor(self, doctor_id: str) -> list[AppointmentResponse]:
        """List a doctor's appointments ordered by date, then time slot."""
        if is_blank(doctor_id):
            raise BadRequestException("Doctor ID is required.")

        return await self._find(
            "get_appointments_by_doctor",
            AppointmentFilters(doctor_id=doctor_id),
            ("doctor", doctor_id),
        )

    async def get_appointments_by_doctor_and_date(
        self,
        doctor_id: str,
        date: str,
    ) -> DoctorDayAppointmentsResponse:
        """
        List a doctor's appointments on one calendar date.

        The date is expanded to the inclusive UTC window from 00:00:00.000
        to 23:59:59.999, and results are ordered by time slot.

        Args:
            doctor_id: Doctor identifier
            date: Date string, e.g. ``2024-06-01``

        Returns:
            Matching appointments with the echoed doctor ID, date and count

        Raises:
            BadRequestException: If an argument is missing or the date is invalid
        """
        if is_blank(doctor_id):
            raise BadRequestException("Doctor ID is required.")

        if is_blank(date):
            raise BadRequestException("Date is required.")

        start_of_day, end_of_day = day_bounds(parse_date(date))

        items = await self._find(
            "get_appointments_by_doctor_and_date",
            AppointmentFilters(
                doctor_id=doctor_id,
                from_date=start_of_day,
                to_date=end_of_day,
                sort=("time_slot",),
            ),
            ("doctor_day", doctor_id, start_of_day.date().isoformat()),
        )

        return DoctorDayAppointmentsResponse(
            appointments=items,
            doctor_id=doctor_id,
            date=date,
            count=len(items),
        )

    async def _find(
        self,
        operation: str,
        filters: AppointmentFilters,
        key_parts: tuple[str, ...],
    ) -> list[AppointmentResponse]:
        """
        Run a list query through the cache, reporting store failures as 500.

        The cache generation is read before querying the store. A read that
        overlaps a booking therefore writes its result under the old
        generation, where no later read looks.
        """
        cache_key = None
        if self.cache:
            generation = await self.cache.get_json(CACHE_GENERATION_KEY) or 0
            cache_key = self._get_list_cache_key(generation, *key_parts)
            cached = await self.cache.get_json(cache_key)
            if cached is not None:
                return [AppointmentResponse.model_validate(item) for item in cached]

        try:
            rows = await self.store.find_many(filters)
        except SQLAlchemyError as e:
            logger.error("appointments_fetch_failed", operation=operation, error=str(e))
            raise ServerErrorException(FETCH_FAILED_MESSAGE) from e

        items = [AppointmentResponse.from_row(row) for row in rows]

        if self.cache and cache_key:
            await self.cache.set_json(
                cache_key,
                [item.model_dump(mode="json", by_alias=True) for item in items],
                ttl=self.cache_ttl,
            )

        return items
