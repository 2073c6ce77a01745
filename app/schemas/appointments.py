"""Appointment schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.dates import ensure_utc


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PatientDetailsInput(CamelModel):
    """Patient contact details as submitted; presence is checked by the service."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None


class AppointmentCreate(CamelModel):
    """
    Schema for creating a new appointment.

    Every field is optional at the parsing boundary so that missing values
    are reported as 400 by the service instead of 422 by the framework.
    Numeric IDs and labels are accepted and stored as strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    patient_id: str | None = None
    doctor_id: str | None = None
    department: str | None = None
    date: str | None = None
    time_slot: str | None = None
    patient_details: PatientDetailsInput | None = None


class PatientDetails(CamelModel):
    """Stored patient details."""

    full_name: str
    email: str
    phone: str


class AppointmentResponse(CamelModel):
    """Schema for appointment response."""

    id: UUID
    patient_id: str
    doctor_id: str
    department: str
    date: datetime
    time_slot: str
    patient_details: PatientDetails
    created_at: datetime

    @field_validator("date", "created_at")
    @classmethod
    def validate_utc(cls, v: datetime) -> datetime:
        """Normalize timestamps read back from the store to UTC."""
        return ensure_utc(v)

    @classmethod
    def from_row(cls, row: dict) -> "AppointmentResponse":
        """Build a response from a flat appointments table row."""
        return cls(
            id=row["id"],
            patient_id=row["patient_id"],
            doctor_id=row["doctor_id"],
            department=row["department"],
            date=row["date"],
            time_slot=row["time_slot"],
            patient_details=PatientDetails(
                full_name=row["patient_full_name"],
                email=row["patient_email"],
                phone=row["patient_phone"],
            ),
            created_at=row["created_at"],
        )


class AppointmentCreatedResponse(BaseModel):
    """Schema for a successful booking."""

    message: str
    appointment: AppointmentResponse


class AppointmentListResponse(BaseModel):
    """Schema for appointment list response."""

    appointments: list[AppointmentResponse]


class DoctorDayAppointmentsResponse(CamelModel):
    """Schema for a doctor's appointments on one calendar date."""

    appointments: list[AppointmentResponse]
    doctor_id: str
    date: str
    count: int


class AppointmentFilters(BaseModel):
    """Schema for appointment filtering."""

    patient_id: str | None = None
    doctor_id: str | None = None
    patient_email: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    sort: tuple[str, ...] = Field(default=("date", "time_slot"))
