"""Appointment endpoints."""

from fastapi import APIRouter, status

from app.dependencies import AppointmentServiceDep
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentCreatedResponse,
    AppointmentListResponse,
    DoctorDayAppointmentsResponse,
)

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Book an appointment",
)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentServiceDep,
) -> AppointmentCreatedResponse:
    """
    Book a doctor's time slot on a given date.

    Args:
        data: Appointment creation data
        service: Appointment service

    Returns:
        Confirmation message and the stored appointment

    Raises:
        BadRequestException: If fields are missing or malformed (400)
        ConflictException: If the slot is already booked (409)
    """
    return await service.create_appointment(data)


@router.get(
    "/",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List all appointments",
)
async def list_appointments(service: AppointmentServiceDep) -> AppointmentListResponse:
    """List every appointment ordered by date and time slot."""
    return AppointmentListResponse(appointments=await service.list_appointments())


@router.get(
    "/patient/{patient_id}",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments for a patient",
)
async def get_appointments_by_patient(
    patient_id: str,
    service: AppointmentServiceDep,
) -> AppointmentListResponse:
    """List a patient's appointments ordered by date and time slot."""
    appointments = await service.get_appointments_by_patient(patient_id)
    return AppointmentListResponse(appointments=appointments)


@router.get(
    "/email/{email}",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments by patient email",
)
async def get_appointments_by_email(
    email: str,
    service: AppointmentServiceDep,
) -> AppointmentListResponse:
    """
    List appointments booked under an email address.

    Kept for clients that predate lookups by patient ID. The email is
    matched case-insensitively.
    """
    appointments = await service.get_appointments_by_email(email)
    return AppointmentListResponse(appointments=appointments)


@router.get(
    "/doctor/{doctor_id}",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments for a doctor",
)
async def get_appointments_by_doctor(
    doctor_id: str,
    service: AppointmentServiceDep,
) -> AppointmentListResponse:
    """List a doctor's appointments ordered by date and time slot."""
    appointments = await service.get_appointments_by_doctor(doctor_id)
    return AppointmentListResponse(appointments=appointments)


@router.get(
    "/doctor/{doctor_id}/date/{date}",
    response_model=DoctorDayAppointmentsResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List a doctor's appointments on a date",
)
async def get_appointments_by_doctor_and_date(
    doctor_id: str,
    date: str,
    service: AppointmentServiceDep,
) -> DoctorDayAppointmentsResponse:
    """
    List a doctor's appointments on one calendar date (UTC), ordered by time slot.

    Args:
        doctor_id: Doctor ID
        date: Date in YYYY-MM-DD format
        service: Appointment service

    Returns:
        Appointments with the echoed doctor ID and date, and a count
    """
    return await service.get_appointments_by_doctor_and_date(doctor_id, date)
