"""
Appointment booking, updates and statistics.
"""
import logging
from datetime import datetime
from typing import Optional

from bson import ObjectId

from core.repositories import AppointmentRepository
from core.services.common import delete_or_404, get_or_404, update_or_404
from core.services.departments import resolve_department_id
from core.services.patients import find_or_create_patient
from core.store import as_object_id

logger = logging.getLogger(__name__)

EXPAND = ('patient', 'doctor', 'department')


def list_appointments(db) -> list[dict]:
    return AppointmentRepository(db).find_all(populate=EXPAND)


def get_appointment(db, pk) -> dict:
    return get_or_404(AppointmentRepository(db), pk, populate=EXPAND)


def list_for_patient(db, patient_id) -> list[dict]:
    oid = as_object_id(patient_id)
    if oid is None:
        return []
    return AppointmentRepository(db).find_all({'patient': oid}, populate=('doctor', 'department'))


def list_for_doctor(db, doctor_id) -> list[dict]:
    oid = as_object_id(doctor_id)
    if oid is None:
        return []
    return AppointmentRepository(db).find_all({'doctor': oid}, populate=('patient', 'department'))


def book_appointment(db, *, email: str, date: datetime, first_name: str = '', last_name: str = '',
                     phone: str = '', time: str = '', department: Optional[str] = None,
                     reason: str = '', doctor: Optional[ObjectId] = None) -> dict:
    """Book a visit from the public booking form.

    1. find the patient by email, or register one from the contact fields;
    2. resolve the department name (case-insensitive, exact) to its id, a
       name that matches nothing leaves the appointment without department;
    3. store the appointment as ``Scheduled``.
    """
    patient, created = find_or_create_patient(
        db, email=email, first_name=first_name, last_name=last_name, phone=phone
    )
    department_id = resolve_department_id(db, department)
    if department and department_id is None:
        logger.info('booking: department %r not found, left unassigned', department)

    fields = {
        'patient': patient['_id'],
        'appointment_date': date,
        'time': time,
        'department': department_id,
        'reason': reason,
        'status': 'Scheduled',
    }
    if doctor is not None:
        fields['doctor'] = doctor
    appointment = AppointmentRepository(db).create(fields)
    logger.info('booked appointment %s for patient %s (new patient: %s)',
                appointment['_id'], patient['_id'], created)
    return appointment


def update_appointment(db, pk, fields: dict) -> dict:
    return update_or_404(AppointmentRepository(db), pk, fields)


def cancel_appointment(db, pk) -> dict:
    """Set status to ``Cancelled``; nothing else changes."""
    return update_or_404(AppointmentRepository(db), pk, {'status': 'Cancelled'})


def delete_appointment(db, pk) -> None:
    delete_or_404(AppointmentRepository(db), pk)


def appointment_stats(db) -> dict:
    # Independent counts; No-show only contributes to the total.
    repo = AppointmentRepository(db)
    return {
        'total': repo.count(),
        'completed': repo.count({'status': 'Completed'}),
        'scheduled': repo.count({'status': 'Scheduled'}),
        'cancelled': repo.count({'status': 'Cancelled'}),
    }
