from core.repositories import (
    AppointmentRepository,
    DepartmentRepository,
    DoctorRepository,
    PatientRepository,
)
from core.store import Found

RECENT_LIMIT = 5


def patient_display_name(resolution) -> str:
    if isinstance(resolution, Found):
        p = resolution.document
        return f"{p.get('first_name', '')} {p.get('last_name', '')}".strip()
    return 'Unknown Patient'


def doctor_display_name(resolution) -> str:
    if isinstance(resolution, Found):
        d = resolution.document
        return f"Dr. {d.get('first_name', '')} {d.get('last_name', '')}".strip()
    return 'No Doctor Assigned'


def dashboard_summary(db) -> dict:
    """Totals per collection and the most recently booked appointments."""
    patients = PatientRepository(db)
    doctors = DoctorRepository(db)
    appointments = AppointmentRepository(db)

    overview = {
        'totalPatients': patients.count(),
        'totalDoctors': doctors.count(),
        'appointments': appointments.count(),
        'departments': DepartmentRepository(db).count(),
    }

    recent = appointments.find_all(sort=[('created_at', -1), ('_id', -1)], limit=RECENT_LIMIT)
    recent_appointments = [{
        'id': str(a['_id']),
        'patient': patient_display_name(patients.resolve(a.get('patient'))),
        'doctor': doctor_display_name(doctors.resolve(a.get('doctor'))),
        'time': a.get('time'),
        'status': a.get('status'),
    } for a in recent]

    return {'overview': overview, 'recentAppointments': recent_appointments}
