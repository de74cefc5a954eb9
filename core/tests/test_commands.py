from io import StringIO

from django.core.management import call_command

from core.repositories import (
    AppointmentRepository,
    DepartmentRepository,
    DoctorRepository,
    PatientRepository,
    UserRepository,
)


def test_populate_data_is_idempotent(mongo):
    call_command('populate_data', stdout=StringIO())
    call_command('populate_data', stdout=StringIO())

    assert DepartmentRepository(mongo).count() == 5
    assert DoctorRepository(mongo).count() == 5
    assert PatientRepository(mongo).count() == 6
    assert AppointmentRepository(mongo).count() == 6
    assert UserRepository(mongo).count() == 1

    cardiology = DepartmentRepository(mongo).find_by_name('cardiology')
    assert cardiology['doctor'] is not None


def test_ensure_test_users_links_patient(client, mongo):
    call_command('ensure_test_users', stdout=StringIO())
    call_command('ensure_test_users', stdout=StringIO())

    users = UserRepository(mongo)
    assert users.count() == 3
    patient_user = users.find_by_email('patient1@hospital.com')
    patient = PatientRepository(mongo).find_by_email('patient1@hospital.com')
    assert patient_user['patient_profile'] == patient['_id']
    assert patient['user'] == patient_user['_id']

    r = client.post('/api/auth/login', {'email': 'doctor1@hospital.com', 'password': '123456'}, format='json')
    assert r.status_code == 200
    assert r.data['user']['role'] == 'doctor'
