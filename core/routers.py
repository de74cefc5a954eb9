"""
URL mappings for the hospital backend API.

This module registers all API endpoints with their corresponding view
functions.  Paths mirror those the front end's ``api.js`` calls.  Note
that trailing slashes are deliberately omitted, and that fixed segments
(``search``, ``stats/overview``, ...) are listed before the ``<pk>``
routes they would otherwise be captured by.
"""
from django.urls import path, include

from .auth_views import login_view, logout_view, me_view, register_view
from .views import appointments, departments, doctors, patients
from .views.dashboard import dashboard_stats
from .views.health import health


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('api/health', health),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/me', me_view, name='me_view'),
    # Dashboard
    path('api/dashboard/stats', dashboard_stats),
    # Patients
    path('api/patients', patients.patients),
    path('api/patients/search', patients.search_patients),
    path('api/patients/<str:pk>', patients.patient_detail),
    # Doctors
    path('api/doctors', doctors.doctors),
    path('api/doctors/search', doctors.search_doctors),
    path('api/doctors/department/<str:department_id>', doctors.doctors_by_department),
    path('api/doctors/<str:pk>', doctors.doctor_detail),
    # Departments
    path('api/departments', departments.departments),
    path('api/departments/<str:pk>', departments.department_detail),
    # Appointments
    path('api/appointments', appointments.appointments),
    path('api/appointments/stats/overview', appointments.appointment_stats),
    path('api/appointments/patient/<str:patient_id>', appointments.appointments_for_patient),
    path('api/appointments/doctor/<str:doctor_id>', appointments.appointments_for_doctor),
    path('api/appointments/<str:pk>/cancel', appointments.cancel_appointment),
    path('api/appointments/<str:pk>', appointments.appointment_detail),
]
