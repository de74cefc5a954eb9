"""
Management command to populate the database with demo data.

Idempotent: records are matched on their natural key (department name,
email) and left alone when they already exist.
"""
from datetime import timedelta
import random

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.utils import timezone

from core.repositories import (
    AppointmentRepository,
    DepartmentRepository,
    DoctorRepository,
    PatientRepository,
    UserRepository,
)
from core.store import get_database

DEPARTMENTS = [
    {'name': 'Cardiology', 'description': 'Heart and blood vessel care', 'floor': 2, 'phone': '555-0102'},
    {'name': 'Neurology', 'description': 'Brain, spine and nervous system', 'floor': 3, 'phone': '555-0103'},
    {'name': 'Pediatrics', 'description': 'Care for infants, children and teens', 'floor': 1, 'phone': '555-0101'},
    {'name': 'Orthopedics', 'description': 'Bones, joints and muscles', 'floor': 4, 'phone': '555-0104'},
    {'name': 'Emergency', 'description': 'Round-the-clock emergency care', 'floor': 0, 'phone': '555-0100'},
]

DOCTORS = [
    ('Sarah', 'Johnson', 'Cardiology', 'Cardiologist', 12, ['MD', 'FACC']),
    ('Michael', 'Chen', 'Neurology', 'Neurologist', 9, ['MD', 'PhD']),
    ('Emily', 'Davis', 'Pediatrics', 'Pediatrician', 7, ['MD']),
    ('James', 'Wilson', 'Orthopedics', 'Orthopedic Surgeon', 15, ['MD', 'FRCS']),
    ('Olivia', 'Martinez', 'Emergency', 'Emergency Physician', 5, ['MD']),
]

PATIENTS = [
    ('John', 'Smith', 'Male', 'O+'),
    ('Emma', 'Brown', 'Female', 'A+'),
    ('Liam', 'Taylor', 'Male', 'B-'),
    ('Ava', 'Anderson', 'Female', 'AB+'),
    ('Noah', 'Thomas', 'Male', 'O-'),
    ('Mia', 'Moore', 'Female', 'A-'),
]

SLOTS = ['09:00 AM', '10:00 AM', '11:00 AM', '02:00 PM', '03:00 PM', '04:00 PM']
REASONS = ['Regular checkup', 'Follow-up visit', 'Chest pain', 'Headache', 'Vaccination', 'Knee pain']
STATUSES = ['Scheduled', 'Completed', 'Cancelled', 'No-show']


class Command(BaseCommand):
    help = 'Populate database with demo data'

    def handle(self, *args, **options):
        db = get_database()
        self.stdout.write('Creating demo data...')

        departments = self.create_departments(db)
        doctors = self.create_doctors(db, departments)
        self.assign_department_heads(db, departments, doctors)
        patients = self.create_patients(db)
        self.create_appointments(db, patients, doctors, departments)
        self.create_admin(db)

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_departments(self, db):
        repo = DepartmentRepository(db)
        departments = {}
        for data in DEPARTMENTS:
            dept = repo.find_by_name(data['name'])
            if not dept:
                dept = repo.create({**data, 'email': f"{data['name'].lower()}@hospital.com"})
                self.stdout.write(f'Department: {dept["name"]}')
            departments[dept['name']] = dept
        return departments

    def create_doctors(self, db, departments):
        repo = DoctorRepository(db)
        doctors = []
        for i, (first, last, dept, specialization, years, quals) in enumerate(DOCTORS):
            email = f'{first}.{last}@hospital.com'.lower()
            doctor = repo.find_one({'email': email})
            if not doctor:
                doctor = repo.create({
                    'first_name': first,
                    'last_name': last,
                    'email': email,
                    'phone': f'555-02{i:02d}',
                    'specialization': specialization,
                    'department': departments[dept]['_id'],
                    'experience': years,
                    'qualifications': quals,
                    'bio': f'{specialization} with {years} years of experience.',
                    'rating': round(random.uniform(3.5, 5.0), 1),
                    'available_slots': random.sample(SLOTS, 3),
                })
                self.stdout.write(f'Doctor: Dr. {first} {last}')
            doctors.append(doctor)
        return doctors

    def assign_department_heads(self, db, departments, doctors):
        repo = DepartmentRepository(db)
        for doctor in doctors:
            for dept in departments.values():
                if dept['_id'] == doctor.get('department') and not dept.get('doctor'):
                    repo.update_by_id(dept['_id'], {'doctor': doctor['_id']})

    def create_patients(self, db):
        repo = PatientRepository(db)
        patients = []
        for i, (first, last, gender, blood) in enumerate(PATIENTS):
            email = f'{first}.{last}@example.com'.lower()
            patient = repo.find_by_email(email)
            if not patient:
                patient = repo.create({
                    'first_name': first,
                    'last_name': last,
                    'email': email,
                    'phone': f'555-03{i:02d}',
                    'gender': gender,
                    'blood_group': blood,
                    'date_of_birth': timezone.now() - timedelta(days=365 * random.randint(18, 80)),
                    'address': f'{100 + i} Main Street',
                    'medical_history': random.sample(['Hypertension', 'Asthma', 'Diabetes', 'Allergy: penicillin'], 2),
                })
                self.stdout.write(f'Patient: {first} {last}')
            patients.append(patient)
        return patients

    def create_appointments(self, db, patients, doctors, departments):
        repo = AppointmentRepository(db)
        if repo.count():
            self.stdout.write('Appointments already present, skipping.')
            return
        for i, patient in enumerate(patients):
            doctor = doctors[i % len(doctors)]
            repo.create({
                'patient': patient['_id'],
                'doctor': doctor['_id'],
                'department': doctor.get('department'),
                'appointment_date': timezone.now() + timedelta(days=random.randint(-10, 20)),
                'time': random.choice(SLOTS),
                'reason': random.choice(REASONS),
                'status': STATUSES[i % len(STATUSES)],
            })
        self.stdout.write(f'Appointments: {len(patients)}')

    def create_admin(self, db):
        repo = UserRepository(db)
        if not repo.find_by_email('admin@hospital.com'):
            repo.create({
                'name': 'Hospital Admin',
                'email': 'admin@hospital.com',
                'password': make_password('admin123'),
                'role': 'admin',
            })
            self.stdout.write('Admin: admin@hospital.com / admin123')
