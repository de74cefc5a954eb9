# core/management/commands/ensure_test_users.py
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from core.repositories import PatientRepository, UserRepository
from core.services.accounts import PLACEHOLDER_PHONE, split_display_name
from core.store import get_database

TEST_SET = [
    ("admin1@hospital.com", "Admin One", "admin"),
    ("doctor1@hospital.com", "Doctor One", "doctor"),
    ("patient1@hospital.com", "Patient One", "patient"),
]


class Command(BaseCommand):
    help = "Ensure test users exist and password=123456 (idempotent)."

    def handle(self, *args, **opts):
        db = get_database()
        users = UserRepository(db)
        patients = PatientRepository(db)
        for email, name, role in TEST_SET:
            u = users.find_by_email(email)
            if u is None:
                u = users.create({"email": email, "name": name, "role": role, "password": make_password("123456")})
            else:
                # force password and role back to the known values
                u = users.update_by_id(u["_id"], {"password": make_password("123456"), "role": role})

            if role == "patient" and not u.get("patient_profile"):
                p = patients.find_by_email(email)
                if p is None:
                    first_name, last_name = split_display_name(name)
                    p = patients.create({
                        "first_name": first_name, "last_name": last_name, "email": email,
                        "phone": PLACEHOLDER_PHONE, "user": u["_id"],
                    })
                else:
                    patients.update_by_id(p["_id"], {"user": u["_id"]})
                users.update_by_id(u["_id"], {"patient_profile": p["_id"]})
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
