from typing import Optional

from core.repositories import DoctorRepository
from core.services.common import delete_or_404, get_or_404, update_or_404
from core.store import as_object_id

SEARCH_FIELDS = ('first_name', 'last_name', 'specialization')
EXPAND = ('department',)


def list_doctors(db) -> list[dict]:
    return DoctorRepository(db).find_all(populate=EXPAND)


def get_doctor(db, pk) -> dict:
    return get_or_404(DoctorRepository(db), pk, populate=EXPAND)


def list_by_department(db, department_id) -> list[dict]:
    oid = as_object_id(department_id)
    if oid is None:
        return []
    return DoctorRepository(db).find_all({'department': oid}, populate=EXPAND)


def create_doctor(db, fields: dict) -> dict:
    return DoctorRepository(db).create(fields)


def update_doctor(db, pk, fields: dict) -> dict:
    return update_or_404(DoctorRepository(db), pk, fields)


def delete_doctor(db, pk) -> None:
    delete_or_404(DoctorRepository(db), pk)


def search_doctors(db, query: Optional[str]) -> list[dict]:
    """Doctors whose first name, last name or specialization contains ``query``."""
    if not query:
        return []
    return DoctorRepository(db).search(query, SEARCH_FIELDS, populate=EXPAND)
