import logging
from typing import Optional

from core.repositories import PatientRepository
from core.services.common import delete_or_404, get_or_404, update_or_404

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('first_name', 'last_name', 'email')


def list_patients(db) -> list[dict]:
    return PatientRepository(db).find_all()


def get_patient(db, pk) -> dict:
    return get_or_404(PatientRepository(db), pk)


def create_patient(db, fields: dict) -> dict:
    return PatientRepository(db).create(fields)


def update_patient(db, pk, fields: dict) -> dict:
    return update_or_404(PatientRepository(db), pk, fields)


def delete_patient(db, pk) -> None:
    delete_or_404(PatientRepository(db), pk)


def search_patients(db, query: Optional[str]) -> list[dict]:
    """Patients whose first name, last name or email contains ``query``.

    An empty query matches nothing.
    """
    if not query:
        return []
    return PatientRepository(db).search(query, SEARCH_FIELDS)


def find_or_create_patient(db, *, email: str, first_name: str = '', last_name: str = '',
                           phone: str = '') -> tuple[dict, bool]:
    """Look a patient up by email, creating one from the contact fields if absent.

    Two concurrent calls for a brand-new email may both miss the lookup; the
    unique email index then rejects the second insert with a validation error.
    """
    repo = PatientRepository(db)
    patient = repo.find_by_email(email)
    if patient:
        return patient, False
    patient = repo.create({
        'first_name': first_name,
        'last_name': last_name,
        'email': email,
        'phone': phone,
    })
    logger.info('created patient %s during booking', patient['_id'])
    return patient, True
