"""
Login and registration against the ``users`` collection.

Registration writes twice (user, then patient, then the user's link to the
patient).  There is no rollback: a failure after the first write leaves a
user without a patient profile.
"""
import logging
from typing import Optional

from django.contrib.auth.hashers import check_password, identify_hasher, make_password
from django.utils.crypto import constant_time_compare
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework_simplejwt.tokens import AccessToken

from core.repositories import PatientRepository, UserRepository

logger = logging.getLogger(__name__)

PLACEHOLDER_LAST_NAME = 'Patient'
PLACEHOLDER_PHONE = 'Not updated'
INVALID_CREDENTIALS = 'Invalid credentials'


def verify_password(raw: str, stored: Optional[str]) -> bool:
    if not stored:
        return False
    try:
        identify_hasher(stored)
    except ValueError:
        # records created before hashing was introduced hold the raw value
        return constant_time_compare(raw, stored)
    return check_password(raw, stored)


def issue_token(user: dict) -> str:
    token = AccessToken()
    token['user_id'] = str(user['_id'])
    token['role'] = user.get('role')
    return str(token)


def split_display_name(name: str) -> tuple[str, str]:
    parts = name.split()
    first_name = parts[0] if parts else name
    last_name = ' '.join(parts[1:]) or PLACEHOLDER_LAST_NAME
    return first_name, last_name


def login(db, *, email: Optional[str], password: Optional[str]) -> tuple[dict, str]:
    """Return ``(user, token)``; unknown email and wrong password fail alike."""
    if not email or not password:
        raise ValidationError('Email and password required')
    user = UserRepository(db).find_by_email(email)
    if not user or not verify_password(password, user.get('password')):
        logger.info('login failed for %s', email.strip().lower())
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    logger.info('login ok for user %s', user['_id'])
    return user, issue_token(user)


def register(db, *, name: Optional[str], email: Optional[str], password: Optional[str]) -> tuple[dict, dict]:
    """Create a patient account and its linked patient profile.

    The role is always ``patient``.  A patient record already holding the
    email (e.g. from an earlier booking) and not yet linked to an account is
    adopted instead of creating a second one.
    """
    name = (name or '').strip()
    email = (email or '').strip().lower()
    if not name or not email or not password:
        raise ValidationError('All fields are required')

    users = UserRepository(db)
    patients = PatientRepository(db)
    if users.find_by_email(email):
        raise ValidationError('User already exists')
    existing = patients.find_by_email(email)
    if existing and existing.get('user'):
        raise ValidationError('User already exists')

    user = users.create({
        'name': name,
        'email': email,
        'password': make_password(password),
        'role': 'patient',
    })

    if existing:
        patient = patients.update_by_id(existing['_id'], {'user': user['_id']})
    else:
        first_name, last_name = split_display_name(name)
        patient = patients.create({
            'first_name': first_name,
            'last_name': last_name,
            'email': email,
            'phone': PLACEHOLDER_PHONE,
            'user': user['_id'],
        })

    user = users.update_by_id(user['_id'], {'patient_profile': patient['_id']})
    logger.info('registered user %s with patient profile %s', user['_id'], patient['_id'])
    return user, patient
