"""
MongoDB access for the hospital backend.

The API keeps one long-lived ``MongoClient`` per process and hands the
resulting database object to every repository explicitly.  Tests swap the
handle for an in-memory one with :func:`set_database`.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from django.conf import settings
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

# Collection names
USERS = 'users'
PATIENTS = 'patients'
DOCTORS = 'doctors'
DEPARTMENTS = 'departments'
APPOINTMENTS = 'appointments'

_lock = threading.Lock()
_database: Optional[Database] = None


def get_database() -> Database:
    """Return the shared database handle, connecting on first use."""
    global _database
    if _database is None:
        with _lock:
            if _database is None:
                client = MongoClient(
                    settings.MONGODB_URI,
                    serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                )
                db = client[settings.MONGODB_NAME]
                ensure_indexes(db)
                logger.info('connected to MongoDB database %s', settings.MONGODB_NAME)
                _database = db
    return _database


def set_database(db: Optional[Database]) -> None:
    """Install ``db`` as the shared handle (``None`` forces a reconnect)."""
    global _database
    with _lock:
        _database = db


def ensure_indexes(db: Database) -> None:
    """Create unique and lookup indexes.  Safe to call repeatedly."""
    db[USERS].create_index([('email', ASCENDING)], unique=True)
    db[PATIENTS].create_index([('email', ASCENDING)], unique=True)
    db[PATIENTS].create_index([('user', ASCENDING)])
    db[DOCTORS].create_index([('email', ASCENDING)], unique=True)
    db[DOCTORS].create_index([('department', ASCENDING)])
    db[DEPARTMENTS].create_index([('name', ASCENDING)], unique=True)
    db[APPOINTMENTS].create_index([('patient', ASCENDING)])
    db[APPOINTMENTS].create_index([('doctor', ASCENDING)])
    db[APPOINTMENTS].create_index([('department', ASCENDING)])
    db[APPOINTMENTS].create_index([('appointment_date', ASCENDING)])
    db[APPOINTMENTS].create_index([('created_at', DESCENDING)])


def as_object_id(value: Any) -> Optional[ObjectId]:
    """Parse ``value`` into an ObjectId; malformed values give ``None``."""
    if isinstance(value, ObjectId):
        return value
    if value is None:
        return None
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


@dataclass(frozen=True)
class Found:
    """A reference that resolved to a stored document."""
    document: dict


class Unresolved:
    """A reference whose target is missing (never set, or deleted)."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'UNRESOLVED'


UNRESOLVED = Unresolved()

Resolution = Union[Found, Unresolved]
