"""
Typed CRUD operations over the MongoDB collections.

Each repository wraps one collection and knows the collection's
"schema": required fields, defaults, enumerated values, normalised
fields and which fields reference documents in other collections.
Documents are plain dicts with snake_case keys; serializers translate
them to and from the camelCase wire format.

Every operation is a single-document, non-transactional call.
"""
from __future__ import annotations

import re
from copy import deepcopy
from typing import Any, Iterable, Optional

from django.utils import timezone
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from rest_framework.exceptions import ValidationError

from core import store
from core.store import UNRESOLVED, Found, Resolution, as_object_id

USER_ROLES = ('admin', 'doctor', 'patient')
GENDERS = ('Male', 'Female', 'Other')
APPOINTMENT_STATUSES = ('Scheduled', 'Completed', 'Cancelled', 'No-show')

_REGISTRY: dict[str, type['DocumentRepository']] = {}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class DocumentRepository:
    collection_name: str = ''
    label: str = 'Document'
    required_fields: tuple[str, ...] = ()
    defaults: dict[str, Any] = {}
    choices: dict[str, tuple[str, ...]] = {}
    # stored lower-cased and trimmed
    lowercase_fields: tuple[str, ...] = ()
    # stored trimmed
    trimmed_fields: tuple[str, ...] = ()
    # field -> name of the repository owning the referenced collection
    references: dict[str, str] = {}
    duplicate_message: str = 'Duplicate value for a unique field'

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        _REGISTRY[cls.__name__] = cls

    def __init__(self, db: Database):
        self.db = db
        self.collection = db[self.collection_name]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_all(self, filter: Optional[dict] = None, *, populate: Iterable[str] = (),
                 sort: Optional[list] = None, limit: Optional[int] = None) -> list[dict]:
        cursor = self.collection.find(filter or {})
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        docs = list(cursor)
        for doc in docs:
            self.populate(doc, *populate)
        return docs

    def find_by_id(self, id: Any, *, populate: Iterable[str] = ()) -> Optional[dict]:
        oid = as_object_id(id)
        if oid is None:
            return None
        return self.find_one({'_id': oid}, populate=populate)

    def find_one(self, filter: dict, *, populate: Iterable[str] = ()) -> Optional[dict]:
        doc = self.collection.find_one(filter)
        if doc is not None:
            self.populate(doc, *populate)
        return doc

    def count(self, filter: Optional[dict] = None) -> int:
        return self.collection.count_documents(filter or {})

    def search(self, text: str, fields: Iterable[str], *, populate: Iterable[str] = ()) -> list[dict]:
        """Case-insensitive literal substring match on any of ``fields``."""
        pattern = re.escape(text)
        query = {'$or': [{f: {'$regex': pattern, '$options': 'i'}} for f in fields]}
        return self.find_all(query, populate=populate)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, fields: dict) -> dict:
        doc = {k: v for k, v in fields.items() if k not in ('_id', 'created_at', 'updated_at')}
        for key, value in self.defaults.items():
            if doc.get(key) is None:
                doc[key] = deepcopy(value)
        self._normalize(doc)
        missing = [f for f in self.required_fields if _is_blank(doc.get(f))]
        if missing:
            raise ValidationError(f"{self.label} validation failed: {', '.join(missing)} required")
        self._check_choices(doc)
        now = timezone.now()
        doc['created_at'] = now
        doc['updated_at'] = now
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ValidationError(self.duplicate_message)
        return doc

    def update_by_id(self, id: Any, fields: dict) -> Optional[dict]:
        """Shallow-merge ``fields`` into the document; ``None`` if absent."""
        oid = as_object_id(id)
        if oid is None:
            return None
        changes = {k: v for k, v in fields.items() if k not in ('_id', 'created_at', 'updated_at')}
        self._normalize(changes)
        cleared = [f for f in self.required_fields if f in changes and _is_blank(changes[f])]
        if cleared:
            raise ValidationError(f"{self.label} validation failed: {', '.join(cleared)} required")
        self._check_choices(changes)
        changes['updated_at'] = timezone.now()
        try:
            return self.collection.find_one_and_update(
                {'_id': oid}, {'$set': changes}, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            raise ValidationError(self.duplicate_message)

    def delete_by_id(self, id: Any) -> bool:
        oid = as_object_id(id)
        if oid is None:
            return False
        return self.collection.delete_one({'_id': oid}).deleted_count == 1

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------
    def resolve(self, ref: Any) -> Resolution:
        oid = as_object_id(ref)
        doc = self.collection.find_one({'_id': oid}) if oid is not None else None
        return Found(doc) if doc is not None else UNRESOLVED

    def related(self, field: str) -> 'DocumentRepository':
        return _REGISTRY[self.references[field]](self.db)

    def populate(self, doc: dict, *fields: str) -> dict:
        """Replace reference ids in ``doc`` with the referenced documents.

        Dangling references become ``None``.
        """
        for field in fields:
            if field not in doc:
                continue
            ref = doc[field]
            if isinstance(ref, dict):
                continue
            resolution = self.related(field).resolve(ref) if ref is not None else UNRESOLVED
            doc[field] = resolution.document if isinstance(resolution, Found) else None
        return doc

    # ------------------------------------------------------------------
    def _normalize(self, doc: dict) -> None:
        for f in self.lowercase_fields:
            if isinstance(doc.get(f), str):
                doc[f] = doc[f].strip().lower()
        for f in self.trimmed_fields:
            if isinstance(doc.get(f), str):
                doc[f] = doc[f].strip()
        for f in self.references:
            if f in doc and doc[f] is not None and not isinstance(doc[f], dict):
                oid = as_object_id(doc[f])
                if oid is None:
                    raise ValidationError(f'Invalid {f} id')
                doc[f] = oid

    def _check_choices(self, doc: dict) -> None:
        for f, allowed in self.choices.items():
            value = doc.get(f)
            if value is not None and value not in allowed:
                raise ValidationError(f"'{value}' is not a valid {f}; expected one of {', '.join(allowed)}")


class UserRepository(DocumentRepository):
    collection_name = store.USERS
    label = 'User'
    required_fields = ('email', 'password', 'name')
    defaults = {'role': 'admin'}
    choices = {'role': USER_ROLES}
    lowercase_fields = ('email',)
    references = {'patient_profile': 'PatientRepository'}
    duplicate_message = 'User already exists'

    def find_by_email(self, email: str, **kwargs) -> Optional[dict]:
        return self.find_one({'email': (email or '').strip().lower()}, **kwargs)


class PatientRepository(DocumentRepository):
    collection_name = store.PATIENTS
    label = 'Patient'
    required_fields = ('first_name', 'last_name', 'email', 'phone')
    defaults = {'status': 'Active', 'medical_history': []}
    choices = {'gender': GENDERS}
    lowercase_fields = ('email',)
    references = {'user': 'UserRepository'}
    duplicate_message = 'A patient with this email already exists'

    def find_by_email(self, email: str, **kwargs) -> Optional[dict]:
        return self.find_one({'email': (email or '').strip().lower()}, **kwargs)


class DoctorRepository(DocumentRepository):
    collection_name = store.DOCTORS
    label = 'Doctor'
    required_fields = ('first_name', 'last_name', 'email', 'phone')
    defaults = {
        'rating': 0,
        'total_patients': 0,
        'qualifications': [],
        'available_slots': [],
        'status': 'Active',
    }
    lowercase_fields = ('email',)
    references = {'department': 'DepartmentRepository'}
    duplicate_message = 'A doctor with this email already exists'


class DepartmentRepository(DocumentRepository):
    collection_name = store.DEPARTMENTS
    label = 'Department'
    required_fields = ('name',)
    defaults = {'status': 'Active'}
    trimmed_fields = ('name',)
    references = {'doctor': 'DoctorRepository'}
    duplicate_message = 'A department with this name already exists'

    def find_by_name(self, name: str) -> Optional[dict]:
        """Exact, case-insensitive name match."""
        pattern = '^' + re.escape(name.strip()) + '$'
        return self.find_one({'name': {'$regex': pattern, '$options': 'i'}})


class AppointmentRepository(DocumentRepository):
    collection_name = store.APPOINTMENTS
    label = 'Appointment'
    required_fields = ('patient', 'appointment_date')
    defaults = {'status': 'Scheduled', 'duration': 30}
    choices = {'status': APPOINTMENT_STATUSES}
    references = {
        'patient': 'PatientRepository',
        'doctor': 'DoctorRepository',
        'department': 'DepartmentRepository',
    }
