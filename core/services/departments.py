from typing import Optional

from bson import ObjectId

from core.repositories import DepartmentRepository
from core.services.common import delete_or_404, get_or_404, update_or_404

EXPAND = ('doctor',)


def list_departments(db) -> list[dict]:
    return DepartmentRepository(db).find_all(populate=EXPAND)


def get_department(db, pk) -> dict:
    return get_or_404(DepartmentRepository(db), pk, populate=EXPAND)


def create_department(db, fields: dict) -> dict:
    return DepartmentRepository(db).create(fields)


def update_department(db, pk, fields: dict) -> dict:
    return update_or_404(DepartmentRepository(db), pk, fields)


def delete_department(db, pk) -> None:
    delete_or_404(DepartmentRepository(db), pk)


def resolve_department_id(db, name: Optional[str]) -> Optional[ObjectId]:
    """Id of the department called ``name`` (any letter case), else ``None``."""
    if not name or not name.strip():
        return None
    department = DepartmentRepository(db).find_by_name(name)
    return department['_id'] if department else None
