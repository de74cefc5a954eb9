from typing import Any, Iterable

from rest_framework.exceptions import NotFound

from core.repositories import DocumentRepository


def get_or_404(repo: DocumentRepository, pk: Any, *, populate: Iterable[str] = ()) -> dict:
    doc = repo.find_by_id(pk, populate=populate)
    if doc is None:
        raise NotFound(f'{repo.label} not found')
    return doc


def update_or_404(repo: DocumentRepository, pk: Any, fields: dict) -> dict:
    doc = repo.update_by_id(pk, fields)
    if doc is None:
        raise NotFound(f'{repo.label} not found')
    return doc


def delete_or_404(repo: DocumentRepository, pk: Any) -> None:
    if not repo.delete_by_id(pk):
        raise NotFound(f'{repo.label} not found')
