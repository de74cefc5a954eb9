import html

import bleach
from rest_framework import serializers

from .fields import ObjectIdField


def clean_text(v):
    """Trim a name and drop any markup; characters such as ``&`` are stored as typed."""
    return html.unescape(bleach.clean((v or '').strip(), tags=[], strip=True)).strip()


class DocumentSerializer(serializers.Serializer):
    """Serializer for a stored document: adds ``_id`` and the timestamps."""

    def get_fields(self):
        fields = super().get_fields()
        return {
            '_id': ObjectIdField(read_only=True),
            **fields,
            'createdAt': serializers.DateTimeField(source='created_at', read_only=True),
            'updatedAt': serializers.DateTimeField(source='updated_at', read_only=True),
        }


def optional_text(**kwargs):
    kwargs.setdefault('required', False)
    kwargs.setdefault('allow_blank', True)
    kwargs.setdefault('allow_null', True)
    return serializers.CharField(**kwargs)


def string_list(**kwargs):
    kwargs.setdefault('required', False)
    return serializers.ListField(child=serializers.CharField(allow_blank=True), **kwargs)


class SearchQuerySerializer(serializers.Serializer):
    """``?query=`` for the search endpoints."""
    query = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
