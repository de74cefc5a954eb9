"""
Serializer fields for MongoDB documents.
"""
from django.utils.module_loading import import_string
from rest_framework import serializers

from core.store import as_object_id

DATE_INPUT_FORMATS = ['iso-8601', '%Y-%m-%d']


class ObjectIdField(serializers.Field):
    """Renders an ObjectId as its 24-hex string."""

    def to_internal_value(self, data):
        oid = as_object_id(data)
        if oid is None:
            raise serializers.ValidationError('Invalid id')
        return oid

    def to_representation(self, value):
        return str(value)


class ReferenceField(serializers.Field):
    """A reference to a document in another collection.

    Input is an id string (or a populated object carrying ``_id``).  On
    output an expanded document is rendered with ``serializer`` (a dotted
    path, resolved lazily because the entity serializers refer to each
    other), a bare id as a string.
    """

    def __init__(self, serializer=None, **kwargs):
        self.serializer_path = serializer
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, dict):
            data = data.get('_id')
        if data in (None, ''):
            if self.allow_null:
                return None
            self.fail('null')
        oid = as_object_id(data)
        if oid is None:
            raise serializers.ValidationError('Invalid id')
        return oid

    def to_representation(self, value):
        if isinstance(value, dict):
            if self.serializer_path is None:
                return str(value.get('_id'))
            return import_string(self.serializer_path)(value).data
        return str(value)


class FlexibleDateTimeField(serializers.DateTimeField):
    """Accepts plain dates (``2024-05-01``) as well as ISO datetimes."""

    def __init__(self, **kwargs):
        kwargs.setdefault('input_formats', DATE_INPUT_FORMATS)
        super().__init__(**kwargs)
