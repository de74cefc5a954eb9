from rest_framework import serializers

from .base import DocumentSerializer, clean_text, optional_text
from .fields import ReferenceField


class DepartmentSerializer(DocumentSerializer):
    name = serializers.CharField(max_length=100)
    description = optional_text()
    doctor = ReferenceField('core.serializers.doctor.DoctorSerializer')
    floor = serializers.IntegerField(required=False, allow_null=True)
    phone = optional_text(max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    status = serializers.CharField(required=False, max_length=50)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v
