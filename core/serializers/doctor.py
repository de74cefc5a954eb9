from rest_framework import serializers

from .base import DocumentSerializer, clean_text, optional_text, string_list
from .fields import ReferenceField


class DoctorSerializer(DocumentSerializer):
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32)
    specialization = optional_text(max_length=100)
    department = ReferenceField('core.serializers.department.DepartmentSerializer')
    experience = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=80)
    qualifications = string_list()
    bio = optional_text()
    rating = serializers.FloatField(required=False, min_value=0, max_value=5)
    totalPatients = serializers.IntegerField(source='total_patients', required=False, min_value=0)
    availableSlots = string_list(source='available_slots')
    avatar = optional_text()
    status = serializers.CharField(required=False, max_length=50)

    def validate_firstName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('First name is required')
        return v

    def validate_lastName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Last name is required')
        return v

    def validate_email(self, v):
        return v.strip().lower()
