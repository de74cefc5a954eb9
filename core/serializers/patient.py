from rest_framework import serializers

from core.repositories import GENDERS
from .base import DocumentSerializer, clean_text, optional_text, string_list
from .fields import FlexibleDateTimeField, ReferenceField


class PatientSerializer(DocumentSerializer):
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32)
    user = ReferenceField()
    dateOfBirth = FlexibleDateTimeField(source='date_of_birth', required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=GENDERS, required=False, allow_null=True)
    bloodGroup = optional_text(source='blood_group', max_length=8)
    address = optional_text()
    emergencyContact = optional_text(source='emergency_contact')
    insurance = optional_text()
    medicalHistory = string_list(source='medical_history')
    avatar = optional_text()
    status = serializers.CharField(required=False, max_length=50)
    lastVisit = FlexibleDateTimeField(source='last_visit', required=False, allow_null=True)

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
