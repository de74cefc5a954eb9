from rest_framework import serializers

from core.repositories import APPOINTMENT_STATUSES
from .base import DocumentSerializer, clean_text, optional_text
from .fields import FlexibleDateTimeField, ReferenceField


class AppointmentSerializer(DocumentSerializer):
    patient = ReferenceField('core.serializers.patient.PatientSerializer', required=True, allow_null=False)
    doctor = ReferenceField('core.serializers.doctor.DoctorSerializer')
    department = ReferenceField('core.serializers.department.DepartmentSerializer')
    appointmentDate = FlexibleDateTimeField(source='appointment_date')
    time = optional_text(max_length=32)
    reason = optional_text()
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES, required=False)
    notes = optional_text()
    duration = serializers.IntegerField(required=False, min_value=1, max_value=24 * 60)


class BookingSerializer(serializers.Serializer):
    """Public booking form.  Any ``status`` sent by the caller is dropped."""
    firstName = serializers.CharField(required=False, allow_blank=True, max_length=100)
    lastName = serializers.CharField(required=False, allow_blank=True, max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    date = FlexibleDateTimeField()
    time = serializers.CharField(required=False, allow_blank=True, max_length=32)
    department = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    doctor = ReferenceField()
    reason = serializers.CharField(required=False, allow_blank=True)

    # Names go through the same cleaning as patient entry; blanks are
    # allowed because a known email needs no contact details.
    def validate_firstName(self, v):
        return clean_text(v)

    def validate_lastName(self, v):
        return clean_text(v)


class AppointmentStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    cancelled = serializers.IntegerField()
