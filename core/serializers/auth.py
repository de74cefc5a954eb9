from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    # Presence is checked by the login service so that a missing field
    # gets the same message as an empty one.
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    # blank values pass here and get "All fields are required" from the service
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    def validate_email(self, v):
        return (v or '').strip().lower()


class ProfileSerializer(serializers.Serializer):
    id = serializers.CharField(source='_id')
    email = serializers.EmailField()
    name = serializers.CharField()
    role = serializers.CharField()
    patientId = serializers.SerializerMethodField()

    def get_patientId(self, user):
        ref = user.get('patient_profile')
        if isinstance(ref, dict):
            ref = ref.get('_id')
        return str(ref) if ref else None
