"""
Patient management views.

CRUD over the patients collection plus a free-text search used by the
front end's patient picker.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.serializers.base import SearchQuerySerializer
from core.serializers.patient import PatientSerializer
from core.services import patients as service
from core.store import get_database


@api_view(['GET', 'POST'])
def patients(request):
    """``GET`` lists every patient; ``POST`` creates one (administrative entry)."""
    db = get_database()
    if request.method == 'GET':
        return Response(PatientSerializer(service.list_patients(db), many=True).data)

    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = service.create_patient(db, s.validated_data)
    return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def search_patients(request):
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    found = service.search_patients(get_database(), q.validated_data.get('query'))
    return Response(PatientSerializer(found, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
def patient_detail(request, pk):
    db = get_database()
    if request.method == 'GET':
        return Response(PatientSerializer(service.get_patient(db, pk)).data)

    if request.method == 'PUT':
        s = PatientSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        patient = service.update_patient(db, pk, s.validated_data)
        return Response(PatientSerializer(patient).data)

    service.delete_patient(db, pk)
    return Response({'message': 'Patient deleted'})
