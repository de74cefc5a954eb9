"""
Doctor directory views.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.serializers.base import SearchQuerySerializer
from core.serializers.doctor import DoctorSerializer
from core.services import doctors as service
from core.store import get_database


@api_view(['GET', 'POST'])
def doctors(request):
    db = get_database()
    if request.method == 'GET':
        return Response(DoctorSerializer(service.list_doctors(db), many=True).data)

    s = DoctorSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = service.create_doctor(db, s.validated_data)
    return Response(DoctorSerializer(doctor).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def search_doctors(request):
    """Query param ``query``: matched against names and specialization."""
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    found = service.search_doctors(get_database(), q.validated_data.get('query'))
    return Response(DoctorSerializer(found, many=True).data)


@api_view(['GET'])
def doctors_by_department(request, department_id):
    found = service.list_by_department(get_database(), department_id)
    return Response(DoctorSerializer(found, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
def doctor_detail(request, pk):
    db = get_database()
    if request.method == 'GET':
        return Response(DoctorSerializer(service.get_doctor(db, pk)).data)

    if request.method == 'PUT':
        s = DoctorSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        doctor = service.update_doctor(db, pk, s.validated_data)
        return Response(DoctorSerializer(doctor).data)

    service.delete_doctor(db, pk)
    return Response({'message': 'Doctor deleted'})
