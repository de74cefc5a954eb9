"""
Department management views.

Departments are the hospital's wings (Cardiology, Neurology, ...).  Each
may name a representative doctor, expanded on reads.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.serializers.department import DepartmentSerializer
from core.services import departments as service
from core.store import get_database


@api_view(['GET', 'POST'])
def departments(request):
    """List departments or create a department."""
    db = get_database()
    if request.method == 'GET':
        return Response(DepartmentSerializer(service.list_departments(db), many=True).data)

    s = DepartmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    department = service.create_department(db, s.validated_data)
    return Response(DepartmentSerializer(department).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
def department_detail(request, pk):
    db = get_database()
    if request.method == 'GET':
        return Response(DepartmentSerializer(service.get_department(db, pk)).data)

    if request.method == 'PUT':
        s = DepartmentSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        department = service.update_department(db, pk, s.validated_data)
        return Response(DepartmentSerializer(department).data)

    service.delete_department(db, pk)
    return Response({'message': 'Department deleted'})
