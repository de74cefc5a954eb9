"""
Appointment views: booking, schedule listings, updates and statistics.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.serializers.appointment import AppointmentSerializer, AppointmentStatsSerializer, BookingSerializer
from core.services import appointments as service
from core.store import get_database


@api_view(['GET', 'POST'])
def appointments(request):
    """``GET`` lists all appointments; ``POST`` books one.

    Booking body: ``firstName``, ``lastName``, ``email``, ``phone``,
    ``date``, ``time``, ``department`` (a name), ``reason`` and optionally
    ``doctor`` (an id).  The patient is looked up by email and created when
    unknown.
    """
    db = get_database()
    if request.method == 'GET':
        return Response(AppointmentSerializer(service.list_appointments(db), many=True).data)

    s = BookingSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    appointment = service.book_appointment(
        db,
        email=v['email'],
        date=v['date'],
        first_name=v.get('firstName', ''),
        last_name=v.get('lastName', ''),
        phone=v.get('phone', ''),
        time=v.get('time', ''),
        department=v.get('department'),
        reason=v.get('reason', ''),
        doctor=v.get('doctor'),
    )
    return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def appointment_stats(request):
    stats = service.appointment_stats(get_database())
    return Response(AppointmentStatsSerializer(stats).data)


@api_view(['GET'])
def appointments_for_patient(request, patient_id):
    found = service.list_for_patient(get_database(), patient_id)
    return Response(AppointmentSerializer(found, many=True).data)


@api_view(['GET'])
def appointments_for_doctor(request, doctor_id):
    found = service.list_for_doctor(get_database(), doctor_id)
    return Response(AppointmentSerializer(found, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
def appointment_detail(request, pk):
    db = get_database()
    if request.method == 'GET':
        return Response(AppointmentSerializer(service.get_appointment(db, pk)).data)

    if request.method == 'PUT':
        s = AppointmentSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        appointment = service.update_appointment(db, pk, s.validated_data)
        return Response(AppointmentSerializer(appointment).data)

    service.delete_appointment(db, pk)
    return Response({'message': 'Appointment deleted'})


@api_view(['PATCH'])
def cancel_appointment(request, pk):
    # The request body is ignored: cancelling only ever touches the status.
    appointment = service.cancel_appointment(get_database(), pk)
    return Response(AppointmentSerializer(appointment).data)
