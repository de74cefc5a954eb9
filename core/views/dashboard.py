"""
Dashboard endpoint.

Provides the high level overview shown on the front end's home page:
totals per collection and the five latest bookings.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.services.dashboard import dashboard_summary
from core.store import get_database


@api_view(['GET'])
def dashboard_stats(request):
    """Return dashboard metrics.

    ``overview`` holds ``totalPatients``, ``totalDoctors``,
    ``appointments`` and ``departments``; ``recentAppointments`` lists
    ``id``, ``patient``, ``doctor``, ``time`` and ``status`` for the newest
    bookings, with placeholder names where a reference no longer resolves.
    """
    return Response(dashboard_summary(get_database()))
