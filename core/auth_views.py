"""
Authentication views.

Login, registration and logout for the front end, plus ``me`` which
returns the profile behind a bearer token.  The token implementation lives
in ``core.authentication`` so that the REST framework can import it
without pulling in these views.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.permissions import IsAuthenticatedUser
from core.serializers.auth import LoginSerializer, ProfileSerializer, RegisterSerializer
from core.services import accounts
from core.store import get_database


# ---------------------------------------------------------------------
# Email/password login (no role bypass)
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Accepts ``email`` and ``password``.  Unknown accounts and wrong
    passwords get the same 401 response.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user, token = accounts.login(get_database(), email=vd.get('email'), password=vd.get('password'))
    return Response({
        'success': True,
        'user': ProfileSerializer(user).data,
        'token': token,
    })


# ---------------------------------------------------------------------
# Self-service registration (always a patient account)
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user, _ = accounts.register(
        get_database(), name=vd.get('name'), email=vd.get('email'), password=vd.get('password')
    )
    return Response({
        'success': True,
        'message': 'Registration successful',
        'user': ProfileSerializer(user).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    """Tokens are stateless; the client discards its copy."""
    return Response({'success': True, 'message': 'Logged out'})


@api_view(['GET'])
@permission_classes([IsAuthenticatedUser])
def me_view(request):
    return Response(ProfileSerializer(request.user.document).data)
