"""
Permission classes for the API.
"""
from django.conf import settings
from rest_framework.permissions import BasePermission


def _is_authenticated(request) -> bool:
    user = getattr(request, "user", None)
    return bool(user and getattr(user, "is_authenticated", False))


class ApiAccess(BasePermission):
    """Open access unless ``API_REQUIRE_AUTH`` is enabled, then a valid token is needed."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if not getattr(settings, "API_REQUIRE_AUTH", False):
            return True
        return _is_authenticated(request)


class IsAuthenticatedUser(BasePermission):
    """Caller presented a valid bearer token."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _is_authenticated(request)
