"""
Bearer token authentication backed by the MongoDB ``users`` collection.

Tokens are signed access tokens issued by
:func:`core.services.accounts.issue_token`.  The token carries the user
id; the user document is loaded on every authenticated request so that a
deleted account stops authenticating immediately.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from rest_framework import authentication, exceptions
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from core.repositories import UserRepository
from core.store import get_database


@dataclass
class SessionUser:
    """The authenticated caller as seen by views and permissions."""
    id: str
    email: str
    name: str
    role: str
    document: dict = field(repr=False, default_factory=dict)

    is_authenticated = True

    @classmethod
    def from_document(cls, doc: dict) -> 'SessionUser':
        return cls(id=str(doc['_id']), email=doc.get('email', ''), name=doc.get('name', ''),
                   role=doc.get('role', 'patient'), document=doc)


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """``Authorization: Bearer <token>``.

    Requests without the header stay anonymous; a header carrying a bad or
    expired token is rejected with 401.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Invalid Authorization header')
        try:
            raw = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid Authorization header')

        try:
            token = AccessToken(raw)
        except TokenError:
            raise exceptions.AuthenticationFailed('Invalid or expired token')

        user = UserRepository(get_database()).find_by_id(token.get('user_id'))
        if not user:
            raise exceptions.AuthenticationFailed('Invalid or expired token')
        return SessionUser.from_document(user), token

    def authenticate_header(self, request):
        return self.keyword
