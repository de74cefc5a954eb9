import mongomock
import pytest
from rest_framework.test import APIClient

from core import store


@pytest.fixture(autouse=True)
def fast_password_hashers(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture(autouse=True)
def mongo():
    """In-memory MongoDB installed as the shared store handle."""
    database = mongomock.MongoClient()['hospital_test']
    store.ensure_indexes(database)
    store.set_database(database)
    yield database
    store.set_database(None)


@pytest.fixture
def client():
    return APIClient()
