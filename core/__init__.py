"""Core application for the hospital backend.

This package contains the MongoDB store and repositories, domain
services, serializers, views and route registrations implementing the
API contract expected by the front-end application.
"""
