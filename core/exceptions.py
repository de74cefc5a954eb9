import logging

from pymongo.errors import PyMongoError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def flatten_detail(detail) -> str:
    """Collapse DRF error details into a single message."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return flatten_detail(detail['detail'])
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            parts.append(message if field == 'non_field_errors' else f'{field}: {message}')
        return '; '.join(parts)
    if isinstance(detail, (list, tuple)):
        return '; '.join(flatten_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        if isinstance(exc, PyMongoError):
            logger.error('store failure in %s: %s', getattr(view, '__name__', view), exc)
        else:
            logger.exception('unhandled error in %s', getattr(view, '__name__', view))
        return Response({'error': str(exc) or exc.__class__.__name__}, status=500)
    # normalize response, keeping headers such as WWW-Authenticate
    resp.data = {'error': flatten_detail(resp.data)}
    return resp
