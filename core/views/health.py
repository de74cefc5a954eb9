from django.http import JsonResponse
from django.utils import timezone
from pymongo.errors import PyMongoError

from core.store import get_database


def health(request):
    now = timezone.now().isoformat()
    try:
        get_database().command('ping')
        return JsonResponse({'status': 'Server is running', 'timestamp': now, 'db': True})
    except PyMongoError as e:
        return JsonResponse({'status': 'Server is running', 'timestamp': now, 'db': False, 'error': str(e)},
                            status=500)
