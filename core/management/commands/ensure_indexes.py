from django.core.management.base import BaseCommand

from core.store import ensure_indexes, get_database


class Command(BaseCommand):
    help = 'Create the MongoDB indexes (unique emails, unique department names, lookups).'

    def handle(self, *args, **options):
        db = get_database()
        ensure_indexes(db)
        self.stdout.write(self.style.SUCCESS(f'Indexes ensured on {db.name}.'))
