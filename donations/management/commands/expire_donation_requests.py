from django.core.management.base import BaseCommand

from donations.services import expire_requests


class Command(BaseCommand):
    help = 'Mark active donation requests past their expiry date as Expired'

    def handle(self, *args, **options):
        expired = expire_requests()
        if expired:
            self.stdout.write(self.style.SUCCESS(f'{expired} donation request(s) expired.'))
        else:
            self.stdout.write('No donation requests to expire.')
