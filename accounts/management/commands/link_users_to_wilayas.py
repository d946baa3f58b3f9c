# accounts/management/commands/link_users_to_wilayas.py
"""
Attach users to the closest wilaya.

USAGE:
    python manage.py link_users_to_wilayas
    python manage.py link_users_to_wilayas --radius 80 --overwrite

Users without coordinates are left alone. By default users that already
have a city are skipped.
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from algorithms.haversine import within_radius
from wilayas.models import Wilaya

User = get_user_model()

DEFAULT_RADIUS_KM = 50


class Command(BaseCommand):
    help = 'Set city_id on users to the nearest wilaya'

    def add_arguments(self, parser):
        parser.add_argument('--radius', type=float, default=DEFAULT_RADIUS_KM,
                            help='Maximum distance in km (default 50)')
        parser.add_argument('--overwrite', action='store_true',
                            help='Also relink users that already have a city')

    def handle(self, *args, **options):
        wilayas = list(Wilaya.objects.all())
        if not wilayas:
            raise CommandError('No wilayas loaded; run import_wilayas first')

        users = User.objects.filter(latitude__isnull=False, longitude__isnull=False)
        if not options['overwrite']:
            users = users.filter(city_id='')

        linked = unmatched = 0
        for user in users.iterator():
            nearby = within_radius(user.latitude, user.longitude, wilayas, options['radius'])
            if not nearby:
                unmatched += 1
                continue

            wilaya, distance = nearby[0]
            user.set_city(wilaya.code)
            user.save(update_fields=['city_id', 'last_city_update'])
            linked += 1
            if options['verbosity'] > 1:
                self.stdout.write(f'{user.username} -> {wilaya.name} ({distance:.1f} km)')

        self.stdout.write(self.style.SUCCESS(f'Linked {linked} user(s), {unmatched} without a wilaya nearby'))
