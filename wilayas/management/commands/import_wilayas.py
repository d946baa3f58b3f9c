# wilayas/management/commands/import_wilayas.py
"""
Import wilayas (and their blood centers) from a JSON, CSV or Excel export.

USAGE:
    python manage.py import_wilayas wilayas_algerie.json
    python manage.py import_wilayas wilayas.xlsx --clear

Expected columns: code, name, latitude, longitude and, for JSON exports,
an optional blood_centers list of {name, latitude, longitude}.
"""
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from algorithms.location import parse_coordinates
from redhope.importing import cell, read_table
from wilayas.models import BloodCenter, Wilaya


class Command(BaseCommand):
    help = 'Import wilayas and blood centers from a JSON, CSV or Excel file'

    def add_arguments(self, parser):
        parser.add_argument('file', type=str, help='Path to the wilaya export')
        parser.add_argument('--clear', action='store_true', help='Delete existing wilayas first')

    def handle(self, *args, **options):
        df = read_table(options['file'])

        missing = [column for column in ('code', 'name', 'latitude', 'longitude') if column not in df.columns]
        if missing:
            raise CommandError(f'Missing columns: {", ".join(missing)}')

        created = updated = skipped = 0

        with transaction.atomic():
            if options['clear']:
                deleted, _ = Wilaya.objects.all().delete()
                self.stdout.write(self.style.WARNING(f'Cleared {deleted} existing rows'))

            for index, row in df.iterrows():
                code = cell(row, 'code')
                name = cell(row, 'name')
                coordinates = parse_coordinates(cell(row, 'latitude'), cell(row, 'longitude'))

                if code is None or name is None or coordinates is None:
                    skipped += 1
                    self.stdout.write(self.style.WARNING(f'[{index + 1}] Skipped: incomplete row'))
                    continue

                # Codes are zero-padded strings ("01"), spreadsheets may hand back ints
                code = str(code).zfill(2) if str(code).isdigit() else str(code)

                wilaya, was_created = Wilaya.objects.update_or_create(
                    code=code,
                    defaults={'name': name, 'latitude': coordinates[0], 'longitude': coordinates[1]},
                )
                if was_created:
                    created += 1
                else:
                    updated += 1

                centers = cell(row, 'blood_centers', default=[])
                if isinstance(centers, list):
                    self._import_blood_centers(wilaya, centers)

        self.stdout.write(self.style.SUCCESS(
            f'Wilayas imported: {created} created, {updated} updated, {skipped} skipped'
        ))

    def _import_blood_centers(self, wilaya, centers):
        wilaya.blood_centers.all().delete()
        for center in centers:
            coordinates = parse_coordinates(center.get('latitude'), center.get('longitude'))
            if not center.get('name') or coordinates is None:
                continue
            BloodCenter.objects.create(
                wilaya=wilaya,
                name=center['name'].strip(),
                latitude=coordinates[0],
                longitude=coordinates[1],
            )
