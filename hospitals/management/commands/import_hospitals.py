# hospitals/management/commands/import_hospitals.py
"""
Django Management Command to Import Hospitals
Reads a JSON, CSV or Excel export and creates/updates hospitals by name + wilaya.

USAGE:
    python manage.py import_hospitals path/to/Hospitals.json

    OR (replace everything):
    python manage.py import_hospitals hospitals.xlsx --clear
"""
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from algorithms.location import parse_coordinates
from hospitals.models import Hospital
from redhope.importing import cell, read_table


class Command(BaseCommand):
    help = 'Import hospitals from a JSON, CSV or Excel file'

    def add_arguments(self, parser):
        parser.add_argument(
            'file',
            type=str,
            help='Path to file containing hospital data'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing hospitals before importing'
        )

    def handle(self, *args, **options):
        df = read_table(options['file'])
        total = len(df)

        self.stdout.write("=" * 60)
        self.stdout.write(self.style.SUCCESS('HOSPITAL IMPORT'))
        self.stdout.write("=" * 60)
        self.stdout.write(f"Found {total} hospitals in {options['file']}")

        missing_columns = [col for col in ('name', 'wilaya') if col not in df.columns]
        if missing_columns:
            raise CommandError(f'Missing columns: {", ".join(missing_columns)}')

        created_count = 0
        updated_count = 0
        skipped_count = 0

        with transaction.atomic():
            if options['clear']:
                deleted, _ = Hospital.objects.all().delete()
                self.stdout.write(self.style.WARNING(f"Cleared {deleted} existing hospitals"))

            for index, row in df.iterrows():
                name = cell(row, 'name')
                wilaya = cell(row, 'wilaya')
                if not name or not wilaya:
                    skipped_count += 1
                    self.stdout.write(self.style.WARNING(f"[{index + 1}/{total}] Skipped: name and wilaya are required"))
                    continue

                coordinates = parse_coordinates(cell(row, 'latitude'), cell(row, 'longitude'))
                if coordinates is None:
                    self.stdout.write(self.style.WARNING(f"[{index + 1}/{total}] {name}: no usable coordinates"))
                    coordinates = (None, None)

                hospital = Hospital.objects.filter(name=name, wilaya__iexact=wilaya).first()
                created = hospital is None
                if created:
                    hospital = Hospital(name=name)

                hospital.wilaya = str(wilaya)
                hospital.structure = str(cell(row, 'structure', default=''))
                hospital.telephone = str(cell(row, 'telephone', default=''))
                hospital.fax = str(cell(row, 'fax', default=''))
                hospital.latitude, hospital.longitude = coordinates
                hospital.save()

                if created:
                    created_count += 1
                else:
                    updated_count += 1

        # Summary
        self.stdout.write("=" * 60)
        self.stdout.write(f"Created:  {created_count} new hospitals")
        self.stdout.write(f"Updated:  {updated_count} existing hospitals")
        self.stdout.write(f"Skipped:  {skipped_count} rows")
        self.stdout.write(self.style.SUCCESS('IMPORT COMPLETE'))
