# redhope/importing.py
"""pandas helpers for the import_* management commands."""
import os

import pandas as pd
from django.core.management.base import CommandError


def read_table(path):
    """Load a JSON, CSV or Excel export into a DataFrame."""
    if not os.path.exists(path):
        raise CommandError(f'File not found: {path}')

    extension = os.path.splitext(path)[1].lower()
    if extension == '.json':
        return pd.read_json(path, dtype=False)
    if extension == '.csv':
        return pd.read_csv(path, dtype=str)
    if extension in ('.xlsx', '.xls'):
        return pd.read_excel(path, dtype=str)
    raise CommandError(f'Unsupported file type "{extension}" (expected .json, .csv or .xlsx)')


def cell(row, column, default=None):
    """Value of row[column] as a stripped string or number, default when empty."""
    if column not in row:
        return default
    value = row[column]
    if isinstance(value, (list, dict)):
        return value
    if pd.isna(value):
        return default
    if isinstance(value, str):
        value = value.strip()
        return value or default
    return value
