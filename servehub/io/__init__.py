"""I/O utilities for CSV import/export."""

from .export_csv import export_lineup_csv, export_schedule_csv
from .import_csv import import_people_csv, import_songs_csv

__all__ = [
    "import_people_csv",
    "import_songs_csv",
    "export_schedule_csv",
    "export_lineup_csv",
]
