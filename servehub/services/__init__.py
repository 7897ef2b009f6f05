"""Services over generated and saved schedules."""

from .analytics import calculate_ministry_stats, calculate_person_stats, calculate_song_stats
from .conflicts import get_all_conflicts, schedules_from_weekly
from .constraints import validate_monthly_schedule

__all__ = [
    "validate_monthly_schedule",
    "get_all_conflicts",
    "schedules_from_weekly",
    "calculate_person_stats",
    "calculate_ministry_stats",
    "calculate_song_stats",
]
