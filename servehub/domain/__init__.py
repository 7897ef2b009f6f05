"""Domain models and data access layer."""

from .models import Base, PersonRecord, ServiceAssignment, ServiceSchedule, SongRecord
from .repositories import PersonRepository, ScheduleRepository, SongRepository

__all__ = [
    "Base",
    "PersonRecord",
    "SongRecord",
    "ServiceSchedule",
    "ServiceAssignment",
    "PersonRepository",
    "SongRepository",
    "ScheduleRepository",
]
