"""Immutable snapshot types consumed and produced by the generators."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from .constants import Gender, Ministry, Priority, SongGenre, SongLanguage, Tempo, tempo_rank


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    ministries: FrozenSet[Ministry] = frozenset()
    gender: Gender = Gender.MALE
    is_active: bool = True
    is_exempt: bool = False
    priority: Priority = Priority.NORMAL
    phone: Optional[str] = None
    email: Optional[str] = None

    def serves(self, ministry: Ministry) -> bool:
        return ministry in self.ministries


@dataclass(frozen=True)
class Song:
    id: str
    title: str
    artist: Optional[str] = None
    genre: Optional[SongGenre] = None
    language: SongLanguage = SongLanguage.ENGLISH
    lyrics: str = ""
    chords: Optional[str] = None
    key: Optional[str] = None
    tempo: Optional[Tempo] = None
    last_used: Optional[date] = None
    tags: Tuple[str, ...] = ()

    @property
    def tempo_rank(self) -> int:
        return tempo_rank(self.tempo)


@dataclass(frozen=True)
class WeeklyAssignment:
    """People assigned to one Sunday service."""

    date: date
    singers: Tuple[Person, ...] = ()
    tech: Optional[Person] = None
    scripture_reader: Optional[Person] = None

    def people(self) -> Iterator[Tuple[Ministry, Person]]:
        """Yield ``(ministry, person)`` for every filled slot."""
        for singer in self.singers:
            yield Ministry.SINGER, singer
        if self.tech is not None:
            yield Ministry.MULTIMEDIA, self.tech
        if self.scripture_reader is not None:
            yield Ministry.SCRIPTURE_READER, self.scripture_reader


@dataclass(frozen=True)
class LineupEntry:
    song: Song
    reason: str


@dataclass(frozen=True)
class TrackerEntry:
    count: int = 0
    last_assigned: Optional[date] = None


@dataclass(frozen=True)
class AssignmentTracker:
    """Per-role assignment counts for one generation run.

    ``record`` returns a new tracker; the scheduler threads trackers through
    the month instead of mutating shared state.
    """

    entries: Mapping[str, TrackerEntry] = field(default_factory=dict)

    def get(self, person_id: str) -> Optional[TrackerEntry]:
        return self.entries.get(person_id)

    def count(self, person_id: str) -> int:
        entry = self.entries.get(person_id)
        return entry.count if entry else 0

    def record(self, person_id: str, when: date) -> "AssignmentTracker":
        current = self.entries.get(person_id, TrackerEntry())
        updated: Dict[str, TrackerEntry] = dict(self.entries)
        updated[person_id] = TrackerEntry(count=current.count + 1, last_assigned=when)
        return AssignmentTracker(updated)


# Ministries that the monthly generator fills, mapped to their tracker slot
TRACKED_MINISTRIES = {
    Ministry.SINGER: "singer",
    Ministry.MULTIMEDIA: "tech",
    Ministry.SCRIPTURE_READER: "scripture",
}


@dataclass(frozen=True)
class TrackerState:
    singer: AssignmentTracker = field(default_factory=AssignmentTracker)
    tech: AssignmentTracker = field(default_factory=AssignmentTracker)
    scripture: AssignmentTracker = field(default_factory=AssignmentTracker)

    def tracker_for(self, ministry: Ministry) -> AssignmentTracker:
        return getattr(self, TRACKED_MINISTRIES[ministry])

    def record(self, ministry: Ministry, person_id: str, when: date) -> "TrackerState":
        slot = TRACKED_MINISTRIES[ministry]
        return replace(self, **{slot: getattr(self, slot).record(person_id, when)})

    def last_assigned_any(self, person_id: str) -> Optional[date]:
        """Most recent assignment date for a person across all roles."""
        dates = [
            entry.last_assigned
            for tracker in (self.singer, self.tech, self.scripture)
            for entry in [tracker.get(person_id)]
            if entry is not None and entry.last_assigned is not None
        ]
        return max(dates) if dates else None


@dataclass(frozen=True)
class AssignmentSnapshot:
    person_id: str
    ministry: Ministry
    confirmed: bool = False


@dataclass(frozen=True)
class ScheduleSnapshot:
    """A saved service schedule as seen by conflict detection and analytics."""

    id: str
    date: date
    assignments: Tuple[AssignmentSnapshot, ...] = ()
    service_type: str = "sunday_morning"
    notes: Optional[str] = None
